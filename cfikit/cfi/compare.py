"""Document-order comparison of identifiers sharing a base.

Ordering uses step indices only. Ids disambiguate (a conflicting id on the
base makes two identifiers incomparable) but never move a location earlier or
later.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import cmp_to_key

from .errors import IncomparableBase
from .parser import parse
from .types import AFTER, BEFORE, Assertion, Identifier, Path

LESS = -1
EQUAL = 0
GREATER = 1

ORDERING_NAMES = {LESS: "less", EQUAL: "equal", GREATER: "greater"}
_SIDE_BIAS_RANK = {BEFORE: -1, None: 0, AFTER: 1}


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def same_base(a: Path, b: Path) -> bool:
    """Return whether two base paths address the same container.

    Indices must match pairwise. Ids are checked only where both steps
    carry one.
    """
    if len(a.steps) != len(b.steps):
        return False
    for left, right in zip(a.steps, b.steps):
        if left.index != right.index:
            return False
        if left.id is not None and right.id is not None and left.id != right.id:
            return False
    return True


def require_same_base(a: Identifier, b: Identifier) -> None:
    if not same_base(a.base, b.base):
        raise IncomparableBase(f"identifiers are on different bases: {a} vs {b}")


def _point_path(identifier: Identifier) -> Path:
    """Full path of a point, or of a range's start point."""
    if identifier.start is not None:
        return identifier.path.extended(identifier.start)
    return identifier.path


def compare_terminals(a: Assertion | None, b: Assertion | None) -> int:
    """Order terminals: absent first, then offset, then side bias (before < none < after)."""
    if a is None or b is None:
        return _sign((a is not None) - (b is not None))
    if a.offset != b.offset:
        return _sign(a.offset - b.offset)
    return _sign(_SIDE_BIAS_RANK[a.side_bias] - _SIDE_BIAS_RANK[b.side_bias])


def compare_paths(a: Path, b: Path) -> int:
    """Compare two paths below the same base by step index, prefix, then terminal."""
    for left, right in zip(a.steps, b.steps):
        if left.index != right.index:
            return _sign(left.index - right.index)
    if len(a.steps) != len(b.steps):
        return _sign(len(a.steps) - len(b.steps))
    return compare_terminals(a.terminal, b.terminal)


def compare(a: str | Identifier, b: str | Identifier) -> int:
    """Return ``LESS``, ``EQUAL`` or ``GREATER`` for ``a`` relative to ``b``.

    Ranges are compared by their start point. Raises ``IncomparableBase``
    when the bases differ.
    """
    left = parse(a)
    right = parse(b)
    require_same_base(left, right)
    return compare_paths(_point_path(left), _point_path(right))


sort_key = cmp_to_key(compare)


def sorted_locations(values: Iterable[str | Identifier]) -> list[str | Identifier]:
    """Return ``values`` in document order; every value must share one base."""
    return sorted(values, key=sort_key)


__all__ = [
    "LESS",
    "EQUAL",
    "GREATER",
    "ORDERING_NAMES",
    "compare",
    "compare_paths",
    "compare_terminals",
    "require_same_base",
    "same_base",
    "sort_key",
    "sorted_locations",
]
