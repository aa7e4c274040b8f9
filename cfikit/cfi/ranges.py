"""Range synthesis and collapse.

A range identifier is stored factored: the longest common step prefix of both
ends, plus each end's remaining steps and terminal relative to that prefix.
"""

from __future__ import annotations

from .compare import GREATER, compare, require_same_base
from .errors import EmptyRangeCollapse
from .parser import parse
from .serialize import serialize
from .types import Identifier, Path, equal_step


def collapse(identifier: str | Identifier, to_start: bool = False) -> Identifier:
    """Reduce a range to its end point (or start point with ``to_start``).

    Point identifiers are returned unchanged. Raises ``EmptyRangeCollapse``
    when the chosen endpoint has no steps (an offset alone addresses nothing).
    """
    parsed = parse(identifier)
    if parsed.start is None or parsed.end is None:
        return parsed
    suffix = parsed.start if to_start else parsed.end
    point = parsed.path.extended(suffix)
    if not point.steps:
        raise EmptyRangeCollapse(f"range {parsed} has no usable {'start' if to_start else 'end'} point")
    return Identifier.point(parsed.base, point)


def common_prefix_length(a: Path, b: Path) -> int:
    """Number of leading steps shared by ``a`` and ``b`` under ``equal_step``."""
    length = 0
    for left, right in zip(a.steps, b.steps):
        if not equal_step(left, right):
            break
        length += 1
    return length


def make_range(a: str | Identifier, b: str | Identifier, *, ordered: bool = False) -> Identifier:
    """Build the identifier spanning point ``a`` to point ``b``.

    Range inputs are collapsed first (``a`` to its start, ``b`` to its end).
    With ``ordered`` the ends are swapped when ``a`` sorts after ``b``.
    Identical points produce a point identifier rather than an empty range.
    """
    first = collapse(a, to_start=True)
    second = collapse(b)
    require_same_base(first, second)
    if ordered and compare(first, second) == GREATER:
        first, second = second, first

    path_a = first.path
    path_b = second.path
    shared = common_prefix_length(path_a, path_b)
    if shared == len(path_a.steps) == len(path_b.steps) and path_a.terminal == path_b.terminal:
        return Identifier.point(first.base, path_a)

    common = Path(path_a.steps[:shared])
    start = Path(path_a.steps[shared:], path_a.terminal)
    end = Path(path_b.steps[shared:], path_b.terminal)
    return Identifier.span(first.base, common, start, end)


def make_range_identifier(a: str | Identifier, b: str | Identifier, *, ordered: bool = False) -> str:
    """Serialized form of ``make_range(a, b)``."""
    return serialize(make_range(a, b, ordered=ordered))


__all__ = ["collapse", "common_prefix_length", "make_range", "make_range_identifier"]
