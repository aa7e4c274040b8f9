"""Helpers for bases that point at a spine item of the package document.

In an EPUB package document the spine is the third child element (step 6) and
spine item ``n`` (zero based) sits at step ``(n + 1) * 2``.
"""

from __future__ import annotations

from .errors import MalformedIdentifier
from .parser import parse
from .types import Identifier, Path, element_step

SPINE_STEP = 6


def spine_base(spine_index: int, idref: str | None = None) -> Path:
    """Return the base path ``/6/{(spine_index + 1) * 2}[idref]``."""
    if isinstance(spine_index, bool) or not isinstance(spine_index, int) or spine_index < 0:
        raise ValueError(f"spine index must be a non-negative integer: {spine_index!r}")
    return Path((element_step(SPINE_STEP), element_step((spine_index + 1) * 2, idref)))


def spine_index(identifier: str | Identifier) -> int:
    """Return the zero-based spine position an identifier's base points at."""
    parsed = parse(identifier)
    steps = parsed.base.steps
    if len(steps) != 2 or steps[0].index != SPINE_STEP or steps[1].index % 2 or steps[1].index == 0:
        raise MalformedIdentifier(f"base does not reference a spine item: {parsed}")
    return steps[1].index // 2 - 1


def point_in_spine(spine_index: int, path: Path, idref: str | None = None) -> Identifier:
    """Build a point identifier for ``path`` inside spine item ``spine_index``."""
    return Identifier.point(spine_base(spine_index, idref), path)


__all__ = ["SPINE_STEP", "point_in_spine", "spine_base", "spine_index"]
