"""Value types for parsed canonical fragment identifiers.

A parsed identifier is a tree of frozen dataclasses: ``Identifier`` owns a
base ``Path`` plus either one body ``Path`` (a point) or a common ``Path`` and
two relative suffixes (a range). Transformations always build new values.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidStepIndex, MalformedIdentifier

ELEMENT = "element"
TEXT = "text"
BEFORE = "before"
AFTER = "after"

CFI_PREFIX = "epubcfi("
CFI_SUFFIX = ")"


@dataclass(frozen=True)
class Assertion:
    """Position inside a path's terminal step."""

    offset: int
    text_assertion: str | None = None
    side_bias: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.offset, bool) or not isinstance(self.offset, int) or self.offset < 0:
            raise ValueError(f"terminal offset must be a non-negative integer: {self.offset!r}")
        if self.side_bias not in (None, BEFORE, AFTER):
            raise ValueError(f"side bias must be {BEFORE!r} or {AFTER!r}: {self.side_bias!r}")

    def to_dict(self) -> dict[str, object]:
        return {
            "offset": self.offset,
            "text_assertion": self.text_assertion,
            "side_bias": self.side_bias,
        }


@dataclass(frozen=True)
class Step:
    """One hop in a path: an element (even index) or text position (odd index)."""

    kind: str
    index: int
    id: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.index, bool) or not isinstance(self.index, int) or self.index < 0:
            raise InvalidStepIndex(f"step index must be a non-negative integer: {self.index!r}")
        if self.kind not in (ELEMENT, TEXT):
            raise ValueError(f"step kind must be {ELEMENT!r} or {TEXT!r}: {self.kind!r}")

    def to_dict(self) -> dict[str, object]:
        return {"kind": self.kind, "index": self.index, "id": self.id}


def element_step(index: int, id: str | None = None) -> Step:
    """Build an element step."""
    return Step(ELEMENT, index, id)


def text_step(index: int, id: str | None = None) -> Step:
    """Build a text-node step."""
    return Step(TEXT, index, id)


def step_for_index(index: int, id: str | None = None) -> Step:
    """Build a step whose kind follows index parity (odd indices are text)."""
    return Step(TEXT if index % 2 else ELEMENT, index, id)


def equal_step(a: Step, b: Step) -> bool:
    """Return whether two steps address the same node.

    Kind and index must match. When either step carries an id, both ids must
    be identical. Terminal assertions are not part of step identity.
    """
    if a.kind != b.kind or a.index != b.index:
        return False
    if a.id is None and b.id is None:
        return True
    return a.id == b.id


@dataclass(frozen=True)
class Path:
    """Ordered steps plus the optional assertion carried by the last step."""

    steps: tuple[Step, ...] = ()
    terminal: Assertion | None = None

    @property
    def terminal_step(self) -> Step | None:
        """Return the step the terminal assertion belongs to, if any."""
        return self.steps[-1] if self.steps else None

    @property
    def is_empty(self) -> bool:
        return not self.steps and self.terminal is None

    def extended(self, suffix: Path) -> Path:
        """Append ``suffix`` steps, taking the suffix terminal."""
        return Path(self.steps + suffix.steps, suffix.terminal)

    def to_dict(self) -> dict[str, object]:
        return {
            "steps": [step.to_dict() for step in self.steps],
            "terminal": self.terminal.to_dict() if self.terminal is not None else None,
        }


@dataclass(frozen=True)
class Identifier:
    """Parsed ``epubcfi(...)`` value: a point, or a range factored over a common path.

    For ranges, ``start`` and ``end`` are relative to the end of ``path`` and
    only meaningful together with it.
    """

    base: Path
    path: Path
    start: Path | None = None
    end: Path | None = None

    def __post_init__(self) -> None:
        if (self.start is None) != (self.end is None):
            raise MalformedIdentifier("range identifiers need both start and end paths")
        if not self.base.steps or self.base.terminal is not None:
            raise MalformedIdentifier("base path needs at least one step and no terminal assertion")
        if self.start is None:
            if not self.path.steps:
                raise MalformedIdentifier("point path needs at least one step")
        elif self.path.terminal is not None:
            raise MalformedIdentifier("common path of a range cannot carry a terminal assertion")

    @classmethod
    def point(cls, base: Path, path: Path) -> Identifier:
        """Construct a point identifier."""
        return cls(base=base, path=path)

    @classmethod
    def span(cls, base: Path, path: Path, start: Path, end: Path) -> Identifier:
        """Construct a range identifier from a common path and two suffixes."""
        return cls(base=base, path=path, start=start, end=end)

    @property
    def range(self) -> bool:
        return self.start is not None

    def __str__(self) -> str:
        from .serialize import serialize

        return serialize(self)

    def to_dict(self) -> dict[str, object]:
        out: dict[str, object] = {
            "base": self.base.to_dict(),
            "range": self.range,
            "path": self.path.to_dict(),
        }
        if self.start is not None and self.end is not None:
            out["start"] = self.start.to_dict()
            out["end"] = self.end.to_dict()
        return out


def is_cfi_string(value: object) -> bool:
    """Cheap shape check for ``epubcfi(...)`` strings; does not parse."""
    if not isinstance(value, str):
        return False
    return value.startswith(CFI_PREFIX) and value.endswith(CFI_SUFFIX)


__all__ = [
    "ELEMENT",
    "TEXT",
    "BEFORE",
    "AFTER",
    "CFI_PREFIX",
    "CFI_SUFFIX",
    "Assertion",
    "Step",
    "Path",
    "Identifier",
    "element_step",
    "text_step",
    "step_for_index",
    "equal_step",
    "is_cfi_string",
]
