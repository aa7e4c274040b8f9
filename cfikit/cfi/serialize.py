"""Serialize ``Path`` and ``Identifier`` values back to canonical strings."""

from __future__ import annotations

from .syntax import escape
from .types import AFTER, BEFORE, CFI_PREFIX, CFI_SUFFIX, Assertion, Identifier, Path, Step

SIDE_BIAS_LETTERS = {AFTER: "a", BEFORE: "b"}


def step_string(step: Step) -> str:
    if step.id:
        return f"/{step.index}[{escape(step.id)}]"
    return f"/{step.index}"


def terminal_string(terminal: Assertion) -> str:
    out = f":{terminal.offset}"
    if terminal.text_assertion is None and terminal.side_bias is None:
        return out
    payload = escape(terminal.text_assertion or "")
    if terminal.side_bias is not None:
        payload += f";s={SIDE_BIAS_LETTERS[terminal.side_bias]}"
    return f"{out}[{payload}]"


def segment_string(path: Path) -> str:
    """Render a path as ``/index[id]/...:offset[assertion]``; empty paths render as ``""``."""
    out = "".join(step_string(step) for step in path.steps)
    if path.terminal is not None:
        out += terminal_string(path.terminal)
    return out


def serialize(identifier: Identifier) -> str:
    """Render an identifier as ``epubcfi(base!path)`` or ``epubcfi(base!path,start,end)``."""
    body = segment_string(identifier.path)
    if identifier.start is not None and identifier.end is not None:
        body = f"{body},{segment_string(identifier.start)},{segment_string(identifier.end)}"
    return f"{CFI_PREFIX}{segment_string(identifier.base)}!{body}{CFI_SUFFIX}"


__all__ = ["segment_string", "serialize", "step_string", "terminal_string"]
