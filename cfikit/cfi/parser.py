"""Parse ``epubcfi(...)`` strings into ``Identifier`` values.

Grammar handled here::

    identifier := "epubcfi(" base "!" body ")"
    body       := path | path "," path "," path
    step       := index ["[" id "]"] [":" offset ["[" assertion "]"]]

Range bodies may have an empty common path and empty or terminal-only
suffixes (``/4/2/1,:0,:5``), because suffixes are relative to the common path.
"""

from __future__ import annotations

import re

from .errors import CFIError, InvalidStepIndex, MalformedIdentifier
from .syntax import split_bracket, split_top_level, unescape
from .types import AFTER, BEFORE, CFI_PREFIX, CFI_SUFFIX, Assertion, Identifier, Path, Step, step_for_index

_DIGITS_RE = re.compile(r"[0-9]+")
SIDE_BIAS_CODES = {"a": AFTER, "b": BEFORE}


def _parse_index(token: str) -> int:
    if not _DIGITS_RE.fullmatch(token):
        raise InvalidStepIndex(f"step index is not a non-negative integer: {token!r}")
    return int(token)


def _parse_step(token: str) -> Step:
    head, payload = split_bracket(token)
    index = _parse_index(head)
    step_id = unescape(payload) if payload else None
    return step_for_index(index, step_id)


def _parse_steps(text: str) -> tuple[Step, ...]:
    if not text:
        return ()
    if not text.startswith("/"):
        raise MalformedIdentifier(f"path must start with '/': {text!r}")
    tokens = split_top_level(text, "/")[1:]
    return tuple(_parse_step(token) for token in tokens)


def _parse_assertion_payload(payload: str, offset: int) -> Assertion:
    """Decode ``text;key=value;...`` into an assertion for ``offset``."""
    params = split_top_level(payload, ";")
    text_assertion = unescape(params[0]) or None
    side_bias = None
    for param in params[1:]:
        key, sep, value = param.partition("=")
        if not sep:
            raise MalformedIdentifier(f"assertion parameter without '=': {param!r}")
        if unescape(key) != "s":
            continue
        side_bias = SIDE_BIAS_CODES.get(unescape(value))
        if side_bias is None:
            raise MalformedIdentifier(f"side bias must be 'a' or 'b': {value!r}")
    return Assertion(offset, text_assertion, side_bias)


def _parse_terminal(text: str) -> Assertion:
    head, payload = split_bracket(text)
    if not _DIGITS_RE.fullmatch(head):
        raise MalformedIdentifier(f"terminal offset is not a non-negative integer: {head!r}")
    offset = int(head)
    if payload is None:
        return Assertion(offset)
    return _parse_assertion_payload(payload, offset)


def _parse_segment(text: str, *, allow_terminal: bool, allow_empty: bool) -> Path:
    parts = split_top_level(text, ":")
    if len(parts) > 2:
        raise MalformedIdentifier(f"more than one ':' in segment {text!r}")
    steps = _parse_steps(parts[0])
    terminal = None
    if len(parts) == 2:
        if not allow_terminal:
            raise MalformedIdentifier(f"segment cannot carry a terminal offset: {text!r}")
        terminal = _parse_terminal(parts[1])
    if not allow_empty and not steps:
        raise MalformedIdentifier(f"segment needs at least one step: {text!r}")
    return Path(steps, terminal)


def parse_segment(text: str) -> Path:
    """Parse one ``/step/step:offset`` segment (the inverse of ``segment_string``)."""
    return _parse_segment(text, allow_terminal=True, allow_empty=True)


def parse(value: str | Identifier) -> Identifier:
    """Parse a CFI string. ``Identifier`` values are returned unchanged.

    Raises ``MalformedIdentifier`` for grammar violations and
    ``InvalidStepIndex`` for step tokens that are not non-negative integers.
    """
    if isinstance(value, Identifier):
        return value
    if not isinstance(value, str):
        raise MalformedIdentifier(f"expected a CFI string, got {type(value).__name__}")

    if not value.startswith(CFI_PREFIX) or not value.endswith(CFI_SUFFIX) or len(value) <= len(CFI_PREFIX):
        raise MalformedIdentifier(f"not an epubcfi(...) string: {value!r}")
    inner = value[len(CFI_PREFIX) : -len(CFI_SUFFIX)]

    try:
        sections = split_top_level(inner, "!")
        if len(sections) != 2:
            raise MalformedIdentifier(f"expected exactly one '!', found {len(sections) - 1}")
        base = _parse_segment(sections[0], allow_terminal=False, allow_empty=False)

        body = split_top_level(sections[1], ",")
        if len(body) == 1:
            path = _parse_segment(body[0], allow_terminal=True, allow_empty=False)
            return Identifier.point(base, path)
        if len(body) == 3:
            common = _parse_segment(body[0], allow_terminal=False, allow_empty=True)
            start = _parse_segment(body[1], allow_terminal=True, allow_empty=True)
            end = _parse_segment(body[2], allow_terminal=True, allow_empty=True)
            return Identifier.span(base, common, start, end)
        raise MalformedIdentifier(f"body must have one or three comma-separated parts, found {len(body)}")
    except CFIError as exc:
        raise type(exc)(f"{exc} in {value!r}") from None


__all__ = ["parse", "parse_segment", "SIDE_BIAS_CODES"]
