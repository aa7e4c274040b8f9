"""Lexical helpers shared by the parser and serializer.

Bracketed payloads (ids and terminal assertions) may contain delimiter
characters escaped with ``^``. Splitting therefore has to skip over brackets
and escapes instead of using ``str.split``.
"""

from __future__ import annotations

from .errors import MalformedIdentifier

ESCAPE = "^"
SPECIAL_CHARACTERS = frozenset("[](),;=^")


def escape(value: str) -> str:
    """Escape CFI special characters inside a bracketed payload."""
    return "".join(ESCAPE + char if char in SPECIAL_CHARACTERS else char for char in value)


def unescape(value: str) -> str:
    """Remove ``^`` escapes from a bracketed payload."""
    out: list[str] = []
    chars = iter(value)
    for char in chars:
        if char == ESCAPE:
            escaped = next(chars, None)
            if escaped is None:
                raise MalformedIdentifier(f"dangling escape in {value!r}")
            out.append(escaped)
        else:
            out.append(char)
    return "".join(out)


def split_top_level(text: str, separator: str) -> list[str]:
    """Split ``text`` on ``separator`` outside brackets and escapes.

    Raises ``MalformedIdentifier`` for unbalanced or nested brackets.
    """
    parts: list[str] = []
    current: list[str] = []
    in_bracket = False
    escaped = False
    for char in text:
        if escaped:
            current.append(char)
            escaped = False
            continue
        if char == ESCAPE:
            escaped = True
            current.append(char)
            continue
        if in_bracket:
            if char == "[":
                raise MalformedIdentifier(f"nested '[' in {text!r}")
            elif char == "]":
                in_bracket = False
            current.append(char)
            continue
        if char == "[":
            in_bracket = True
            current.append(char)
        elif char == "]":
            raise MalformedIdentifier(f"unbalanced ']' in {text!r}")
        elif char == separator:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    if escaped:
        raise MalformedIdentifier(f"dangling escape in {text!r}")
    if in_bracket:
        raise MalformedIdentifier(f"unterminated '[' in {text!r}")
    parts.append("".join(current))
    return parts


def split_bracket(token: str) -> tuple[str, str | None]:
    """Split ``head[payload]`` into ``(head, raw payload)``.

    The payload is returned still escaped. Tokens without a bracket yield
    ``(token, None)``; anything after the closing bracket is malformed.
    """
    open_at = token.find("[")
    if open_at < 0:
        if "]" in token:
            raise MalformedIdentifier(f"unbalanced ']' in {token!r}")
        return token, None
    if not token.endswith("]"):
        raise MalformedIdentifier(f"unexpected text after ']' in {token!r}")
    payload = token[open_at + 1 : -1]
    escaped = False
    for char in payload:
        if escaped:
            escaped = False
        elif char == ESCAPE:
            escaped = True
        elif char in "[]":
            raise MalformedIdentifier(f"unexpected {char!r} inside brackets in {token!r}")
    if escaped:
        raise MalformedIdentifier(f"unterminated '[' in {token!r}")
    return token[:open_at], payload


__all__ = [
    "ESCAPE",
    "SPECIAL_CHARACTERS",
    "escape",
    "unescape",
    "split_top_level",
    "split_bracket",
]
