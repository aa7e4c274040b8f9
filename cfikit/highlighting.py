"""Terminal colorizing for CLI JSON output.

Pygments is imported lazily on first use and its callables cached, so
importing the CLI stays cheap when color is disabled.
"""

from __future__ import annotations

_PYGMENTS_READY = False
_PYGMENTS_AVAILABLE = False
_PYGMENTS_HIGHLIGHT = None
_PYGMENTS_JSON_LEXER = None
_PYGMENTS_TERMINAL_FORMATTER = None
_PYGMENTS_GET_STYLE_BY_NAME = None
_PYGMENTS_VALID_STYLES: set[str] = set()
_PYGMENTS_INVALID_STYLES: set[str] = set()
_PYGMENTS_FORMATTERS: dict[str, object] = {}

FALLBACK_STYLE = "monokai"


def _ensure_pygments_loaded() -> bool:
    """Lazily import and cache Pygments callables.

    Returns whether Pygments is available in the runtime environment.
    """
    global _PYGMENTS_READY
    global _PYGMENTS_AVAILABLE
    global _PYGMENTS_HIGHLIGHT
    global _PYGMENTS_JSON_LEXER
    global _PYGMENTS_TERMINAL_FORMATTER
    global _PYGMENTS_GET_STYLE_BY_NAME

    if _PYGMENTS_READY:
        return _PYGMENTS_AVAILABLE

    _PYGMENTS_READY = True
    try:
        from pygments import highlight as pygments_highlight
        from pygments.formatters import TerminalFormatter
        from pygments.lexers import JsonLexer
        from pygments.styles import get_style_by_name
    except ImportError:
        _PYGMENTS_AVAILABLE = False
        return False

    _PYGMENTS_HIGHLIGHT = pygments_highlight
    _PYGMENTS_JSON_LEXER = JsonLexer
    _PYGMENTS_TERMINAL_FORMATTER = TerminalFormatter
    _PYGMENTS_GET_STYLE_BY_NAME = get_style_by_name
    _PYGMENTS_AVAILABLE = True
    return True


def normalize_style(style: str) -> str:
    """Validate/canonicalize requested style name with cache-backed checks."""
    if style in _PYGMENTS_VALID_STYLES:
        return style
    if style in _PYGMENTS_INVALID_STYLES:
        return FALLBACK_STYLE

    try:
        assert _PYGMENTS_GET_STYLE_BY_NAME is not None
        _PYGMENTS_GET_STYLE_BY_NAME(style)
        _PYGMENTS_VALID_STYLES.add(style)
        return style
    except Exception:
        _PYGMENTS_INVALID_STYLES.add(style)
        return FALLBACK_STYLE


def _formatter_for_style(style: str):
    formatter = _PYGMENTS_FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    assert _PYGMENTS_TERMINAL_FORMATTER is not None
    formatter = _PYGMENTS_TERMINAL_FORMATTER(style=style)
    _PYGMENTS_FORMATTERS[style] = formatter
    return formatter


def colorize_json(text: str, style: str = FALLBACK_STYLE) -> str:
    """Highlight JSON text with Pygments, returning ``text`` unchanged on any failure."""
    if not _ensure_pygments_loaded():
        return text

    style = normalize_style(style)
    try:
        assert _PYGMENTS_HIGHLIGHT is not None and _PYGMENTS_JSON_LEXER is not None
        rendered = _PYGMENTS_HIGHLIGHT(text, _PYGMENTS_JSON_LEXER(), _formatter_for_style(style))
    except Exception:
        return text
    return rendered if "\x1b[" in rendered else text


__all__ = ["FALLBACK_STYLE", "colorize_json", "normalize_style"]
