"""Persistent JSON config helpers.

Stores per-book bookmarks, per-book last-read locations and the highlight
style used by the CLI. Reads are defensive: malformed or missing config falls
back safely. Writes of locations are strict: a malformed identifier raises
instead of being persisted.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .cfi import Identifier, parse, segment_string, serialize, sort_key
from .cfi.errors import CFIError

APP_NAME = "cfikit"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_HIGHLIGHT_STYLE = "monokai"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> bool:
    """Persist config data as pretty-printed JSON.

    Returns whether the file was written. Filesystem/serialization errors are
    not raised so preference writes never interrupt callers.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        return False
    return True


def _save_config_or_raise(data: dict[str, object]) -> None:
    if not save_config(data):
        raise OSError(f"could not write config file {CONFIG_PATH}")


def _book_table(config: dict[str, object], key: str) -> dict[str, object]:
    """Return (creating when needed) the ``config[key]`` object."""
    table = config.get(key)
    if not isinstance(table, dict):
        table = {}
        config[key] = table
    return table


def _parse_stored(value: object) -> Identifier | None:
    if not isinstance(value, str):
        return None
    try:
        return parse(value)
    except CFIError:
        return None


def _document_order_key(item: tuple[str, Identifier]):
    name, identifier = item
    base = identifier.base
    return (tuple(step.index for step in base.steps), segment_string(base), sort_key(identifier), name)


def load_bookmarks(book: str) -> dict[str, str]:
    """Load bookmarks for ``book`` as ``{name: cfi}`` in document order.

    Entries whose value is not a parseable identifier are dropped. Bookmarks
    on different spine items are grouped by base.
    """
    books = load_config().get("bookmarks")
    if not isinstance(books, dict):
        return {}
    raw_marks = books.get(book)
    if not isinstance(raw_marks, dict):
        return {}

    parsed: list[tuple[str, Identifier]] = []
    for name, value in raw_marks.items():
        if not isinstance(name, str) or not name:
            continue
        identifier = _parse_stored(value)
        if identifier is not None:
            parsed.append((name, identifier))
    parsed.sort(key=_document_order_key)
    return {name: serialize(identifier) for name, identifier in parsed}


def save_bookmark(book: str, name: str, location: str | Identifier) -> str:
    """Store ``location`` under ``name`` and return its canonical form.

    Raises ``CFIError`` for malformed locations, ``ValueError`` for an
    empty name and ``OSError`` when the config file cannot be written.
    """
    if not name:
        raise ValueError("bookmark name must not be empty")
    canonical = serialize(parse(location))
    config = load_config()
    marks = _book_table(_book_table(config, "bookmarks"), book)
    marks[name] = canonical
    _save_config_or_raise(config)
    return canonical


def delete_bookmark(book: str, name: str) -> bool:
    """Remove a bookmark, returning whether it existed."""
    config = load_config()
    books = config.get("bookmarks")
    if not isinstance(books, dict):
        return False
    marks = books.get(book)
    if not isinstance(marks, dict) or name not in marks:
        return False
    del marks[name]
    if not marks:
        del books[book]
    _save_config_or_raise(config)
    return True


def load_last_location(book: str) -> str | None:
    """Return the stored last-read location, or ``None`` when unset/invalid."""
    locations = load_config().get("last_locations")
    if not isinstance(locations, dict):
        return None
    identifier = _parse_stored(locations.get(book))
    return serialize(identifier) if identifier is not None else None


def save_last_location(book: str, location: str | Identifier) -> str:
    """Persist the last-read location in canonical form.

    Malformed input raises ``CFIError``; a failed write raises ``OSError``.
    """
    canonical = serialize(parse(location))
    config = load_config()
    _book_table(config, "last_locations")[book] = canonical
    _save_config_or_raise(config)
    return canonical


def load_highlight_style() -> str:
    """Load persisted Pygments style name, defaulting to ``monokai``."""
    value = load_config().get("highlight_style")
    if not isinstance(value, str):
        return DEFAULT_HIGHLIGHT_STYLE
    stripped = value.strip()
    return stripped if stripped else DEFAULT_HIGHLIGHT_STYLE


def save_highlight_style(style: str) -> None:
    """Persist selected Pygments style name."""
    stripped = str(style).strip()
    if not stripped:
        return
    config = load_config()
    config["highlight_style"] = stripped
    save_config(config)
