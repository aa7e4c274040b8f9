"""Command-line front door for cfikit.

Parses, compares, factors and collapses identifiers given on the command
line, and manages per-book bookmarks stored in the user config.
"""

from __future__ import annotations

import argparse
import json
import sys

from . import config
from .cfi import (
    ORDERING_NAMES,
    CFIError,
    collapse,
    compare,
    make_range_identifier,
    parse,
    serialize,
    sorted_locations,
)
from .highlighting import colorize_json


def _use_color(args: argparse.Namespace) -> bool:
    if args.no_color:
        return False
    try:
        return sys.stdout.isatty()
    except Exception:
        return False


def _cmd_parse(args: argparse.Namespace) -> str:
    text = json.dumps(parse(args.cfi).to_dict(), indent=2)
    if _use_color(args):
        style = args.style if args.style is not None else config.load_highlight_style()
        text = colorize_json(text, style).rstrip("\n")
    return text


def _cmd_compare(args: argparse.Namespace) -> str:
    return ORDERING_NAMES[compare(args.a, args.b)]


def _cmd_range(args: argparse.Namespace) -> str:
    return make_range_identifier(args.a, args.b, ordered=args.ordered)


def _cmd_collapse(args: argparse.Namespace) -> str:
    return serialize(collapse(args.cfi, to_start=args.start))


def _cmd_sort(args: argparse.Namespace) -> str:
    return "\n".join(serialize(parse(value)) for value in sorted_locations(args.cfis))


def _cmd_mark(args: argparse.Namespace) -> str:
    return config.save_bookmark(args.book, args.name, args.cfi)


def _cmd_marks(args: argparse.Namespace) -> str:
    marks = config.load_bookmarks(args.book)
    return "\n".join(f"{name}\t{location}" for name, location in marks.items())


def _cmd_unmark(args: argparse.Namespace) -> str:
    if not config.delete_bookmark(args.book, args.name):
        raise SystemExit(f"No bookmark named {args.name!r} for {args.book!r}.")
    return ""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cfikit",
        description="Parse, order and combine EPUB canonical fragment identifiers.",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for colored JSON output.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    commands = parser.add_subparsers(dest="command", required=True)

    parse_cmd = commands.add_parser("parse", help="Print the parsed structure of an identifier as JSON.")
    parse_cmd.add_argument("cfi")
    parse_cmd.set_defaults(handler=_cmd_parse)

    compare_cmd = commands.add_parser("compare", help="Print less, equal or greater for A relative to B.")
    compare_cmd.add_argument("a")
    compare_cmd.add_argument("b")
    compare_cmd.set_defaults(handler=_cmd_compare)

    range_cmd = commands.add_parser("range", help="Print the range identifier spanning points A and B.")
    range_cmd.add_argument("a")
    range_cmd.add_argument("b")
    range_cmd.add_argument("--ordered", action="store_true", help="Swap A and B when A comes later.")
    range_cmd.set_defaults(handler=_cmd_range)

    collapse_cmd = commands.add_parser("collapse", help="Print the end (or start) point of a range.")
    collapse_cmd.add_argument("cfi")
    collapse_cmd.add_argument("--start", action="store_true", help="Collapse to the start point.")
    collapse_cmd.set_defaults(handler=_cmd_collapse)

    sort_cmd = commands.add_parser("sort", help="Print identifiers in document order.")
    sort_cmd.add_argument("cfis", nargs="+")
    sort_cmd.set_defaults(handler=_cmd_sort)

    mark_cmd = commands.add_parser("mark", help="Store a bookmark for BOOK.")
    mark_cmd.add_argument("book")
    mark_cmd.add_argument("name")
    mark_cmd.add_argument("cfi")
    mark_cmd.set_defaults(handler=_cmd_mark)

    marks_cmd = commands.add_parser("marks", help="List bookmarks for BOOK in document order.")
    marks_cmd.add_argument("book")
    marks_cmd.set_defaults(handler=_cmd_marks)

    unmark_cmd = commands.add_parser("unmark", help="Delete a bookmark for BOOK.")
    unmark_cmd.add_argument("book")
    unmark_cmd.add_argument("name")
    unmark_cmd.set_defaults(handler=_cmd_unmark)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run one subcommand.

    Identifier errors and failed config writes exit with status 1 and an
    ``error:`` message instead of a traceback.
    """
    args = build_parser().parse_args(argv)
    try:
        output = args.handler(args)
    except (CFIError, OSError) as exc:
        raise SystemExit(f"error: {exc}") from exc
    if output:
        sys.stdout.write(output + "\n")


if __name__ == "__main__":
    main()
