"""Tests for serializing parsed identifiers back to strings.

Canonical inputs must come back byte-identical; other spellings must at
least re-parse to the same structure.
"""

from __future__ import annotations

import unittest

from cfikit.cfi import (
    AFTER,
    Assertion,
    Identifier,
    Path,
    element_step,
    parse,
    segment_string,
    serialize,
    text_step,
)

CANONICAL = [
    "epubcfi(/6/4!/4/2)",
    "epubcfi(/6/4[chap01ref]!/4[body01]/10[para05]/3:10)",
    "epubcfi(/6/4!/4/2/1:5[Hello^, world;s=b])",
    "epubcfi(/6/4!/4/2/1:3[;s=a])",
    "epubcfi(/6/4!/4/2,/2:0,/4:3)",
    "epubcfi(/6/4!/4/2/1,:0,:5)",
    "epubcfi(/6/4!,/2:0,/4:1)",
    "epubcfi(/6/4!/4/2,,/6:1)",
    "epubcfi(/6/4!/4[a^,b^]c]/2)",
]


class SerializeTests(unittest.TestCase):
    def test_canonical_strings_are_reproduced(self) -> None:
        for text in CANONICAL:
            with self.subTest(text=text):
                self.assertEqual(serialize(parse(text)), text)

    def test_non_canonical_spellings_round_trip_structurally(self) -> None:
        cases = [
            "epubcfi(/6/4!/4[]/2:0[])",
            "epubcfi(/6/4!/4/2/1:3[abc;x=1;s=a])",
            "epubcfi(/6/4!/4/2/1:5[one,two])",
        ]
        for text in cases:
            with self.subTest(text=text):
                parsed = parse(text)
                self.assertEqual(parse(serialize(parsed)), parsed)

    def test_dropped_redundant_brackets(self) -> None:
        self.assertEqual(serialize(parse("epubcfi(/6/4!/4[]/2:0[])")), "epubcfi(/6/4!/4/2:0)")

    def test_segment_string_of_built_path(self) -> None:
        path = Path((element_step(4, "body]01"), text_step(3)), Assertion(7, "x;y", AFTER))
        self.assertEqual(segment_string(path), "/4[body^]01]/3:7[x^;y;s=a]")

    def test_empty_path_renders_empty(self) -> None:
        self.assertEqual(segment_string(Path()), "")

    def test_str_of_identifier_serializes(self) -> None:
        identifier = Identifier.point(Path((element_step(6), element_step(4))), Path((element_step(2),)))
        self.assertEqual(str(identifier), "epubcfi(/6/4!/2)")


if __name__ == "__main__":
    unittest.main()
