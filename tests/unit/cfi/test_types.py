from __future__ import annotations

import unittest

from cfikit.cfi import (
    ELEMENT,
    TEXT,
    Assertion,
    Identifier,
    InvalidStepIndex,
    MalformedIdentifier,
    Path,
    Step,
    element_step,
    equal_step,
    is_cfi_string,
    parse,
    text_step,
)


class EqualStepTests(unittest.TestCase):
    def test_same_kind_and_index_without_ids(self) -> None:
        self.assertTrue(equal_step(element_step(4), element_step(4)))

    def test_index_or_kind_mismatch(self) -> None:
        self.assertFalse(equal_step(element_step(4), element_step(6)))
        self.assertFalse(equal_step(Step(ELEMENT, 3), Step(TEXT, 3)))

    def test_ids_must_match_when_present_on_either_side(self) -> None:
        self.assertTrue(equal_step(element_step(4, "a"), element_step(4, "a")))
        self.assertFalse(equal_step(element_step(4, "a"), element_step(4, "b")))
        self.assertFalse(equal_step(element_step(4, "a"), element_step(4)))
        self.assertFalse(equal_step(element_step(4), element_step(4, "a")))

    def test_terminal_assertions_do_not_affect_step_identity(self) -> None:
        a = parse("epubcfi(/6/4!/4/2/1:0)").path
        b = parse("epubcfi(/6/4!/4/2/1:9[;s=a])").path
        self.assertTrue(equal_step(a.terminal_step, b.terminal_step))


class ValueTypeTests(unittest.TestCase):
    def test_negative_index_is_rejected(self) -> None:
        with self.assertRaises(InvalidStepIndex):
            element_step(-2)

    def test_assertion_validates_offset_and_side_bias(self) -> None:
        with self.assertRaises(ValueError):
            Assertion(-1)
        with self.assertRaises(ValueError):
            Assertion(0, side_bias="middle")

    def test_range_common_path_cannot_carry_terminal(self) -> None:
        base = Path((element_step(6), element_step(4)))
        common = Path((element_step(4),), Assertion(1))
        with self.assertRaises(MalformedIdentifier):
            Identifier.span(base, common, Path(), Path())
        with self.assertRaises(MalformedIdentifier):
            Identifier(base=base, path=common, start=Path(), end=Path())

    def test_range_needs_both_ends(self) -> None:
        base = Path((element_step(6),))
        with self.assertRaises(MalformedIdentifier):
            Identifier(base=base, path=Path(), start=Path())

    def test_point_needs_at_least_one_step(self) -> None:
        base = Path((element_step(6), element_step(4)))
        with self.assertRaises(MalformedIdentifier):
            Identifier.point(base, Path())
        with self.assertRaises(MalformedIdentifier):
            Identifier(base=base, path=Path((), Assertion(5)))

    def test_base_needs_steps_and_no_terminal(self) -> None:
        body = Path((element_step(4),))
        with self.assertRaises(MalformedIdentifier):
            Identifier.point(Path(), body)
        with self.assertRaises(MalformedIdentifier):
            Identifier.point(Path((element_step(6),), Assertion(0)), body)

    def test_constructed_identifiers_reparse(self) -> None:
        base = Path((element_step(6), element_step(4)))
        built = [
            Identifier.point(base, Path((element_step(4), text_step(1)), Assertion(2))),
            Identifier.span(base, Path(), Path((element_step(2),)), Path((element_step(4),), Assertion(3))),
        ]
        for identifier in built:
            with self.subTest(identifier=str(identifier)):
                self.assertEqual(parse(str(identifier)), identifier)

    def test_extended_takes_suffix_terminal(self) -> None:
        common = Path((element_step(4), element_step(2)))
        suffix = Path((text_step(1),), Assertion(3))
        self.assertEqual(common.extended(suffix), Path((element_step(4), element_step(2), text_step(1)), Assertion(3)))

    def test_to_dict_shape(self) -> None:
        data = parse("epubcfi(/6/4!/4/2,/2:0,/4:3)").to_dict()
        self.assertTrue(data["range"])
        self.assertEqual([step["index"] for step in data["base"]["steps"]], [6, 4])
        self.assertEqual(data["start"]["terminal"], {"offset": 0, "text_assertion": None, "side_bias": None})
        self.assertNotIn("start", parse("epubcfi(/6/4!/4)").to_dict())

    def test_identifiers_are_immutable(self) -> None:
        parsed = parse("epubcfi(/6/4!/4)")
        with self.assertRaises(AttributeError):
            parsed.path = Path()  # type: ignore[misc]

    def test_is_cfi_string(self) -> None:
        self.assertTrue(is_cfi_string("epubcfi(/6/4!/4)"))
        self.assertFalse(is_cfi_string(" epubcfi(/6/4!/4) "))
        self.assertFalse(is_cfi_string("/6/4!/4"))
        self.assertFalse(is_cfi_string(None))


if __name__ == "__main__":
    unittest.main()
