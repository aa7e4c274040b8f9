from __future__ import annotations

import json
import unittest
from unittest import mock

from cfikit import highlighting


class ColorizeJsonTests(unittest.TestCase):
    def test_colorizes_with_pygments(self) -> None:
        text = json.dumps({"offset": 3, "side_bias": None})
        rendered = highlighting.colorize_json(text, "monokai")
        self.assertIn("\x1b[", rendered)

    def test_unknown_style_falls_back(self) -> None:
        highlighting.colorize_json("{}", "monokai")
        self.assertEqual(highlighting.normalize_style("no-such-style-anywhere"), "monokai")

    def test_returns_input_when_pygments_missing(self) -> None:
        with mock.patch("cfikit.highlighting._ensure_pygments_loaded", return_value=False):
            self.assertEqual(highlighting.colorize_json('{"a": 1}'), '{"a": 1}')


if __name__ == "__main__":
    unittest.main()
