"""Tests for measure_indent."""

import pytest

from notionpub.converter.indent import measure_indent


class TestMeasureIndent:
    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("", 0),
            ("- item", 0),
            (" - item", 0),
            ("  - item", 1),
            ("   - item", 1),
            ("    - item", 2),
            ("\t- item", 1),
            ("\t\t- item", 2),
            ("\t  - item", 2),
            ("  \t- item", 2),
        ],
    )
    def test_levels(self, line, expected):
        assert measure_indent(line) == expected

    def test_odd_space_before_tab_is_dropped(self):
        assert measure_indent(" \t- item") == 1

    def test_whitespace_only_line(self):
        assert measure_indent("      ") == 3

    def test_stops_at_first_text_character(self):
        assert measure_indent("a    b") == 0
        assert measure_indent("  a    ") == 1
