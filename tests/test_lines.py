"""
Tests for line grouping.
"""

from ocr_layout.postprocessor.lines import group_into_lines
from tests.conftest import make_word


class TestGroupIntoLines:
    """Test assigning words to visual rows."""

    def test_empty_input(self):
        """No words gives no lines."""
        assert group_into_lines([]) == []

    def test_single_row_sorted_left_to_right(self):
        """Words on one row come back ordered by x0."""
        words = [make_word("c", 200, 0), make_word("a", 0, 2), make_word("b", 100, 1)]

        lines = group_into_lines(words)

        assert len(lines) == 1
        assert [w.text for w in lines[0]] == ["a", "b", "c"]

    def test_rows_split_by_vertical_distance(self):
        """Rows further apart than the tolerance are separate lines."""
        words = [
            make_word("second", 0, 50),
            make_word("first", 0, 0),
            make_word("third", 0, 100),
        ]

        lines = group_into_lines(words)

        assert [[w.text for w in line] for line in lines] == [["first"], ["second"], ["third"]]

    def test_word_within_tolerance_joins_line(self):
        """A word 8px below a 20px-high anchor stays on the line."""
        words = [make_word("a", 0, 0), make_word("b", 50, 8)]

        assert len(group_into_lines(words)) == 1

    def test_anchor_does_not_slide(self):
        """Distance is measured from the word that opened the line."""
        words = [make_word("a", 0, 0), make_word("b", 50, 8), make_word("c", 100, 16)]

        lines = group_into_lines(words)

        assert [[w.text for w in line] for line in lines] == [["a", "b"], ["c"]]

    def test_degenerate_height_uses_default(self):
        """A zero-height first word falls back to a 20px line height."""
        words = [
            make_word("flat", 0, 0, height=0),
            make_word("near", 50, 9),
            make_word("far", 100, 25),
        ]

        lines = group_into_lines(words)

        assert [[w.text for w in line] for line in lines] == [["flat", "near"], ["far"]]

    def test_minimum_tolerance(self):
        """Short words still get a 10px tolerance."""
        words = [make_word("a", 0, 0, height=6), make_word("b", 50, 9, height=6)]

        assert len(group_into_lines(words)) == 1

    def test_partition_and_monotonic_order(self):
        """Every word lands in one line and line tops increase."""
        words = [
            make_word("w1", 10, 3), make_word("w2", 200, 120), make_word("w3", 80, 61),
            make_word("w4", 150, 0), make_word("w5", 40, 118), make_word("w6", 5, 64),
            make_word("w7", 300, 2),
        ]

        lines = group_into_lines(words)

        grouped = [w for line in lines for w in line]
        assert sorted(id(w) for w in grouped) == sorted(id(w) for w in words)

        tops = [min(w.y0 for w in line) for line in lines]
        assert tops == sorted(tops)
        for line in lines:
            assert [w.x0 for w in line] == sorted(w.x0 for w in line)
