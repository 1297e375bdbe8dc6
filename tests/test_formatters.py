"""
Tests for table and text formatting.
"""

from ocr_layout.ocr_engine.ocr_result import RecognitionResult, TextBlock
from ocr_layout.postprocessor.columns import no_header_line
from ocr_layout.postprocessor.formatters import format_as_table, format_as_text
from tests.conftest import make_word


class TestFormatAsText:
    """Test flattening of results into one line."""

    def test_paragraph_whitespace_collapsed(self):
        result = RecognitionResult(paragraphs=[TextBlock("Hello\nworld  ")])

        assert format_as_text(result) == "Hello world"

    def test_paragraphs_joined(self):
        result = RecognitionResult(
            paragraphs=[TextBlock("First\tpart"), TextBlock("  "), TextBlock("second part\n")],
            lines=[TextBlock("ignored")]
        )

        assert format_as_text(result) == "First part second part"

    def test_falls_back_to_lines(self):
        result = RecognitionResult(
            paragraphs=[TextBlock(" ")],
            lines=[TextBlock("line one"), TextBlock("line two")],
            full_text="ignored"
        )

        assert format_as_text(result) == "line one line two"

    def test_falls_back_to_full_text(self):
        result = RecognitionResult(full_text="  raw\n\ntext ")

        assert format_as_text(result) == "raw text"

    def test_empty_result(self):
        assert format_as_text(RecognitionResult()) == ""


class TestFormatAsTable:
    """Test rendering of tab-separated rows."""

    def test_split_percentage_repaired(self):
        """'58' and '3%' in one column become '58.3%'."""
        words = [
            make_word("Revenue", 0, 0, width=70),
            make_word("58", 0, 40, width=20),
            make_word("3%", 35, 40, width=20),
        ]

        assert format_as_table(words) == "Revenue\n58.3%"

    def test_tab_separated_cells(self):
        words = [
            make_word("Item", 0, 0, width=40), make_word("2023", 100, 0, width=40),
            make_word("2022", 200, 0, width=40),
            make_word("Sales", 0, 40, width=50), make_word("583%", 100, 40, width=40),
            make_word("81%", 200, 40, width=30),
        ]

        assert format_as_table(words) == "Item\t2023\t2022\nSales\t58.3%\t8.1%"

    def test_borders_and_fillers_dropped(self):
        words = [
            make_word("|", 0, 0), make_word("|12|", 20, 0, width=40),
            make_word("|", 70, 0), make_word("34", 120, 0, width=20),
            make_word("-------------", 0, 40, width=200),
            make_word("....", 0, 80, width=40),
            make_word("56", 0, 120, width=20), make_word("——", 100, 120, width=20),
        ]

        assert format_as_table(words) == "12\t34\n56"

    def test_header_policy_applied(self):
        """A CJK header keeps a moderate gap together unless disabled."""
        words = [make_word("營業", 0, 0, width=40), make_word("收入", 70, 0, width=40)]

        assert format_as_table(words) == "營業收入"
        assert format_as_table(words, no_header_line) == "營業\t收入"

    def test_no_trailing_whitespace(self):
        words = [make_word("A1", 0, 0), make_word("B2  ", 100, 0)]

        text = format_as_table(words)

        assert text == text.rstrip()
        assert text == "A1\tB2"

    def test_empty(self):
        assert format_as_table([]) == ""
