"""
Tests for numeric normalizers.
"""

import pytest

from ocr_layout.postprocessor.normalizers import (
    fix_decimal_points,
    looks_like_number_part,
    remove_table_artifacts,
)


class TestLooksLikeNumberPart:
    """Test detection of numbers split across two tokens."""

    @pytest.mark.parametrize("a,b", [
        ("58", "3%"),
        ("12", "5"),
        ("7", "%"),
        ("A1", "%"),
        ("3", ".14"),
        ("3", ",5"),
    ])
    def test_pieces_of_one_number(self, a, b):
        assert looks_like_number_part(a, b)

    @pytest.mark.parametrize("a,b", [
        ("12", "345"),
        ("abc", "3%"),
        ("12", "ab"),
        ("Revenue", "12"),
    ])
    def test_separate_tokens(self, a, b):
        assert not looks_like_number_part(a, b)


class TestFixDecimalPoints:
    """Test restoration of dropped decimal points."""

    @pytest.mark.parametrize("text,expected", [
        ("583%", "58.3%"),
        ("Growth 583%", "Growth 58.3%"),
        ("81%", "8.1%"),
        ("58 3%", "58.3%"),
        ("58,3%", "58.3%"),
        ("58，3%", "58.3%"),
        ("58o3%", "58.3%"),
        ("58O3%", "58.3%"),
    ])
    def test_repairs(self, text, expected):
        assert fix_decimal_points(text) == expected

    @pytest.mark.parametrize("text", [
        "99%", "80%", "90%", "100%", "12.5%", "1583%", "Revenue", "2023", "",
    ])
    def test_left_unchanged(self, text):
        assert fix_decimal_points(text) == text


class TestRemoveTableArtifacts:
    """Test stripping of table-drawing characters."""

    @pytest.mark.parametrize("text,expected", [
        ("| 12.5 |", "12.5"),
        ("___", ""),
        ("...", ""),
        ("— —", ""),
        ("a  -  b", "a b"),
        ("-5%", "5%"),
        ("  Revenue\t", "Revenue"),
        ("營業收入", "營業收入"),
    ])
    def test_cleaning(self, text, expected):
        assert remove_table_artifacts(text) == expected

    @pytest.mark.parametrize("text", [
        "| 12.5 |", "+--+--+", "a | b | c", ". . .", "= 58.3% =", "Net  Income",
    ])
    def test_idempotent(self, text):
        once = remove_table_artifacts(text)

        assert remove_table_artifacts(once) == once
