"""
Shared fixtures for the OCR layout tests.
"""

from typing import List, Optional

import pytest
from PIL import Image

from config import ConfigurationManager
from ocr_layout.ocr_engine.base import BaseBackend
from ocr_layout.ocr_engine.ocr_result import BoundingBox, RecognitionResult, RecognizedWord, TextBlock


def make_word(
    text: str,
    x0: float,
    y0: float,
    width: Optional[float] = None,
    height: float = 20,
    confidence: float = 0.9
) -> RecognizedWord:
    """Build a word; width defaults to 10px per character."""
    if width is None:
        width = 10 * max(len(text), 1)
    return RecognizedWord(
        text=text,
        bbox=BoundingBox(x0=x0, y0=y0, x1=x0 + width, y1=y0 + height),
        confidence=confidence
    )


def make_grid(rows: List[List[str]], column_x: List[float], row_gap: float = 40) -> List[RecognizedWord]:
    """Lay out cell texts on a regular grid."""
    words = []
    for r, row in enumerate(rows):
        for c, text in enumerate(row):
            words.append(make_word(text, column_x[c], r * row_gap))
    return words


class FakeBackend(BaseBackend):
    """Backend replaying canned responses; exceptions are raised."""

    name = "fake"

    def __init__(self, responses=(), supports_language_selection=False, raw_text=""):
        self.responses = list(responses)
        self.supports_language_selection = supports_language_selection
        self.raw_text = raw_text
        self.calls = []
        self.text_calls = []

    def recognize(self, image, language=None):
        self.calls.append(language)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get_raw_text(self, image, language=None):
        self.text_calls.append(language)
        if isinstance(self.raw_text, Exception):
            raise self.raw_text
        return self.raw_text


@pytest.fixture
def word():
    return make_word


@pytest.fixture
def blank_image():
    return Image.new("RGB", (40, 20), "white")


@pytest.fixture
def table_result():
    """A three-row numeric table with a paragraph view of the same page."""
    words = make_grid(
        [["12", "3.4", "56%"], ["78", "9.0", "12%"], ["34", "5.6", "78%"]],
        column_x=[0, 100, 200]
    )
    return RecognitionResult(
        full_text="12 3.4 56%\n78 9.0 12%\n34 5.6 78%",
        words=words,
        paragraphs=[TextBlock("12 3.4 56%\n78 9.0 12%\n34 5.6 78%")],
        engine="fake"
    )


@pytest.fixture
def prose_result():
    """A single line of English prose."""
    text = (
        "The quarterly report describes the growth of the company and "
        "the outlook for the next year with some caution"
    )
    words = []
    x = 0
    for token in text.split():
        words.append(make_word(token, x, 0))
        x += 10 * len(token) + 8
    return RecognitionResult(
        full_text=text,
        words=words,
        paragraphs=[TextBlock(text)],
        engine="fake"
    )


@pytest.fixture
def fresh_config():
    """Reset the configuration singleton around a test."""
    ConfigurationManager.reset()
    yield ConfigurationManager
    ConfigurationManager.reset()
