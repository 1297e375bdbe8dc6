"""
Tests for the concrete recognition backends with the engines stubbed.
"""

import pytest
import pytesseract

from ocr_layout.ocr_engine.detector_backends import EasyOCRBackend, PaddleOCRBackend
from ocr_layout.ocr_engine.ocr_result import BoundingBox
from ocr_layout.ocr_engine.tesseract_backend import TesseractBackend
from ocr_layout.utils.exceptions import (
    EngineUnavailableError,
    RecognitionFailureError,
    UnrecognizedResultShapeError,
)

TESSERACT_DATA = {
    'text': ['', 'Revenue', '58.3%', '', 'Net', 'Income'],
    'left': [0, 10, 120, 0, 10, 50],
    'top': [0, 10, 10, 0, 50, 50],
    'width': [200, 70, 50, 0, 35, 60],
    'height': [100, 20, 20, 0, 20, 20],
    'conf': [-1, 96, 88.5, -1, 91, 90],
    'block_num': [1, 1, 1, 1, 1, 1],
    'par_num': [0, 1, 1, 1, 2, 2],
    'line_num': [0, 1, 1, 1, 1, 1],
}


@pytest.fixture
def tesseract(monkeypatch):
    monkeypatch.setattr(pytesseract, "get_tesseract_version", lambda: "5.3.0")
    monkeypatch.setattr(pytesseract, "image_to_data", lambda image, **kwargs: TESSERACT_DATA)
    return TesseractBackend()


class TestTesseractBackend:
    """Test parsing of Tesseract's word table."""

    def test_words_lines_paragraphs(self, tesseract, blank_image):
        result = tesseract.recognize(blank_image, "eng")

        assert [w.text for w in result.words] == ["Revenue", "58.3%", "Net", "Income"]
        assert result.words[0].bbox == BoundingBox(10, 10, 80, 30)
        assert result.words[1].confidence == pytest.approx(0.885)
        assert [l.text for l in result.lines] == ["Revenue 58.3%", "Net Income"]
        assert [p.text for p in result.paragraphs] == ["Revenue 58.3%", "Net Income"]
        assert result.full_text == "Revenue 58.3%\nNet Income"
        assert result.language == "eng"
        assert result.engine == "tesseract"

    def test_low_confidence_stays_on_percent_scale(self, tesseract, blank_image, monkeypatch):
        """Tesseract confidences are always percentages, even below 1."""
        data = {
            'text': ['faint', 'ghost', 'skip'],
            'left': [0, 60, 120],
            'top': [0, 0, 0],
            'width': [50, 50, 40],
            'height': [20, 20, 20],
            'conf': [1, 0.5, -1],
            'block_num': [1, 1, 1],
            'par_num': [1, 1, 1],
            'line_num': [1, 1, 1],
        }
        monkeypatch.setattr(pytesseract, "image_to_data", lambda image, **kwargs: data)

        result = tesseract.recognize(blank_image)

        assert [w.confidence for w in result.words] == pytest.approx([0.01, 0.005, 0.0])

    def test_default_language(self, tesseract, blank_image):
        assert tesseract.recognize(blank_image).language == "chi_tra+eng"

    def test_build_config(self, tesseract):
        assert tesseract._build_config() == "--psm 3 --oem 3"

    def test_engine_failure(self, tesseract, blank_image, monkeypatch):
        def crash(image, **kwargs):
            raise RuntimeError("tesseract crashed")

        monkeypatch.setattr(pytesseract, "image_to_data", crash)

        with pytest.raises(RecognitionFailureError):
            tesseract.recognize(blank_image)

    def test_missing_binary(self, monkeypatch):
        def not_installed():
            raise EnvironmentError("tesseract is not installed")

        monkeypatch.setattr(pytesseract, "get_tesseract_version", not_installed)

        with pytest.raises(EngineUnavailableError):
            TesseractBackend()


class FakeReader:
    def __init__(self, output):
        self.output = output

    def readtext(self, array):
        if isinstance(self.output, Exception):
            raise self.output
        return self.output


class FakePaddle:
    def __init__(self, output):
        self.output = output

    def ocr(self, array, cls=True):
        return self.output


class TestDetectorBackends:
    """Test polygon outputs from detection models."""

    def test_easyocr(self, blank_image):
        reader = FakeReader([
            ([[0, 0], [40, 2], [40, 22], [0, 20]], "營業", 0.97),
            ([[100, 0], [140, 0], [140, 20], [100, 20]], "2023", 0.9),
        ])

        result = EasyOCRBackend(reader=reader).recognize(blank_image)

        assert [w.text for w in result.words] == ["營業", "2023"]
        assert result.words[0].bbox == BoundingBox(0, 0, 40, 22)
        assert [l.text for l in result.lines] == ["營業", "2023"]
        assert result.engine == "easyocr"

    def test_easyocr_failure(self, blank_image):
        backend = EasyOCRBackend(reader=FakeReader(RuntimeError("cuda error")))

        with pytest.raises(RecognitionFailureError):
            backend.recognize(blank_image)

    def test_easyocr_bad_entry(self, blank_image):
        backend = EasyOCRBackend(reader=FakeReader([("only", "two")]))

        with pytest.raises(UnrecognizedResultShapeError):
            backend.recognize(blank_image)

    def test_paddleocr(self, blank_image):
        paddle = FakePaddle([[
            ([[0, 0], [40, 0], [40, 20], [0, 20]], ("58.3%", 0.95)),
        ]])

        result = PaddleOCRBackend(ocr=paddle).recognize(blank_image)

        assert [w.text for w in result.words] == ["58.3%"]
        assert result.words[0].confidence == pytest.approx(0.95)

    def test_paddleocr_empty_page(self, blank_image):
        result = PaddleOCRBackend(ocr=FakePaddle([None])).recognize(blank_image)

        assert result.is_empty()
