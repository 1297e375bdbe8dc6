"""
Backends built on specialized text-detection models.

EasyOCR and PaddleOCR detect text regions as quadrilaterals and
recognize each region as one token. Their boxes are converted to
axis-aligned boxes before layout reconstruction. Both libraries are
optional extras; a missing library makes the backend unavailable so
the engine can fall back to the next one.
"""

import time
from typing import Any, List, Optional

import numpy as np
from PIL import Image

from config import get_config
from ocr_layout.utils.logger import get_logger
from ocr_layout.utils.exceptions import (
    EngineUnavailableError,
    RecognitionFailureError,
    UnrecognizedResultShapeError,
)
from .base import BaseBackend
from .ocr_result import BoundingBox, RecognitionResult, RecognizedWord, TextBlock, normalize_confidence

# Initialize module logger
logger = get_logger(__name__)


def _build_result(words: List[RecognizedWord], engine: str, start_time: float) -> RecognitionResult:
    # Detectors return one token per text region, in reading order
    lines = [TextBlock(w.text) for w in words]
    return RecognitionResult(
        full_text='\n'.join(w.text for w in words),
        words=words,
        lines=lines,
        engine=engine,
        processing_time=time.time() - start_time
    )


class EasyOCRBackend(BaseBackend):
    """Wrapper for EasyOCR to provide the backend interface."""

    name = "easyocr"

    def __init__(self, reader: Any = None) -> None:
        """
        Initialize the EasyOCR reader.

        Args:
            reader: Prebuilt ``easyocr.Reader``; built from configuration
                when omitted.

        Raises:
            EngineUnavailableError: If EasyOCR cannot be loaded.
        """
        if reader is None:
            try:
                import easyocr
            except ImportError as e:
                raise EngineUnavailableError(self.name, "easyocr is not installed") from e

            languages = get_config("ocr.easyocr.languages", ["ch_tra", "en"])
            gpu = get_config("ocr.easyocr.gpu", False)
            try:
                reader = easyocr.Reader(languages, gpu=gpu)
            except Exception as e:
                raise EngineUnavailableError(self.name, str(e)) from e

        self.reader = reader
        logger.debug("EasyOCRBackend initialized")

    def recognize(self, image: Image.Image, language: Optional[str] = None) -> RecognitionResult:
        """Recognize text regions; ``language`` is fixed at reader creation."""
        start_time = time.time()

        try:
            results = self.reader.readtext(np.array(image.convert('RGB')))
        except Exception as e:
            raise RecognitionFailureError("image", str(e)) from e

        words = []
        for entry in results:
            try:
                polygon, text, conf = entry
            except (TypeError, ValueError) as e:
                raise UnrecognizedResultShapeError(f"easyocr entry: {e}") from e
            words.append(RecognizedWord(
                text=str(text),
                bbox=BoundingBox.from_polygon(polygon),
                confidence=normalize_confidence(conf)
            ))

        return _build_result(words, self.name, start_time)


class PaddleOCRBackend(BaseBackend):
    """Wrapper for PaddleOCR to provide the backend interface."""

    name = "paddleocr"

    def __init__(self, ocr: Any = None) -> None:
        """
        Initialize the PaddleOCR pipeline.

        Args:
            ocr: Prebuilt ``PaddleOCR`` instance; built from
                configuration when omitted.

        Raises:
            EngineUnavailableError: If PaddleOCR cannot be loaded.
        """
        if ocr is None:
            try:
                from paddleocr import PaddleOCR
            except ImportError as e:
                raise EngineUnavailableError(self.name, "paddleocr is not installed") from e

            try:
                ocr = PaddleOCR(
                    use_angle_cls=get_config("ocr.paddleocr.use_angle_cls", True),
                    lang=get_config("ocr.paddleocr.lang", "chinese_cht")
                )
            except Exception as e:
                raise EngineUnavailableError(self.name, str(e)) from e

        self.ocr = ocr
        logger.debug("PaddleOCRBackend initialized")

    def recognize(self, image: Image.Image, language: Optional[str] = None) -> RecognitionResult:
        """Recognize text regions; ``language`` is fixed at pipeline creation."""
        start_time = time.time()

        try:
            results = self.ocr.ocr(np.array(image.convert('RGB')), cls=True)
        except Exception as e:
            raise RecognitionFailureError("image", str(e)) from e

        words = []
        # One entry per page; a page without text is None
        if results and results[0]:
            for entry in results[0]:
                try:
                    polygon, (text, conf) = entry
                except (TypeError, ValueError) as e:
                    raise UnrecognizedResultShapeError(f"paddleocr entry: {e}") from e
                words.append(RecognizedWord(
                    text=str(text),
                    bbox=BoundingBox.from_polygon(polygon),
                    confidence=normalize_confidence(conf)
                ))

        return _build_result(words, self.name, start_time)
