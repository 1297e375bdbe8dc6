"""
Tesseract OCR Backend.

This module provides recognition using Tesseract (pytesseract), the
general-purpose engine. It extracts words with bounding boxes and
rebuilds Tesseract's own line and paragraph structure.

Features:
    - Word-level bounding boxes and confidences
    - Line and paragraph texts from block/paragraph/line numbers
    - Language profiles (chi_tra, eng, chi_tra+eng)
    - Fast text-only pass for language detection

Requirements:
    - Tesseract OCR installed on the system, with the chi_tra
      traineddata for Traditional Chinese
    - pytesseract Python package
"""

import time
from typing import Any, Dict, List, Optional, Tuple

from PIL import Image

from config import get_config
from ocr_layout.utils.logger import get_logger
from ocr_layout.utils.exceptions import EngineUnavailableError, RecognitionFailureError
from .base import BaseBackend
from .ocr_result import BoundingBox, RecognitionResult, RecognizedWord, TextBlock, normalize_confidence

# Initialize module logger
logger = get_logger(__name__)

# (block_num, par_num) and (block_num, par_num, line_num)
ParagraphKey = Tuple[int, int]
LineKey = Tuple[int, int, int]


class TesseractBackend(BaseBackend):
    """
    Tesseract recognition backend.

    Attributes:
        language: Default Tesseract language profile
        psm: Page Segmentation Mode (1-13)
        oem: OCR Engine Mode (0-3)
        extra_config: Additional Tesseract configuration

    Example:
        >>> backend = TesseractBackend()
        >>> result = backend.recognize(image, language="chi_tra+eng")
        >>> print(f"Found {result.word_count} words")
    """

    name = "tesseract"
    supports_language_selection = True

    def __init__(self) -> None:
        """Initialize the Tesseract backend with configuration."""
        self.language = get_config("ocr.language.default", "chi_tra+eng")
        self.psm = get_config("ocr.tesseract.psm", 3)
        self.oem = get_config("ocr.tesseract.oem", 3)
        self.extra_config = get_config("ocr.tesseract.config", "")

        self._check_dependencies()

        logger.debug(
            f"TesseractBackend initialized (lang={self.language}, "
            f"psm={self.psm}, oem={self.oem})"
        )

    def _check_dependencies(self) -> None:
        """
        Check if Tesseract is available.

        Raises:
            EngineUnavailableError: If Tesseract is not installed.
        """
        try:
            import pytesseract
        except ImportError as e:
            raise EngineUnavailableError(
                self.name, "pytesseract is not installed"
            ) from e

        self._pytesseract = pytesseract
        try:
            self.version = str(pytesseract.get_tesseract_version())
        except Exception as e:
            raise EngineUnavailableError(
                self.name, f"Tesseract OCR not installed or not in PATH: {e}"
            ) from e

        logger.info(f"Tesseract version: {self.version}")

    def _build_config(self) -> str:
        """Build the Tesseract configuration string."""
        config_parts = [
            f"--psm {self.psm}",
            f"--oem {self.oem}"
        ]

        if self.extra_config:
            config_parts.append(self.extra_config)

        return ' '.join(config_parts)

    def recognize(
        self,
        image: Image.Image,
        language: Optional[str] = None
    ) -> RecognitionResult:
        """
        Recognize words, lines and paragraphs in an image.

        Args:
            image: PIL Image to process.
            language: Language profile; defaults to the configured one.

        Returns:
            RecognitionResult with confidences in the range 0-1.

        Raises:
            RecognitionFailureError: If Tesseract fails.
        """
        language = language or self.language
        start_time = time.time()

        try:
            if image.mode != 'RGB':
                image = image.convert('RGB')

            config = self._build_config()
            logger.debug(f"Running Tesseract OCR (lang={language}, config: {config})")

            data = self._pytesseract.image_to_data(
                image,
                lang=language,
                config=config,
                output_type=self._pytesseract.Output.DICT
            )
        except Exception as e:
            logger.error(f"Tesseract processing failed: {e}")
            raise RecognitionFailureError("image", str(e)) from e

        words, lines, paragraphs = self._parse_tesseract_output(data)
        processing_time = time.time() - start_time

        result = RecognitionResult(
            full_text='\n'.join(line.text for line in lines),
            words=words,
            paragraphs=paragraphs,
            lines=lines,
            language=language,
            engine=self.name,
            processing_time=processing_time,
            metadata={
                'psm': self.psm,
                'oem': self.oem,
                'tesseract_version': self.version
            }
        )

        logger.info(
            f"OCR completed: {result.word_count} words, {len(lines)} lines, "
            f"avg confidence: {result.average_confidence:.2f} "
            f"({processing_time:.2f}s)"
        )
        return result

    def _parse_tesseract_output(
        self,
        data: Dict[str, List[Any]]
    ) -> Tuple[List[RecognizedWord], List[TextBlock], List[TextBlock]]:
        """
        Parse ``image_to_data`` output.

        Returns:
            Words in Tesseract order plus line and paragraph texts.
        """
        words: List[RecognizedWord] = []
        line_words: Dict[LineKey, List[str]] = {}
        paragraph_lines: Dict[ParagraphKey, List[LineKey]] = {}

        for i in range(len(data['text'])):
            text = (data['text'][i] or '').strip()
            if not text:
                continue

            x, y = data['left'][i], data['top'][i]
            w, h = data['width'][i], data['height'][i]
            if w <= 0 or h <= 0:
                continue

            conf = float(data['conf'][i])
            words.append(RecognizedWord(
                text=text,
                bbox=BoundingBox(x0=x, y0=y, x1=x + w, y1=y + h),
                # Tesseract reports 0-100, and -1 for non-word elements
                confidence=normalize_confidence(max(conf, 0.0) / 100.0)
            ))

            par_key = (data['block_num'][i], data['par_num'][i])
            line_key = par_key + (data['line_num'][i],)
            if line_key not in line_words:
                line_words[line_key] = []
                paragraph_lines.setdefault(par_key, []).append(line_key)
            line_words[line_key].append(text)

        lines = [TextBlock(' '.join(line_words[key])) for key in line_words]
        paragraphs = [
            TextBlock('\n'.join(' '.join(line_words[key]) for key in keys))
            for keys in paragraph_lines.values()
        ]
        return words, lines, paragraphs

    def get_raw_text(self, image: Image.Image, language: Optional[str] = None) -> str:
        """
        Extract only the text content (no bounding boxes).

        Raises:
            RecognitionFailureError: If Tesseract fails.
        """
        try:
            text = self._pytesseract.image_to_string(
                image,
                lang=language or self.language,
                config=self._build_config()
            )
        except Exception as e:
            raise RecognitionFailureError("image", str(e)) from e
        return text.strip()

    def get_available_languages(self) -> List[str]:
        """Get list of installed Tesseract languages."""
        try:
            langs = self._pytesseract.get_languages()
        except Exception as e:
            logger.debug(f"Could not get languages: {e}")
            return ['eng']
        return [l for l in langs if l != 'osd']
