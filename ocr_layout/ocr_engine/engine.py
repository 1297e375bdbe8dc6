"""
Main Recognition Engine Module.

This module provides the RecognitionEngine class, the single interface
the batch shell uses for recognition. It walks a ranked list of
backends and keeps the first one that initializes.

Usage:
    from ocr_layout.ocr_engine import RecognitionEngine

    engine = RecognitionEngine()
    result = engine.recognize("scan.png", language="chi_tra+eng")

    print(result.full_text)
    print(result.words)
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from PIL import Image, UnidentifiedImageError

from config import get_config
from ocr_layout.utils.logger import get_logger
from ocr_layout.utils.exceptions import EngineUnavailableError, OCRError, RecognitionFailureError
from .base import BaseBackend
from .detector_backends import EasyOCRBackend, PaddleOCRBackend
from .ocr_result import RecognitionResult
from .tesseract_backend import TesseractBackend

# Initialize module logger
logger = get_logger(__name__)

BackendFactory = Callable[[], BaseBackend]
BackendSpec = Union[str, BaseBackend, BackendFactory]
ImageSource = Union[Image.Image, str, Path]

# Backends available by name, in no particular order
BACKENDS: Dict[str, BackendFactory] = {
    'tesseract': TesseractBackend,
    'easyocr': EasyOCRBackend,
    'paddleocr': PaddleOCRBackend,
}


class RecognitionEngine:
    """
    Recognition engine with ranked backend fallback.

    Backends are tried in order. Names are looked up in ``BACKENDS``;
    factories are called; instances are used as-is. A backend raising
    EngineUnavailableError is skipped with a warning.

    Attributes:
        backend: The active backend instance
        backend_name: Name of the active backend

    Example:
        >>> engine = RecognitionEngine(["easyocr", "tesseract"])
        >>> engine.backend_name
        'tesseract'
    """

    def __init__(self, backends: Optional[Sequence[BackendSpec]] = None) -> None:
        """
        Initialize the engine.

        Args:
            backends: Ranked backend specs; defaults to ``ocr.engines``.

        Raises:
            EngineUnavailableError: If no backend can be initialized.
        """
        if backends is None:
            backends = get_config("ocr.engines", ["tesseract"])
        if isinstance(backends, (str, BaseBackend)):
            backends = [backends]

        self.backend = self._initialize_backend(list(backends))
        self.backend_name = self.backend.name

        logger.info(f"Recognition engine initialized with backend: {self.backend_name}")

    def _initialize_backend(self, candidates: List[BackendSpec]) -> BaseBackend:
        """
        Return the first backend that initializes.

        Raises:
            EngineUnavailableError: If every candidate is unavailable.
        """
        tried = []

        for candidate in candidates:
            if isinstance(candidate, BaseBackend):
                return candidate

            if isinstance(candidate, str):
                name = candidate.lower()
                if name == "pytesseract":
                    name = "tesseract"
                factory = BACKENDS.get(name)
                if factory is None:
                    logger.warning(f"Unknown backend '{candidate}', skipping")
                    tried.append(candidate)
                    continue
            else:
                name = getattr(candidate, "name", repr(candidate))
                factory = candidate

            try:
                return factory()
            except EngineUnavailableError as e:
                logger.warning(f"Backend '{name}' unavailable, trying next: {e}")
                tried.append(name)

        raise EngineUnavailableError(
            ", ".join(str(t) for t in tried) or "none",
            "no recognition backend could be initialized"
        )

    @property
    def supports_language_selection(self) -> bool:
        return self.backend.supports_language_selection

    def _load_image(self, image: ImageSource) -> Image.Image:
        """
        Load an image from a path, or validate a PIL image.

        Raises:
            RecognitionFailureError: If the image cannot be loaded.
        """
        if isinstance(image, (str, Path)):
            image_path = str(image)
            logger.debug(f"Loading image from: {image_path}")
            try:
                with Image.open(image_path) as img:
                    img.load()
                    return img.copy()
            except (OSError, UnidentifiedImageError) as e:
                raise RecognitionFailureError(image_path, f"Failed to load image: {e}") from e

        if not isinstance(image, Image.Image):
            raise RecognitionFailureError(
                "unknown", f"Invalid image input: {type(image).__name__}"
            )
        return image

    def recognize(self, image: ImageSource, language: Optional[str] = None) -> RecognitionResult:
        """
        Recognize one image with the active backend.

        Args:
            image: PIL Image or path to an image file.
            language: Language profile for backends that support one.

        Returns:
            RecognitionResult from the backend.

        Raises:
            RecognitionFailureError: If loading or recognition fails.
            UnrecognizedResultShapeError: If the backend output is unusable.
        """
        pil_image = self._load_image(image)

        logger.debug(f"Recognizing with {self.backend_name} backend (lang={language})")
        try:
            raw = self.backend.recognize(pil_image, language)
        except OCRError:
            raise
        except Exception as e:
            raise RecognitionFailureError(self.backend_name, str(e)) from e

        return RecognitionResult.from_dict(raw, engine=self.backend_name)

    def recognize_text(self, image: ImageSource, language: Optional[str] = None) -> str:
        """
        Fast text-only recognition, used for language detection.

        Raises:
            RecognitionFailureError: If loading or recognition fails.
        """
        pil_image = self._load_image(image)
        try:
            return self.backend.get_raw_text(pil_image, language)
        except OCRError:
            raise
        except Exception as e:
            raise RecognitionFailureError(self.backend_name, str(e)) from e

    def get_backend_info(self) -> Dict[str, Any]:
        """Get information about the current backend."""
        info = {
            'backend': self.backend_name,
            'supports_language_selection': self.supports_language_selection
        }

        if hasattr(self.backend, 'get_available_languages'):
            info['languages'] = self.backend.get_available_languages()

        return info
