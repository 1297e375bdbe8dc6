"""
Recognition backend interface.

Every backend turns a PIL image into a RecognitionResult. Backends
report literal engine output only; layout reconstruction happens later.
"""

from abc import ABC, abstractmethod
from typing import Optional

from PIL import Image

from .ocr_result import RecognitionResult


class BaseBackend(ABC):
    """
    Interface for recognition backends.

    Attributes:
        name: Backend identifier used in configuration and results
        supports_language_selection: Whether ``recognize`` honours a
            language profile such as ``chi_tra+eng``
    """

    name: str = "base"
    supports_language_selection: bool = False

    @abstractmethod
    def recognize(
        self,
        image: Image.Image,
        language: Optional[str] = None
    ) -> RecognitionResult:
        """
        Recognize one image.

        Raises:
            RecognitionFailureError: If the engine fails on the image.
        """
        raise NotImplementedError

    def get_raw_text(self, image: Image.Image, language: Optional[str] = None) -> str:
        """Text-only pass; backends override this when they have a faster path."""
        return self.recognize(image, language).full_text
