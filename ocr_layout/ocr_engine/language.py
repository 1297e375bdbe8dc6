"""
Language profile auto-detection.

A quick text-only pass with the mixed profile is run first; the share
of CJK characters among CJK and Latin letters then selects the profile
for the real pass.
"""

import re
from typing import Optional

from config import get_config
from ocr_layout.utils.logger import get_logger
from .engine import ImageSource, RecognitionEngine

# Initialize module logger
logger = get_logger(__name__)

CJK_DOMINANT_RATIO = 0.7
LATIN_DOMINANT_RATIO = 0.3

CJK_CHAR_RE = re.compile(r'[\u4e00-\u9fff]')
LATIN_CHAR_RE = re.compile(r'[a-zA-Z]')


class LanguageDetector:
    """
    Picks a language profile from a quick recognition pass.

    Attributes:
        cjk_profile: Profile for mostly-CJK pages
        latin_profile: Profile for mostly-Latin pages
        mixed_profile: Profile for mixed pages and the fallback

    Example:
        >>> detector = LanguageDetector()
        >>> detector.choose_profile("營業收入 Revenue 合計")
        'chi_tra+eng'
    """

    def __init__(
        self,
        cjk_profile: Optional[str] = None,
        latin_profile: Optional[str] = None,
        mixed_profile: Optional[str] = None
    ) -> None:
        self.cjk_profile = cjk_profile or get_config("ocr.language.profiles.cjk", "chi_tra")
        self.latin_profile = latin_profile or get_config("ocr.language.profiles.latin", "eng")
        self.mixed_profile = mixed_profile or get_config(
            "ocr.language.profiles.mixed", "chi_tra+eng"
        )

    def choose_profile(self, text: str) -> str:
        """Select a profile from the CJK share of the letters in ``text``."""
        cjk_chars = len(CJK_CHAR_RE.findall(text))
        latin_chars = len(LATIN_CHAR_RE.findall(text))
        total = cjk_chars + latin_chars

        if total == 0:
            return self.mixed_profile

        cjk_ratio = cjk_chars / total
        if cjk_ratio > CJK_DOMINANT_RATIO:
            return self.cjk_profile
        if cjk_ratio < LATIN_DOMINANT_RATIO:
            return self.latin_profile
        return self.mixed_profile

    def detect(self, engine: RecognitionEngine, image: ImageSource) -> str:
        """
        Run the quick pass and choose a profile.

        Any failure during the quick pass yields the mixed profile; the
        real recognition pass reports its own errors.
        """
        try:
            text = engine.recognize_text(image, self.mixed_profile)
        except Exception as e:
            logger.warning(f"Language detection failed, using {self.mixed_profile}: {e}")
            return self.mixed_profile

        profile = self.choose_profile(text)
        logger.debug(f"Detected language profile: {profile}")
        return profile
