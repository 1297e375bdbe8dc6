"""
Tests for language profile detection.
"""

import pytest

from ocr_layout.ocr_engine.engine import RecognitionEngine
from ocr_layout.ocr_engine.language import LanguageDetector
from tests.conftest import FakeBackend


@pytest.fixture
def detector():
    return LanguageDetector(cjk_profile="chi_tra", latin_profile="eng", mixed_profile="chi_tra+eng")


class TestChooseProfile:
    """Test the CJK ratio thresholds."""

    @pytest.mark.parametrize("text,expected", [
        ("營業收入合計", "chi_tra"),
        ("Total revenue for the year", "eng"),
        ("營業收入 Revenue", "chi_tra+eng"),
        ("", "chi_tra+eng"),
        ("2023 58.3% 1,234", "chi_tra+eng"),
    ])
    def test_profiles(self, detector, text, expected):
        assert detector.choose_profile(text) == expected

    def test_defaults_from_config(self):
        detector = LanguageDetector()

        assert detector.cjk_profile == "chi_tra"
        assert detector.latin_profile == "eng"
        assert detector.mixed_profile == "chi_tra+eng"


class TestDetect:
    """Test the quick recognition pass."""

    def test_quick_pass_uses_mixed_profile(self, detector, blank_image):
        backend = FakeBackend(raw_text="營業收入合計", supports_language_selection=True)

        profile = detector.detect(RecognitionEngine(backend), blank_image)

        assert profile == "chi_tra"
        assert backend.text_calls == ["chi_tra+eng"]

    def test_failure_falls_back_to_mixed(self, detector, blank_image):
        backend = FakeBackend(raw_text=RuntimeError("engine crashed"))

        assert detector.detect(RecognitionEngine(backend), blank_image) == "chi_tra+eng"
