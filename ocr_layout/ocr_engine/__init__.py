"""
Recognition Engine Module for the OCR layout system.

This module provides recognition functionality including:
    - Word extraction with bounding boxes and confidences
    - Engine-agnostic result structures
    - Ranked backend fallback
    - Language profile auto-detection

Supports multiple backends:
    - Tesseract (general-purpose, primary)
    - EasyOCR (text-detection model, optional)
    - PaddleOCR (text-detection model, optional)
"""

from .ocr_result import BoundingBox, RecognizedWord, TextBlock, RecognitionResult
from .base import BaseBackend
from .tesseract_backend import TesseractBackend
from .detector_backends import EasyOCRBackend, PaddleOCRBackend
from .engine import RecognitionEngine, BACKENDS
from .language import LanguageDetector

__all__ = [
    'BoundingBox',
    'RecognizedWord',
    'TextBlock',
    'RecognitionResult',
    'BaseBackend',
    'TesseractBackend',
    'EasyOCRBackend',
    'PaddleOCRBackend',
    'RecognitionEngine',
    'BACKENDS',
    'LanguageDetector'
]
