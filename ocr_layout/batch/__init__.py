"""
Batch Module for the OCR layout system.

Sequential, partial-failure tolerant recognition of image batches.
"""

from .orchestrator import (
    RecognitionOrchestrator,
    BatchStatus,
    BatchResult,
    ImageOutcome
)

__all__ = [
    'RecognitionOrchestrator',
    'BatchStatus',
    'BatchResult',
    'ImageOutcome'
]
