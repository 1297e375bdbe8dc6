"""
OCR Layout - Source Package.

Post-recognition layout reconstruction for OCR output: recognized words
with bounding boxes are turned into either a single normalized text
line or a tab-separated table.

Modules:
    - ocr_engine: Recognition backends and engine-agnostic results
    - postprocessor: Line/column grouping, table detection, formatting
    - batch: Sequential batch orchestration
    - utils: Logging, exceptions and helpers

Architecture:
    Image -> Recognition engine -> Line grouping -> Table detection
          -> Table formatting | Text formatting -> Batch result
"""

__version__ = "1.0.0"

__all__ = [
    'ocr_engine',
    'postprocessor',
    'batch',
    'utils'
]
