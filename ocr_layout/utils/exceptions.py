"""
Custom Exceptions Module.

This module defines all custom exceptions used throughout the OCR layout
system. Using specific exceptions allows recognition failures to be
isolated per image while programming errors still propagate.

Exception Hierarchy:
    OCRLayoutError (base)
    ├── InputError
    │   └── UnsupportedFileTypeError
    ├── OCRError
    │   ├── EngineUnavailableError
    │   ├── RecognitionFailureError
    │   └── UnrecognizedResultShapeError
    └── BatchError
        └── BatchInProgressError
"""


class OCRLayoutError(Exception):
    """
    Base exception for all OCR layout errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(OCRLayoutError):
    """Base exception for input handling errors."""
    pass


class UnsupportedFileTypeError(InputError):
    """
    Raised when an unsupported file type is provided.

    Example:
        >>> raise UnsupportedFileTypeError(".gif", [".jpg", ".png"])
    """

    def __init__(self, file_type: str, supported_types: list):
        message = f"Unsupported file type: '{file_type}'"
        details = {"file_type": file_type, "supported_types": supported_types}
        super().__init__(message, details)


# =============================================================================
# OCR ERRORS
# =============================================================================

class OCRError(OCRLayoutError):
    """Base exception for recognition errors that are isolated per image."""
    pass


class EngineUnavailableError(OCRError):
    """Raised when a recognition engine is not installed or not ready."""

    def __init__(self, engine_name: str, reason: str = None):
        message = f"Recognition engine not available: {engine_name}"
        details = {"engine": engine_name}
        if reason:
            details["reason"] = reason
        super().__init__(message, details)


class RecognitionFailureError(OCRError):
    """Raised when the engine fails on one image."""

    def __init__(self, source: str, reason: str = None):
        message = f"Recognition failed for: {source}"
        details = {"source": source, "reason": reason}
        super().__init__(message, details)


class UnrecognizedResultShapeError(OCRError):
    """Raised when engine output cannot be mapped to a RecognitionResult."""

    def __init__(self, reason: str, received_type: str = None):
        message = f"Unrecognized recognition result: {reason}"
        details = {"received_type": received_type} if received_type else {}
        super().__init__(message, details)


# =============================================================================
# BATCH ERRORS
# =============================================================================

class BatchError(OCRLayoutError):
    """Base exception for batch orchestration errors."""
    pass


class BatchInProgressError(BatchError):
    """Raised when a batch is started while another one is running."""

    def __init__(self, current_index: int = None):
        message = "A recognition batch is already running"
        details = {"current_index": current_index}
        super().__init__(message, details)


# Export all exceptions
__all__ = [
    'OCRLayoutError',
    'InputError',
    'UnsupportedFileTypeError',
    'OCRError',
    'EngineUnavailableError',
    'RecognitionFailureError',
    'UnrecognizedResultShapeError',
    'BatchError',
    'BatchInProgressError',
]
