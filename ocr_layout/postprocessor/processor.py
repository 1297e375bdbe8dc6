"""
Layout Processor Module.

This module provides the LayoutProcessor class that turns one
recognition result into output text, choosing between table and text
formatting according to the recognition mode.

Modes:
    - text: always flatten to a single line
    - table: always render tab-separated rows
    - auto: run the table detector and branch
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from config import get_config
from ocr_layout.ocr_engine.ocr_result import RecognitionResult
from ocr_layout.utils.logger import get_logger
from .columns import HEADER_CLASSIFIERS, HeaderClassifier
from .formatters import format_as_table, format_as_text
from .table_detector import is_table

# Initialize module logger
logger = get_logger(__name__)


class RecognitionMode(str, Enum):
    """User-selected formatting mode."""
    AUTO = "auto"
    TEXT = "text"
    TABLE = "table"


class LayoutKind(str, Enum):
    """Formatting path that produced an output."""
    TEXT = "text"
    TABLE = "table"


@dataclass(frozen=True)
class FormattedText:
    """
    Output for one image.

    Attributes:
        text: Tab/newline-delimited table or a single flattened line
        layout: Which formatting path produced the text
    """
    text: str
    layout: LayoutKind


class LayoutProcessor:
    """
    Formats recognition results according to the recognition mode.

    Attributes:
        mode: Active RecognitionMode
        header_classifier: Header-row policy used for table columns

    Example:
        >>> processor = LayoutProcessor(mode="auto")
        >>> output = processor.process(result)
        >>> output.layout
        <LayoutKind.TABLE: 'table'>
    """

    def __init__(
        self,
        mode: Union[RecognitionMode, str, None] = None,
        header_classifier: Optional[HeaderClassifier] = None
    ) -> None:
        """
        Initialize the processor.

        Args:
            mode: Recognition mode; defaults to ``layout.mode``.
            header_classifier: Header policy; defaults to the policy
                named by ``layout.header_detection``.

        Raises:
            ValueError: If the mode or the configured policy is unknown.
        """
        self.mode = RecognitionMode(mode or get_config("layout.mode", "auto"))

        if header_classifier is None:
            policy = get_config("layout.header_detection", "cjk")
            if policy not in HEADER_CLASSIFIERS:
                raise ValueError(f"Unknown header detection policy: {policy!r}")
            header_classifier = HEADER_CLASSIFIERS[policy]
        self.header_classifier = header_classifier

        logger.debug(f"LayoutProcessor initialized (mode={self.mode.value})")

    def process(
        self,
        result: RecognitionResult,
        mode: Union[RecognitionMode, str, None] = None
    ) -> FormattedText:
        """
        Format one recognition result.

        Args:
            result: Adapted recognition output.
            mode: Optional override of the processor's mode.

        Returns:
            FormattedText with the chosen layout.
        """
        mode = RecognitionMode(mode) if mode else self.mode

        if mode is RecognitionMode.TABLE:
            use_table = True
        elif mode is RecognitionMode.TEXT:
            use_table = False
        else:
            use_table = is_table(result.words)

        if use_table:
            text = format_as_table(result.words, self.header_classifier)
            return FormattedText(text=text, layout=LayoutKind.TABLE)

        return FormattedText(text=format_as_text(result), layout=LayoutKind.TEXT)
