"""
Post-Recognition Layout Module.

This module reconstructs page layout from recognized words:
    - Line grouping by vertical position
    - Table detection
    - Column grouping for header and data rows
    - Numeric repair of OCR decimal errors
    - Table and single-line text formatting
"""

from .lines import group_into_lines
from .table_detector import is_table
from .columns import group_into_columns, is_header_line, no_header_line
from .normalizers import looks_like_number_part, fix_decimal_points, remove_table_artifacts
from .formatters import format_as_table, format_as_text
from .processor import LayoutProcessor, RecognitionMode, LayoutKind, FormattedText

__all__ = [
    'group_into_lines',
    'is_table',
    'group_into_columns',
    'is_header_line',
    'no_header_line',
    'looks_like_number_part',
    'fix_decimal_points',
    'remove_table_artifacts',
    'format_as_table',
    'format_as_text',
    'LayoutProcessor',
    'RecognitionMode',
    'LayoutKind',
    'FormattedText'
]
