"""
Output formatters for recognized pages.

``format_as_table`` renders rows as tab-separated cells, one row per
line. ``format_as_text`` flattens everything into a single line so the
result fits in one spreadsheet cell.
"""

import re
from typing import List, Sequence

from ocr_layout.ocr_engine.ocr_result import RecognitionResult, RecognizedWord
from ocr_layout.utils.logger import get_logger
from .columns import HeaderClassifier, group_into_columns, is_header_line
from .lines import group_into_lines
from .normalizers import fix_decimal_points, remove_table_artifacts
from .table_detector import is_border_token

# Initialize module logger
logger = get_logger(__name__)

CELL_SEPARATOR = '\t'
ROW_SEPARATOR = '\n'

WHITESPACE_RE = re.compile(r'\s+')


def format_as_table(
    words: Sequence[RecognizedWord],
    header_classifier: HeaderClassifier = is_header_line
) -> str:
    """
    Render recognized words as tab-separated rows.

    Border tokens are dropped before grouping. Each column's words are
    joined without a separator, repaired with ``fix_decimal_points`` and
    cleaned with ``remove_table_artifacts``. Empty cells are dropped and
    rows left without cells are omitted.

    Args:
        words: Recognized words for one image.
        header_classifier: Policy choosing the header column strategy.

    Returns:
        Rows joined by newlines, without trailing whitespace.
    """
    filtered = [w for w in words if not is_border_token(w.text)]
    rows: List[str] = []

    for line in group_into_lines(filtered):
        cells = []
        for column in group_into_columns(line, header_classifier):
            cell = ''.join(w.text for w in column).strip()
            cell = remove_table_artifacts(fix_decimal_points(cell))
            if cell:
                cells.append(cell)

        if cells:
            rows.append(CELL_SEPARATOR.join(cells))

    logger.debug(f"Formatted table with {len(rows)} rows")
    return ROW_SEPARATOR.join(rows).rstrip()


def format_as_text(result: RecognitionResult) -> str:
    """
    Flatten a recognition result into one line of text.

    Paragraph texts are preferred, then line texts, then the engine's
    raw text. Any run of whitespace, including newlines and tabs,
    becomes a single space.

    Example:
        >>> format_as_text(RecognitionResult(paragraphs=[TextBlock("Hello\\nworld  ")]))
        'Hello world'
    """
    paragraphs = [p.text.strip() for p in result.paragraphs if p.text.strip()]
    lines = [l.text.strip() for l in result.lines if l.text.strip()]

    if paragraphs:
        text = ' '.join(paragraphs)
    elif lines:
        text = ' '.join(lines)
    else:
        text = result.full_text or ''

    return WHITESPACE_RE.sub(' ', text).strip()
