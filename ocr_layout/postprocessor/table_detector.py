"""
Table Detection Module.

Decides whether a page of recognized words is a table. The policy is
deliberately conservative: a page is tabular only when it has enough
rows, a stable column count, column alignment, no signs of flowing
prose and a numeric payload.

Usage:
    from ocr_layout.postprocessor.table_detector import is_table

    if is_table(result.words):
        text = format_as_table(result.words)
"""

import re
from statistics import mean
from typing import List, Sequence

from ocr_layout.ocr_engine.ocr_result import RecognizedWord
from ocr_layout.utils.logger import get_logger
from .lines import Line, group_into_lines

# Initialize module logger
logger = get_logger(__name__)

MIN_TABLE_LINES = 3
MIN_AVERAGE_COLUMNS = 2.5
COLUMN_COUNT_SLACK = 1
MIN_SIMILAR_LINE_RATIO = 0.7

PROSE_WORD_LIMIT = 20
ALIGNMENT_TOLERANCE_PX = 30
MIN_ALIGNED_POSITION_RATIO = 0.5
MIN_ALIGNED_LINE_RATIO = 0.4

MIN_NUMERIC_WORD_RATIO = 0.3

COMPLETE_WORD_MIN_LENGTH = 3
MAX_COMPLETE_WORD_RATIO = 0.7

CONNECTING_WORDS = (
    'the', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for', 'of', 'with', 'by'
)

BORDER_TOKEN_RE = re.compile(r'^[|\-+=_\s]+$')
CONNECTOR_RE = re.compile(
    r'\b(?:' + '|'.join(CONNECTING_WORDS) + r')\b', re.IGNORECASE
)
ALL_DIGITS_RE = re.compile(r'^\d+$')
# Decimals are covered by the digit class
NUMERIC_TOKEN_RE = re.compile(r'[\d%]')


def is_border_token(text: str) -> bool:
    """True for empty tokens and tokens made only of table-drawing characters."""
    stripped = text.strip()
    return not stripped or bool(BORDER_TOKEN_RE.match(stripped))


def is_numeric_token(text: str) -> bool:
    """True when a token carries a digit, a percent sign or a decimal."""
    return bool(NUMERIC_TOKEN_RE.search(text))


def seems_like_continuous_text(lines: Sequence[Line]) -> bool:
    """
    Check whether the words read like running prose.

    Prose either uses common English connectors as whole words, or is
    dominated by words of three or more characters that are not plain
    numbers.
    """
    all_words = [word.text for line in lines for word in line]
    if not all_words:
        return False

    text = ' '.join(all_words)
    if CONNECTOR_RE.search(text):
        return True

    complete_words = [
        w for w in all_words
        if len(w) >= COMPLETE_WORD_MIN_LENGTH and not ALL_DIGITS_RE.match(w)
    ]
    return len(complete_words) / len(all_words) > MAX_COMPLETE_WORD_RATIO


def has_table_structure(lines: Sequence[Line]) -> bool:
    """
    Check column alignment of the lines against the first line.

    Lines with as many words as the first line are compared position by
    position; a line counts as aligned when at least half its positions
    start within the alignment tolerance of the first line's.
    """
    if len(lines) < 2:
        return False

    all_text = ' '.join(word.text for line in lines for word in line)
    total_words = len(all_text.split())

    if total_words > PROSE_WORD_LIMIT and seems_like_continuous_text(lines):
        logger.debug(f"Rejected as prose ({total_words} words)")
        return False

    header = lines[0]
    aligned_lines = 0

    for line in lines[1:]:
        if len(line) != len(header):
            continue

        aligned_positions = sum(
            1 for ref, word in zip(header, line)
            if abs(ref.x0 - word.x0) <= ALIGNMENT_TOLERANCE_PX
        )
        if aligned_positions / len(header) >= MIN_ALIGNED_POSITION_RATIO:
            aligned_lines += 1

    return aligned_lines / (len(lines) - 1) >= MIN_ALIGNED_LINE_RATIO


def is_table(words: Sequence[RecognizedWord]) -> bool:
    """
    Decide whether recognized words form a table.

    Args:
        words: Recognized words for one image.

    Returns:
        True only when every structural and content check passes.
    """
    filtered: List[RecognizedWord] = [w for w in words if not is_border_token(w.text)]
    lines = group_into_lines(filtered)

    if len(lines) < MIN_TABLE_LINES:
        logger.debug(f"Not a table: {len(lines)} lines")
        return False

    column_counts = [len(line) for line in lines]
    avg_columns = mean(column_counts)
    if avg_columns < MIN_AVERAGE_COLUMNS:
        logger.debug(f"Not a table: {avg_columns:.2f} columns on average")
        return False

    similar = [c for c in column_counts if abs(c - avg_columns) <= COLUMN_COUNT_SLACK]
    if len(similar) / len(lines) < MIN_SIMILAR_LINE_RATIO:
        logger.debug("Not a table: unstable column count")
        return False

    if not has_table_structure(lines):
        logger.debug("Not a table: columns are not aligned")
        return False

    numeric_words = [w for w in filtered if is_numeric_token(w.text)]
    numeric_ratio = len(numeric_words) / len(filtered)
    if numeric_ratio < MIN_NUMERIC_WORD_RATIO:
        logger.debug(f"Not a table: numeric ratio {numeric_ratio:.2f}")
        return False

    logger.debug(
        f"Table detected: {len(lines)} lines, {avg_columns:.1f} columns on average"
    )
    return True
