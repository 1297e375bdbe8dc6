"""
Column grouping within one table line.

Header rows and data rows are split with different gap rules. Header
rows in CJK financial tables have wide, irregular labels and year
captions, so they are cut on gaps relative to the average word width.
Data rows are cut on gaps relative to the previous word, except where
the recognizer split one number in two.

The header classifier is a policy: ``is_header_line`` is tuned for
Chinese financial statements, ``no_header_line`` treats every row as
data.
"""

import re
from statistics import mean
from typing import Callable, Dict, List, Sequence

from ocr_layout.ocr_engine.ocr_result import RecognizedWord
from .lines import Line
from .normalizers import looks_like_number_part

Column = List[RecognizedWord]
HeaderClassifier = Callable[[Sequence[RecognizedWord]], bool]

# Header rows: gap factors relative to the average word width
HEADER_GAP_FACTOR = 1.5
HEADER_YEAR_GAP_FACTOR = 0.8
HEADER_WORD_GAP_FACTOR = 1.0
HEADER_WORD_MIN_LENGTH = 2

# Data rows: gap factor relative to the previous word's width
DATA_GAP_FACTOR = 0.5

CJK_RUN_RE = re.compile(r'[\u4e00-\u9fff]{2,}')
NUMERIC_RE = re.compile(r'[\d%]')
YEAR_TOKEN_RE = re.compile(r'(?<!\d)20\d{2}(?!\d)')
YEAR_RE = re.compile(r'^20\d{2}$')


def is_header_line(line: Sequence[RecognizedWord]) -> bool:
    """
    Classify a line as a CJK table header.

    A header carries a run of two or more CJK characters and either no
    numbers at all or a year such as 2023.
    """
    # CJK engines often emit one token per character
    joined = ''.join(w.text for w in line)
    if not CJK_RUN_RE.search(joined):
        return False

    spaced = ' '.join(w.text for w in line)
    return not NUMERIC_RE.search(spaced) or bool(YEAR_TOKEN_RE.search(spaced))


def no_header_line(line: Sequence[RecognizedWord]) -> bool:
    return False


HEADER_CLASSIFIERS: Dict[str, HeaderClassifier] = {
    'cjk': is_header_line,
    'none': no_header_line,
}


def _group_header(words: List[RecognizedWord]) -> List[Column]:
    avg_word_width = mean(w.width for w in words)

    columns: List[Column] = [[words[0]]]
    for prev, word in zip(words, words[1:]):
        gap = word.x0 - prev.x1
        text = word.text.strip()

        if gap > HEADER_GAP_FACTOR * avg_word_width:
            split = True
        elif YEAR_RE.match(text) and gap > HEADER_YEAR_GAP_FACTOR * avg_word_width:
            split = True
        elif len(text) >= HEADER_WORD_MIN_LENGTH and gap > HEADER_WORD_GAP_FACTOR * avg_word_width:
            split = True
        else:
            split = False

        if split:
            columns.append([word])
        else:
            columns[-1].append(word)

    return columns


def _group_data(words: List[RecognizedWord]) -> List[Column]:
    columns: List[Column] = [[words[0]]]
    for prev, word in zip(words, words[1:]):
        gap = word.x0 - prev.x1

        if gap > DATA_GAP_FACTOR * prev.width and not looks_like_number_part(prev.text, word.text):
            columns.append([word])
        else:
            columns[-1].append(word)

    return columns


def group_into_columns(
    line: Line,
    header_classifier: HeaderClassifier = is_header_line
) -> List[Column]:
    """
    Split one line into columns.

    Columns are contiguous runs of the line's words sorted by x0;
    concatenated in order they reproduce that sorted line exactly.

    Args:
        line: Words of one line.
        header_classifier: Decides whether the header strategy applies.

    Returns:
        List of columns, empty for an empty line.
    """
    words = sorted(line, key=lambda w: w.x0)
    if not words:
        return []

    if header_classifier(words):
        return _group_header(words)
    return _group_data(words)
