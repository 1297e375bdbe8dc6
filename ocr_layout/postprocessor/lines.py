"""
Line grouping for recognized words.

Words are assigned to visual rows by their top edge. Each row is
anchored on the top of the first word that opened it; a word joins the
open row when its top lies within half a line height of that anchor.
"""

from typing import List, Sequence

from ocr_layout.ocr_engine.ocr_result import RecognizedWord

# A line is an ordered run of words sharing one vertical band
Line = List[RecognizedWord]

# Fallback height for words with a degenerate box
DEFAULT_LINE_HEIGHT = 20
# Fraction of the line height a word may sit away from the anchor
LINE_TOLERANCE_RATIO = 0.5
# Lower bound for the tolerance, in pixels
MIN_LINE_TOLERANCE = 10


def group_into_lines(words: Sequence[RecognizedWord]) -> List[Line]:
    """
    Partition words into lines ordered top to bottom.

    Words inside each returned line are ordered left to right. Every
    input word appears in exactly one line.

    Args:
        words: Recognized words in any order.

    Returns:
        List of lines; empty when no words are given.
    """
    if not words:
        return []

    ordered = sorted(words, key=lambda w: w.y0)

    lines: List[Line] = []
    current: Line = [ordered[0]]
    anchor_y = ordered[0].y0

    for word in ordered[1:]:
        line_height = current[0].y1 - current[0].y0
        if line_height <= 0:
            line_height = DEFAULT_LINE_HEIGHT
        tolerance = max(line_height * LINE_TOLERANCE_RATIO, MIN_LINE_TOLERANCE)

        if abs(word.y0 - anchor_y) > tolerance:
            lines.append(current)
            current = [word]
            anchor_y = word.y0
        else:
            current.append(word)

    lines.append(current)

    return [sorted(line, key=lambda w: w.x0) for line in lines]
