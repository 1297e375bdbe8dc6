"""
Numeric Normalizers Module.

This module repairs common OCR damage to numbers in table cells:
    - Lost decimal points in percentages ("583%" -> "58.3%")
    - Decimal points read as spaces, commas or the letter o
    - Numbers split into two tokens by the recognizer
    - Table border characters recognized as text

Examples:
    >>> fix_decimal_points("583%")
    '58.3%'
    >>> remove_table_artifacts("| 12.5 |")
    '12.5'
"""

import re

# Three-digit percentages strictly inside this range lost their point
THREE_DIGIT_PERCENT_RANGE = (100, 1000)
# Two-digit percentages strictly inside this range lost their point
TWO_DIGIT_PERCENT_RANGE = (80, 90)
# Tokens whose digits read at most this value keep a literal 0
MAX_LITERAL_ZERO_PERCENT = 100

ALL_DIGITS_RE = re.compile(r'^\d+$')
PERCENT_TOKEN_RE = re.compile(r'^\d+%$')
TRAILING_DIGIT_RE = re.compile(r'\d$')

THREE_DIGIT_PERCENT_RE = re.compile(r'(?<![\d.,])(\d{3})%')
TWO_DIGIT_PERCENT_RE = re.compile(r'(?<![\d.,])(\d{2})%')
SPACED_DECIMAL_RE = re.compile(r'(\d+)\s+(\d+)%')
COMMA_DECIMAL_RE = re.compile(r'(\d+)[,，、](\d+)%')
STRAY_O_DECIMAL_RE = re.compile(r'(?<![\d.])(\d+)[oO0](\d{1,2})%')

ARTIFACT_CHARS_RE = re.compile(r'[_|\-+=]')
WHITESPACE_RE = re.compile(r'\s+')
# Leader dots and long dashes left over once border characters are gone
FILLER_ONLY_RE = re.compile(r'^[.…–— ]*$')


def looks_like_number_part(a: str, b: str) -> bool:
    """
    Check whether two adjacent tokens are pieces of one number.

    Args:
        a: Left token.
        b: Right token.

    Returns:
        True for splits such as ("58", "3%"), ("12", "5"), ("7", "%")
        and ("3", ".14").
    """
    a_digits = bool(ALL_DIGITS_RE.match(a))

    if a_digits and PERCENT_TOKEN_RE.match(b):
        return True
    if a_digits and ALL_DIGITS_RE.match(b) and len(b) <= 2:
        return True
    if TRAILING_DIGIT_RE.search(a) and b.startswith('%'):
        return True
    if a_digits and b.startswith(('.', ',')):
        return True
    return False


def _insert_point_three_digits(match: re.Match) -> str:
    digits = match.group(1)
    low, high = THREE_DIGIT_PERCENT_RANGE
    if low < int(digits) < high:
        return f"{digits[:2]}.{digits[2]}%"
    return match.group(0)


def _insert_point_two_digits(match: re.Match) -> str:
    digits = match.group(1)
    low, high = TWO_DIGIT_PERCENT_RANGE
    if low < int(digits) < high:
        return f"{digits[0]}.{digits[1]}%"
    return match.group(0)


def _replace_stray_o(match: re.Match) -> str:
    token = match.group(0)[:-1]
    if token.isdigit() and int(token) <= MAX_LITERAL_ZERO_PERCENT:
        return match.group(0)
    return f"{match.group(1)}.{match.group(2)}%"


def fix_decimal_points(text: str) -> str:
    """
    Restore decimal points OCR dropped from percentages.

    Rules are applied in order:
        1. "583%" -> "58.3%" for values strictly between 100 and 1000
        2. "81%" -> "8.1%" for values strictly between 80 and 90
        3. "58 3%" -> "58.3%"
        4. "58,3%" -> "58.3%"
        5. "58o3%" -> "58.3%"

    Args:
        text: Cell text.

    Returns:
        Text with repaired percentages; other text is unchanged.
    """
    text = THREE_DIGIT_PERCENT_RE.sub(_insert_point_three_digits, text)
    text = TWO_DIGIT_PERCENT_RE.sub(_insert_point_two_digits, text)
    text = SPACED_DECIMAL_RE.sub(r'\1.\2%', text)
    text = COMMA_DECIMAL_RE.sub(r'\1.\2%', text)
    text = STRAY_O_DECIMAL_RE.sub(_replace_stray_o, text)
    return text


def remove_table_artifacts(text: str) -> str:
    """
    Strip table-drawing characters from cell text.

    Underscores and ``| - + =`` are removed, whitespace is collapsed and
    trimmed, and a remainder made only of dots or long dashes becomes
    empty. Applying the function twice gives the same result as once.
    """
    text = ARTIFACT_CHARS_RE.sub('', text)
    text = WHITESPACE_RE.sub(' ', text).strip()
    if FILLER_ONLY_RE.match(text):
        return ''
    return text
