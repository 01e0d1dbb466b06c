"""Fixed-sequence detectors for the table scanner.

All detectors are pure: they look at ``src`` around ``pos`` and never move a
cursor. Row and cell markers are escape-aware; a marker preceded by an odd
number of backslashes is literal text.
"""

from __future__ import annotations

OPEN_TABLE = "#|"
CLOSE_TABLE = "|#"
ROW = "||"
CELL = "|"
CODE_FENCE = "```"
MATH_FENCE = "$$"
TEMPLATE_OPEN = "{{"
TEMPLATE_CLOSE = "}}"

BACKSLASH = "\\"


def matches(sequence: str, src: str, pos: int) -> bool:
    """True if ``sequence`` occurs in ``src`` exactly at ``pos``."""
    return src.startswith(sequence, pos)


def is_escaped(src: str, pos: int) -> bool:
    """True if the run of backslashes right before ``pos`` has odd length.

    Example:
        >>> is_escaped(r"a\\|", 2), is_escaped(r"a\\\\|", 3)
        (True, False)
    """
    start = pos
    pos -= 1
    while pos >= 0 and src[pos] == BACKSLASH:
        pos -= 1
    return (start - pos) % 2 == 0


def is_open_table(src: str, pos: int) -> bool:
    return matches(OPEN_TABLE, src, pos)


def is_close_table(src: str, pos: int) -> bool:
    return matches(CLOSE_TABLE, src, pos)


def is_code_fence(src: str, pos: int) -> bool:
    return matches(CODE_FENCE, src, pos)


def is_math_fence(src: str, pos: int) -> bool:
    return matches(MATH_FENCE, src, pos)


def is_template_open(src: str, pos: int) -> bool:
    return matches(TEMPLATE_OPEN, src, pos)


def is_template_close(src: str, pos: int) -> bool:
    return matches(TEMPLATE_CLOSE, src, pos)


def is_row_marker(src: str, pos: int) -> bool:
    """``||`` that is not escaped."""
    return matches(ROW, src, pos) and not is_escaped(src, pos)


def is_cell_marker(src: str, pos: int) -> bool:
    """A lone, unescaped ``|``; the first pipe of ``||`` is a row marker."""
    return matches(CELL, src, pos) and not is_escaped(src, pos) and not is_row_marker(src, pos)
