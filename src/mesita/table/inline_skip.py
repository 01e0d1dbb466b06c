"""Lookahead for inline code and inline math spans.

The table scanner must not split cells on a pipe inside `` `a|b` `` or
``$a|b$``. Each skipper recognizes a span starting at ``pos`` and reports how
far to jump; ``None`` means the opening character is ordinary text. Spans
never cross ``line_end``.
"""

from __future__ import annotations

from typing import NamedTuple

from mesita.table.markers import is_escaped

BACKTICK = "`"
DOLLAR = "$"
_DIGITS = frozenset("0123456789")
_BLANKS = frozenset(" \t")


class SkipResult(NamedTuple):
    """Where a recognized span ends and how many characters it covers."""

    end: int
    steps: int


def skip_inline_code(src: str, pos: int, line_end: int) -> SkipResult | None:
    """Match a backtick code span opening at ``pos``.

    The opening run of N backticks is closed by the next run of exactly N
    backticks on the same line.

    Example:
        >>> skip_inline_code("`a|b` | c", 0, 9)
        SkipResult(end=5, steps=5)
        >>> skip_inline_code("``a` | c", 0, 8) is None
        True
    """
    if pos >= len(src) or src[pos] != BACKTICK:
        return None
    if pos > 0 and is_escaped(src, pos):
        return None

    start = pos
    while pos < line_end and src[pos] == BACKTICK:
        pos += 1
    opener_length = pos - start

    match_end = pos
    while True:
        match_start = src.find(BACKTICK, match_end, line_end)
        if match_start == -1:
            return None
        match_end = match_start + 1
        while match_end < line_end and src[match_end] == BACKTICK:
            match_end += 1
        if match_end - match_start == opener_length:
            return SkipResult(end=match_end, steps=match_end - start)


def skip_inline_math(src: str, pos: int, line_end: int) -> SkipResult | None:
    """Match a ``$...$`` span opening at ``pos``.

    The opener must not be followed by whitespace. ``$$`` is skipped as a
    unit; display math fences are handled by the block-level toggle. The
    closer is the next unescaped ``$`` on the line; if it is preceded by
    whitespace or followed by a digit (``$5 and $6``) there is no span.

    Example:
        >>> skip_inline_math("$a|b$ | c", 0, 9)
        SkipResult(end=5, steps=5)
        >>> skip_inline_math("$5 | $6", 0, 7) is None
        True
    """
    if pos >= len(src) or src[pos] != DOLLAR:
        return None
    if pos > 0 and is_escaped(src, pos):
        return None

    next_char = src[pos + 1] if pos + 1 < min(line_end + 1, len(src)) else ""
    if next_char in _BLANKS:
        return None
    if next_char == DOLLAR:
        return SkipResult(end=pos + 2, steps=2)

    match = pos + 1
    while True:
        match = src.find(DOLLAR, match, line_end)
        if match == -1:
            return None
        if is_escaped(src, match):
            match += 1
            continue

        prev_char = src[match - 1]
        after = src[match + 1] if match + 1 < min(line_end + 1, len(src)) else ""
        if prev_char in _BLANKS or after in _DIGITS:
            return None

        return SkipResult(end=match + 1, steps=match + 1 - pos)
