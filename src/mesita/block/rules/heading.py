"""ATX heading rule."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mesita.tokens import TokenType

if TYPE_CHECKING:
    from mesita.block.state import BlockState


def heading_rule(state: BlockState, start_line: int, end_line: int, silent: bool) -> bool:
    """Match ``# Title`` through ``###### Title``.

    Headings need 1-6 ``#`` followed by space, tab or end of line, so ``#|``
    is never a heading. A trailing ``#`` sequence is removed if preceded by
    space.
    """
    content = state.line_text(start_line)

    level = 0
    while level < len(content) and content[level] == "#" and level < 6:
        level += 1
    if level == 0:
        return False
    if level < len(content) and content[level] not in " \t":
        return False

    if silent:
        return True

    text = content[level:].strip()
    if text.endswith("#"):
        trailing_start = len(text)
        while trailing_start > 0 and text[trailing_start - 1] == "#":
            trailing_start -= 1
        if trailing_start == 0:
            text = ""
        elif text[trailing_start - 1] in " \t":
            text = text[: trailing_start - 1].rstrip()

    state.line = start_line + 1

    token = state.push(TokenType.HEADING_OPEN, f"h{level}", 1)
    token.markup = "#" * level
    token.map = [start_line, state.line]

    token = state.push(TokenType.INLINE, "", 0)
    token.content = text
    token.map = [start_line, state.line]

    token = state.push(TokenType.HEADING_CLOSE, f"h{level}", -1)
    token.markup = "#" * level
    return True
