"""Blockquote rule.

Consecutive lines starting with ``>`` form a quote. The marker and one
optional space are cut off through a derived region and the remainder is
tokenized as ordinary block content.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mesita.block.state import LineRegion
from mesita.tokens import TokenType

if TYPE_CHECKING:
    from mesita.block.state import BlockState


def _content_after_marker(state: BlockState, line: int) -> int | None:
    pos = state.content_start(line)
    if pos >= state.end(line) or state.src[pos] != ">":
        return None
    pos += 1
    if pos < state.end(line) and state.src[pos] == " ":
        pos += 1
    return pos


def blockquote_rule(state: BlockState, start_line: int, end_line: int, silent: bool) -> bool:
    if _content_after_marker(state, start_line) is None:
        return False

    if silent:
        return True

    begins: dict[int, int] = {}
    next_line = start_line
    while next_line < end_line:
        begin = _content_after_marker(state, next_line)
        if begin is None:
            break
        begins[next_line] = begin
        next_line += 1

    token = state.push(TokenType.BLOCKQUOTE_OPEN, "blockquote", 1)
    token.markup = ">"
    token.map = [start_line, next_line]

    inner = state.derive(LineRegion(start_line=start_line, end_line=next_line, begins=begins))
    state.tokenizer.tokenize(inner, start_line, next_line)
    state.level = inner.level

    token = state.push(TokenType.BLOCKQUOTE_CLOSE, "blockquote", -1)
    token.markup = ">"

    state.line = next_line
    return True
