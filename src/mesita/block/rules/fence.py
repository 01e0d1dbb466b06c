"""Fenced code block rule.

Fenced code blocks start with 3+ backticks or tildes and run to a closing
fence of the same character that is at least as long. An unterminated fence
runs to the end of the current region.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mesita.tokens import TokenType

if TYPE_CHECKING:
    from mesita.block.state import BlockState

FENCE_CHARS = frozenset("`~")


def _marker_run(src: str, pos: int, limit: int, char: str) -> int:
    start = pos
    while pos < limit and src[pos] == char:
        pos += 1
    return pos - start


def fence_rule(state: BlockState, start_line: int, end_line: int, silent: bool) -> bool:
    src = state.src
    pos = state.content_start(start_line)
    maximum = state.end(start_line)

    if pos + 3 > maximum or src[pos] not in FENCE_CHARS:
        return False

    fence_char = src[pos]
    count = _marker_run(src, pos, maximum, fence_char)
    if count < 3:
        return False

    info = src[pos + count : maximum].strip()
    # Backtick fences cannot have backticks in the info string
    if fence_char == "`" and "`" in info:
        return False

    if silent:
        return True

    fence_indent = state.indent(start_line)
    next_line = start_line
    closed = False
    while True:
        next_line += 1
        if next_line >= end_line:
            break
        line_pos = state.content_start(next_line)
        line_max = state.end(next_line)
        if state.indent(next_line) >= 4:
            continue
        run = _marker_run(src, line_pos, line_max, fence_char)
        if run < count:
            continue
        if state.skip_spaces(line_pos + run, line_max) < line_max:
            continue
        closed = True
        break

    lines = []
    for line in range(start_line + 1, next_line):
        begin = state.begin(line)
        # Strip at most the opening fence's indentation from content lines
        strip = min(fence_indent, state.indent(line))
        lines.append(src[begin + strip : state.end(line)])

    state.line = next_line + (1 if closed else 0)

    token = state.push(TokenType.FENCE, "code", 0)
    token.info = info
    token.content = "".join(f"{line}\n" for line in lines)
    token.markup = fence_char * count
    token.map = [start_line, state.line]
    return True
