"""Paragraph rule, the fallback that always matches."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mesita.tokens import TokenType

if TYPE_CHECKING:
    from mesita.block.state import BlockState


def paragraph_rule(state: BlockState, start_line: int, end_line: int, silent: bool) -> bool:
    """Consume lines until a blank line or a block that interrupts paragraphs."""
    terminators = state.tokenizer.ruler.get_rules("paragraph")
    next_line = start_line + 1

    while next_line < end_line and not state.is_empty(next_line):
        if any(rule(state, next_line, end_line, True) for rule in terminators):
            break
        next_line += 1

    if silent:
        return True

    state.line = next_line

    token = state.push(TokenType.PARAGRAPH_OPEN, "p", 1)
    token.map = [start_line, next_line]

    token = state.push(TokenType.INLINE, "", 0)
    token.content = state.get_lines(start_line, next_line).strip()
    token.map = [start_line, next_line]

    state.push(TokenType.PARAGRAPH_CLOSE, "p", -1)
    return True
