"""Display math rule for ``$$ ... $$`` blocks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mesita.tokens import TokenType

if TYPE_CHECKING:
    from mesita.block.state import BlockState

MATH_FENCE = "$$"


def math_block_rule(state: BlockState, start_line: int, end_line: int, silent: bool) -> bool:
    first = state.line_text(start_line).rstrip()
    if not first.startswith(MATH_FENCE):
        return False

    if silent:
        return True

    rest = first[len(MATH_FENCE) :]
    # $$ E = mc^2 $$ on a single line
    if rest.endswith(MATH_FENCE):
        body = [rest[: -len(MATH_FENCE)].strip()]
        next_line = start_line + 1
    else:
        body = [rest.strip()] if rest.strip() else []
        next_line = start_line + 1
        while next_line < end_line:
            text = state.line_text(next_line).rstrip()
            next_line += 1
            if text.endswith(MATH_FENCE):
                closing = text[: -len(MATH_FENCE)].strip()
                if closing:
                    body.append(closing)
                break
            body.append(text)

    state.line = next_line

    token = state.push(TokenType.MATH_BLOCK, "div", 0)
    token.content = "\n".join(body)
    token.markup = MATH_FENCE
    token.map = [start_line, next_line]
    return True
