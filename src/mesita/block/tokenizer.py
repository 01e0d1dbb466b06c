"""Line-driven block tokenizer.

Walks lines, skips blank ones and hands each remaining line to the rule chain.
Every rule either declines (returns False) or consumes one or more lines and
advances ``state.line``. The loop is re-entrant: rules such as the extended
table and blockquote call ``tokenize`` again on a derived state for their
inner content.

Thread Safety:
BlockTokenizer holds only the (read-only after setup) ruler. All per-call
state lives in BlockState.

"""

from __future__ import annotations

from typing import Any

from mesita.block.ruler import Ruler
from mesita.block.state import BlockState
from mesita.errors import ParseError
from mesita.tokens import Token


class BlockTokenizer:
    """Run block rules over a source buffer.

    Usage:
        >>> tokenizer = BlockTokenizer(default_ruler())
        >>> [t.type.name for t in tokenizer.parse("# Hi")]
        ['HEADING_OPEN', 'INLINE', 'HEADING_CLOSE']

    """

    __slots__ = ("ruler",)

    def __init__(self, ruler: Ruler) -> None:
        self.ruler = ruler

    def tokenize(self, state: BlockState, start_line: int, end_line: int) -> None:
        """Tokenize lines ``[start_line, end_line)`` into ``state.tokens``.

        Raises:
            ParseError: If a rule reports a match without consuming a line
        """
        rules = self.ruler.get_rules()
        line = start_line

        while line < end_line:
            line = state.skip_empty_lines(line)
            state.line = line
            if line >= end_line:
                break

            matched = False
            for rule in rules:
                if rule(state, line, end_line, False):
                    if state.line <= line:
                        raise ParseError(
                            f"block rule {getattr(rule, '__name__', rule)!r} "
                            "matched without consuming a line",
                            lineno=line,
                        )
                    matched = True
                    break

            if not matched:
                raise ParseError("no block rule matched", lineno=line)

            line = state.line

    def parse(self, source: str, env: dict[str, Any] | None = None) -> list[Token]:
        """Tokenize a complete document.

        Line endings are normalized to ``\\n`` first.
        """
        src = source.replace("\r\n", "\n").replace("\r", "\n")
        state = BlockState(src, self, env=env)
        self.tokenize(state, 0, state.line_max)
        return state.tokens
