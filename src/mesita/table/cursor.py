"""Forward-only, line-aware scanning position.

The cursor walks the raw source one character at a time. When it steps past
the end of the current line it jumps to the next line's content start (the
line begin plus its indentation, as reported by the host line index), so
leading indentation never reaches the table scanner.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mesita.location import Position

if TYPE_CHECKING:
    from mesita.block.state import BlockState


class Cursor:
    """Absolute index plus the line it falls on.

    Usage:
        >>> state = BlockState("#|\\n  || a ||", tokenizer)
        >>> cursor = Cursor(state, pos=2, line=0)
        >>> cursor.advance()
        >>> cursor.position()
        Position(line=1, offset=5)

    The index never decreases. Once the source is exhausted ``char`` is None
    and ``line`` is past the last line.

    """

    __slots__ = ("_state", "_pos", "_line", "_line_end")

    def __init__(self, state: BlockState, pos: int, line: int) -> None:
        self._state = state
        self._pos = pos
        self._line = line
        self._line_end = state.end(line)

    @property
    def pos(self) -> int:
        return self._pos

    @property
    def line(self) -> int:
        return self._line

    @property
    def line_end(self) -> int:
        """End offset of the current line (exclusive)."""
        return self._line_end

    @property
    def char(self) -> str | None:
        """Character under the cursor, or None at end of buffer."""
        if self._pos >= len(self._state.src):
            return None
        return self._state.src[self._pos]

    def position(self) -> Position:
        return Position(line=self._line, offset=self._pos)

    def advance(self, steps: int = 1) -> None:
        """Move forward ``steps`` characters, wrapping across line ends."""
        state = self._state
        for _ in range(steps):
            self._pos += 1
            if self._pos > self._line_end:
                self._line += 1
                self._pos = max(self._pos, state.content_start(self._line))
                self._line_end = state.end(self._line)
