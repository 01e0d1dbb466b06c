"""Source positions recorded while scanning.

Thread Safety:
Position is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """A location in the source buffer.

    Lines are 0-indexed, matching token ``map`` ranges. ``offset`` is the
    absolute character index into the source, so a position can always be
    turned back into a slice without consulting the line index.

    Examples:
        >>> pos = Position(line=1, offset=5)
        >>> str(pos)
        '1:5'

    """

    line: int
    offset: int

    def __str__(self) -> str:
        return f"{self.line}:{self.offset}"
