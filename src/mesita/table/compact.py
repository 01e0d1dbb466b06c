"""Removal of cells flagged by span resolution."""

from __future__ import annotations

from mesita.tokens import Token, TokenType
from mesita.utils.logger import get_logger

logger = get_logger(__name__)


def find_matching_close(tokens: list[Token], index: int) -> int | None:
    """Index of the ``td_close`` closing the ``td_open`` at ``index``.

    The match is the next ``td_close`` on the same level, so the cells of a
    nested table are skipped over.
    """
    level = tokens[index].level
    for j in range(index + 1, len(tokens)):
        token = tokens[j]
        if token.type is TokenType.TD_CLOSE and token.level == level:
            return j
    return None


def compact(tokens: list[Token]) -> list[Token]:
    """Return ``tokens`` without flagged cells and everything inside them.

    A flagged cell without a matching close is left in place.
    """
    removed: list[tuple[int, int]] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token.type is TokenType.TD_OPEN and token.marked_for_deletion:
            close = find_matching_close(tokens, index)
            if close is None:
                logger.debug("no td_close for flagged cell at token %d", index)
            else:
                removed.append((index, close))
                index = close
        index += 1

    if not removed:
        return tokens

    result: list[Token] = []
    position = 0
    for start, end in removed:
        result.extend(tokens[position:start])
        position = end + 1
    result.extend(tokens[position:])
    return result
