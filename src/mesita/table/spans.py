"""Colspan and rowspan resolution.

A cell whose whole content is ``>`` merges into the cell on its left; a cell
whose whole content is ``^`` merges into the cell above. Runs of markers
accumulate onto the nearest content cell:

    || A | > | > ||      A gets colspan="3"
    || B | C | D ||
    || ^ | E | F ||      B gets rowspan="2"

Marker cells are flagged with ``meta["delete"]`` and dropped from the stream
afterwards by ``compact``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mesita.tokens import Token

COLSPAN = ">"
ROWSPAN = "^"


def _mark(token: Token) -> None:
    token.meta["delete"] = True


def _spread(
    content_map: list[list[str]],
    cell_map: list[list[Token]],
    cells: list[tuple[int, int]],
    marker: str,
    blocker: str,
    attr: str,
) -> None:
    """Walk ``cells`` (nearest first) and attach the span to the first owner."""
    factor = 2
    for row, col in cells:
        content = content_map[row][col]
        token = cell_map[row][col]
        if content == marker:
            factor += 1
            _mark(token)
        elif content == blocker:
            # The crossing span belongs to another cell
            break
        else:
            if not token.meta.get("synthetic"):
                token.attr_set(attr, str(factor))
            break


def apply_spans(content_map: list[list[str]], cell_map: list[list[Token]]) -> None:
    """Set ``colspan``/``rowspan`` on owner cells and flag marker cells.

    Both maps are rectangular and indexed ``[row][column]``. A ``>`` in the
    first column and a ``^`` in the first row are ordinary content.
    """
    if not content_map:
        return
    width = len(content_map[0])

    for i, row in enumerate(content_map):
        for j in range(width):
            content = row[j]
            if content == COLSPAN and j > 0:
                _mark(cell_map[i][j])
                _spread(
                    content_map,
                    cell_map,
                    [(i, col) for col in range(j - 1, -1, -1)],
                    COLSPAN,
                    ROWSPAN,
                    "colspan",
                )
            elif content == ROWSPAN and i > 0:
                _mark(cell_map[i][j])
                _spread(
                    content_map,
                    cell_map,
                    [(r, j) for r in range(i - 1, -1, -1)],
                    ROWSPAN,
                    COLSPAN,
                    "rowspan",
                )
