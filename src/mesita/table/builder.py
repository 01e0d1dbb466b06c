"""Turn scanned table boundaries into a table/tbody/tr/td token stream.

Each cell's raw range is tokenized by the host block tokenizer through a
derived state, so cells may hold any block content, including nested tables.
While emitting, the builder records what each cell displays (the content map)
and which ``td_open`` token belongs to which grid coordinate (the cell map);
the span resolver works on both afterwards.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from mesita.attrs import FLAGS_KEY, parse_attrs
from mesita.block.state import LineRegion
from mesita.table.compact import compact
from mesita.table.spans import apply_spans
from mesita.tokens import Token, TokenType

if TYPE_CHECKING:
    from mesita.block.state import BlockState
    from mesita.table.scanner import CellSpan, TableScanResult

_TRAILING_ATTRS_RE = re.compile(r"\s*\{[^}]*\}\Z")


def extract_table_attrs(state: BlockState, pos: int) -> dict[str, list[str]]:
    """Parse the attribute block following a table's closing fence."""
    start = state.skip_spaces(pos)
    return parse_attrs(state.src[start:])


def apply_table_attrs(token: Token, attrs: dict[str, list[str]]) -> None:
    """Set parsed attributes on ``token``; bare flags become ``name="true"``."""
    for name, values in attrs.items():
        if name != FLAGS_KEY:
            token.attr_join(name, " ".join(values))
    for flag in attrs.get(FLAGS_KEY, []):
        token.attr_join(flag, "true")


def extract_cell_class(content_token: Token, td_open: Token) -> None:
    """Move classes from a trailing ``{.class}`` block onto the cell.

    Only classes are moved; other attributes stay in the text so they are not
    propagated to the row or table. An attribute block left empty is removed.

    Example:
        "Total {.bold}"  ->  td class="bold", content "Total"
    """
    match = _TRAILING_ATTRS_RE.search(content_token.content)
    if match is None:
        return

    block = match.group(0)
    classes = parse_attrs(block.strip()).get("class")
    if not classes:
        return

    td_open.attr_set("class", " ".join(classes))

    remainder = block
    for name in classes:
        remainder = remainder.replace(f".{name}", "", 1)
    if not remainder.strip()[1:-1].strip():
        remainder = ""
    content_token.content = content_token.content[: match.start()] + remainder


def _tokenize_cell(state: BlockState, cell: CellSpan) -> Token | None:
    """Tokenize a cell's range and return the token describing its content.

    That is the first token of the cell carrying text, at any depth; failing
    that, the first one carrying markup (a lone ``>`` is consumed as an empty
    blockquote whose markup is ``>``). Tokens of nested tables are skipped.
    """
    first = len(state.tokens)
    sub = state.derive(LineRegion.between(cell.start, cell.end))
    state.tokenizer.tokenize(sub, cell.start.line, cell.end.line + 1)

    emitted: list[Token] = []
    table_depth = 0
    for token in state.tokens[first:]:
        if token.type is TokenType.TABLE_OPEN:
            table_depth += 1
        elif token.type is TokenType.TABLE_CLOSE:
            table_depth -= 1
        elif table_depth == 0 and not token.hidden:
            emitted.append(token)

    for token in emitted:
        if token.content.strip():
            return token
    for token in emitted:
        if token.markup.strip():
            return token
    return None


def _cell_text(token: Token | None) -> str:
    if token is None:
        return ""
    return token.content.strip() or token.markup.strip()


def build_table(
    state: BlockState,
    start_line: int,
    scan: TableScanResult,
    attrs: dict[str, list[str]],
) -> None:
    """Emit the token stream for a closed table.

    Args:
        state: Block state receiving the tokens
        start_line: Line holding the opening fence
        scan: Scanner result with ``end_of_table`` set
        attrs: Table attributes parsed from after the closing fence
    """
    end_of_table = scan.end_of_table
    assert end_of_table is not None

    table_start = len(state.tokens)

    token = state.push(TokenType.TABLE_OPEN, "table", 1)
    apply_table_attrs(token, attrs)
    token.map = [start_line, end_of_table]

    token = state.push(TokenType.TBODY_OPEN, "tbody", 1)
    token.map = [start_line + 1, end_of_table - 1]

    width = scan.max_row_length

    # Grid of td_open tokens and of what each cell displays, by [row][column]
    cell_map: list[list[Token]] = []
    content_map: list[list[str]] = []

    for row in scan.rows:
        cells: list[Token] = []
        contents: list[str] = []

        token = state.push(TokenType.TR_OPEN, "tr", 1)
        token.map = [row.start_line, row.end_line]

        for cell in row.cells:
            td_open = state.push(TokenType.TD_OPEN, "td", 1)
            td_open.map = [cell.start.line, cell.end.line]
            cells.append(td_open)

            content_token = _tokenize_cell(state, cell)
            contents.append(_cell_text(content_token))

            token = state.push(TokenType.TD_CLOSE, "td", -1)
            token.map = [cell.end.line, cell.end.line + 1]

            if content_token is not None:
                extract_cell_class(content_token, td_open)

        for _ in range(width - len(row.cells)):
            td_open = state.push(TokenType.TD_OPEN, "td", 1)
            td_open.meta["synthetic"] = True
            state.push(TokenType.TD_CLOSE, "td", -1)
            cells.append(td_open)
            contents.append("")

        state.push(TokenType.TR_CLOSE, "tr", -1)

        cell_map.append(cells)
        content_map.append(contents)

    apply_spans(content_map, cell_map)
    state.tokens[table_start:] = compact(state.tokens[table_start:])

    state.push(TokenType.TBODY_CLOSE, "tbody", -1)

    token = state.push(TokenType.TABLE_CLOSE, "table", -1)
    token.map = [end_of_table, end_of_table + 1]
