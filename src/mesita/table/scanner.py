"""Single-pass scanner locating rows and cells of an extended table.

Starting right after an opening ``#|``, the scanner walks the source until the
matching ``|#`` and records where each row (``|| ... ||``) and each cell
(separated by ``|``) begins and ends. It never builds anything; positions are
handed to the tree builder.

Delimiters are inert inside:

- nested tables (``#| ... |#``), which stay opaque and are parsed later when
  the cell content is tokenized
- fenced code (```` ``` ````) and, if enabled, fenced math (``$$``)
- template variables (``{{ ... }}``)
- inline code and inline math spans, if enabled

The scan state is a plain record owned by a single ``scan_table`` call.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mesita.location import Position
from mesita.table.cursor import Cursor
from mesita.table.inline_skip import skip_inline_code, skip_inline_math
from mesita.table.markers import (
    CELL,
    CLOSE_TABLE,
    CODE_FENCE,
    MATH_FENCE,
    OPEN_TABLE,
    ROW,
    TEMPLATE_CLOSE,
    TEMPLATE_OPEN,
    is_cell_marker,
    is_close_table,
    is_code_fence,
    is_math_fence,
    is_open_table,
    is_row_marker,
    is_template_close,
    is_template_open,
)

if TYPE_CHECKING:
    from mesita.block.state import BlockState
    from mesita.config import ParseConfig


@dataclass(frozen=True, slots=True)
class ScanOptions:
    """Which nesting-awareness rules are active."""

    ignore_splitters_in_block_code: bool = True
    ignore_splitters_in_block_math: bool = False
    ignore_splitters_in_inline_code: bool = False
    ignore_splitters_in_inline_math: bool = False

    @classmethod
    def from_config(cls, config: ParseConfig) -> ScanOptions:
        return cls(
            ignore_splitters_in_block_code=config.table_ignore_splitters_in_block_code,
            ignore_splitters_in_block_math=config.table_ignore_splitters_in_block_math,
            ignore_splitters_in_inline_code=config.table_ignore_splitters_in_inline_code,
            ignore_splitters_in_inline_math=config.table_ignore_splitters_in_inline_math,
        )


@dataclass(frozen=True, slots=True)
class CellSpan:
    """Half-open raw content range of a cell, markers excluded."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Row:
    start_line: int
    end_line: int
    cells: tuple[CellSpan, ...]


@dataclass(frozen=True, slots=True)
class TableScanResult:
    """Rows found by the scanner.

    Attributes:
        rows: Rows in source order, each with at least one cell
        end_of_table: Line after the table block, or None if the closing
            fence was never found
        final_pos: Absolute offset where scanning stopped (just past ``|#``
            for a closed table)

    """

    rows: tuple[Row, ...]
    end_of_table: int | None
    final_pos: int

    @property
    def closed(self) -> bool:
        return self.end_of_table is not None

    @property
    def max_row_length(self) -> int:
        return max((len(row.cells) for row in self.rows), default=0)


@dataclass(slots=True)
class _ScanState:
    inside_code: bool = False
    inside_math: bool = False
    inside_template: bool = False
    nesting_level: int = 0
    # nesting level -> currently inside a row
    row_map: dict[int, bool] = field(default_factory=dict)
    cells: list[CellSpan] = field(default_factory=list)
    cell_start: Position | None = None
    row_start: int | None = None
    rows: list[Row] = field(default_factory=list)

    def close_cell(self, end: Position) -> None:
        if self.cell_start is not None:
            self.cells.append(CellSpan(self.cell_start, end))

    def finish_row(self, cursor: Cursor) -> None:
        """Close the open cell and keep the row if it has any cells."""
        self.close_cell(cursor.position())
        if self.cells and self.row_start is not None:
            self.rows.append(Row(self.row_start, cursor.line, tuple(self.cells)))
        self.cells = []
        self.cell_start = None
        self.row_start = None


def scan_table(
    state: BlockState,
    start_pos: int,
    start_line: int,
    limit: int,
    options: ScanOptions | None = None,
) -> TableScanResult:
    """Scan the table whose ``#|`` sits at ``start_pos``.

    Args:
        state: Block state supplying the source and line bounds
        start_pos: Offset of the opening ``#|``
        start_line: Line holding the opening fence
        limit: Last offset the scanner may look at
        options: Active nesting-awareness rules (defaults if None)

    Returns:
        TableScanResult; ``end_of_table`` is None for an unterminated table
    """
    options = options or ScanOptions()
    src = state.src
    cursor = Cursor(state, start_pos + len(OPEN_TABLE), start_line)
    scan = _ScanState()
    end_of_table: int | None = None

    while cursor.pos <= limit:
        if cursor.char is None:
            break

        if options.ignore_splitters_in_block_code:
            if not scan.inside_math and is_code_fence(src, cursor.pos):
                scan.inside_code = not scan.inside_code
                cursor.advance(len(CODE_FENCE))

        if options.ignore_splitters_in_block_math:
            if not scan.inside_code and is_math_fence(src, cursor.pos):
                scan.inside_math = not scan.inside_math
                cursor.advance(len(MATH_FENCE))

        if scan.inside_code or scan.inside_math:
            cursor.advance()
            continue

        if not scan.inside_template and is_template_open(src, cursor.pos):
            scan.inside_template = True
            cursor.advance(len(TEMPLATE_OPEN))

        if scan.inside_template and is_template_close(src, cursor.pos):
            scan.inside_template = False
            cursor.advance(len(TEMPLATE_CLOSE))

        if scan.inside_template:
            cursor.advance()
            continue

        if options.ignore_splitters_in_inline_code:
            skip = skip_inline_code(src, cursor.pos, cursor.line_end)
            if skip is not None:
                cursor.advance(skip.steps)
                continue

        if options.ignore_splitters_in_inline_math:
            skip = skip_inline_math(src, cursor.pos, cursor.line_end)
            if skip is not None:
                cursor.advance(skip.steps)
                continue

        if is_open_table(src, cursor.pos):
            scan.nesting_level += 1
            cursor.advance(len(OPEN_TABLE))
            continue

        if is_close_table(src, cursor.pos):
            if scan.nesting_level == 0:
                scan.finish_row(cursor)
                cursor.advance(len(CLOSE_TABLE))
                end_of_table = cursor.line + 2
                break
            scan.nesting_level -= 1
            cursor.advance(len(CLOSE_TABLE))
            continue

        # Nested table interiors are opaque
        if scan.nesting_level > 0:
            cursor.advance()
            continue

        if is_row_marker(src, cursor.pos):
            inside_row = scan.row_map.get(scan.nesting_level, False)
            if inside_row:
                scan.finish_row(cursor)
                cursor.advance(len(ROW))
            else:
                cursor.advance(len(ROW))
                scan.row_start = cursor.line
                scan.cell_start = cursor.position()
            scan.row_map[scan.nesting_level] = not inside_row
            continue

        if is_cell_marker(src, cursor.pos):
            scan.close_cell(cursor.position())
            cursor.advance(len(CELL))
            scan.cell_start = cursor.position()
            continue

        cursor.advance()

    return TableScanResult(
        rows=tuple(scan.rows),
        end_of_table=end_of_table,
        final_pos=cursor.pos,
    )
