"""Block rule recognizing ``#| ... |#`` extended tables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mesita.diagnostics import TABLE_NOT_CLOSED, push_lint
from mesita.table.builder import build_table, extract_table_attrs
from mesita.table.markers import OPEN_TABLE, is_open_table
from mesita.table.scanner import ScanOptions, scan_table
from mesita.utils.logger import get_logger

if TYPE_CHECKING:
    from mesita.block.state import BlockState

logger = get_logger(__name__)


def table_rule(state: BlockState, start_line: int, end_line: int, silent: bool) -> bool:
    """Match an extended table opening at ``start_line``.

    An unterminated table leaves a hidden ``YFM004`` diagnostic and declines,
    so its lines fall through to the remaining rules.
    """
    start_pos = state.content_start(start_line)
    limit = state.end(end_line - 1)

    if limit - start_pos < len(OPEN_TABLE):
        return False
    if not is_open_table(state.src, start_pos):
        return False

    if silent:
        return True

    scan = scan_table(
        state,
        start_pos,
        start_line,
        limit,
        ScanOptions.from_config(state.config),
    )

    if scan.end_of_table is None:
        logger.debug("table opened at line %d is never closed", start_line)
        push_lint(state, TABLE_NOT_CLOSED, start_line, end_line)
        return False

    attrs = extract_table_attrs(state, scan.final_pos)
    build_table(state, start_line, scan, attrs)

    state.line = scan.end_of_table
    return True
