"""Extended tables: ``#| ... |#`` blocks with rows, cells and spans.

Example:
    #|
    || Header | > ||
    || a      | b ||
    |# {.wide}

The scanner (``scan_table``) finds row and cell boundaries, the builder
(``build_table``) tokenizes each cell and emits the table token stream, and
``apply_spans``/``compact`` turn ``>`` and ``^`` cells into spans.
"""

from mesita.table.builder import (
    apply_table_attrs,
    build_table,
    extract_cell_class,
    extract_table_attrs,
)
from mesita.table.compact import compact, find_matching_close
from mesita.table.cursor import Cursor
from mesita.table.rule import table_rule
from mesita.table.scanner import CellSpan, Row, ScanOptions, TableScanResult, scan_table
from mesita.table.spans import COLSPAN, ROWSPAN, apply_spans

__all__ = [
    "COLSPAN",
    "ROWSPAN",
    "CellSpan",
    "Cursor",
    "Row",
    "ScanOptions",
    "TableScanResult",
    "apply_spans",
    "apply_table_attrs",
    "build_table",
    "compact",
    "extract_cell_class",
    "extract_table_attrs",
    "find_matching_close",
    "scan_table",
    "table_rule",
]
