"""Table plugin for mesita (``#| ... |#`` extended tables).

Usage:
    >>> md = Markdown(plugins=["table"])
    >>> md("#|\n|| A | B ||\n|| 1 | 2 ||\n|#")
    '<table>\n<tbody>\n<tr>\n<td>\n<p>A</p>\n</td>...'

Syntax:
#|
|| Header 1 | Header 2 ||
|| Cell with

   - block content | > ||
|# {.wide}

Features:
- Any block content inside cells, nested tables included
- ``>`` joins a cell with the one on its left, ``^`` with the one above
- ``{.class}`` at the end of a cell sets the cell's class
- Attribute block after ``|#`` sets table attributes
- Pipes can be escaped with ``\\|``

Thread Safety:
This plugin is stateless and thread-safe.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mesita.plugins import register_plugin
from mesita.table.rule import table_rule

if TYPE_CHECKING:
    from mesita.block.ruler import Ruler


@register_plugin("table")
class TablePlugin:
    """Plugin adding extended table support.

    The rule runs before fenced code so ``#|`` is claimed first. It does not
    interrupt paragraphs.

    """

    @property
    def name(self) -> str:
        return "table"

    def extend_ruler(self, ruler: Ruler) -> None:
        ruler.before("fence", "table", table_rule)

    def extend_config(self, options: dict[str, Any]) -> None:
        options.setdefault("tables_enabled", True)
