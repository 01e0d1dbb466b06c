"""Term definitions plugin for mesita.

Usage:
    >>> md = Markdown(plugins=["terms"])
    >>> md("[*api]: Application programming interface")
    '<dfn class="yfm yfm-term_dfn" id=":api_element" ...'

Thread Safety:
This plugin is stateless. Definitions are collected in the per-parse env.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mesita.plugins import register_plugin
from mesita.terms import term_rule

if TYPE_CHECKING:
    from mesita.block.ruler import Ruler


@register_plugin("terms")
class TermsPlugin:
    """Plugin adding ``[*key]: definition`` blocks.

    Definitions may interrupt a paragraph.

    """

    @property
    def name(self) -> str:
        return "terms"

    def extend_ruler(self, ruler: Ruler) -> None:
        ruler.before("paragraph", "terms", term_rule, alt=("paragraph",))

    def extend_config(self, options: dict[str, Any]) -> None:
        options.setdefault("terms_enabled", True)
