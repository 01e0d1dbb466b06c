"""Lint diagnostic codes and the hidden marker tokens that carry them.

Rules never raise on malformed Markdown. Instead they drop a hidden ``LINT``
token into the stream whose attribute name is the diagnostic code; the lint
runner (``mesita.lint``) collects these afterwards and renderers skip them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mesita.tokens import Token, TokenType

if TYPE_CHECKING:
    from mesita.block.state import BlockState


@dataclass(frozen=True, slots=True)
class LintRule:
    """A diagnostic a block rule can report."""

    code: str
    name: str
    description: str


TABLE_NOT_CLOSED = LintRule("YFM004", "table-not-closed", "Table not closed")
TERM_DEFINITION_DUPLICATED = LintRule(
    "YFM006", "term-definition-duplicated", "Term definition duplicated"
)
TERM_INSIDE_DEFINITION = LintRule(
    "YFM008", "term-inside-definition-not-allowed", "Term inside definition not allowed"
)

LINT_RULES: dict[str, LintRule] = {
    rule.code: rule
    for rule in (TABLE_NOT_CLOSED, TERM_DEFINITION_DUPLICATED, TERM_INSIDE_DEFINITION)
}


def push_lint(state: BlockState, rule: LintRule, start_line: int, end_line: int) -> Token:
    """Append a hidden diagnostic marker covering ``[start_line, end_line]``."""
    token = state.push(TokenType.LINT, "", 0)
    token.hidden = True
    token.map = [start_line, end_line]
    token.attr_set(rule.code, "true")
    return token


def lint_codes(token: Token) -> list[str]:
    """Diagnostic codes carried by a token (empty for ordinary tokens)."""
    if token.type is not TokenType.LINT:
        return []
    return [name for name, value in token.attrs.items() if value == "true"]
