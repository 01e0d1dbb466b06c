"""Term definitions: ``[*key]: definition``.

A definition block starts with ``[*key]:`` and continues until a blank line or
the next definition. Definitions are collected in ``env["terms"]`` under
``":key"`` and rendered as a ``<dfn>`` dialog that term references
(``[text](*key)``) elsewhere in the document point at.

Example:
    [*api]: Application programming
    interface.

    -> env["terms"][":api"] == "Application programming\\ninterface."
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from mesita.block.state import BlockState
from mesita.diagnostics import TERM_DEFINITION_DUPLICATED, TERM_INSIDE_DEFINITION, push_lint
from mesita.tokens import TokenType

if TYPE_CHECKING:
    from mesita.tokens import Token

TERMS_KEY = "terms"

_TERM_LINE_RE = re.compile(r"\[\*(\w+)\]:")
_TERM_REFERENCE_RE = re.compile(r"\[([^\[]+)\](\(\*(\w+)\))", re.MULTILINE)
_ESCAPE_RE = re.compile(r"\\(.)")


def _label_end(src: str, pos: int, maximum: int) -> int | None:
    while pos < maximum:
        char = src[pos]
        if char == "[":
            return None
        if char == "]":
            return pos
        if char == "\\":
            pos += 1
        pos += 1
    return None


def _definition_end(state: BlockState, start_line: int, end_line: int) -> int:
    """Last line belonging to the definition starting at ``start_line``."""
    line = start_line
    while line + 1 < end_line:
        following = line + 1
        if state.is_empty(following) or _TERM_LINE_RE.match(state.line_text(following)):
            break
        line = following
    return line


def _parse_title(state: BlockState, title: str, start_line: int) -> list[Token]:
    """Tokenize a definition body as a standalone document."""
    sub = BlockState(
        title,
        state.tokenizer,
        env=state.env,
        config=state.config,
        level=state.level,
    )
    state.tokenizer.tokenize(sub, 0, sub.line_max)
    for token in sub.tokens:
        if token.map is not None:
            token.map = [token.map[0] + start_line, token.map[1] + start_line]
    return sub.tokens


def term_rule(state: BlockState, start_line: int, end_line: int, silent: bool) -> bool:
    src = state.src
    pos = state.content_start(start_line)
    maximum = state.end(start_line)

    if pos + 2 >= maximum:
        return False
    if src[pos] != "[" or src[pos + 1] != "*":
        return False

    label_start = pos + 2
    label_end = _label_end(src, label_start, maximum)
    if label_end is None or label_end + 1 >= len(src) or src[label_end + 1] != ":":
        return False

    if silent:
        return True

    last_line = _definition_end(state, start_line, end_line)

    label = _ESCAPE_RE.sub(r"\1", src[label_start:label_end])
    title = src[label_end + 2 : state.end(last_line)].strip()
    if not label or not title:
        return False

    terms: dict[str, str] = state.env.setdefault(TERMS_KEY, {})
    key = f":{label}"

    if state.config.lint_run:
        if _TERM_REFERENCE_RE.search(title):
            push_lint(state, TERM_INSIDE_DEFINITION, last_line, end_line)
        if key in terms:
            push_lint(state, TERM_DEFINITION_DUPLICATED, last_line, end_line)
            state.line = last_line + 1
            return True

    terms.setdefault(key, title)

    token = state.push(TokenType.DFN_OPEN, "dfn", 1)
    token.attr_set("class", "yfm yfm-term_dfn")
    token.attr_set("id", f"{key}_element")
    token.attr_set("role", "dialog")
    token.attr_set("aria-live", "polite")
    token.attr_set("aria-modal", "true")
    token.map = [start_line, last_line + 1]

    state.tokens.extend(_parse_title(state, title, start_line))

    state.push(TokenType.DFN_CLOSE, "dfn", -1)

    state.line = last_line + 1
    return True
