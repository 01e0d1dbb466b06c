"""Attribute block parser for ``{.class #id key=value flag}`` fragments.

Attribute blocks follow a table's closing fence (``|# {.wide border}``) and
may end a cell's content (``text {.highlight}``). The result maps attribute
names to all the values given for them; bare words without ``=value`` are
collected under the reserved ``"attr"`` key and become ``name="true"`` when
applied to an element.

Malformed input never raises: anything that is not a complete, well-formed
block parses to an empty mapping.

Example:
    >>> parse_attrs('{.wide .striped #main data-x="1 2" sortable}')
    {'class': ['wide', 'striped'], 'id': ['main'], 'data-x': ['1 2'], 'attr': ['sortable']}
"""

from __future__ import annotations

import re

from mesita.utils.logger import get_logger

logger = get_logger(__name__)

FLAGS_KEY = "attr"
"""Reserved key collecting bare flags."""

_NAME_RE = re.compile(r"^[A-Za-z_:][\w:.\-]*$")


def find_block_end(text: str, start: int = 0) -> int | None:
    """Index just past the ``}`` closing the block opened at ``start``.

    Braces inside double quotes do not count. Returns None if ``text[start]``
    is not ``{`` or the block never closes.
    """
    if start >= len(text) or text[start] != "{":
        return None
    in_quotes = False
    for pos in range(start + 1, len(text)):
        char = text[pos]
        if char == '"':
            in_quotes = not in_quotes
        elif char == "}" and not in_quotes:
            return pos + 1
        elif char == "\n" and not in_quotes:
            return None
    return None


def _split_words(inner: str) -> list[str] | None:
    """Split on whitespace, keeping double-quoted runs together."""
    words: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in inner:
        if char == '"':
            in_quotes = not in_quotes
            current.append(char)
        elif char.isspace() and not in_quotes:
            if current:
                words.append("".join(current))
                current = []
        else:
            current.append(char)
    if in_quotes:
        return None
    if current:
        words.append("".join(current))
    return words


def parse_attrs(text: str) -> dict[str, list[str]]:
    """Parse the attribute block at the start of ``text``.

    Leading spaces are skipped; text after the closing ``}`` is ignored.

    Args:
        text: Source text, typically everything after a closing fence

    Returns:
        Attribute name -> values, in order of appearance; ``{}`` if ``text``
        does not start with a well-formed block
    """
    text = text.lstrip(" \t")
    end = find_block_end(text)
    if end is None:
        return {}

    words = _split_words(text[1 : end - 1])
    if words is None:
        logger.debug("unbalanced quotes in attribute block %r", text[:end])
        return {}

    attrs: dict[str, list[str]] = {}
    for word in words:
        if word[0] in ".#":
            key = "class" if word[0] == "." else "id"
            value = word[1:]
            if not value or not _NAME_RE.match(value):
                logger.debug("invalid attribute %r", word)
                return {}
        elif "=" in word:
            key, _, value = word.partition("=")
            if len(value) >= 2 and value[0] == value[-1] == '"':
                value = value[1:-1]
            if not _NAME_RE.match(key):
                logger.debug("invalid attribute name %r", key)
                return {}
        else:
            if not _NAME_RE.match(word):
                logger.debug("invalid attribute flag %r", word)
                return {}
            key, value = FLAGS_KEY, word
        attrs.setdefault(key, []).append(value)

    return attrs
