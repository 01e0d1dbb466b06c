"""
mesita: extended tables for Markdown

A line-oriented Markdown block tokenizer built around the fenced, nestable
``#| ... |#`` table syntax: rows, cells holding arbitrary block content, and
colspan/rowspan through ``>`` and ``^`` cells. Zero runtime dependencies.

Quick Start:
    >>> from mesita import parse, render
    >>> tokens = parse("#|\\n|| a | b ||\\n|#")
    >>> print(render(tokens))
    <table>
    <tbody>
    <tr>
    <td>
    <p>a</p>
    </td>
    <td>
    <p>b</p>
    </td>
    </tr>
    </tbody>
    </table>

    >>> # Or use the high-level Markdown class
    >>> from mesita import Markdown
    >>> md = Markdown(plugins=["table"], table_ignoreSplittersInInlineCode=True)
    >>> html = md("#|\\n|| `a|b` ||\\n|#")

Linting:
    >>> from mesita import lint
    >>> [issue.code for issue in lint("#|\\n|| never closed ||")]
    ['YFM004']

"""

from dataclasses import asdict
from typing import Any

from mesita.block import BlockState, BlockTokenizer, LineIndex, LineRegion, Ruler, default_ruler
from mesita.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from mesita.errors import MesitaError, ParseError, PluginError, RenderError
from mesita.lint import LintIssue, LogLevel, lint
from mesita.location import Position
from mesita.plugins import BUILTIN_PLUGINS, apply_plugins, get_plugin, register_plugin
from mesita.renderers.html import HtmlRenderer
from mesita.tokens import Token, TokenType

__version__ = "0.1.0"

# Config flags that switch on a plugin without naming it
_FLAG_PLUGINS: dict[str, str] = {
    "tables_enabled": "table",
    "terms_enabled": "terms",
}


def parse(
    source: str,
    *,
    plugins: list[str] | None = None,
    env: dict[str, Any] | None = None,
    config: ParseConfig | None = None,
) -> list[Token]:
    """Parse Markdown source into a flat block token stream.

    Args:
        source: Markdown source text
        plugins: Plugin names to enable (all built-in plugins if None)
        env: Shared environment; term definitions are collected here
        config: Parse configuration (defaults if None)

    Returns:
        Tokens in document order

    Example:
        >>> tokens = parse("#|\\n|| a ||\\n|#")
        >>> tokens[0].type
        <TokenType.TABLE_OPEN: ...>
    """
    md = Markdown(plugins=plugins if plugins is not None else ["all"], config=config)
    return md.parse(source, env=env)


def render(tokens: list[Token]) -> str:
    """Render a token stream to HTML.

    Example:
        >>> render(parse("# Hello"))
        '<h1>Hello</h1>\\n'
    """
    return HtmlRenderer().render(tokens)


class Markdown:
    """High-level Markdown processor combining tokenizer and renderer.

    Usage:
        >>> md = Markdown(plugins=["table"])
        >>> html = md("#|\\n|| a | > ||\\n|#")
        >>> # Access the tokens
        >>> tokens = md.parse("#|\\n|| a ||\\n|#")
        >>> # Options accept snake_case and the camelCase names
        >>> md = Markdown(plugins=["all"], table_ignoreSplittersInInlineMath=True)

    Thread Safety:
        Uses ContextVar for thread-local configuration. Each instance owns its
        Ruler; safe to use multiple Markdown instances concurrently.

    """

    __slots__ = ("_config", "_plugins", "_tokenizer", "_renderer")

    def __init__(
        self,
        *,
        plugins: list[str] | None = None,
        config: ParseConfig | None = None,
        **options: Any,
    ) -> None:
        """Initialize Markdown processor.

        Args:
            plugins: List of plugin names to enable (e.g., ["table", "terms"]).
                Use ["all"] to enable all built-in plugins.
            config: Base configuration; ``options`` override its fields
            **options: ParseConfig fields, snake_case or camelCase
        """
        merged: dict[str, Any] = asdict(config) if config is not None else {}
        merged.update(options)

        requested = list(plugins or [])
        flags = ParseConfig.from_dict(merged)
        requested += [name for flag, name in _FLAG_PLUGINS.items() if getattr(flags, flag)]

        ruler = default_ruler()
        self._plugins = apply_plugins(requested, ruler, merged)

        # Build immutable config once (thread-safe, reused across calls)
        self._config = ParseConfig.from_dict(merged)
        self._tokenizer = BlockTokenizer(ruler)
        self._renderer = HtmlRenderer()

    @property
    def config(self) -> ParseConfig:
        return self._config

    @property
    def plugins(self) -> list[str]:
        """Names of the applied plugins."""
        return list(self._plugins)

    def __call__(self, source: str) -> str:
        """Parse and render Markdown in one call."""
        return self._renderer.render(self.parse(source))

    def parse(self, source: str, *, env: dict[str, Any] | None = None) -> list[Token]:
        """Parse Markdown source into tokens.

        Thread Safety:
            Sets config via ContextVar (thread-local), restored afterwards.
        """
        with parse_config_context(self._config):
            return self._tokenizer.parse(source, env=env)

    def lint(
        self,
        source: str,
        *,
        path: str = "input",
        log_levels: dict[str, LogLevel | str] | None = None,
        source_map: dict[str, str] | None = None,
        seen: set[str] | None = None,
    ) -> list[LintIssue]:
        """Lint ``source`` with this instance's plugins and options."""
        return lint(
            source,
            path=path,
            log_levels=log_levels,
            plugins=self._plugins,
            source_map=source_map,
            config=self._config,
            seen=seen,
        )


__all__ = [
    # Main API
    "parse",
    "render",
    "lint",
    "Markdown",
    # Tokens
    "Token",
    "TokenType",
    "Position",
    # Block tokenizer
    "BlockState",
    "BlockTokenizer",
    "LineIndex",
    "LineRegion",
    "Ruler",
    "default_ruler",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Plugins
    "BUILTIN_PLUGINS",
    "apply_plugins",
    "get_plugin",
    "register_plugin",
    # Linting
    "LintIssue",
    "LogLevel",
    # Rendering
    "HtmlRenderer",
    # Errors
    "MesitaError",
    "ParseError",
    "PluginError",
    "RenderError",
]
