"""ContextVar-based parse configuration for mesita.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per Markdown instance, read by block rules while they run.

Usage:
    md = Markdown(plugins=["table"], table_ignore_splitters_in_inline_code=True)
    html = md("#|\n|| a | `|` ||\n|#")  # Sets config internally via ContextVar

    # Direct tokenizer usage (advanced)
    with parse_config_context(ParseConfig(tables_enabled=True)):
        tokens = tokenizer.parse(source)

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage.

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any


# Option names used by documentation toolchains that embed the table grammar.
_CAMEL_CASE_ALIASES: dict[str, str] = {
    "table_ignoreSplittersInBlockCode": "table_ignore_splitters_in_block_code",
    "table_ignoreSplittersInBlockMath": "table_ignore_splitters_in_block_math",
    "table_ignoreSplittersInInlineCode": "table_ignore_splitters_in_inline_code",
    "table_ignoreSplittersInInlineMath": "table_ignore_splitters_in_inline_math",
    "isLintRun": "lint_run",
}


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        tables_enabled: Enable the ``#| ... |#`` extended table rule
        terms_enabled: Enable ``[*key]: definition`` term definitions
        table_ignore_splitters_in_block_code: Row/cell markers inside
            triple-backtick fences are inert
        table_ignore_splitters_in_block_math: Row/cell markers inside
            ``$$`` fences are inert
        table_ignore_splitters_in_inline_code: Row/cell markers inside
            backtick code spans are inert
        table_ignore_splitters_in_inline_math: Row/cell markers inside
            ``$...$`` spans are inert
        lint_run: Emit lint-only diagnostics (duplicate terms and the like)

    """

    tables_enabled: bool = False
    terms_enabled: bool = False
    table_ignore_splitters_in_block_code: bool = True
    table_ignore_splitters_in_block_math: bool = False
    table_ignore_splitters_in_inline_code: bool = False
    table_ignore_splitters_in_inline_math: bool = False
    lint_run: bool = False

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Accepts both the snake_case field names and the camelCase option
        names (``table_ignoreSplittersInInlineCode``...). Unknown keys are
        silently ignored.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "tables_enabled": True,
            ...     "table_ignoreSplittersInInlineMath": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.table_ignore_splitters_in_inline_math
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered: dict[str, Any] = {}
        for key, value in config_dict.items():
            key = _CAMEL_CASE_ALIASES.get(key, key)
            if key in valid_fields:
                filtered[key] = value
        return cls(**filtered)


_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Only affects the current thread's context. Other threads are unaffected.
    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the module-level default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(tables_enabled=True)):
        ...     get_parse_config().tables_enabled
        True
    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
