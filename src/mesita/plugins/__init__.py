"""Plugin system for mesita.

Plugins add block rules to the tokenizer:
- table: ``#| ... |#`` extended tables with row/col spans
- terms: ``[*key]: definition`` term definitions

Usage:
    >>> from mesita import Markdown
    >>>
    >>> # Enable specific plugins
    >>> md = Markdown(plugins=["table"])
    >>> html = md("#|\n|| a | b ||\n|#")
    >>>
    >>> # Enable all plugins
    >>> md = Markdown(plugins=["all"])

Plugin Architecture:
Each plugin hooks into two extension points:

1. extend_ruler: insert its block rule(s) into a Ruler at the right priority
2. extend_config: switch on the ParseConfig fields it depends on

Thread Safety:
All plugins are stateless. Rules keep their state in BlockState.

"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from mesita.errors import PluginError

if TYPE_CHECKING:
    from mesita.block.ruler import Ruler

__all__ = [
    "MesitaPlugin",
    "BUILTIN_PLUGINS",
    "register_plugin",
    "get_plugin",
    "resolve_plugins",
    "apply_plugins",
]


@runtime_checkable
class MesitaPlugin(Protocol):
    """Protocol for mesita plugins."""

    @property
    def name(self) -> str:
        """Plugin identifier."""
        ...

    def extend_ruler(self, ruler: Ruler) -> None:
        """Register block rules.

        Called once per Markdown instance, on that instance's own Ruler.
        """
        ...

    def extend_config(self, options: dict[str, Any]) -> None:
        """Set the ParseConfig options the plugin needs.

        User options given to Markdown() take precedence.
        """
        ...


# Registry of built-in plugins
BUILTIN_PLUGINS: dict[str, type[MesitaPlugin]] = {}


def register_plugin(
    name: str,
) -> Callable[[type[MesitaPlugin]], type[MesitaPlugin]]:
    """Decorator to register a plugin.

    Args:
        name: Plugin name for lookup

    Returns:
        Decorator function that registers and returns the class

    Usage:
        @register_plugin("table")
        class TablePlugin:
            ...

    """

    def decorator(cls: type[MesitaPlugin]) -> type[MesitaPlugin]:
        BUILTIN_PLUGINS[name] = cls
        return cls

    return decorator


def get_plugin(name: str) -> MesitaPlugin:
    """Get a plugin instance by name.

    Raises:
        PluginError: If plugin name is not recognized

    """
    if name not in BUILTIN_PLUGINS:
        available = ", ".join(sorted(BUILTIN_PLUGINS.keys()))
        raise PluginError(name, f"unknown plugin. Available: {available}")
    return BUILTIN_PLUGINS[name]()


def resolve_plugins(plugins: Iterable[str]) -> list[str]:
    """Expand ``"all"`` and drop duplicates, keeping the first occurrence."""
    names: list[str] = []
    for plugin_name in plugins:
        expanded = list(BUILTIN_PLUGINS) if plugin_name == "all" else [plugin_name]
        for name in expanded:
            if name not in names:
                names.append(name)
    return names


def apply_plugins(
    plugins: Iterable[str],
    ruler: Ruler,
    options: dict[str, Any],
) -> list[str]:
    """Apply plugins to a ruler and a config option mapping.

    Args:
        plugins: Plugin names, ``"all"`` for every built-in plugin
        ruler: Ruler to extend
        options: ParseConfig options to update

    Returns:
        Names of the applied plugins

    """
    names = resolve_plugins(plugins)
    for name in names:
        plugin = get_plugin(name)
        plugin.extend_ruler(ruler)
        plugin.extend_config(options)
    return names


# Import built-in plugins to register them
# These imports trigger the @register_plugin decorators
from mesita.plugins.table import TablePlugin  # noqa: E402
from mesita.plugins.terms import TermsPlugin  # noqa: E402

__all__ += [
    "TablePlugin",
    "TermsPlugin",
]
