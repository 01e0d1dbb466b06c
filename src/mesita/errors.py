"""Exception classes for mesita.

Malformed Markdown never raises: an unterminated table degrades to a lint
diagnostic and a paragraph. These exceptions cover programming errors in
rules, plugins and renderers.
"""

from __future__ import annotations


class MesitaError(Exception):
    """Base exception for all mesita errors."""

    pass


class ParseError(MesitaError):
    """Error during block tokenization.

    Raised when a block rule breaks the tokenizer contract, e.g. reports a
    match without consuming any line.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (0-indexed, like token maps)
            col_offset: Column offset where error occurred
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class RenderError(MesitaError):
    """Error during HTML rendering.

    Raised when the token stream is unbalanced or carries an unknown type.
    """

    pass


class PluginError(MesitaError):
    """Error in plugin lookup or registration."""

    def __init__(self, plugin_name: str, message: str) -> None:
        """Initialize plugin error.

        Args:
            plugin_name: Name of the failing plugin
            message: Description of the error
        """
        self.plugin_name = plugin_name
        super().__init__(f"Plugin '{plugin_name}': {message}")
