"""Token and TokenType definitions for the mesita block tokenizer.

Block rules emit a flat stream of tokens. Container elements are a pair of
open (``nesting=1``) and close (``nesting=-1``) tokens; leaf elements such as
fenced code are a single token with ``nesting=0``.

Unlike lexer tokens in a pull parser, these tokens are mutable: the table rule
attaches ``colspan``/``rowspan`` to cells after they were emitted and flags
sentinel cells for removal through ``meta``.

"""

from dataclasses import dataclass, field
from enum import Enum, auto


class TokenType(Enum):
    """Token types produced by block rules."""

    # Core block elements
    PARAGRAPH_OPEN = auto()
    PARAGRAPH_CLOSE = auto()
    INLINE = auto()  # Raw inline text of a paragraph or heading
    HEADING_OPEN = auto()
    HEADING_CLOSE = auto()
    BLOCKQUOTE_OPEN = auto()
    BLOCKQUOTE_CLOSE = auto()
    FENCE = auto()  # ``` or ~~~
    MATH_BLOCK = auto()  # $$ ... $$

    # Extended tables
    TABLE_OPEN = auto()
    TABLE_CLOSE = auto()
    TBODY_OPEN = auto()
    TBODY_CLOSE = auto()
    TR_OPEN = auto()
    TR_CLOSE = auto()
    TD_OPEN = auto()
    TD_CLOSE = auto()

    # Term definitions
    DFN_OPEN = auto()
    DFN_CLOSE = auto()

    # Hidden diagnostic marker, never rendered
    LINT = auto()


@dataclass(slots=True)
class Token:
    """A block-level element emitted into the token stream.

    Attributes:
        type: The token type
        tag: HTML tag name ("" for tokens without one)
        nesting: 1 opens an element, -1 closes it, 0 is self-contained
        level: Nesting depth in the stream at the time of emission
        map: ``[start_line, end_line]`` source range, if known
        attrs: Insertion-ordered HTML attributes
        content: Text payload (inline text, code body)
        markup: Marker characters that produced the token (``>``, ```` ``` ````)
        info: Fence info string
        hidden: Hidden tokens are skipped by renderers
        meta: Free-form per-token data (``{"delete": True}`` marks table cells)

    """

    type: TokenType
    tag: str
    nesting: int
    level: int = 0
    map: list[int] | None = None
    attrs: dict[str, str] = field(default_factory=dict)
    content: str = ""
    markup: str = ""
    info: str = ""
    hidden: bool = False
    meta: dict[str, object] = field(default_factory=dict)

    def attr_get(self, name: str) -> str | None:
        """Get attribute value or None."""
        return self.attrs.get(name)

    def attr_set(self, name: str, value: str) -> None:
        """Set attribute, replacing any existing value."""
        self.attrs[name] = value

    def attr_join(self, name: str, value: str) -> None:
        """Append to an attribute's value, space-separated."""
        existing = self.attrs.get(name)
        self.attrs[name] = f"{existing} {value}" if existing else value

    @property
    def marked_for_deletion(self) -> bool:
        return bool(self.meta.get("delete"))

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.content
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, level={self.level})"
