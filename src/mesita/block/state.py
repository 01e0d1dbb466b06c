"""Line index and per-call tokenizer state.

The tokenizer works on whole lines. ``LineIndex`` records, for every line, the
absolute offset where it begins, the width of its leading indentation and the
offset where it ends (the ``\\n`` or end of source). A sentinel line at EOF
keeps lookups one past the last line in bounds.

Sub-ranges (a table cell, the body of a blockquote) are tokenized through a
derived ``BlockState`` carrying a ``LineRegion``: the region overrides the
begin/end offsets of some lines instead of patching the shared index, so
sibling cells and the enclosing rule never observe each other's bounds.

Thread Safety:
LineIndex and LineRegion are immutable. BlockState is single-use per parse.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from mesita.config import ParseConfig, get_parse_config
from mesita.tokens import Token, TokenType

if TYPE_CHECKING:
    from mesita.block.tokenizer import BlockTokenizer
    from mesita.location import Position


class LineIndex:
    """Per-line offsets of a source buffer.

    Usage:
        >>> index = LineIndex.from_source("  ab\\ncd")
        >>> index.begin(0), index.indent(0), index.end(0)
        (0, 2, 4)
        >>> index.begin(1), index.end(1)
        (5, 7)

    """

    __slots__ = ("_begins", "_indents", "_ends", "_length")

    def __init__(
        self, begins: list[int], indents: list[int], ends: list[int], length: int
    ) -> None:
        self._begins = begins
        self._indents = indents
        self._ends = ends
        self._length = length

    @classmethod
    def from_source(cls, src: str) -> LineIndex:
        """Build the index in one pass over ``src``."""
        begins: list[int] = []
        indents: list[int] = []
        ends: list[int] = []
        length = len(src)
        start = 0
        while start < length:
            end = src.find("\n", start)
            if end == -1:
                end = length
            pos = start
            while pos < end and src[pos] in " \t":
                pos += 1
            begins.append(start)
            indents.append(pos - start)
            ends.append(end)
            start = end + 1

        # Sentinel line at EOF
        begins.append(length)
        indents.append(0)
        ends.append(length)
        return cls(begins, indents, ends, length)

    @property
    def line_count(self) -> int:
        """Number of real lines (the EOF sentinel excluded)."""
        return len(self._begins) - 1

    def begin(self, line: int) -> int:
        if line >= len(self._begins):
            return self._length
        return self._begins[line]

    def indent(self, line: int) -> int:
        if line >= len(self._indents):
            return 0
        return self._indents[line]

    def end(self, line: int) -> int:
        if line >= len(self._ends):
            return self._length
        return self._ends[line]


@dataclass(frozen=True, slots=True)
class LineRegion:
    """An explicit sub-range of lines with overridden bounds.

    Attributes:
        start_line: First line of the region
        end_line: One past the last line of the region
        begins: Line number -> begin offset override; indentation is measured
            from the override
        ends: Line number -> end offset override

    """

    start_line: int
    end_line: int
    begins: Mapping[int, int] = field(default_factory=dict)
    ends: Mapping[int, int] = field(default_factory=dict)

    @classmethod
    def between(cls, start: Position, end: Position) -> LineRegion:
        """Region covering the half-open text range ``[start, end)``."""
        return cls(
            start_line=start.line,
            end_line=end.line + 1,
            begins={start.line: start.offset},
            ends={end.line: end.offset},
        )

    def over(self, parent: LineRegion | None) -> LineRegion:
        """Layer this region on top of an enclosing one.

        Lines this region does not override keep the parent's overrides, so a
        cell inside a blockquote still sees the quote markers stripped.
        """
        if parent is None:
            return self
        return LineRegion(
            start_line=self.start_line,
            end_line=self.end_line,
            begins={**parent.begins, **self.begins},
            ends={**parent.ends, **self.ends},
        )


class BlockState:
    """Mutable state for one tokenizer call.

    ``tokens`` and ``env`` are shared with derived states, everything else is
    local. ``line`` is the next line to tokenize; rules advance it past the
    lines they consumed.

    """

    __slots__ = (
        "src",
        "index",
        "region",
        "tokens",
        "env",
        "config",
        "tokenizer",
        "line",
        "line_max",
        "level",
    )

    def __init__(
        self,
        src: str,
        tokenizer: BlockTokenizer,
        *,
        env: dict[str, Any] | None = None,
        config: ParseConfig | None = None,
        tokens: list[Token] | None = None,
        index: LineIndex | None = None,
        region: LineRegion | None = None,
        level: int = 0,
    ) -> None:
        self.src = src
        self.tokenizer = tokenizer
        self.index = index if index is not None else LineIndex.from_source(src)
        self.region = region
        self.tokens: list[Token] = tokens if tokens is not None else []
        self.env: dict[str, Any] = env if env is not None else {}
        self.config = config if config is not None else get_parse_config()
        self.level = level
        self.line = region.start_line if region is not None else 0
        self.line_max = region.end_line if region is not None else self.index.line_count

    # =========================================================================
    # Line bounds
    # =========================================================================

    def begin(self, line: int) -> int:
        """Absolute offset where ``line`` begins."""
        if self.region is not None:
            override = self.region.begins.get(line)
            if override is not None:
                return override
        return self.index.begin(line)

    def indent(self, line: int) -> int:
        """Width of the indentation skipped at the start of ``line``."""
        if self.region is not None:
            begin = self.region.begins.get(line)
            if begin is not None:
                return self.skip_spaces(begin, self.end(line)) - begin
        return self.index.indent(line)

    def content_start(self, line: int) -> int:
        """Offset of the first character after the indentation."""
        return self.begin(line) + self.indent(line)

    def end(self, line: int) -> int:
        """Absolute offset where ``line`` ends (exclusive)."""
        if self.region is not None:
            override = self.region.ends.get(line)
            if override is not None:
                return override
        return self.index.end(line)

    def is_empty(self, line: int) -> bool:
        """True if the line holds nothing but whitespace."""
        return self.skip_spaces(self.content_start(line), self.end(line)) >= self.end(line)

    def skip_empty_lines(self, line: int) -> int:
        while line < self.line_max and self.is_empty(line):
            line += 1
        return line

    def skip_spaces(self, pos: int, limit: int | None = None) -> int:
        """Advance ``pos`` over spaces and tabs."""
        limit = len(self.src) if limit is None else limit
        while pos < limit and self.src[pos] in " \t":
            pos += 1
        return pos

    def line_text(self, line: int) -> str:
        """Content of ``line`` after its indentation."""
        return self.src[self.content_start(line) : self.end(line)]

    def get_lines(self, start: int, end: int) -> str:
        """Join lines ``[start, end)`` with newlines, indentation stripped."""
        return "\n".join(self.line_text(line) for line in range(start, end))

    # =========================================================================
    # Token emission
    # =========================================================================

    def push(self, token_type: TokenType, tag: str, nesting: int) -> Token:
        """Append a token, keeping ``level`` balanced across open/close pairs."""
        token = Token(type=token_type, tag=tag, nesting=nesting)
        if nesting < 0:
            self.level -= 1
        token.level = self.level
        if nesting > 0:
            self.level += 1
        self.tokens.append(token)
        return token

    def derive(self, region: LineRegion) -> BlockState:
        """State for tokenizing ``region`` into the same token stream."""
        return BlockState(
            self.src,
            self.tokenizer,
            env=self.env,
            config=self.config,
            tokens=self.tokens,
            index=self.index,
            region=region.over(self.region),
            level=self.level,
        )
