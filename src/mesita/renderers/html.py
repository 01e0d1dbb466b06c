"""HTML renderer using StringBuilder pattern.

Renders the flat block token stream to HTML in a single pass. Container
tokens open and close elements; leaf tokens (fences, math blocks, inline
text) render their content escaped. Hidden tokens, such as lint markers,
produce no output.

Thread Safety:
All per-render state (the StringBuilder and the open-element stack) is local
to each render() call. Multiple threads can share a single HtmlRenderer.
"""

from __future__ import annotations

import html
from collections.abc import Iterable

from mesita.errors import RenderError
from mesita.stringbuilder import StringBuilder
from mesita.tokens import Token, TokenType


# Open/close tokens whose element content starts on a new line
_BLOCK_CONTAINERS = frozenset(
    {
        TokenType.BLOCKQUOTE_OPEN,
        TokenType.TABLE_OPEN,
        TokenType.TBODY_OPEN,
        TokenType.TR_OPEN,
        TokenType.TD_OPEN,
        TokenType.DFN_OPEN,
    }
)


def html_escape(s: str) -> str:
    """Escape HTML special characters.

    Escapes <, >, &, " but NOT single quotes.
    """
    return html.escape(s, quote=False).replace('"', "&quot;")


def _render_attrs(token: Token) -> str:
    return "".join(
        f' {html_escape(name)}="{html_escape(value)}"' for name, value in token.attrs.items()
    )


class HtmlRenderer:
    """Render block tokens to HTML.

    Usage:
        >>> renderer = HtmlRenderer()
        >>> renderer.render(tokens)
        '<table>\\n<tbody>\\n<tr>\\n<td>\\n<p>a</p>\\n</td>\\n</tr>\\n</tbody>\\n</table>\\n'

    """

    __slots__ = ()

    def render(self, tokens: Iterable[Token]) -> str:
        """Render a token stream.

        Raises:
            RenderError: If open and close tokens do not pair up
        """
        sb = StringBuilder()
        stack: list[Token] = []

        for token in tokens:
            if token.hidden:
                continue
            if token.nesting > 0:
                stack.append(token)
            elif token.nesting < 0:
                if not stack or stack[-1].tag != token.tag:
                    raise RenderError(
                        f"unexpected closing {token.type.name} at line "
                        f"{token.map[0] if token.map else '?'}"
                    )
                stack.pop()
            self._render_token(token, sb)

        if stack:
            raise RenderError(f"unclosed {stack[-1].type.name}")
        return sb.build()

    def _render_token(self, token: Token, sb: StringBuilder) -> None:
        """Dispatch on token type."""
        match token.type:
            case TokenType.INLINE:
                sb.append(html_escape(token.content))
            case TokenType.PARAGRAPH_OPEN | TokenType.HEADING_OPEN:
                sb.append(f"<{token.tag}{_render_attrs(token)}>")
            case TokenType.FENCE:
                self._render_fence(token, sb)
            case TokenType.MATH_BLOCK:
                sb.append('<div class="math-block">\n')
                sb.append(html_escape(token.content))
                sb.append("\n</div>\n")
            case _ if token.type in _BLOCK_CONTAINERS:
                sb.append_line(f"<{token.tag}{_render_attrs(token)}>")
            case _ if token.nesting < 0:
                sb.append_line(f"</{token.tag}>")
            case _:
                raise RenderError(f"cannot render token type {token.type.name}")

    def _render_fence(self, token: Token, sb: StringBuilder) -> None:
        """Render fenced code block."""
        lang = token.info.split()[0] if token.info else ""
        lang_class = f' class="language-{html_escape(lang)}"' if lang else ""
        sb.append(f"<pre><code{lang_class}>")
        sb.append(html_escape(token.content))
        sb.append("</code></pre>\n")
