"""mesita renderers.

Renderers convert the flat block token stream into output formats.

Available Renderers:
- HtmlRenderer: Renders tokens to HTML using StringBuilder pattern

Thread Safety:
All renderers use StringBuilder local to each render() call.
Safe for concurrent use from multiple threads.

"""

from mesita.renderers.html import HtmlRenderer, html_escape

__all__ = ["HtmlRenderer", "html_escape"]
