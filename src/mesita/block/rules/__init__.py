"""Built-in block rules.

Each rule has the signature ``rule(state, start_line, end_line, silent)``:
it returns False if the construct does not start at ``start_line``; in silent
mode it only answers whether it would match; otherwise it emits tokens and
advances ``state.line``.
"""

from mesita.block.ruler import Ruler
from mesita.block.rules.fence import fence_rule
from mesita.block.rules.heading import heading_rule
from mesita.block.rules.math import math_block_rule
from mesita.block.rules.paragraph import paragraph_rule
from mesita.block.rules.quote import blockquote_rule

# Chains a rule may interrupt when it starts on a continuation line
_INTERRUPTS = ("paragraph",)


def default_ruler() -> Ruler:
    """Create a ruler holding the core block grammar, in priority order."""
    ruler = Ruler()
    ruler.push("fence", fence_rule, alt=_INTERRUPTS)
    ruler.push("math_block", math_block_rule, alt=_INTERRUPTS)
    ruler.push("heading", heading_rule, alt=_INTERRUPTS)
    ruler.push("blockquote", blockquote_rule, alt=_INTERRUPTS)
    ruler.push("paragraph", paragraph_rule)
    return ruler


__all__ = [
    "blockquote_rule",
    "default_ruler",
    "fence_rule",
    "heading_rule",
    "math_block_rule",
    "paragraph_rule",
]
