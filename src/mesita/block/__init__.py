"""Line-oriented block tokenizer hosting the extended table grammar."""

from mesita.block.ruler import BlockRule, Ruler
from mesita.block.rules import default_ruler
from mesita.block.state import BlockState, LineIndex, LineRegion
from mesita.block.tokenizer import BlockTokenizer

__all__ = [
    "BlockRule",
    "BlockState",
    "BlockTokenizer",
    "LineIndex",
    "LineRegion",
    "Ruler",
    "default_ruler",
]
