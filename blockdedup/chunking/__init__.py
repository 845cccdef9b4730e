"""
Expose block splitting utilities.

Includes:
- Block: data class for one block of text
- paragraph_blocks / sentence_blocks / hybrid_blocks / sized_blocks: raw strategies
- split_blocks: segment text with a BlockSplitMethod
"""

from .splitter import (
    Block,
    hybrid_blocks,
    paragraph_blocks,
    sentence_blocks,
    sized_blocks,
    split_blocks,
)

__all__ = [
    "Block",
    "hybrid_blocks",
    "paragraph_blocks",
    "sentence_blocks",
    "sized_blocks",
    "split_blocks",
]
