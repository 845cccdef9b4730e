"""
Block segmentation for deduplication.

Functions provided:
- paragraph_blocks: split on blank lines
- sentence_blocks: runs of text terminated by . ! or ?
- split_blocks: segment text with one of the BlockSplitMethod strategies

Blocks keep the original text slices (no trimming); only blocks that are empty
after trimming are dropped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from blockdedup.options.schema import BlockSplitMethod, coerce_split_method

# A newline, any whitespace (including further newlines), a newline.
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")

# Maximal run of non-terminators followed by one or more terminators.
# Trailing text without a terminator is never matched.
_SENTENCE = re.compile(r"[^.!?]+[.!?]+")

HYBRID_PARAGRAPH_LIMIT = 500
SIZED_CHUNK_TARGET = 200


@dataclass(frozen=True)
class Block:
    """One block of the input, in document order."""
    index: int
    text: str

    def __len__(self) -> int:
        return len(self.text)


# ------------------------------
# Primitive splitters
# ------------------------------

def _non_empty(parts: List[str]) -> List[str]:
    return [p for p in parts if p.strip()]


def paragraph_blocks(text: str) -> List[str]:
    """Split text into paragraphs separated by blank lines."""
    return _non_empty(_PARAGRAPH_BREAK.split(text or ""))


def sentence_blocks(text: str) -> List[str]:
    """Terminated sentences only; an unterminated tail is dropped."""
    return _non_empty(_SENTENCE.findall(text or ""))


def hybrid_blocks(text: str, *, paragraph_limit: int = HYBRID_PARAGRAPH_LIMIT) -> List[str]:
    """
    Paragraphs, with long paragraphs broken further into sentences.
    A long paragraph without any terminated sentence stays whole.
    """
    out: List[str] = []
    for par in _PARAGRAPH_BREAK.split(text or ""):
        if len(par) > paragraph_limit:
            out.extend(_SENTENCE.findall(par) or [par])
        else:
            out.append(par)
    return _non_empty(out)


def sized_blocks(text: str, *, chunk_size: int = SIZED_CHUNK_TARGET) -> List[str]:
    """
    Greedily pack sentences into chunks of about chunk_size characters.
    A sentence that would push the chunk past chunk_size starts a new chunk.
    """
    chunks: List[str] = []
    cur = ""
    for sent in _SENTENCE.findall(text or ""):
        if len(cur) + len(sent) > chunk_size:
            chunks.append(cur)
            cur = sent
        else:
            cur += " " + sent
    if cur.strip():
        chunks.append(cur)
    return _non_empty(chunks)


# ------------------------------
# Unified entrypoint
# ------------------------------

def split_blocks(text: str, method: BlockSplitMethod | str = BlockSplitMethod.paragraph) -> List[Block]:
    """
    Segment text into ordered blocks. Unknown methods behave as paragraph.
    """
    m = coerce_split_method(method)
    if m is BlockSplitMethod.sentence:
        parts = sentence_blocks(text)
    elif m is BlockSplitMethod.hybrid:
        parts = hybrid_blocks(text)
    elif m is BlockSplitMethod.sized:
        parts = sized_blocks(text)
    else:
        parts = paragraph_blocks(text)
    return [Block(index=i, text=t) for i, t in enumerate(parts)]
