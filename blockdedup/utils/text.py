"""
Lightweight text normalization helpers.

- block_signature: canonical comparison form of a block
- parse_pattern_lines: split a multi-line pattern field into patterns
"""

from __future__ import annotations

import re
from typing import Iterable, List


_WS = re.compile(r"\s+")
# \w is Unicode-aware here, so accented letters are kept (not ASCII-only)
_PUNCT = re.compile(r"[^\w\s]")


def block_signature(text: str) -> str:
    """
    Signature used for similarity comparison:
      - lowercase
      - collapse whitespace runs to a single space
      - drop anything that is not a word character or whitespace
      - strip
    """
    s = (text or "").lower()
    s = _WS.sub(" ", s)
    s = _PUNCT.sub("", s)
    return s.strip()


def parse_pattern_lines(raw: str | Iterable[str] | None) -> List[str]:
    """
    Accept a newline-separated string or an iterable of strings.
    Each pattern is trimmed; blank entries are ignored. Order is kept.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        items = raw.split("\n")
    else:
        items = [str(x) for x in raw]
    out: List[str] = []
    for item in items:
        p = item.strip()
        if p:
            out.append(p)
    return out
