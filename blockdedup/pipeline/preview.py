"""
Advisory preview of near-duplicate pairs.

Splits the text the same way a dedup pass would and reports up to `max_examples`
(earlier block, later block, score) pairs. It is a quick look, not a decision:

- preserve patterns are not consulted, so preserved blocks can show up here;
- blocks shorter than min_block_size are skipped entirely;
- a block that matches is reported and not added to the seen set.

Inputs longer than `max_chars` return no examples.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from blockdedup.chunking import split_blocks
from blockdedup.options.schema import DedupConfig
from blockdedup.similarity import calculate_similarity
from blockdedup.utils.text import block_signature

PREVIEW_MAX_CHARS = 1_000_000
PREVIEW_MAX_EXAMPLES = 5


@dataclass(frozen=True)
class PreviewExample:
    original: str
    duplicate: str
    similarity: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "original": self.original,
            "duplicate": self.duplicate,
            "similarity": round(self.similarity, 4),
        }


def preview_duplicates(
    text: str,
    config: Optional[DedupConfig] = None,
    *,
    max_examples: int = PREVIEW_MAX_EXAMPLES,
    max_chars: int = PREVIEW_MAX_CHARS,
) -> List[PreviewExample]:
    cfg = config or DedupConfig()
    text = text or ""
    if len(text) > max_chars or max_examples <= 0:
        return []

    examples: List[PreviewExample] = []
    seen: Dict[str, str] = {}  # signature -> first block text

    for block in split_blocks(text, cfg.split_method):
        if len(examples) >= max_examples:
            break
        if len(block.text) < cfg.min_block_size:
            continue

        sig = block_signature(block.text)
        matched = False
        for seen_sig, seen_text in seen.items():
            score = calculate_similarity(sig, seen_sig, cfg.algorithm)
            if score >= cfg.similarity_threshold:
                examples.append(PreviewExample(original=seen_text, duplicate=block.text, similarity=score))
                matched = True
                break
        if not matched:
            seen[sig] = block.text

    return examples
