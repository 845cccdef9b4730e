# blockdedup/pipeline/dedup.py
"""
Sequential near-duplicate removal over the blocks of one document.

For each block, in document order:
  1. a block matching any preserve pattern is kept and never becomes a comparison target;
  2. a block shorter than min_block_size is kept and never becomes a comparison target;
  3. otherwise its signature is compared against the retained signatures in insertion
     order; the first score >= threshold marks it a duplicate (dropped);
  4. a block with no match is kept and its signature is retained.

Public API:
    compile_preserve_patterns(patterns) -> list[re.Pattern]
    dedup_text(text, config, *, progress=None, cancel_event=None) -> DedupResult
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Pattern

from blockdedup.chunking import Block, split_blocks
from blockdedup.errors import ConfigurationError
from blockdedup.options.schema import BLOCK_SEPARATOR, DedupConfig
from blockdedup.similarity import calculate_similarity
from blockdedup.utils.text import block_signature

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]

DEFAULT_PROGRESS_EVERY = 20


@dataclass
class DedupStats:
    """Character counts for one pass."""
    original: int = 0
    processed: int = 0
    removed: int = 0
    duplicates_found: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "original": self.original,
            "processed": self.processed,
            "removed": self.removed,
            "duplicates_found": self.duplicates_found,
        }


@dataclass
class DedupResult:
    """Retained blocks (document order), the joined output text and stats."""
    blocks: List[Block]
    text: str
    stats: DedupStats
    total_blocks: int = 0
    cancelled: bool = False
    duplicate_indexes: List[int] = field(default_factory=list)

    @property
    def reduction_percent(self) -> float:
        if self.stats.original == 0:
            return 0.0
        return self.stats.removed / self.stats.original * 100.0


def compile_preserve_patterns(patterns: Iterable[str]) -> List[Pattern[str]]:
    """
    Compile case-insensitive preserve patterns. The first pattern that fails to
    compile raises ConfigurationError; nothing is silently skipped.
    """
    compiled: List[Pattern[str]] = []
    for pat in patterns:
        try:
            compiled.append(re.compile(pat, re.IGNORECASE))
        except re.error as e:
            raise ConfigurationError(
                f"Invalid preserve pattern {pat!r}: {e}",
                pattern=pat,
                reason=str(e),
            ) from e
    return compiled


def _report(progress: Optional[ProgressCallback], fraction: float) -> None:
    if progress is None:
        return
    try:
        progress(fraction)
    except Exception:
        logger.warning("Progress callback raised; ignoring", exc_info=True)


def _finish(
    text: str,
    kept: List[Block],
    dup_indexes: List[int],
    total: int,
    cancelled: bool,
) -> DedupResult:
    out = BLOCK_SEPARATOR.join(b.text for b in kept)
    stats = DedupStats(
        original=len(text),
        processed=len(out),
        removed=len(text) - len(out),
        duplicates_found=len(dup_indexes),
    )
    return DedupResult(
        blocks=kept,
        text=out,
        stats=stats,
        total_blocks=total,
        cancelled=cancelled,
        duplicate_indexes=dup_indexes,
    )


def dedup_text(
    text: str,
    config: Optional[DedupConfig] = None,
    *,
    progress: Optional[ProgressCallback] = None,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
    cancel_event: Optional[threading.Event] = None,
) -> DedupResult:
    """
    Run one dedup pass over `text`.

    - Raises ConfigurationError before touching any block if a preserve pattern
      does not compile.
    - `progress(fraction)` is called every `progress_every` blocks and once at the end.
    - `cancel_event` is checked between blocks only; when set, the blocks retained so
      far are returned with cancelled=True.
    """
    cfg = config or DedupConfig()
    text = text or ""
    preserve = compile_preserve_patterns(cfg.preserve_patterns)

    blocks = split_blocks(text, cfg.split_method)
    total = len(blocks)
    every = max(1, int(progress_every))

    kept: List[Block] = []
    dup_indexes: List[int] = []
    # dict keeps insertion order; first sufficiently similar entry wins
    retained: Dict[str, None] = {}

    for i, block in enumerate(blocks):
        if cancel_event is not None and cancel_event.is_set():
            logger.info("Dedup pass cancelled after %d/%d blocks", i, total)
            return _finish(text, kept, dup_indexes, total, cancelled=True)

        if i % every == 0:
            _report(progress, (i + 1) / total)

        if preserve and any(rx.search(block.text) for rx in preserve):
            kept.append(block)
            continue

        if len(block.text) < cfg.min_block_size:
            kept.append(block)
            continue

        sig = block_signature(block.text)
        is_dup = False
        for seen in retained:
            if calculate_similarity(sig, seen, cfg.algorithm) >= cfg.similarity_threshold:
                is_dup = True
                break

        if is_dup:
            dup_indexes.append(block.index)
            continue

        kept.append(block)
        retained[sig] = None

    _report(progress, 1.0)
    result = _finish(text, kept, dup_indexes, total, cancelled=False)
    logger.debug(
        "Dedup pass: %d blocks, %d kept, %d duplicates (%s, threshold=%.2f, split=%s)",
        total,
        len(kept),
        result.stats.duplicates_found,
        cfg.algorithm.value,
        cfg.similarity_threshold,
        cfg.split_method.value,
    )
    return result
