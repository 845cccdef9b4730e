"""
Batch orchestration: one dedup pass per input with the same config.

Each input is a (name, source) pair where source is either the text itself or a
zero-argument callable returning it (so read errors are captured per item). An
optional third element overrides the shared DedupConfig for that item.
A failure on one item becomes that item's result and never stops the batch.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from blockdedup.options.schema import DedupConfig
from blockdedup.pipeline.dedup import DedupResult, dedup_text

logger = logging.getLogger(__name__)

TextSource = Union[str, Callable[[], str]]
BatchInput = Union[Tuple[str, TextSource], Tuple[str, TextSource, Optional[DedupConfig]]]
BatchProgress = Callable[[int, int], None]


def reduction_percent(original: int, processed: int) -> float:
    """(original - processed) / original * 100, or 0 for empty input."""
    if original == 0:
        return 0.0
    return (original - processed) / original * 100.0


@dataclass
class BatchItemResult:
    """Outcome of one batch item: a result with size figures, or an error."""
    name: str
    result: Optional[DedupResult] = None
    error: Optional[str] = None
    original_size: int = 0
    processed_size: int = 0
    reduction: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, object]:
        if not self.ok:
            return {"name": self.name, "error": self.error}
        return {
            "name": self.name,
            "original_size": self.original_size,
            "processed_size": self.processed_size,
            "reduction": round(self.reduction, 2),
            "duplicates_found": self.result.stats.duplicates_found if self.result else 0,
        }


def _run_one(name: str, source: TextSource, config: DedupConfig) -> BatchItemResult:
    try:
        text = source() if callable(source) else source
        res = dedup_text(text, config)
    except Exception as e:
        logger.warning("Batch item %s failed: %s", name, e)
        return BatchItemResult(name=name, error=f"{type(e).__name__}: {e}")
    return BatchItemResult(
        name=name,
        result=res,
        original_size=res.stats.original,
        processed_size=res.stats.processed,
        reduction=reduction_percent(res.stats.original, res.stats.processed),
    )


def _unpack(item: BatchInput, default: DedupConfig) -> Tuple[str, TextSource, DedupConfig]:
    name, source = item[0], item[1]
    override = item[2] if len(item) > 2 else None
    return name, source, override or default


def _notify(progress: Optional[BatchProgress], current: int, total: int) -> None:
    if progress is None:
        return
    try:
        progress(current, total)
    except Exception:
        logger.warning("Batch progress callback raised; ignoring", exc_info=True)


def run_batch(
    inputs: Sequence[BatchInput],
    config: Optional[DedupConfig] = None,
    *,
    max_workers: int = 1,
    progress: Optional[BatchProgress] = None,
) -> List[BatchItemResult]:
    """
    Dedup every input and return results in input order.

    max_workers=1 processes items strictly one after another; larger values use a
    bounded thread pool but still return results in input order.
    """
    cfg = config or DedupConfig()
    items = list(inputs)
    total = len(items)

    if max_workers <= 1 or total <= 1:
        out: List[BatchItemResult] = []
        for i, item in enumerate(items, start=1):
            out.append(_run_one(*_unpack(item, cfg)))
            _notify(progress, i, total)
        return out

    results: Dict[int, BatchItemResult] = {}
    with ThreadPoolExecutor(max_workers=max_workers) as ex:
        fut2idx = {
            ex.submit(_run_one, *_unpack(item, cfg)): idx
            for idx, item in enumerate(items)
        }
        done = 0
        for fut in as_completed(fut2idx):
            results[fut2idx[fut]] = fut.result()
            done += 1
            _notify(progress, done, total)
    return [results[i] for i in range(total)]
