"""
Pipeline facade for blockdedup.

Callers import the engine entrypoints from here instead of the concrete modules:

    from blockdedup.pipeline import dedup_text, run_batch, preview_duplicates

- dedup_text        : one sequential dedup pass (pipeline/dedup.py)
- schedule_dedup    : same pass, dispatched off-thread for large inputs (pipeline/runner.py)
- run_batch         : per-input passes with failure isolation (pipeline/batch.py)
- preview_duplicates: advisory near-duplicate examples (pipeline/preview.py)
"""

from .dedup import (
    DedupResult,
    DedupStats,
    compile_preserve_patterns,
    dedup_text,
)
from .runner import LARGE_INPUT_CHARS, schedule_dedup
from .batch import BatchItemResult, reduction_percent, run_batch
from .preview import PreviewExample, preview_duplicates

__all__ = [
    "DedupResult",
    "DedupStats",
    "compile_preserve_patterns",
    "dedup_text",
    "LARGE_INPUT_CHARS",
    "schedule_dedup",
    "BatchItemResult",
    "reduction_percent",
    "run_batch",
    "PreviewExample",
    "preview_duplicates",
]
