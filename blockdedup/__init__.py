"""
blockdedup: remove near-duplicate paragraphs, sentences or chunks from text
while keeping distinct content in its original order.
"""

from blockdedup.chunking import Block, split_blocks
from blockdedup.errors import ConfigurationError
from blockdedup.options import (
    BlockSplitMethod,
    DedupConfig,
    SimilarityAlgorithm,
    build_dedup_config,
)
from blockdedup.pipeline import (
    BatchItemResult,
    DedupResult,
    DedupStats,
    PreviewExample,
    dedup_text,
    preview_duplicates,
    run_batch,
    schedule_dedup,
)
from blockdedup.similarity import calculate_similarity
from blockdedup.utils import block_signature

__version__ = "0.1.0"

__all__ = [
    "Block",
    "split_blocks",
    "ConfigurationError",
    "BlockSplitMethod",
    "DedupConfig",
    "SimilarityAlgorithm",
    "build_dedup_config",
    "BatchItemResult",
    "DedupResult",
    "DedupStats",
    "PreviewExample",
    "dedup_text",
    "preview_duplicates",
    "run_batch",
    "schedule_dedup",
    "calculate_similarity",
    "block_signature",
]
