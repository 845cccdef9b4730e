from .schema import (
    BLOCK_SEPARATOR,
    BlockSplitMethod,
    DedupConfig,
    SimilarityAlgorithm,
    build_dedup_config,
    coerce_algorithm,
    coerce_split_method,
)
from .validation import PatternIssue, check_preserve_patterns, validate_cli_options

__all__ = [
    "BLOCK_SEPARATOR",
    "BlockSplitMethod",
    "DedupConfig",
    "SimilarityAlgorithm",
    "build_dedup_config",
    "coerce_algorithm",
    "coerce_split_method",
    "PatternIssue",
    "check_preserve_patterns",
    "validate_cli_options",
]
