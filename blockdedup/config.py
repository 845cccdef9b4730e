"""
blockdedup configuration loader.

- Reads environment variables and .env without failing on import.
- Provides a typed Config object with sensible defaults.
- Malformed values fall back to defaults instead of raising.

Usage:
    from blockdedup.config import load_config
    cfg = load_config()
    dedup_cfg = cfg.to_dedup_config()

The engine never reads the environment itself; callers pass a DedupConfig.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import find_dotenv, load_dotenv

from blockdedup.options.schema import (
    DEFAULT_MIN_BLOCK_SIZE,
    DEFAULT_SIMILARITY_THRESHOLD,
    DedupConfig,
)
from blockdedup.utils.text import parse_pattern_lines


def _getenv_str(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.getenv(name)
    if val is None or val == "":
        return default
    return val


def _getenv_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or val == "":
        return default
    try:
        return int(val)
    except ValueError:
        return default


def _getenv_float(name: str, default: float) -> float:
    val = os.getenv(name)
    if val is None or val == "":
        return default
    try:
        return float(val)
    except ValueError:
        return default


def _getenv_patterns(name: str) -> Tuple[str, ...]:
    # .env files cannot hold real newlines easily; accept a literal "\n" as separator
    val = os.getenv(name) or ""
    return tuple(parse_pattern_lines(val.replace("\\n", "\n")))


@dataclass(frozen=True)
class Config:
    # Engine defaults
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    min_block_size: int = DEFAULT_MIN_BLOCK_SIZE
    algorithm: str = "jaccard"
    split_method: str = "paragraph"
    preserve_patterns: Tuple[str, ...] = field(default_factory=tuple)

    # Scheduling / progress
    large_input_chars: int = 100_000
    progress_every: int = 20

    # Preview
    preview_max_chars: int = 1_000_000
    preview_examples: int = 5

    # Batch / output
    batch_workers: int = 1
    output_prefix: str = "deduplicated_"

    # Logging
    log_level: str = "INFO"

    def to_dedup_config(self) -> DedupConfig:
        return DedupConfig(
            similarity_threshold=self.similarity_threshold,
            min_block_size=self.min_block_size,
            algorithm=self.algorithm,
            split_method=self.split_method,
            preserve_patterns=self.preserve_patterns,
        )


# Single, cached instance after first load
__CONFIG_SINGLETON: Optional[Config] = None


def load_config(reload: bool = False) -> Config:
    """
    Load configuration from environment and .env (once) with defaults.
    Use reload=True to force re-reading.
    """
    global __CONFIG_SINGLETON
    if __CONFIG_SINGLETON is not None and not reload:
        return __CONFIG_SINGLETON

    # .env is looked up from the working directory upward; never overrides set vars.
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path, override=False)

    cfg = Config(
        similarity_threshold=_getenv_float("DEDUP_SIMILARITY_THRESHOLD", DEFAULT_SIMILARITY_THRESHOLD),
        min_block_size=_getenv_int("DEDUP_MIN_BLOCK_SIZE", DEFAULT_MIN_BLOCK_SIZE),
        algorithm=_getenv_str("DEDUP_ALGORITHM", "jaccard") or "jaccard",
        split_method=_getenv_str("DEDUP_SPLIT_METHOD", "paragraph") or "paragraph",
        preserve_patterns=_getenv_patterns("DEDUP_PRESERVE_PATTERNS"),
        large_input_chars=_getenv_int("DEDUP_LARGE_INPUT_CHARS", 100_000),
        progress_every=_getenv_int("DEDUP_PROGRESS_EVERY", 20),
        preview_max_chars=_getenv_int("DEDUP_PREVIEW_MAX_CHARS", 1_000_000),
        preview_examples=_getenv_int("DEDUP_PREVIEW_EXAMPLES", 5),
        batch_workers=_getenv_int("DEDUP_BATCH_WORKERS", 1),
        output_prefix=_getenv_str("DEDUP_OUTPUT_PREFIX", "deduplicated_") or "deduplicated_",
        log_level=_getenv_str("LOG_LEVEL", "INFO") or "INFO",
    )

    __CONFIG_SINGLETON = cfg
    return cfg
