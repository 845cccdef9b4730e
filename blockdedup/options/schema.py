"""
Options schema for the dedup engine.

Defines:
- enums for similarity algorithm and block split method,
- the immutable DedupConfig bundle passed to every pass,
- coercion helpers shared by the config loader and the CLI.

Numeric policy
- similarity_threshold is clamped to [0, 1]; NaN / non-numeric is rejected.
- min_block_size below 0 is clamped to 0; non-integers are rejected.
- unknown algorithm / split names fall back to jaccard / paragraph.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple

from blockdedup.errors import ConfigurationError
from blockdedup.utils.text import parse_pattern_lines

logger = logging.getLogger(__name__)


class SimilarityAlgorithm(str, Enum):
    jaccard = "jaccard"
    cosine = "cosine"
    levenshtein = "levenshtein"


class BlockSplitMethod(str, Enum):
    paragraph = "paragraph"
    sentence = "sentence"
    hybrid = "hybrid"
    sized = "sized"


DEFAULT_SIMILARITY_THRESHOLD = 0.7
DEFAULT_MIN_BLOCK_SIZE = 30
BLOCK_SEPARATOR = "\n\n"

_ALGORITHM_ALIASES = {
    "jaccard": SimilarityAlgorithm.jaccard,
    "cosine": SimilarityAlgorithm.cosine,
    "levenshtein": SimilarityAlgorithm.levenshtein,
    "edit": SimilarityAlgorithm.levenshtein,
}

_SPLIT_ALIASES = {
    "paragraph": BlockSplitMethod.paragraph,
    "paragraphs": BlockSplitMethod.paragraph,
    "sentence": BlockSplitMethod.sentence,
    "sentences": BlockSplitMethod.sentence,
    "hybrid": BlockSplitMethod.hybrid,
    "sized": BlockSplitMethod.sized,
    "sized_chunks": BlockSplitMethod.sized,
    "sizedchunks": BlockSplitMethod.sized,
    "chunks": BlockSplitMethod.sized,
}


def lookup_algorithm(v: object) -> Optional[SimilarityAlgorithm]:
    """Exact lookup; None when the name is not recognized."""
    if isinstance(v, SimilarityAlgorithm):
        return v
    if v is None:
        return None
    return _ALGORITHM_ALIASES.get(str(v).strip().lower())


def lookup_split_method(v: object) -> Optional[BlockSplitMethod]:
    """Exact lookup; None when the name is not recognized."""
    if isinstance(v, BlockSplitMethod):
        return v
    if v is None:
        return None
    return _SPLIT_ALIASES.get(str(v).strip().lower().replace("-", "_"))


def coerce_algorithm(v: object) -> SimilarityAlgorithm:
    algo = lookup_algorithm(v)
    if algo is None:
        if v not in (None, ""):
            logger.warning("Unknown similarity algorithm %r; falling back to jaccard", v)
        return SimilarityAlgorithm.jaccard
    return algo


def coerce_split_method(v: object) -> BlockSplitMethod:
    method = lookup_split_method(v)
    if method is None:
        if v not in (None, ""):
            logger.warning("Unknown split method %r; falling back to paragraph", v)
        return BlockSplitMethod.paragraph
    return method


def clamp_threshold(v: object) -> float:
    if isinstance(v, bool):
        raise ConfigurationError(f"similarity threshold must be a number, got {v!r}")
    try:
        f = float(v)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"similarity threshold must be a number, got {v!r}", reason=str(e)) from e
    if math.isnan(f):
        raise ConfigurationError("similarity threshold must not be NaN")
    return min(1.0, max(0.0, f))


def clamp_min_block_size(v: object) -> int:
    if isinstance(v, bool):
        raise ConfigurationError(f"min block size must be an integer, got {v!r}")
    if isinstance(v, float):
        if not v.is_integer():
            raise ConfigurationError(f"min block size must be an integer, got {v!r}")
        v = int(v)
    try:
        n = int(v)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"min block size must be an integer, got {v!r}", reason=str(e)) from e
    return max(0, n)


@dataclass(frozen=True)
class DedupConfig:
    """Read-only settings for one dedup pass."""
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    min_block_size: int = DEFAULT_MIN_BLOCK_SIZE
    algorithm: SimilarityAlgorithm = SimilarityAlgorithm.jaccard
    split_method: BlockSplitMethod = BlockSplitMethod.paragraph
    preserve_patterns: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "similarity_threshold", clamp_threshold(self.similarity_threshold))
        object.__setattr__(self, "min_block_size", clamp_min_block_size(self.min_block_size))
        object.__setattr__(self, "algorithm", coerce_algorithm(self.algorithm))
        object.__setattr__(self, "split_method", coerce_split_method(self.split_method))
        object.__setattr__(self, "preserve_patterns", tuple(parse_pattern_lines(self.preserve_patterns)))

    def replace(self, **changes) -> "DedupConfig":
        d = asdict(self)
        d.update(changes)
        return DedupConfig(**d)

    def to_dict(self) -> Dict[str, object]:
        return {
            "similarity_threshold": self.similarity_threshold,
            "min_block_size": self.min_block_size,
            "algorithm": self.algorithm.value,
            "split_method": self.split_method.value,
            "preserve_patterns": list(self.preserve_patterns),
        }


def build_dedup_config(
    *,
    similarity_threshold: Optional[float] = None,
    min_block_size: Optional[int] = None,
    algorithm: Optional[str] = None,
    split_method: Optional[str] = None,
    preserve_patterns: Optional[Iterable[str] | str] = None,
    base: Optional[DedupConfig] = None,
) -> DedupConfig:
    """
    Overlay explicitly provided values on top of `base` (or the defaults).
    None means "not provided".
    """
    cfg = base or DedupConfig()
    changes: Dict[str, object] = {}
    if similarity_threshold is not None:
        changes["similarity_threshold"] = similarity_threshold
    if min_block_size is not None:
        changes["min_block_size"] = min_block_size
    if algorithm is not None:
        changes["algorithm"] = algorithm
    if split_method is not None:
        changes["split_method"] = split_method
    if preserve_patterns is not None:
        changes["preserve_patterns"] = tuple(parse_pattern_lines(preserve_patterns))
    return cfg.replace(**changes) if changes else cfg
