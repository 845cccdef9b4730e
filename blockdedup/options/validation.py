"""
Pydantic-based option validation (CLI / caller boundary).

Goals
- Enforce numeric ranges for threshold and min block size.
- Normalize algorithm/split names to supported enums (aliases accepted).
- Split and trim preserve patterns; report every pattern that fails to compile.

Usage
- validate_cli_options(raw: dict, *, fixup: bool = False) -> dict
  Returns a clean dict accepted by build_dedup_config().
- check_preserve_patterns(patterns) -> list[PatternIssue]

Notes
- The engine itself clamps out-of-range numbers (see options.schema); this layer is
  stricter and rejects them unless fixup=True.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from blockdedup.options.schema import (
    lookup_algorithm,
    lookup_split_method,
)
from blockdedup.utils.text import parse_pattern_lines


@dataclass(frozen=True)
class PatternIssue:
    """One preserve pattern that failed to compile."""
    index: int
    pattern: str
    error: str

    def to_dict(self) -> Dict[str, object]:
        return {"index": self.index, "pattern": self.pattern, "error": self.error}


def check_preserve_patterns(patterns: Iterable[str] | str | None) -> List[PatternIssue]:
    """
    Compile every pattern (case-insensitive, as the pass does) and collect failures.
    Empty list means all patterns are usable.
    """
    issues: List[PatternIssue] = []
    for i, pat in enumerate(parse_pattern_lines(patterns)):
        try:
            re.compile(pat, re.IGNORECASE)
        except re.error as e:
            issues.append(PatternIssue(index=i, pattern=pat, error=str(e)))
    return issues


# ---- models ----

class _OptionsInput(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    similarity_threshold: Optional[float] = None
    min_block_size: Optional[int] = None
    algorithm: Optional[str] = None
    split_method: Optional[str] = None
    preserve_patterns: Optional[List[str]] = None

    @field_validator("similarity_threshold")
    @classmethod
    def _threshold_range(cls, v):
        if v is None:
            return None
        if math.isnan(v) or not (0.0 <= v <= 1.0):
            raise ValueError(f"similarity_threshold must be within [0, 1], got {v}")
        return v

    @field_validator("min_block_size")
    @classmethod
    def _size_non_negative(cls, v):
        if v is not None and v < 0:
            raise ValueError(f"min_block_size must be >= 0, got {v}")
        return v

    @field_validator("algorithm", mode="before")
    @classmethod
    def _algorithm_norm(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        algo = lookup_algorithm(v)
        if algo is None:
            raise ValueError(f"unsupported algorithm '{v}' (allowed: jaccard/cosine/levenshtein)")
        return algo.value

    @field_validator("split_method", mode="before")
    @classmethod
    def _split_norm(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        method = lookup_split_method(v)
        if method is None:
            raise ValueError(f"unsupported split method '{v}' (allowed: paragraph/sentence/hybrid/sized)")
        return method.value

    @field_validator("preserve_patterns", mode="before")
    @classmethod
    def _patterns_list(cls, v):
        if v is None:
            return None
        return parse_pattern_lines(v) or None


def _fixup_threshold(v: Any) -> Optional[float]:
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    if math.isnan(f):
        return None
    return min(1.0, max(0.0, f))


def _fixup_size(v: Any) -> Optional[int]:
    try:
        n = int(float(v))
    except (TypeError, ValueError):
        return None
    return max(0, n)


def validate_cli_options(raw: Dict[str, Any], *, fixup: bool = False) -> Dict[str, Any]:
    """
    Validate and normalize an options dict.

    Behavior:
    - Missing values stay None (callers fall back to configured defaults).
    - Invalid values:
        * fixup=False -> raise ValueError
        * fixup=True  -> threshold clamped to [0, 1], size clamped to >= 0,
                         unknown names dropped (None)
    - Preserve patterns that do not compile always raise ValueError listing every
      bad pattern; fixup never silently discards a pattern.

    Returns a dict with keys: similarity_threshold, min_block_size, algorithm,
    split_method, preserve_patterns
    """
    try:
        data = _OptionsInput(**raw).model_dump()
    except ValidationError as e:
        if not fixup:
            raise ValueError(str(e)) from e
        data = {
            "similarity_threshold": None,
            "min_block_size": None,
            "algorithm": None,
            "split_method": None,
            "preserve_patterns": parse_pattern_lines(raw.get("preserve_patterns")) or None,
        }
        if raw.get("similarity_threshold") is not None:
            data["similarity_threshold"] = _fixup_threshold(raw.get("similarity_threshold"))
        if raw.get("min_block_size") is not None:
            data["min_block_size"] = _fixup_size(raw.get("min_block_size"))
        algo = lookup_algorithm(raw.get("algorithm"))
        data["algorithm"] = algo.value if algo else None
        method = lookup_split_method(raw.get("split_method"))
        data["split_method"] = method.value if method else None

    issues = check_preserve_patterns(data.get("preserve_patterns"))
    if issues:
        detail = "; ".join(f"#{i.index} {i.pattern!r}: {i.error}" for i in issues)
        raise ValueError(f"invalid preserve pattern(s): {detail}")

    return data
