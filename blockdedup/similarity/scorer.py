"""
Similarity scoring between block signatures.

All scores are in [0, 1]. Signatures are expected to come from
blockdedup.utils.text.block_signature (lowercase, single-spaced, no punctuation),
so word tokenization is a plain split on " ".

Public API:
    jaccard_similarity(a, b) -> float
    cosine_similarity(a, b) -> float
    levenshtein_distance(a, b) -> int
    levenshtein_similarity(a, b) -> float
    calculate_similarity(a, b, algorithm) -> float
"""

from __future__ import annotations

from collections import Counter
from typing import Callable, Dict, Set

import numpy as np
from rapidfuzz.distance import Levenshtein

from blockdedup.options.schema import SimilarityAlgorithm, coerce_algorithm


def _word_set(sig: str) -> Set[str]:
    return set(sig.split(" "))


def jaccard_similarity(a: str, b: str) -> float:
    sa, sb = _word_set(a), _word_set(b)
    union = len(sa | sb)
    if union == 0:
        return 0.0
    return len(sa & sb) / union


def cosine_similarity(a: str, b: str) -> float:
    """Cosine of the word-frequency vectors."""
    fa, fb = Counter(a.split(" ")), Counter(b.split(" "))
    vocab = list(fa.keys() | fb.keys())
    va = np.array([fa.get(w, 0) for w in vocab], dtype=np.int64)
    vb = np.array([fb.get(w, 0) for w in vocab], dtype=np.int64)
    sq_a = int(np.dot(va, va))
    sq_b = int(np.dot(vb, vb))
    if sq_a == 0 or sq_b == 0:
        return 0.0
    # sqrt of the product keeps identical vectors at exactly 1.0
    score = int(np.dot(va, vb)) / float(np.sqrt(float(sq_a) * float(sq_b)))
    return min(1.0, max(0.0, score))


def levenshtein_distance(a: str, b: str) -> int:
    """Unit-cost insert/delete/substitute edit distance."""
    return Levenshtein.distance(a, b)


def levenshtein_similarity(a: str, b: str) -> float:
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a, b) / longest


_SCORERS: Dict[SimilarityAlgorithm, Callable[[str, str], float]] = {
    SimilarityAlgorithm.jaccard: jaccard_similarity,
    SimilarityAlgorithm.cosine: cosine_similarity,
    SimilarityAlgorithm.levenshtein: levenshtein_similarity,
}


def calculate_similarity(a: str, b: str, algorithm: SimilarityAlgorithm | str = SimilarityAlgorithm.jaccard) -> float:
    """Score two signatures; unknown algorithm names fall back to jaccard."""
    return _SCORERS[coerce_algorithm(algorithm)](a, b)
