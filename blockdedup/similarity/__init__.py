"""
Similarity scorers for block signatures (jaccard, cosine, levenshtein).
"""

from .scorer import (
    calculate_similarity,
    cosine_similarity,
    jaccard_similarity,
    levenshtein_distance,
    levenshtein_similarity,
)

__all__ = [
    "calculate_similarity",
    "cosine_similarity",
    "jaccard_similarity",
    "levenshtein_distance",
    "levenshtein_similarity",
]
