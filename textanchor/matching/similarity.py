"""
Normalized edit-distance similarity.

Scores are 1 - levenshtein(a, b) / max(len(a), len(b)), so identical strings
score 1.0 and strings with nothing in common score 0.0.
"""

import Levenshtein


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit-cost insert, delete and substitute."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """
    Similarity score between two strings in [0, 1].

    Args:
        a, b: Strings to compare

    Returns:
        1.0 when both are empty, 0.0 when exactly one is empty,
        otherwise the normalized inverse edit distance.
    """
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    return 1.0 - edit_distance(a, b) / max(len(a), len(b))
