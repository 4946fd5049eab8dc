"""
Sliding-window fuzzy search.

Tries every window whose length is within 20% of the pattern length at every
offset of the text and keeps the best-scoring window above a threshold. Cost is
O(len(text) * len(pattern) * window range) per call, so this is only used as a
fallback or on bounded context strings.
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..schema import Position
from .similarity import similarity

# Short patterns get a stricter bar: one edit already moves their score a lot.
SHORT_PATTERN_LENGTH = 10
SHORT_PATTERN_MIN_THRESHOLD = 0.85

MIN_WINDOW_RATIO = 0.8
MAX_WINDOW_RATIO = 1.2


@dataclass(frozen=True)
class FuzzyMatch:
    """Best-scoring window found by fuzzy_find."""

    start: int
    end: int
    score: float

    @property
    def position(self) -> Position:
        return Position(start=self.start, end=self.end)


def effective_threshold(pattern: str, threshold: float) -> float:
    if len(pattern) < SHORT_PATTERN_LENGTH:
        return max(threshold, SHORT_PATTERN_MIN_THRESHOLD)
    return threshold


def window_sizes(pattern_length: int) -> range:
    """Window lengths tried for a pattern, smallest first."""
    return range(
        math.floor(pattern_length * MIN_WINDOW_RATIO),
        math.ceil(pattern_length * MAX_WINDOW_RATIO) + 1,
    )


def fuzzy_find(text: str, pattern: str, threshold: float = 0.75) -> Optional[FuzzyMatch]:
    """
    Find the substring of text most similar to pattern.

    Args:
        text: Text body to search
        pattern: String to locate
        threshold: Minimum similarity for a window to count as a match

    Returns:
        FuzzyMatch for the best window, or None if no window meets the
        threshold. Ties go to the smaller window, then the earlier offset.
    """
    if not pattern or not text:
        return None

    bar = effective_threshold(pattern, threshold)
    best: Optional[FuzzyMatch] = None

    for size in window_sizes(len(pattern)):
        for start in range(len(text) - size + 1):
            score = similarity(text[start : start + size], pattern)
            if score >= bar and (best is None or score > best.score):
                best = FuzzyMatch(start=start, end=start + size, score=score)

    return best
