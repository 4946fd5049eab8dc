"""String similarity and fuzzy substring search."""

from .fuzzy import FuzzyMatch, fuzzy_find
from .similarity import edit_distance, similarity

__all__ = ["FuzzyMatch", "edit_distance", "fuzzy_find", "similarity"]
