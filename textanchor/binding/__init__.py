"""Anchor binding: extraction, resolution and segment merging."""

from .anchor_resolver import STRATEGIES, FinalResult, resolve, resolve_match
from .batch import build_segments, resolve_all, resolve_batch
from .extractor import anchor_from_selection, extract_anchor
from .resolver import AnchorResolver
from .segments import merge_overlapping_positions, positions_overlap

__all__ = [
    "STRATEGIES",
    "FinalResult",
    "AnchorResolver",
    "anchor_from_selection",
    "build_segments",
    "extract_anchor",
    "merge_overlapping_positions",
    "positions_overlap",
    "resolve",
    "resolve_all",
    "resolve_batch",
    "resolve_match",
]
