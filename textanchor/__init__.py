"""
textanchor - resilient text anchoring for highlights.

Core modules:
- schema: Anchor/Position/Segment value types
- matching: Edit-distance similarity and fuzzy window search
- binding: Anchor extraction, position resolution, batch resolution, segment merging
- config: Tunable resolver thresholds (YAML / environment)
"""

from .binding import (
    AnchorResolver,
    build_segments,
    extract_anchor,
    merge_overlapping_positions,
    resolve,
    resolve_all,
)
from .config import ResolverConfig, load_config
from .schema import Anchor, IdentifiedAnchor, Position, Segment

__version__ = "0.1.0"

__all__ = [
    "Anchor",
    "AnchorResolver",
    "IdentifiedAnchor",
    "Position",
    "ResolverConfig",
    "Segment",
    "build_segments",
    "extract_anchor",
    "load_config",
    "merge_overlapping_positions",
    "resolve",
    "resolve_all",
]
