"""
Schema definitions for anchors, resolved positions and highlight segments.
"""

from .anchor import (
    Anchor,
    AnchorId,
    AnchorMatch,
    BatchResult,
    IdentifiedAnchor,
    Position,
    ResolutionStrategy,
    Segment,
)

__all__ = [
    "Anchor",
    "AnchorId",
    "AnchorMatch",
    "BatchResult",
    "IdentifiedAnchor",
    "Position",
    "ResolutionStrategy",
    "Segment",
]
