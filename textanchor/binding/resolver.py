"""
AnchorResolver — binds a ResolverConfig to the resolution functions.
"""

from pathlib import Path
from typing import Iterable, Optional

from ..config import ResolverConfig, load_config
from ..schema import Anchor, AnchorId, BatchResult, IdentifiedAnchor, Position, ResolutionStrategy, Segment
from .anchor_resolver import resolve, resolve_match
from .batch import build_segments, resolve_all, resolve_batch
from .extractor import extract_anchor


class AnchorResolver:
    """
    Resolve anchors against text with a fixed set of thresholds.

    Holds no state besides its configuration, so one instance can be shared
    between threads.
    """

    def __init__(self, config: Optional[ResolverConfig] = None) -> None:
        self.config = config or ResolverConfig()

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AnchorResolver":
        return cls(load_config(path))

    def extract(self, full_text: str, start: int, end: int) -> Optional[Anchor]:
        return extract_anchor(full_text, start, end, self.config.context_length)

    def resolve(self, text: str, anchor: Anchor) -> Optional[Position]:
        return resolve(text, anchor, self.config)

    def resolve_match(self, text: str, anchor: Anchor) -> Optional[tuple[Position, ResolutionStrategy]]:
        return resolve_match(text, anchor, self.config)

    def resolve_all(self, text: str, anchors: Iterable[IdentifiedAnchor]) -> dict[AnchorId, Position]:
        return resolve_all(text, anchors, self.config)

    def resolve_batch(self, text: str, anchors: Iterable[IdentifiedAnchor]) -> BatchResult:
        return resolve_batch(text, anchors, self.config)

    def segments(self, text: str, anchors: Iterable[IdentifiedAnchor]) -> list[Segment]:
        return build_segments(text, anchors, self.config)
