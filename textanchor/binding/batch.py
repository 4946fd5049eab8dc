"""
Batch resolution of many anchors against one text body.

Every anchor is resolved independently, so the work can be spread over a
ThreadPoolExecutor without coordination; results are always reported in
input order.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional

from ..config import ResolverConfig
from ..schema import AnchorId, AnchorMatch, BatchResult, IdentifiedAnchor, Position, Segment
from .anchor_resolver import resolve_match
from .segments import merge_overlapping_positions

logger = logging.getLogger(__name__)


def resolve_batch(
    text: str,
    anchors: Iterable[IdentifiedAnchor],
    config: Optional[ResolverConfig] = None,
    max_workers: Optional[int] = None,
) -> BatchResult:
    """
    Resolve every anchor against text.

    Args:
        text: Current text body
        anchors: Anchors with ids
        config: Resolver thresholds
        max_workers: Thread pool size; defaults to config.max_workers.
                     1 resolves sequentially.

    Returns:
        BatchResult with positions by id, per-anchor strategies and the ids
        that could not be resolved.
    """
    config = config or ResolverConfig()
    anchors = list(anchors)
    workers = max_workers or config.max_workers

    def _resolve(anchor: IdentifiedAnchor):
        return resolve_match(text, anchor, config)

    if workers > 1 and len(anchors) > 1:
        with ThreadPoolExecutor(max_workers=min(workers, len(anchors))) as ex:
            outcomes = list(ex.map(_resolve, anchors))
    else:
        outcomes = [_resolve(a) for a in anchors]

    result = BatchResult()
    for anchor, outcome in zip(anchors, outcomes):
        if outcome is None:
            result.unresolved.append(anchor.id)
            continue
        position, strategy = outcome
        result.positions[anchor.id] = position
        result.matches.append(AnchorMatch(id=anchor.id, position=position, strategy=strategy))

    logger.info(
        "Resolved %d/%d anchors against %d chars",
        len(result.positions),
        len(anchors),
        len(text),
    )
    return result


def resolve_all(
    text: str,
    anchors: Iterable[IdentifiedAnchor],
    config: Optional[ResolverConfig] = None,
    max_workers: Optional[int] = None,
) -> dict[AnchorId, Position]:
    """Map anchor id -> position; unresolved anchors are omitted."""
    return resolve_batch(text, anchors, config, max_workers).positions


def build_segments(
    text: str,
    anchors: Iterable[IdentifiedAnchor],
    config: Optional[ResolverConfig] = None,
    max_workers: Optional[int] = None,
) -> list[Segment]:
    """Resolve anchors and merge their positions into drawable segments."""
    return merge_overlapping_positions(resolve_all(text, anchors, config, max_workers))
