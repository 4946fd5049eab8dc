"""
Segment merging for overlapping highlights.

Several highlights can cover the same or adjacent text. The renderer draws one
mark per overlap cluster, tagged with every highlight that contributed to it.
"""

from typing import Iterable, Mapping, Union

from ..schema import AnchorId, Position, Segment

PositionInput = Union[Mapping[AnchorId, Position], Iterable[tuple[AnchorId, Position]]]


def positions_overlap(a: Position, b: Position) -> bool:
    """True when two positions share a character; touching ranges do not overlap."""
    return a.overlaps(b)


def merge_overlapping_positions(positions: PositionInput) -> list[Segment]:
    """
    Collapse overlapping or touching positions into non-overlapping segments.

    Args:
        positions: id -> Position mapping, or (id, Position) pairs

    Returns:
        Segments sorted by start. Every input id appears in exactly one segment,
        in the order its position was reached after sorting by start.
    """
    items = list(positions.items()) if isinstance(positions, Mapping) else list(positions)
    if not items:
        return []

    ordered = sorted(items, key=lambda item: item[1].start)

    merged: list[Segment] = []
    first_id, first_pos = ordered[0]
    ids: list[AnchorId] = [first_id]
    start, end = first_pos.start, first_pos.end

    for anchor_id, position in ordered[1:]:
        if position.start <= end:
            if anchor_id not in ids:
                ids.append(anchor_id)
            end = max(end, position.end)
        else:
            merged.append(Segment(ids=tuple(ids), start=start, end=end))
            ids = [anchor_id]
            start, end = position.start, position.end

    merged.append(Segment(ids=tuple(ids), start=start, end=end))
    return merged
