"""
Anchor and position schema definitions.

An Anchor is the durable record of a selection: the selected text plus a
bounded window of context on either side. Positions and Segments are the
ephemeral results of resolving anchors against a specific text body.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

AnchorId = Union[int, str]


class ResolutionStrategy(str, Enum):
    """Cascade step that produced a resolved position."""

    EXACT_CONTEXT = "exact_context"  # prefix + text + suffix found verbatim
    EXACT_TEXT = "exact_text"  # text found verbatim, disambiguated by context
    FUZZY_CONTEXT = "fuzzy_context"  # located between fuzzy prefix/suffix
    FUZZY_TEXT = "fuzzy_text"  # text itself located by fuzzy search


class Anchor(BaseModel):
    """
    Context-bearing reference to a span of text.

    Independent of any particular revision of the document it was taken from.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    prefix: str = ""
    suffix: str = ""

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("anchor text must not be blank")
        return v

    @property
    def pattern(self) -> str:
        """Selected text with its recorded context on both sides."""
        return self.prefix + self.text + self.suffix


class IdentifiedAnchor(Anchor):
    """An anchor paired with an opaque identifier."""

    id: AnchorId

    def anchor(self) -> Anchor:
        """Return the bare anchor without its identifier."""
        return Anchor(text=self.text, prefix=self.prefix, suffix=self.suffix)


class Position(BaseModel):
    """Half-open character range [start, end) in a text body."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)

    @model_validator(mode="after")
    def check_order(self) -> "Position":
        if self.start > self.end:
            raise ValueError(f"start ({self.start}) is after end ({self.end})")
        return self

    @property
    def length(self) -> int:
        return self.end - self.start

    def slice(self, text: str) -> str:
        """Return the substring of text this position covers."""
        return text[self.start : self.end]

    def overlaps(self, other: "Position") -> bool:
        """True when the two ranges share at least one character."""
        return self.start < other.end and other.start < self.end


class Segment(BaseModel):
    """
    Maximal contiguous range covered by one or more resolved positions.

    `ids` lists every contributing anchor in the order it was merged.
    """

    model_config = ConfigDict(frozen=True)

    ids: tuple[AnchorId, ...] = Field(..., min_length=1)
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)

    @model_validator(mode="after")
    def check_segment(self) -> "Segment":
        if self.start > self.end:
            raise ValueError(f"start ({self.start}) is after end ({self.end})")
        if len(set(self.ids)) != len(self.ids):
            raise ValueError(f"duplicate ids in segment: {list(self.ids)}")
        return self

    @property
    def position(self) -> Position:
        return Position(start=self.start, end=self.end)

    @property
    def key(self) -> str:
        """Stable render key for the cluster."""
        return "-".join(str(i) for i in self.ids)

    def total(self, counts: Mapping[AnchorId, int]) -> int:
        """Sum a per-anchor count (comments, reactions) across the cluster."""
        return sum(counts.get(i, 0) for i in self.ids)


@dataclass
class AnchorMatch:
    """A resolved anchor with the strategy that located it."""

    id: AnchorId
    position: Position
    strategy: ResolutionStrategy


@dataclass
class BatchResult:
    """Outcome of resolving many anchors against one text body."""

    positions: dict[AnchorId, Position] = field(default_factory=dict)
    matches: list[AnchorMatch] = field(default_factory=list)
    unresolved: list[AnchorId] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.positions)

    def summary(self) -> str:
        return f"BatchResult(resolved={len(self.positions)}, unresolved={len(self.unresolved)})"
