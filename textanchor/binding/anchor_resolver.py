"""Anchor resolution — maps a stored anchor to character positions in the current text.

Strategy cascade, cheapest and most precise first:
1. Exact match of prefix + text + suffix
2. Exact match of text, best occurrence chosen by context similarity
3. Fuzzy prefix, then fuzzy suffix after it; validate the span between
4. Fuzzy match of the text itself
5. Give up (None) — the highlight is no longer present
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from ..config import ResolverConfig
from ..matching import fuzzy_find, similarity
from ..schema import Anchor, Position, ResolutionStrategy

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = ResolverConfig()


def _try_exact_context(text: str, anchor: Anchor, config: ResolverConfig) -> Optional[Position]:
    """prefix + text + suffix appears verbatim."""
    pos = text.find(anchor.pattern)
    if pos < 0:
        return None
    start = pos + len(anchor.prefix)
    return Position(start=start, end=start + len(anchor.text))


def _occurrences(text: str, needle: str) -> list[int]:
    """Start offsets of every occurrence of needle, overlapping ones included."""
    found: list[int] = []
    pos = text.find(needle)
    while pos >= 0:
        found.append(pos)
        pos = text.find(needle, pos + 1)
    return found


def _context_score(text: str, anchor: Anchor, pos: int) -> float:
    """Average similarity of the actual surroundings at pos to the stored context."""
    end = pos + len(anchor.text)
    actual_prefix = text[max(0, pos - len(anchor.prefix)) : pos]
    actual_suffix = text[end : end + len(anchor.suffix)]

    prefix_score = similarity(actual_prefix, anchor.prefix) if anchor.prefix else 1.0
    suffix_score = similarity(actual_suffix, anchor.suffix) if anchor.suffix else 1.0
    return (prefix_score + suffix_score) / 2


def _try_exact_text(text: str, anchor: Anchor, config: ResolverConfig) -> Optional[Position]:
    """text appears verbatim; pick the occurrence whose context fits best."""
    best_pos = -1
    best_score = 0.0
    for pos in _occurrences(text, anchor.text):
        score = _context_score(text, anchor, pos)
        if best_pos < 0 or score > best_score:
            best_pos, best_score = pos, score

    if best_pos < 0:
        return None
    if best_score < config.exact_context_threshold:
        logger.debug(
            "Best verbatim occurrence at %d has context score %.2f, falling through",
            best_pos,
            best_score,
        )
        return None
    return Position(start=best_pos, end=best_pos + len(anchor.text))


@dataclass(frozen=True)
class FinalResult:
    """A strategy's answer that ends the cascade, even when position is None."""

    position: Optional[Position]
    strategy: ResolutionStrategy


StrategyResult = Union[Position, FinalResult, None]
Strategy = Callable[[str, Anchor, ResolverConfig], StrategyResult]


def _try_fuzzy_context(text: str, anchor: Anchor, config: ResolverConfig) -> StrategyResult:
    """Fuzzy-locate prefix and suffix and take the text between them."""
    prefix_match = fuzzy_find(text, anchor.prefix, config.prefix_threshold)
    if prefix_match is None:
        # No prefix signal at all: fuzzy text search is the last word.
        match = fuzzy_find(text, anchor.text, config.prefix_fallback_threshold)
        return FinalResult(match.position if match else None, ResolutionStrategy.FUZZY_TEXT)

    after_prefix = text[prefix_match.end :]
    suffix_match = fuzzy_find(after_prefix, anchor.suffix, config.suffix_threshold)
    if suffix_match is None:
        return None

    start = prefix_match.end
    end = prefix_match.end + suffix_match.start
    score = similarity(text[start:end], anchor.text)
    if score < config.span_similarity_threshold:
        logger.debug("Span between fuzzy context scored %.2f, falling through", score)
        return None
    return Position(start=start, end=end)


def _try_fuzzy_text(text: str, anchor: Anchor, config: ResolverConfig) -> Optional[Position]:
    """Fuzzy-locate the text itself."""
    match = fuzzy_find(text, anchor.text, config.text_threshold)
    return match.position if match else None


STRATEGIES: list[tuple[ResolutionStrategy, Strategy]] = [
    (ResolutionStrategy.EXACT_CONTEXT, _try_exact_context),
    (ResolutionStrategy.EXACT_TEXT, _try_exact_text),
    (ResolutionStrategy.FUZZY_CONTEXT, _try_fuzzy_context),
    (ResolutionStrategy.FUZZY_TEXT, _try_fuzzy_text),
]


def resolve_match(
    text: str,
    anchor: Anchor,
    config: Optional[ResolverConfig] = None,
) -> Optional[tuple[Position, ResolutionStrategy]]:
    """
    Resolve an anchor and report which strategy located it.

    Returns:
        (position, strategy), or None when the anchor cannot be found.
    """
    config = config or _DEFAULT_CONFIG
    if not text or not anchor.text.strip():
        return None

    label = anchor.text[:40]
    for name, strategy in STRATEGIES:
        position = strategy(text, anchor, config)
        if isinstance(position, FinalResult):
            if position.position is None:
                logger.debug("Anchor %r unresolved: no prefix and no fuzzy text match", label)
                return None
            position, name = position.position, position.strategy
        if position is not None:
            logger.debug(
                "Anchor %r resolved by %s at %d-%d",
                label,
                name.value,
                position.start,
                position.end,
            )
            return position, name

    logger.debug("Anchor %r unresolved", label)
    return None


def resolve(
    text: str,
    anchor: Anchor,
    config: Optional[ResolverConfig] = None,
) -> Optional[Position]:
    """
    Find an anchor's position in text.

    Args:
        text: Current text body
        anchor: Stored anchor
        config: Thresholds (defaults when omitted)

    Returns:
        Position of the anchored span, or None if it is no longer present.
    """
    result = resolve_match(text, anchor, config)
    return result[0] if result else None
