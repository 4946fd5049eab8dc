"""
Tests for the anchor resolution cascade.
"""

from textanchor.binding import STRATEGIES, FinalResult, resolve, resolve_match
from textanchor.binding.anchor_resolver import _try_exact_text, _try_fuzzy_context, _try_fuzzy_text
from textanchor.config import ResolverConfig
from textanchor.matching import similarity
from textanchor.schema import Anchor, Position, ResolutionStrategy

CATS = "the cat sat near the cat flap"

COMMITTEE_PREFIX = "The committee met on Tuesday and after a long debate "
COMMITTEE_TEXT = "decided to postpone the vote"
COMMITTEE_SUFFIX = " until the next session of parliament."


class TestExactStrategies:
    """Tests for the verbatim strategies."""

    def test_exact_round_trip(self):
        """Test unchanged text resolves to the original offsets."""
        anchor = Anchor(text="quick", prefix="The ", suffix=" brown fox")
        result = resolve_match("The quick brown fox", anchor)
        assert result == (Position(start=4, end=9), ResolutionStrategy.EXACT_CONTEXT)

    def test_full_pattern_picks_second_occurrence(self):
        """Test context matching the second occurrence selects it."""
        anchor = Anchor(text="cat", prefix="near the ", suffix=" flap")
        assert resolve(CATS, anchor) == Position(start=21, end=24)

    def test_context_disambiguates_repeated_text(self):
        """Test similar but not identical context still picks the right occurrence."""
        anchor = Anchor(text="cat", prefix="near teh ", suffix=" flap")
        position, strategy = resolve_match(CATS, anchor)
        assert position == Position(start=21, end=24)
        assert strategy == ResolutionStrategy.EXACT_TEXT

    def test_no_context_takes_first_occurrence(self):
        """Test missing context is not penalized and ties keep the first hit."""
        anchor = Anchor(text="cat")
        assert _try_exact_text(CATS, anchor, ResolverConfig()) == Position(start=4, end=7)

    def test_poor_context_falls_through(self):
        """Test verbatim text with unrelated context is rejected by strategy 2."""
        anchor = Anchor(text="beta", prefix="zzzzzz", suffix="qqqqqq")
        assert _try_exact_text("alpha beta gamma", anchor, ResolverConfig()) is None

    def test_typo_fixed_near_anchor(self):
        """Test a typo fix in the surrounding context keeps exact offsets."""
        before = (
            "Highlights should survive small edits to the surounding paragraph. "
            "This sentence is the one the reader selected. Later text follows here."
        )
        after = before.replace("surounding", "surrounding")
        selected = "This sentence is the one the reader selected."
        start = before.index(selected)
        anchor = Anchor(
            text=selected,
            prefix=before[max(0, start - 80) : start],
            suffix=before[start + len(selected) : start + len(selected) + 80],
        )

        position, strategy = resolve_match(after, anchor)
        assert strategy == ResolutionStrategy.EXACT_TEXT
        assert position.slice(after) == selected


class TestFuzzyStrategies:
    """Tests for the fuzzy fallbacks."""

    def test_edited_text_between_context(self):
        """Test a changed highlight is recovered between its prefix and suffix."""
        anchor = Anchor(text=COMMITTEE_TEXT, prefix=COMMITTEE_PREFIX, suffix=COMMITTEE_SUFFIX)
        text = COMMITTEE_PREFIX + "decided to postpone the final vote" + COMMITTEE_SUFFIX

        position, strategy = resolve_match(text, anchor)
        assert strategy == ResolutionStrategy.FUZZY_CONTEXT
        assert position.start == len(COMMITTEE_PREFIX)
        assert position.slice(text) == "decided to postpone the final vote"

    def test_span_must_resemble_text(self):
        """Test a span between matched context that differs wholesale is rejected."""
        anchor = Anchor(
            text="the original highlighted words",
            prefix="PREFIX_CONTEXT_HERE ",
            suffix=" SUFFIX_CONTEXT_HERE",
        )
        text = "PREFIX_CONTEXT_HERE xxxxxxxxxxxxxxxxxxxxxxxxx SUFFIX_CONTEXT_HERE"
        assert _try_fuzzy_context(text, anchor, ResolverConfig()) is None
        assert resolve(text, anchor) is None

    def test_no_prefix_uses_fuzzy_text(self):
        """Test anchors without a prefix fall back to fuzzy text search."""
        text = "We study quantum entanglemnt today"
        position, strategy = resolve_match(text, Anchor(text="quantum entanglement"))
        assert strategy == ResolutionStrategy.FUZZY_TEXT
        assert position.slice(text) == "quantum entanglemnt"

    def test_missing_suffix_falls_back_to_fuzzy_text(self):
        """Test a lost suffix drops through to whole-text fuzzy search."""
        anchor = Anchor(
            text="The mitochondria is the powerhouse of the cell",
            prefix="Introduction to the topic. ",
            suffix="Conclusion follows after this point.",
        )
        text = "Introduction to the topic. The mitochondrion is the powerhouse of the cell."

        position, strategy = resolve_match(text, anchor)
        assert strategy == ResolutionStrategy.FUZZY_TEXT
        assert similarity(position.slice(text), anchor.text) >= 0.75

    def test_no_prefix_returns_final_result(self):
        """Test strategy 3 without a prefix returns a final fuzzy-text answer."""
        text = "We study quantum entanglemnt today"
        result = _try_fuzzy_context(text, Anchor(text="quantum entanglement"), ResolverConfig())
        assert isinstance(result, FinalResult)
        assert result.strategy == ResolutionStrategy.FUZZY_TEXT
        assert result.position.slice(text) == "quantum entanglemnt"

    def test_no_prefix_fallback_is_final(self):
        """Test a failed no-prefix fallback ends the cascade before strategy 4."""
        window = "quXntuX enXangXemeXt"
        text = "zzzz" + window + "zzzz"
        anchor = Anchor(text="quantum entanglement")
        config = ResolverConfig()
        assert similarity(window, anchor.text) == 0.75

        assert _try_fuzzy_context(text, anchor, config) == FinalResult(
            None, ResolutionStrategy.FUZZY_TEXT
        )
        assert _try_fuzzy_text(text, anchor, config) is not None
        assert resolve(text, anchor) is None


class TestResolve:
    """Tests for cascade behaviour as a whole."""

    def test_strategy_order(self):
        """Test strategies run from most precise to most tolerant."""
        assert [name for name, _ in STRATEGIES] == [
            ResolutionStrategy.EXACT_CONTEXT,
            ResolutionStrategy.EXACT_TEXT,
            ResolutionStrategy.FUZZY_CONTEXT,
            ResolutionStrategy.FUZZY_TEXT,
        ]

    def test_strategies_callable_directly(self):
        """Test every strategy returns a value instead of raising."""
        text = "We study quantum entanglemnt today"
        anchor = Anchor(text="quantum entanglement")
        results = [strategy(text, anchor, ResolverConfig()) for _, strategy in STRATEGIES]
        assert results[0] is None
        assert results[1] is None
        assert isinstance(results[2], FinalResult)
        assert results[3].slice(text) == "quantum entanglemnt"

    def test_deleted_text_is_unresolved(self):
        """Test text that no longer exists yields no position."""
        anchor = Anchor(text="quantum entanglement")
        assert resolve("Completely different words are here now", anchor) is None

    def test_empty_inputs(self):
        """Test empty text body or empty anchor text never match."""
        assert resolve("", Anchor(text="quick")) is None
        empty = Anchor.model_construct(text="", prefix="", suffix="")
        assert resolve("The quick brown fox", empty) is None

    def test_positions_within_text(self):
        """Test resolved positions stay inside the text body."""
        text = COMMITTEE_PREFIX + "decided to postpone the final vote" + COMMITTEE_SUFFIX
        anchor = Anchor(text=COMMITTEE_TEXT, prefix=COMMITTEE_PREFIX, suffix=COMMITTEE_SUFFIX)
        position = resolve(text, anchor)
        assert 0 <= position.start <= position.end <= len(text)

    def test_config_thresholds_are_honoured(self):
        """Test a stricter context threshold changes which occurrence wins."""
        anchor = Anchor(text="cat", prefix="near teh ", suffix=" flap")
        strict = ResolverConfig(exact_context_threshold=1.0)
        assert resolve(CATS, anchor, strict) == Position(start=4, end=7)
