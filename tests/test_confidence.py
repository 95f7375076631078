"""Tests for overall confidence blending."""

import pytest
from pydantic import ValidationError

from taskparse.confidence import ConfidenceBreakdown, blend_confidence, clamp01, title_bonus
from taskparse.config import ConfidenceWeights


class TestClamp:
    """Tests for clamp01."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(-0.5, 0.0), (0.0, 0.0), (0.42, 0.42), (1.0, 1.0), (1.3, 1.0)],
    )
    def test_clamp(self, value, expected):
        """Values are clamped into [0, 1]."""
        assert clamp01(value) == expected


class TestTitleBonus:
    """Tests for the title quality bonus."""

    def test_single_word(self):
        """A single word earns nothing."""
        assert title_bonus("Groceries", ConfidenceWeights()) == 0.0

    def test_short_multi_word(self):
        """Multi-word titles of 3 characters or fewer earn nothing."""
        assert title_bonus("a b", ConfidenceWeights()) == 0.0

    def test_multi_word(self):
        """More than one word and longer than 3 characters."""
        assert title_bonus("Buy milk", ConfidenceWeights()) == pytest.approx(0.25)

    def test_long_title(self):
        """Longer than 10 characters earns the extra bonus."""
        assert title_bonus("Buy groceries", ConfidenceWeights()) == pytest.approx(0.4)

    def test_long_single_word(self):
        """The length bonus does not require several words."""
        assert title_bonus("Housekeeping", ConfidenceWeights()) == pytest.approx(0.15)


class TestBlendConfidence:
    """Tests for blend_confidence."""

    def test_base_only(self):
        """A one-word title with nothing else found scores the base."""
        assert blend_confidence("Dentist").total == pytest.approx(0.3)

    def test_documented_example(self):
        """Title bonus plus a 0.9 date."""
        assert blend_confidence("Buy groceries", date_confidence=0.9).total == 0.925

    def test_weighted_fields(self):
        """Every field contributes its weight times its confidence."""
        breakdown = blend_confidence(
            "Dentist",
            date_confidence=0.8,
            time_confidence=0.6,
            category_confidence=0.5,
            priority_confidence=0.4,
        )
        assert breakdown.date == pytest.approx(0.2)
        assert breakdown.time == pytest.approx(0.09)
        assert breakdown.category == pytest.approx(0.05)
        assert breakdown.priority == pytest.approx(0.02)
        assert breakdown.total == pytest.approx(0.66)

    def test_absent_fields_count_zero(self):
        """None confidences contribute nothing."""
        breakdown = blend_confidence("Dentist", date_confidence=None, time_confidence=None)
        assert breakdown.date == 0.0
        assert breakdown.time == 0.0

    def test_description_bonus(self):
        """A non-trivial description earns a bonus."""
        with_description = blend_confidence("Dentist", description="bring insurance card")
        assert with_description.description == pytest.approx(0.05)
        assert with_description.total == pytest.approx(0.35)

    def test_trivial_description_earns_nothing(self):
        """Descriptions at or below the minimum remainder earn nothing."""
        breakdown = blend_confidence("Dentist", description="ok", description_min_remainder=5)
        assert breakdown.description == 0.0

    def test_saturates_at_one(self):
        """A perfect parse is clamped to 1."""
        breakdown = blend_confidence(
            "Buy groceries for the week",
            date_confidence=1.0,
            time_confidence=1.0,
            category_confidence=1.0,
            priority_confidence=1.0,
            description="the usual list from the fridge",
        )
        assert breakdown.total == 1.0

    def test_custom_weights(self):
        """Weights come from the caller when given."""
        weights = ConfidenceWeights(base=0.5, date=0.5)
        breakdown = blend_confidence("Dentist", date_confidence=1.0, weights=weights)
        assert breakdown.total == 1.0
        assert breakdown.base == 0.5

    def test_zero_weights(self):
        """All-zero weights give zero confidence."""
        with pytest.warns(UserWarning):
            weights = ConfidenceWeights(
                base=0.0,
                title_multi_word=0.0,
                title_long=0.0,
                date=0.0,
                time=0.0,
                category=0.0,
                priority=0.0,
                description=0.0,
            )
        assert blend_confidence("Buy groceries", 1.0, 1.0, weights=weights).total == 0.0


class TestBreakdown:
    """Tests for ConfidenceBreakdown."""

    def test_explain_lists_nonzero_terms(self):
        """explain() shows the base, the non-zero terms and the total."""
        breakdown = blend_confidence("Buy groceries", date_confidence=0.9)
        explanation = breakdown.explain()
        assert explanation.startswith("base=0.30")
        assert "title=+0.400" in explanation
        assert "date=+0.225" in explanation
        assert "time" not in explanation
        assert explanation.endswith("total=0.925")

    def test_frozen(self):
        """Breakdowns are immutable."""
        breakdown = ConfidenceBreakdown(base=0.3, total=0.3)
        with pytest.raises(ValidationError):
            breakdown.total = 0.5  # type: ignore[misc]
