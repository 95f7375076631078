"""Overall confidence blending.

The overall confidence of a parse is a weighted sum of title quality and the
per-field confidences, clamped to [0, 1]:

    overall = base
        + title_multi_word   (title has more than one word, longer than 3 chars)
        + title_long         (title longer than 10 chars)
        + date * date_confidence
        + time * time_confidence
        + category * category_confidence
        + priority * priority_confidence
        + description        (a description was extracted)

Absent fields count as zero. Weights come from ConfidenceWeights in
taskparse.config.

Example:
    >>> from taskparse.confidence import blend_confidence
    >>> blend_confidence("Buy groceries", date_confidence=0.9).total
    0.925
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from taskparse.config import ConfidenceWeights, settings

# Title length thresholds for the quality bonuses
MULTI_WORD_MIN_LENGTH = 3
LONG_TITLE_MIN_LENGTH = 10


class ConfidenceBreakdown(BaseModel):
    """Contribution of each term to the overall confidence.

    Attributes:
        base: Starting confidence.
        title: Title quality bonuses.
        date: Weighted date confidence.
        time: Weighted time confidence.
        category: Weighted category confidence.
        priority: Weighted priority confidence.
        description: Description bonus.
        total: Clamped sum of every term.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    base: float = Field(ge=0.0)
    title: float = Field(default=0.0, ge=0.0)
    date: float = Field(default=0.0, ge=0.0)
    time: float = Field(default=0.0, ge=0.0)
    category: float = Field(default=0.0, ge=0.0)
    priority: float = Field(default=0.0, ge=0.0)
    description: float = Field(default=0.0, ge=0.0)
    total: float = Field(ge=0.0, le=1.0, description="Overall confidence")

    def explain(self) -> str:
        """Human-readable list of the non-zero terms."""
        parts = [f"base={self.base:.2f}"]
        for name in ("title", "date", "time", "category", "priority", "description"):
            value = getattr(self, name)
            if value:
                parts.append(f"{name}=+{value:.3f}")
        parts.append(f"total={self.total:.3f}")
        return ", ".join(parts)


def clamp01(value: float) -> float:
    """Clamp a value into [0, 1]."""
    return max(0.0, min(1.0, value))


def title_bonus(title: str, weights: ConfidenceWeights) -> float:
    """Bonus for a title that looks like a real task name."""
    bonus = 0.0
    if len(title) > MULTI_WORD_MIN_LENGTH and len(title.split()) > 1:
        bonus += weights.title_multi_word
    if len(title) > LONG_TITLE_MIN_LENGTH:
        bonus += weights.title_long
    return bonus


def blend_confidence(
    title: str,
    date_confidence: float | None = None,
    time_confidence: float | None = None,
    category_confidence: float | None = None,
    priority_confidence: float | None = None,
    description: str | None = None,
    weights: ConfidenceWeights | None = None,
    description_min_remainder: int | None = None,
) -> ConfidenceBreakdown:
    """Blend per-field confidences into an overall confidence.

    Args:
        title: Derived task title.
        date_confidence: Date confidence, None when no date was found.
        time_confidence: Time confidence, None when no time was found.
        category_confidence: Category score, None without a category.
        priority_confidence: Priority score, None without a priority.
        description: Extracted description, if any.
        weights: Blend weights; defaults to the configured ones.
        description_min_remainder: A description must be longer than this
            to earn its bonus; defaults to the configured value.

    Returns:
        ConfidenceBreakdown whose ``total`` is in [0, 1].
    """
    weights = weights or settings.confidence_weights
    if description_min_remainder is None:
        description_min_remainder = settings.description_min_remainder

    terms = {
        "base": weights.base,
        "title": title_bonus(title, weights),
        "date": weights.date * (date_confidence or 0.0),
        "time": weights.time * (time_confidence or 0.0),
        "category": weights.category * (category_confidence or 0.0),
        "priority": weights.priority * (priority_confidence or 0.0),
        "description": (
            weights.description
            if description is not None and len(description) > description_min_remainder
            else 0.0
        ),
    }
    # Round away float noise so 0.3 + 0.25 + ... compares cleanly
    total = clamp01(round(sum(terms.values()), 6))
    return ConfidenceBreakdown(**terms, total=total)
