"""Quick statistics about an utterance, computed without parsing it.

Useful for deciding how much review UI to show: a short "buy milk" needs
none, a long message full of dates and priority words probably does.

Example:
    >>> from taskparse.stats import parsing_stats
    >>> parsing_stats("Buy milk").complexity_score < 0.5
    True
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

DATE_KEYWORDS = (
    "tomorrow", "today", "tonight", "yesterday", "next", "this", "last",
    "week", "weekend", "month", "year", "morning", "afternoon", "evening", "night",
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)
TIME_KEYWORDS = (
    "am", "pm", "oclock", "o'clock", "noon", "midnight", "morning", "afternoon",
    "evening", "night", "early", "late", "around", "about",
)
PRIORITY_KEYWORDS = (
    "urgent", "important", "asap", "critical", "priority", "must",
    "essential", "vital", "crucial", "immediately",
)


def _keyword_pattern(keywords: tuple[str, ...]) -> re.Pattern[str]:
    return re.compile(r"\b(?:" + "|".join(map(re.escape, keywords)) + r")\b", re.IGNORECASE)


_DATE = _keyword_pattern(DATE_KEYWORDS)
_TIME = _keyword_pattern(TIME_KEYWORDS)
# "3pm" has no boundary between the digit and the meridiem
_GLUED_MERIDIEM = re.compile(r"\d\s*[ap]\.?m\b", re.IGNORECASE)
_PRIORITY = _keyword_pattern(PRIORITY_KEYWORDS)


class ParsingStats(BaseModel):
    """Surface statistics of an utterance.

    Attributes:
        original_length: Character count.
        word_count: Whitespace-separated word count.
        has_date_keywords: Mentions a day, week, month or similar.
        has_time_keywords: Mentions a clock reading or part of day.
        has_priority_keywords: Mentions urgency or importance.
        complexity_score: Rough difficulty estimate in [0, 1].
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    original_length: int = Field(ge=0)
    word_count: int = Field(ge=0)
    has_date_keywords: bool
    has_time_keywords: bool
    has_priority_keywords: bool
    complexity_score: float = Field(ge=0.0, le=1.0)


def has_date_keywords(text: str) -> bool:
    return _DATE.search(text) is not None


def has_time_keywords(text: str) -> bool:
    return _TIME.search(text) is not None or _GLUED_MERIDIEM.search(text) is not None


def has_priority_keywords(text: str) -> bool:
    return _PRIORITY.search(text) is not None


def complexity_score(text: str) -> float:
    """Weighted mix of length, word count and keyword presence.

    Length and word count each contribute up to 0.3 (saturating at 100
    characters and 20 words); date, time and priority keywords add 0.2,
    0.1 and 0.1.
    """
    score = 0.3 * min(len(text) / 100, 1.0)
    score += 0.3 * min(len(text.split()) / 20, 1.0)
    if has_date_keywords(text):
        score += 0.2
    if has_time_keywords(text):
        score += 0.1
    if has_priority_keywords(text):
        score += 0.1
    return max(0.0, min(1.0, round(score, 6)))


def parsing_stats(text: str) -> ParsingStats:
    """Compute ParsingStats for ``text``."""
    return ParsingStats(
        original_length=len(text),
        word_count=len(text.split()),
        has_date_keywords=has_date_keywords(text),
        has_time_keywords=has_time_keywords(text),
        has_priority_keywords=has_priority_keywords(text),
        complexity_score=complexity_score(text),
    )
