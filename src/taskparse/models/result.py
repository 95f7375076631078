"""The immutable result handed back to callers of parse()."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class ParseResult(BaseModel):
    """Structured task description extracted from one utterance.

    Once returned, the result belongs to the caller. It is frozen so it can
    be shared between a task-creation form, a reminder scheduler and a
    calendar view without defensive copies.

    Attributes:
        original_text: The input exactly as received.
        title: Task title. Empty only for empty or whitespace-only input.
        description: Extra detail found in long inputs, if any.
        date: Due date, if one was recognized.
        time: Due time, if one was recognized.
        category: Suggested category label.
        priority: Suggested priority label.
        overall_confidence: Blended confidence for the whole result.
        date_confidence: Confidence of the date field (None if absent).
        time_confidence: Confidence of the time field (None if absent).
        category_confidence: Confidence of the category (None if absent).
        priority_confidence: Confidence of the priority (None if absent).
        alternatives: Other plausible readings of ambiguous fragments.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    original_text: str = Field(description="Input text as received")
    title: str = Field(description="Derived task title")
    description: str | None = Field(default=None, description="Extracted description")
    date: dt.date | None = Field(default=None, description="Due date")
    time: dt.time | None = Field(default=None, description="Due time")
    category: str | None = Field(default=None, description="Suggested category")
    priority: str | None = Field(default=None, description="Suggested priority")
    overall_confidence: float = Field(
        ge=0.0,
        le=1.0,
        description="Blended confidence for the whole result",
    )
    date_confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    time_confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    category_confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    priority_confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    alternatives: tuple[str, ...] = Field(
        default=(),
        description="Alternative readings of ambiguous fragments",
    )

    @classmethod
    def empty(cls, original_text: str) -> ParseResult:
        """Result for empty or whitespace-only input."""
        return cls(original_text=original_text, title="", overall_confidence=0.0)

    @property
    def has_schedule(self) -> bool:
        """Whether a date or a time was recognized."""
        return self.date is not None or self.time is not None

    def due_datetime(self) -> dt.datetime | None:
        """Combine date and time for reminder scheduling.

        Returns:
            The due moment, midnight when only a date was found, or None
            when no date was found.
        """
        if self.date is None:
            return None
        return dt.datetime.combine(self.date, self.time or dt.time(0, 0))
