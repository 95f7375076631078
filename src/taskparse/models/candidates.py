"""Per-field candidates produced while parsing a single utterance.

Candidates are transient: the extractors create them during one parse
call and the assembler folds them into a ParseResult.
"""

from __future__ import annotations

from datetime import date, time
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Which tier produced a date
DateSource = Literal["primary", "fallback"]


class DateCandidate(BaseModel):
    """A resolved due date.

    Attributes:
        value: The calendar date.
        confidence: Static weight of the recognizer that produced it.
        matched_text: Text fragment the recognizer matched.
        recognizer: Name of the recognizer.
        source: Extraction tier that produced the date.
        alternatives: Other plausible readings of the same fragment.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    value: date = Field(description="Resolved calendar date")
    confidence: float = Field(ge=0.0, le=1.0, description="Recognizer confidence weight")
    matched_text: str = Field(default="", description="Matched text fragment")
    recognizer: str = Field(default="", description="Recognizer name")
    source: DateSource = Field(default="primary", description="Extraction tier")
    alternatives: tuple[str, ...] = Field(default=(), description="Alternative readings")


class TimeCandidate(BaseModel):
    """A resolved time of day.

    Attributes:
        hour: Hour on a 24-hour clock.
        minute: Minute of the hour.
        confidence: Static weight of the recognizer that produced it.
        matched_text: Text fragment the recognizer matched.
        recognizer: Name of the recognizer.
        alternatives: Other plausible readings of the same fragment.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    hour: int = Field(ge=0, le=23, description="Hour (24-hour clock)")
    minute: int = Field(ge=0, le=59, description="Minute")
    confidence: float = Field(ge=0.0, le=1.0, description="Recognizer confidence weight")
    matched_text: str = Field(default="", description="Matched text fragment")
    recognizer: str = Field(default="", description="Recognizer name")
    alternatives: tuple[str, ...] = Field(default=(), description="Alternative readings")

    @property
    def value(self) -> time:
        """The candidate as a datetime.time."""
        return time(self.hour, self.minute)


class CategoryCandidate(BaseModel):
    """Best-scoring category suggestion."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str = Field(description="Category label")
    confidence: float = Field(ge=0.0, le=1.0, description="Keyword score")


class PriorityCandidate(BaseModel):
    """Best-scoring priority suggestion."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str = Field(description="Priority label")
    confidence: float = Field(ge=0.0, le=1.0, description="Keyword score")
