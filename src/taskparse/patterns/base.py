"""Recognizers: a compiled matcher, a calculator and a confidence weight.

Every recognizer exposes the same ``try_match(text, reference)`` interface.
New expressions are added by appending an entry to a recognizer table, not
by subclassing. A calculator that raises for its match (an out-of-range
number, an impossible date) makes the recognizer report "no match" so the
next recognizer in the table gets its turn.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date, time

from taskparse.models import DateCandidate, TimeCandidate

logger = logging.getLogger(__name__)

# Flags used for every recognizer pattern
PATTERN_FLAGS = re.IGNORECASE

DateCalculator = Callable[[re.Match[str], date], date]
TimeCalculator = Callable[[re.Match[str], date], time]
AlternativesFn = Callable[[re.Match[str], date], tuple[str, ...]]


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a recognizer pattern with the pinned flags."""
    return re.compile(pattern, PATTERN_FLAGS)


@dataclass(frozen=True)
class DateRecognizer:
    """Recognizer producing a calendar date.

    Attributes:
        name: Short identifier used in logs and candidates.
        pattern: Compiled case-insensitive matcher.
        calculator: Turns a match and the reference day into a date.
        confidence: Static weight reported with every match.
        alternatives: Optional producer of alternative readings.
    """

    name: str
    pattern: re.Pattern[str]
    calculator: DateCalculator
    confidence: float
    alternatives: AlternativesFn | None = None

    def try_match(self, text: str, reference: date) -> DateCandidate | None:
        """Match the first occurrence in ``text`` and resolve it.

        Returns:
            DateCandidate, or None when nothing matched or the calculator
            could not resolve the match.
        """
        match = self.pattern.search(text)
        if match is None:
            return None
        try:
            value = self.calculator(match, reference)
            alternatives = self.alternatives(match, reference) if self.alternatives else ()
        except Exception as e:
            logger.debug("Date recognizer %s rejected %r: %s", self.name, match.group(0), e)
            return None
        return DateCandidate(
            value=value,
            confidence=self.confidence,
            matched_text=match.group(0),
            recognizer=self.name,
            alternatives=alternatives,
        )


@dataclass(frozen=True)
class TimeRecognizer:
    """Recognizer producing a time of day.

    Attributes:
        name: Short identifier used in logs and candidates.
        pattern: Compiled case-insensitive matcher.
        calculator: Turns a match into a time of day.
        confidence: Static weight reported with every match.
        alternatives: Optional producer of alternative readings.
    """

    name: str
    pattern: re.Pattern[str]
    calculator: TimeCalculator
    confidence: float
    alternatives: AlternativesFn | None = None

    def try_match(self, text: str, reference: date) -> TimeCandidate | None:
        """Match the first occurrence in ``text`` and resolve it.

        Returns:
            TimeCandidate, or None when nothing matched or the calculator
            could not resolve the match.
        """
        match = self.pattern.search(text)
        if match is None:
            return None
        try:
            value = self.calculator(match, reference)
            alternatives = self.alternatives(match, reference) if self.alternatives else ()
        except Exception as e:
            logger.debug("Time recognizer %s rejected %r: %s", self.name, match.group(0), e)
            return None
        return TimeCandidate(
            hour=value.hour,
            minute=value.minute,
            confidence=self.confidence,
            matched_text=match.group(0),
            recognizer=self.name,
            alternatives=alternatives,
        )


def first_date(
    recognizers: Sequence[DateRecognizer],
    text: str,
    reference: date,
) -> DateCandidate | None:
    """First successful date recognizer in declaration order."""
    for recognizer in recognizers:
        candidate = recognizer.try_match(text, reference)
        if candidate is not None:
            return candidate
    return None


def first_time(
    recognizers: Sequence[TimeRecognizer],
    text: str,
    reference: date,
) -> TimeCandidate | None:
    """First successful time recognizer in declaration order."""
    for recognizer in recognizers:
        candidate = recognizer.try_match(text, reference)
        if candidate is not None:
            return candidate
    return None
