"""Fallback date resolver.

Second extraction tier for dates. It only runs when the primary recognizers
found no date or only a low-confidence one, and covers phrasings the primary
table leaves out: weekends, "after next week", explicit-year dates and a few
coarse approximations (holidays, school and fiscal year ends).

Explicit-year dates are handed to dateparser, but only the substring a
pattern below has already captured. Running dateparser over the whole
utterance would let it pick up fragments the title stripper cannot see.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, time

from dateparser.search import search_dates  # type: ignore[import-untyped]

from taskparse.exceptions import RecognitionError
from taskparse.models import DateCandidate
from taskparse.patterns import DateRecognizer, compile_pattern, first_date, holiday_date
from taskparse.patterns.calendar import (
    MONTH_NAMES,
    add_days,
    add_months,
    add_period,
    next_annual_date,
    parse_count,
    weekend_saturday,
)
from taskparse.patterns.dates import SEASON_STARTS

logger = logging.getLogger(__name__)

# Pattern to detect if text contains an explicit year (1900-2099)
_HAS_YEAR = re.compile(r"\b(19|20)\d{2}\b")

# Fallback confidence weights
RELATIVE_CONFIDENCE = 0.8
WEEKEND_CONFIDENCE = 0.8
EXPLICIT_YEAR_CONFIDENCE = 0.85
HOLIDAY_CONFIDENCE = 0.6
SEASON_CONFIDENCE = 0.5
FISCAL_YEAR_CONFIDENCE = 0.7
SCHOOL_YEAR_CONFIDENCE = 0.6

# Last day of the school year (month, day)
SCHOOL_YEAR_END = (6, 15)

# "before christmas" is resolved by the primary table as a week ahead
_NOT_AFTER_BEFORE = r"(?<!\bbefore\s)"


def _weeks_from_today(match: re.Match[str], reference: date) -> date:
    return add_days(reference, 7 * parse_count(match.group(1)))


def _counted_period(match: re.Match[str], reference: date) -> date:
    return add_period(reference, int(match.group(1)), match.group(2))


def _after_tomorrow(match: re.Match[str], reference: date) -> date:
    return add_days(reference, 2)


def _after_next_week(match: re.Match[str], reference: date) -> date:
    return add_days(reference, 8)


def _after_next_month(match: re.Match[str], reference: date) -> date:
    return add_days(add_months(reference, 1), 1)


def _next_week(match: re.Match[str], reference: date) -> date:
    return add_days(reference, 7)


def _next_month(match: re.Match[str], reference: date) -> date:
    return add_months(reference, 1)


def _tomorrow(match: re.Match[str], reference: date) -> date:
    return add_days(reference, 1)


def _today(match: re.Match[str], reference: date) -> date:
    return reference


def _this_weekend(match: re.Match[str], reference: date) -> date:
    return weekend_saturday(reference)


def _next_weekend(match: re.Match[str], reference: date) -> date:
    return weekend_saturday(reference, weeks_ahead=1)


def _christmas(match: re.Match[str], reference: date) -> date:
    return holiday_date("christmas", reference)


def _thanksgiving(match: re.Match[str], reference: date) -> date:
    return holiday_date("thanksgiving", reference)


def _new_year(match: re.Match[str], reference: date) -> date:
    return date(reference.year + 1, 1, 1)


def _next_season(match: re.Match[str], reference: date) -> date:
    month, day = SEASON_STARTS[match.group(1).lower()]
    return date(reference.year + 1, month, day)


def _end_of_fiscal_year(match: re.Match[str], reference: date) -> date:
    return date(reference.year, 12, 31)


def _end_of_school_year(match: re.Match[str], reference: date) -> date:
    return next_annual_date(*SCHOOL_YEAR_END, reference)


class ExplicitYearDate:
    """Calculator that resolves an explicit-year date with dateparser.

    Attributes:
        languages: Languages passed to dateparser.
        settings: dateparser settings; RELATIVE_BASE is filled in per call.
    """

    def __init__(self, languages: list[str] | None = None) -> None:
        self.languages = languages or ["en"]
        self.settings = {
            "PREFER_DAY_OF_MONTH": "first",
            "STRICT_PARSING": False,
            "RETURN_AS_TIMEZONE_AWARE": False,
        }

    def __call__(self, match: re.Match[str], reference: date) -> date:
        text = match.group(0)
        if not _HAS_YEAR.search(text):
            raise ValueError(f"no explicit year in {text!r}")
        settings = {**self.settings, "RELATIVE_BASE": datetime.combine(reference, time())}
        results = search_dates(text, languages=self.languages, settings=settings)
        for matched_text, parsed in results or []:
            if parsed is not None and _HAS_YEAR.search(matched_text):
                return parsed.date()
        raise RecognitionError("explicit_year", text, "dateparser found no dated fragment")


_explicit_year = ExplicitYearDate()

FALLBACK_RECOGNIZERS: tuple[DateRecognizer, ...] = (
    # Relative phrases
    DateRecognizer(
        "fallback_weeks_from_today",
        compile_pattern(r"\b(a|one|two|three)\s+weeks?\s+from\s+(?:today|now)\b"),
        _weeks_from_today,
        RELATIVE_CONFIDENCE,
    ),
    DateRecognizer(
        "fallback_in_period",
        compile_pattern(r"\bin\s+(\d+)\s+(days?|weeks?|months?|years?)\b"),
        _counted_period,
        RELATIVE_CONFIDENCE,
    ),
    DateRecognizer(
        "fallback_period_from_now",
        compile_pattern(r"\b(\d+)\s+(days?|weeks?|months?|years?)\s+from\s+now\b"),
        _counted_period,
        RELATIVE_CONFIDENCE,
    ),
    DateRecognizer(
        "after_tomorrow",
        compile_pattern(r"\bafter\s+tomorrow\b"),
        _after_tomorrow,
        RELATIVE_CONFIDENCE,
    ),
    DateRecognizer(
        "after_next_week",
        compile_pattern(r"\bafter\s+next\s+week\b"),
        _after_next_week,
        RELATIVE_CONFIDENCE,
    ),
    DateRecognizer(
        "after_next_month",
        compile_pattern(r"\bafter\s+next\s+month\b"),
        _after_next_month,
        RELATIVE_CONFIDENCE,
    ),
    DateRecognizer(
        "fallback_next_week",
        compile_pattern(r"\bnext\s+week\b"),
        _next_week,
        RELATIVE_CONFIDENCE,
    ),
    DateRecognizer(
        "fallback_next_month",
        compile_pattern(r"\bnext\s+month\b"),
        _next_month,
        RELATIVE_CONFIDENCE,
    ),
    DateRecognizer(
        "fallback_tomorrow",
        compile_pattern(r"\btomorrow\b"),
        _tomorrow,
        RELATIVE_CONFIDENCE,
    ),
    DateRecognizer(
        "fallback_today",
        compile_pattern(r"\btoday\b"),
        _today,
        RELATIVE_CONFIDENCE,
    ),
    # Weekends
    DateRecognizer(
        "next_weekend",
        compile_pattern(r"\b(?:on\s+|over\s+)?next\s+weekend\b"),
        _next_weekend,
        WEEKEND_CONFIDENCE,
    ),
    DateRecognizer(
        "this_weekend",
        compile_pattern(r"\b(?:on\s+|over\s+)?(?:this|the)\s+weekend\b"),
        _this_weekend,
        WEEKEND_CONFIDENCE,
    ),
    # Explicit-year dates
    DateRecognizer(
        "explicit_iso_date",
        compile_pattern(r"\b\d{4}-\d{1,2}-\d{1,2}\b"),
        _explicit_year,
        EXPLICIT_YEAR_CONFIDENCE,
    ),
    DateRecognizer(
        "explicit_day_month_year",
        compile_pattern(
            rf"\b\d{{1,2}}(?:st|nd|rd|th)?\s+(?:of\s+)?(?:{MONTH_NAMES})\b\.?,?\s+\d{{4}}\b"
        ),
        _explicit_year,
        EXPLICIT_YEAR_CONFIDENCE,
    ),
    DateRecognizer(
        "explicit_month_day_year",
        compile_pattern(
            rf"\b(?:{MONTH_NAMES})\b\.?\s+\d{{1,2}}(?:st|nd|rd|th)?,?\s+\d{{4}}\b"
        ),
        _explicit_year,
        EXPLICIT_YEAR_CONFIDENCE,
    ),
    DateRecognizer(
        "explicit_month_year",
        compile_pattern(rf"\b(?:{MONTH_NAMES})\b\.?,?\s+\d{{4}}\b"),
        _explicit_year,
        EXPLICIT_YEAR_CONFIDENCE,
    ),
    # Approximations
    DateRecognizer(
        "christmas",
        compile_pattern(rf"{_NOT_AFTER_BEFORE}\b(?:christmas|xmas)\b"),
        _christmas,
        HOLIDAY_CONFIDENCE,
    ),
    DateRecognizer(
        "new_year",
        compile_pattern(rf"{_NOT_AFTER_BEFORE}\bnew\s+year'?s?(?:\s+day)?\b"),
        _new_year,
        HOLIDAY_CONFIDENCE,
    ),
    DateRecognizer(
        "thanksgiving",
        compile_pattern(rf"{_NOT_AFTER_BEFORE}\bthanksgiving\b"),
        _thanksgiving,
        HOLIDAY_CONFIDENCE,
    ),
    DateRecognizer(
        "next_season",
        compile_pattern(r"\bnext\s+(spring|summer|fall|autumn|winter)\b"),
        _next_season,
        SEASON_CONFIDENCE,
    ),
    DateRecognizer(
        "end_of_fiscal_year",
        compile_pattern(r"\b(?:by\s+)?(?:the\s+)?end\s+of\s+(?:the\s+)?fiscal\s+year\b"),
        _end_of_fiscal_year,
        FISCAL_YEAR_CONFIDENCE,
    ),
    DateRecognizer(
        "end_of_school_year",
        compile_pattern(r"\b(?:by\s+)?(?:the\s+)?end\s+of\s+(?:the\s+)?school\s+year\b"),
        _end_of_school_year,
        SCHOOL_YEAR_CONFIDENCE,
    ),
)


class FallbackDateResolver:
    """Resolve a date the primary recognizers missed.

    Example:
        ```python
        resolver = FallbackDateResolver()
        candidate = resolver.resolve("clean the garage this weekend", date(2026, 3, 4))
        # candidate.value == date(2026, 3, 7), candidate.source == "fallback"
        ```
    """

    def __init__(self, recognizers: tuple[DateRecognizer, ...] = FALLBACK_RECOGNIZERS) -> None:
        self.recognizers = recognizers

    def resolve(self, text: str, reference: date) -> DateCandidate | None:
        """First fallback date found in ``text``, or None.

        Args:
            text: The utterance (matched case-insensitively).
            reference: Reference day shared with the primary extractor.

        Returns:
            DateCandidate tagged with source="fallback", or None.
        """
        candidate = first_date(self.recognizers, text.lower(), reference)
        if candidate is None:
            logger.debug("Fallback resolver found no date")
            return None
        logger.debug(
            "Fallback resolver matched %r via %s", candidate.matched_text, candidate.recognizer
        )
        return candidate.model_copy(update={"source": "fallback"})
