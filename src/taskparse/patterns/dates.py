"""Date recognizers for the primary extractor.

DATE_RECOGNIZERS is ordered: the first recognizer whose calculator succeeds
wins. More specific phrasings come before the general ones they contain
("the day after tomorrow" before "tomorrow", "friday next week" before
"next week").

Confidence weights:
- 0.95: "today"
- 0.9: fixed offsets and explicit month/day expressions
- 0.85: counted day offsets, "this/next <weekday>", full numeric dates
- 0.8: week offsets, "<weekday> this/next week", next/this period
- 0.75: period boundaries, short numeric dates
- 0.7: bare weekdays, bare ordinals ("on the 15th")
- 0.4-0.5: seasons and holidays
"""

from __future__ import annotations

import re
from datetime import date, timedelta

from taskparse.exceptions import RecognitionError

from .base import DateRecognizer, compile_pattern
from .calendar import (
    MONTH_NAMES,
    NUMBER_NAMES,
    WEEKDAY_NAMES,
    add_days,
    add_months,
    add_period,
    add_years,
    end_of_period,
    expand_year,
    month_number,
    next_annual_date,
    nth_weekday_of_month,
    parse_count,
    start_of_next_period,
    upcoming_weekday,
    weekday_next_week,
    weekday_number,
)

_COUNT = rf"(\d{{1,3}}|{NUMBER_NAMES})"
_ORDINAL = r"(?:st|nd|rd|th)"

# Approximate astronomical season starts (month, day)
SEASON_STARTS: dict[str, tuple[int, int]] = {
    "spring": (3, 20),
    "summer": (6, 21),
    "fall": (9, 22),
    "autumn": (9, 22),
    "winter": (12, 21),
}


# Fixed offsets


def _today(match: re.Match[str], reference: date) -> date:
    return reference


def _tomorrow(match: re.Match[str], reference: date) -> date:
    return add_days(reference, 1)


def _day_after_tomorrow(match: re.Match[str], reference: date) -> date:
    return add_days(reference, 2)


def _yesterday(match: re.Match[str], reference: date) -> date:
    return add_days(reference, -1)


# Numeric relative offsets


def _in_days(match: re.Match[str], reference: date) -> date:
    return add_days(reference, parse_count(match.group(1)))


def _weeks_from_today(match: re.Match[str], reference: date) -> date:
    return add_days(reference, 7 * parse_count(match.group(1)))


def _in_period(match: re.Match[str], reference: date) -> date:
    return add_period(reference, parse_count(match.group(1)), match.group(2))


# Weekdays


def _this_weekday(match: re.Match[str], reference: date) -> date:
    return upcoming_weekday(reference, weekday_number(match.group(1)))


def _next_weekday(match: re.Match[str], reference: date) -> date:
    return weekday_next_week(reference, weekday_number(match.group(1)))


def _weekday_this_week(match: re.Match[str], reference: date) -> date:
    """Weekday of the current week; already-past days move to next week."""
    target = weekday_number(match.group(1))
    if target < reference.weekday():
        return weekday_next_week(reference, target)
    return add_days(reference, target - reference.weekday())


# Period boundaries


def _end_of_this_period(match: re.Match[str], reference: date) -> date:
    return end_of_period(reference, match.group(1))


def _end_of_next_period(match: re.Match[str], reference: date) -> date:
    unit = match.group(1)
    return end_of_period(start_of_next_period(reference, unit), unit)


def _beginning_of_next_period(match: re.Match[str], reference: date) -> date:
    return start_of_next_period(reference, match.group(1))


def _next_period(match: re.Match[str], reference: date) -> date:
    unit = match.group(1).lower()
    if unit == "week":
        return add_days(reference, 7)
    if unit == "month":
        return add_months(reference, 1)
    return add_years(reference, 1)


def _this_period(match: re.Match[str], reference: date) -> date:
    # The period has already started, so the earliest usable day is today
    return reference


# Absolute dates


def _month_day(match: re.Match[str], reference: date) -> date:
    month = month_number(match.group(1))
    day = int(match.group(2))
    if match.group(3):
        return date(int(match.group(3)), month, day)
    return next_annual_date(month, day, reference)


def _day_of_month(match: re.Match[str], reference: date) -> date:
    day = int(match.group(1))
    month = month_number(match.group(2))
    if match.group(3):
        return date(int(match.group(3)), month, day)
    return next_annual_date(month, day, reference)


def _numeric_date(match: re.Match[str], reference: date) -> date:
    month = int(match.group(1))
    day = int(match.group(2))
    return date(expand_year(int(match.group(3))), month, day)


def _short_numeric_date(match: re.Match[str], reference: date) -> date:
    return next_annual_date(int(match.group(1)), int(match.group(2)), reference)


def _day_first_alternative(match: re.Match[str], reference: date) -> tuple[str, ...]:
    """Offer the DD/MM reading when both parts could be a month."""
    first, second = int(match.group(1)), int(match.group(2))
    if first == second or first > 12 or second > 12:
        return ()
    year = match.group(3) if match.re.groups >= 3 else None
    try:
        if year:
            swapped = date(expand_year(int(year)), second, first)
        else:
            swapped = next_annual_date(second, first, reference)
    except ValueError:
        return ()
    return (swapped.isoformat(),)


def _iso_date(match: re.Match[str], reference: date) -> date:
    return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))


def _ordinal_day(match: re.Match[str], reference: date) -> date:
    """Next occurrence of a day of the month, this month or a later one."""
    day = int(match.group(1))
    if not 1 <= day <= 31:
        raise ValueError(f"day {day} out of range")
    first_of_month = reference.replace(day=1)
    for months_ahead in range(0, 12):
        month_start = add_months(first_of_month, months_ahead)
        try:
            candidate = month_start.replace(day=day)
        except ValueError:
            continue
        if candidate >= reference:
            return candidate
    raise RecognitionError("ordinal_day", match.group(0), f"no upcoming month has day {day}")


# Approximations


def _season(match: re.Match[str], reference: date) -> date:
    when = match.group(1).lower()
    month, day = SEASON_STARTS[match.group(2).lower()]
    if when == "next":
        return date(reference.year + 1, month, day)
    return next_annual_date(month, day, reference)


def holiday_date(name: str, reference: date) -> date:
    """Next occurrence of a named holiday on or after the reference day.

    Raises:
        ValueError: If the holiday is unknown.
    """
    name = re.sub(r"\s+", " ", name.lower()).replace("'", "")
    if name.startswith("christmas"):
        return next_annual_date(12, 25, reference)
    if name.startswith("new year"):
        return next_annual_date(1, 1, reference)
    if name == "thanksgiving":
        # Fourth Thursday of November (US)
        this_year = nth_weekday_of_month(reference.year, 11, 3, 4)
        if this_year >= reference:
            return this_year
        return nth_weekday_of_month(reference.year + 1, 11, 3, 4)
    raise ValueError(f"unknown holiday: {name!r}")


def _before_holiday(match: re.Match[str], reference: date) -> date:
    """A week ahead of the holiday, never earlier than today."""
    holiday = holiday_date(match.group(1), reference)
    return max(holiday - timedelta(days=7), reference)


DATE_RECOGNIZERS: tuple[DateRecognizer, ...] = (
    # Fixed offsets
    DateRecognizer(
        "day_after_tomorrow",
        compile_pattern(r"\b(?:the\s+)?day\s+after\s+tomorrow\b"),
        _day_after_tomorrow,
        0.9,
    ),
    DateRecognizer("tomorrow", compile_pattern(r"\b(?:tomorrow|tmrw)\b"), _tomorrow, 0.9),
    DateRecognizer("today", compile_pattern(r"\btoday\b"), _today, 0.95),
    DateRecognizer("tonight", compile_pattern(r"\bto-?ni(?:ght|te)\b"), _today, 0.85),
    DateRecognizer("yesterday", compile_pattern(r"\byesterday\b"), _yesterday, 0.9),
    # Counted offsets
    DateRecognizer("in_days", compile_pattern(rf"\bin\s+{_COUNT}\s+days?\b"), _in_days, 0.85),
    DateRecognizer(
        "days_from_now",
        compile_pattern(rf"\b{_COUNT}\s+days?\s+from\s+(?:now|today)\b"),
        _in_days,
        0.85,
    ),
    DateRecognizer(
        "weeks_from_today",
        compile_pattern(r"\b(a|one|two)\s+weeks?\s+from\s+(?:today|now)\b"),
        _weeks_from_today,
        0.8,
    ),
    # Weekdays
    DateRecognizer(
        "weekday_this_week",
        compile_pattern(rf"\b(?:on\s+)?({WEEKDAY_NAMES})\s+(?:of\s+)?this\s+week\b"),
        _weekday_this_week,
        0.8,
    ),
    DateRecognizer(
        "weekday_next_week",
        compile_pattern(rf"\b(?:on\s+)?({WEEKDAY_NAMES})\s+(?:of\s+)?next\s+week\b"),
        _next_weekday,
        0.8,
    ),
    DateRecognizer(
        "this_weekday",
        compile_pattern(rf"\b(?:this|this\s+coming|coming)\s+({WEEKDAY_NAMES})\b"),
        _this_weekday,
        0.85,
    ),
    DateRecognizer(
        "next_weekday",
        compile_pattern(rf"\bnext\s+({WEEKDAY_NAMES})\b"),
        _next_weekday,
        0.85,
    ),
    # Period boundaries
    DateRecognizer(
        "end_of_next_period",
        compile_pattern(r"\b(?:by\s+)?(?:the\s+)?end\s+of\s+(?:the\s+)?next\s+(week|month|year)\b"),
        _end_of_next_period,
        0.75,
    ),
    DateRecognizer(
        "end_of_period",
        compile_pattern(r"\b(?:by\s+)?(?:the\s+)?end\s+of\s+(?:the\s+|this\s+)?(week|month|year)\b"),
        _end_of_this_period,
        0.75,
    ),
    DateRecognizer(
        "beginning_of_next_period",
        compile_pattern(
            r"\b(?:the\s+)?(?:beginning|start)\s+of\s+(?:the\s+)?next\s+(week|month|year)\b"
        ),
        _beginning_of_next_period,
        0.75,
    ),
    DateRecognizer(
        "in_period",
        compile_pattern(rf"\bin\s+{_COUNT}\s+(weeks?|months?|years?)\b"),
        _in_period,
        0.8,
    ),
    DateRecognizer(
        "period_from_now",
        compile_pattern(rf"\b{_COUNT}\s+(weeks?|months?|years?)\s+from\s+(?:now|today)\b"),
        _in_period,
        0.8,
    ),
    DateRecognizer("next_period", compile_pattern(r"\bnext\s+(week|month|year)\b"), _next_period, 0.8),
    DateRecognizer("this_period", compile_pattern(r"\bthis\s+(week|month|year)\b"), _this_period, 0.8),
    # Absolute dates
    DateRecognizer(
        "iso_date",
        compile_pattern(r"\b(\d{4})-(\d{1,2})-(\d{1,2})\b"),
        _iso_date,
        0.95,
    ),
    DateRecognizer(
        "day_of_month",
        compile_pattern(
            rf"\b(?:the\s+)?(\d{{1,2}}){_ORDINAL}\s+of\s+({MONTH_NAMES})\b\.?(?:,?\s+(\d{{4}})\b)?"
        ),
        _day_of_month,
        0.9,
    ),
    DateRecognizer(
        "month_day",
        compile_pattern(
            rf"\b(?!may\b)({MONTH_NAMES})\b\.?\s+(?:the\s+)?(\d{{1,2}}){_ORDINAL}?\b"
            rf"(?:,?\s+(\d{{4}})\b)?"
        ),
        _month_day,
        0.9,
    ),
    # "may" is also a verb: "I may 3 times check" is not a date
    DateRecognizer(
        "may_day_after_preposition",
        compile_pattern(
            rf"\b(?:on|by|until|till|before|after|due|from)\s+(may)\.?\s+(?:the\s+)?"
            rf"(\d{{1,2}}){_ORDINAL}?\b(?:,?\s+(\d{{4}})\b)?"
        ),
        _month_day,
        0.9,
    ),
    DateRecognizer(
        "may_day",
        compile_pattern(
            rf"\b(may)\.?\s+(?:the\s+)?(\d{{1,2}})(?={_ORDINAL}|,?\s+\d{{4}}\b){_ORDINAL}?\b"
            rf"(?:,?\s+(\d{{4}})\b)?"
        ),
        _month_day,
        0.9,
    ),
    DateRecognizer(
        "numeric_date",
        compile_pattern(r"\b(\d{1,2})[/\-](\d{1,2})[/\-](\d{2}|\d{4})\b"),
        _numeric_date,
        0.85,
        alternatives=_day_first_alternative,
    ),
    DateRecognizer(
        "short_numeric_date",
        compile_pattern(r"\b(\d{1,2})/(\d{1,2})\b(?![/\-]\d)"),
        _short_numeric_date,
        0.75,
        alternatives=_day_first_alternative,
    ),
    DateRecognizer(
        "ordinal_day",
        compile_pattern(rf"\b(?:on\s+)?the\s+(\d{{1,2}}){_ORDINAL}\b"),
        _ordinal_day,
        0.7,
    ),
    # Bare weekday
    DateRecognizer(
        "weekday",
        compile_pattern(rf"\b(?:on\s+)?({WEEKDAY_NAMES})\b"),
        _this_weekday,
        0.7,
    ),
    # Approximations
    DateRecognizer(
        "season",
        compile_pattern(r"\b(next|this)\s+(spring|summer|fall|autumn|winter)\b"),
        _season,
        0.4,
    ),
    DateRecognizer(
        "before_holiday",
        compile_pattern(r"\bbefore\s+(christmas|thanksgiving|new\s+year'?s?(?:\s+day)?)\b"),
        _before_holiday,
        0.5,
    ),
)
