"""Time recognizers for the primary extractor.

Like the date table, TIME_RECOGNIZERS is ordered and the first successful
recognizer wins. Fractions of the hour come first, then explicit clock
readings, spoken minutes and loose hours ("around 4", "at 3"). Named parts
of the day come last, with "early"/"late" qualified anchors ahead of the
bare ones, so an hour is never lost to the part of the day around it.

A bare hour without am/pm ("3 o'clock", "half past 7") takes its half of the
day from a part of the day written next to it ("at 3 in the afternoon",
"tomorrow morning at 8"). Without one it is read as a daytime hour: 8
through 12 stay as they are, 1 through 7 move to the afternoon, and the
other half-day reading is reported as an alternative.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta

from .base import TimeRecognizer, compile_pattern
from .calendar import clock_time, opposite_half_day

_MERIDIEM = r"(?:\s*([ap])\.?\s?m\.?(?!\w))"

# Units that make "about 3" a quantity rather than a time
_NOT_A_TIME = (
    r"(?!\s*(?:days?|weeks?|months?|years?|hours?|hrs?|minutes?|mins?|people|"
    r"persons?|times|items?|pages?|%|percent)\b)"
)


def daytime_hour(hour: int) -> int:
    """Read a bare hour as a daytime hour (1-7 become 13-19)."""
    if 1 <= hour <= 7:
        return hour + 12
    return hour


def _meridiem(match: re.Match[str], group: int | None) -> str | None:
    letter = match.group(group) if group is not None else None
    if letter:
        return f"{letter.lower()}m"
    return _day_part_meridiem(match)


# Part of the day right after or right before a bare hour
_DAY_PART_AFTER = compile_pattern(
    r"\s*,?\s*(?:(?:in\s+the|this|tomorrow|today)\s+)?(morning|afternoon|evening)\b"
    r"|\s*,?\s*(?:at\s+)?(night|tonight)\b"
)
_DAY_PART_BEFORE = compile_pattern(
    r"\b(morning|afternoon|evening|night|tonight)\s*,?\s*(?:at\s+)?$"
)


def _day_part_meridiem(match: re.Match[str]) -> str | None:
    """am/pm implied by a part of the day written next to the match."""
    after = _DAY_PART_AFTER.match(match.string, match.end())
    if after is not None:
        part = after.group(1) or after.group(2)
    else:
        before = _DAY_PART_BEFORE.search(match.string[: match.start()])
        if before is None:
            return None
        part = before.group(1)
    part = part.lower()
    if part == "morning":
        return "am"
    if part in ("night", "tonight"):
        hour = re.search(r"\d{1,2}", match.group(0))
        # "12 at night" is midnight, "2 at night" is early morning
        if hour is not None and (int(hour.group(0)) == 12 or int(hour.group(0)) < 5):
            return "am"
    return "pm"


def _hour_reading(hour: int, minute: int, meridiem: str | None) -> time:
    if meridiem is not None:
        return clock_time(hour, minute, meridiem)
    if not 0 <= hour <= 12:
        raise ValueError(f"hour {hour} is not a spoken clock reading")
    return time(daytime_hour(hour), minute)


def _opposite_if_bare(meridiem_group: int | None, calculator):
    """Alternatives producer: the other half-day when nothing fixed it."""

    def alternatives(match: re.Match[str], reference: date) -> tuple[str, ...]:
        if _meridiem(match, meridiem_group) is not None:
            return ()
        value = calculator(match, reference)
        return (opposite_half_day(value).strftime("%H:%M"),)

    return alternatives


def _fixed(hour: int, minute: int = 0):
    value = time(hour, minute)

    def calculator(match: re.Match[str], reference: date) -> time:
        return value

    return calculator


# Clock readings


def _twelve_hour(match: re.Match[str], reference: date) -> time:
    minute = int(match.group(2)) if match.group(2) else 0
    return clock_time(int(match.group(1)), minute, _meridiem(match, 3))


def _twenty_four_hour(match: re.Match[str], reference: date) -> time:
    return clock_time(int(match.group(1)), int(match.group(2)))


def _oclock(match: re.Match[str], reference: date) -> time:
    return _hour_reading(int(match.group(1)), 0, _meridiem(match, 2))


# Spoken forms


def _minutes_past(minute: int):
    def calculator(match: re.Match[str], reference: date) -> time:
        return _hour_reading(int(match.group(1)), minute, _meridiem(match, 2))

    return calculator


def _quarter_to(match: re.Match[str], reference: date) -> time:
    target = _hour_reading(int(match.group(1)), 0, _meridiem(match, 2))
    moment = datetime.combine(reference, target) - timedelta(minutes=15)
    return moment.time()


def _approximate(match: re.Match[str], reference: date) -> time:
    return _hour_reading(int(match.group(1)), 0, _meridiem(match, 2))


def _at_hour(match: re.Match[str], reference: date) -> time:
    return _hour_reading(int(match.group(1)), 0, _meridiem(match, None))


def _anchor(name: str, pattern: str, hour: int, confidence: float) -> TimeRecognizer:
    return TimeRecognizer(name, compile_pattern(pattern), _fixed(hour), confidence)


_half_past = _minutes_past(30)
_quarter_past = _minutes_past(15)
_spoken_thirty = _minutes_past(30)
_spoken_fifteen = _minutes_past(15)
_spoken_forty_five = _minutes_past(45)


TIME_RECOGNIZERS: tuple[TimeRecognizer, ...] = (
    # Fractions of the hour; "half past 7 pm" contains the clock reading "7 pm"
    TimeRecognizer(
        "half_past",
        compile_pattern(rf"\bhalf\s+past\s+(\d{{1,2}})\b{_MERIDIEM}?"),
        _half_past,
        0.8,
        alternatives=_opposite_if_bare(2, _half_past),
    ),
    TimeRecognizer(
        "quarter_past",
        compile_pattern(rf"\b(?:a\s+)?quarter\s+past\s+(\d{{1,2}})\b{_MERIDIEM}?"),
        _quarter_past,
        0.8,
        alternatives=_opposite_if_bare(2, _quarter_past),
    ),
    TimeRecognizer(
        "quarter_to",
        compile_pattern(rf"\b(?:a\s+)?quarter\s+(?:to|till|of)\s+(\d{{1,2}})\b{_MERIDIEM}?"),
        _quarter_to,
        0.8,
        alternatives=_opposite_if_bare(2, _quarter_to),
    ),
    # Clock readings
    TimeRecognizer(
        "twelve_hour",
        compile_pattern(rf"\b(\d{{1,2}})(?::?(\d{{2}}))?{_MERIDIEM}"),
        _twelve_hour,
        0.9,
    ),
    TimeRecognizer(
        "twenty_four_hour",
        compile_pattern(r"\b(\d{1,2}):(\d{2})\b"),
        _twenty_four_hour,
        0.85,
    ),
    TimeRecognizer(
        "oclock",
        compile_pattern(rf"\b(\d{{1,2}})\s*o['’]?\s?clock\b{_MERIDIEM}?"),
        _oclock,
        0.85,
        alternatives=_opposite_if_bare(2, _oclock),
    ),
    # Spoken minutes
    TimeRecognizer(
        "spoken_thirty",
        compile_pattern(rf"\b(\d{{1,2}})\s*thirty\b{_MERIDIEM}?"),
        _spoken_thirty,
        0.75,
        alternatives=_opposite_if_bare(2, _spoken_thirty),
    ),
    TimeRecognizer(
        "spoken_fifteen",
        compile_pattern(rf"\b(\d{{1,2}})\s*fifteen\b{_MERIDIEM}?"),
        _spoken_fifteen,
        0.75,
        alternatives=_opposite_if_bare(2, _spoken_fifteen),
    ),
    TimeRecognizer(
        "spoken_forty_five",
        compile_pattern(rf"\b(\d{{1,2}})\s*forty[\s-]?five\b{_MERIDIEM}?"),
        _spoken_forty_five,
        0.75,
        alternatives=_opposite_if_bare(2, _spoken_forty_five),
    ),
    # Loose readings
    TimeRecognizer(
        "approximate",
        compile_pattern(
            rf"\b(?:around|about|approximately|approx\.?|roughly)\s+(\d{{1,2}})\b"
            rf"{_NOT_A_TIME}{_MERIDIEM}?"
        ),
        _approximate,
        0.7,
        alternatives=_opposite_if_bare(2, _approximate),
    ),
    TimeRecognizer(
        "at_hour",
        compile_pattern(rf"\bat\s+(\d{{1,2}})\b(?![:/.\-]\d){_NOT_A_TIME}"),
        _at_hour,
        0.65,
        alternatives=_opposite_if_bare(None, _at_hour),
    ),
    # Named moments
    _anchor("noon", r"\b(?:at\s+)?(?:noon|midday|mid-day)\b", 12, 0.95),
    _anchor("midnight", r"\b(?:at\s+)?midnight\b", 0, 0.95),
    # Qualified parts of the day
    _anchor("early_morning", r"\b(?:in\s+the\s+)?early\s+(?:in\s+the\s+)?morning\b", 7, 0.7),
    _anchor("late_morning", r"\b(?:in\s+the\s+)?late\s+(?:in\s+the\s+)?morning\b", 11, 0.7),
    _anchor("early_afternoon", r"\b(?:in\s+the\s+)?early\s+(?:in\s+the\s+)?afternoon\b", 13, 0.7),
    _anchor("late_afternoon", r"\b(?:in\s+the\s+)?late\s+(?:in\s+the\s+)?afternoon\b", 16, 0.7),
    _anchor("early_evening", r"\b(?:in\s+the\s+)?early\s+(?:in\s+the\s+)?evening\b", 17, 0.7),
    _anchor("late_evening", r"\b(?:in\s+the\s+)?late\s+(?:in\s+the\s+)?evening\b", 21, 0.7),
    # Parts of the day
    _anchor("morning", r"\b(?:in\s+the\s+|this\s+)?morning\b", 9, 0.6),
    _anchor("afternoon", r"\b(?:in\s+the\s+|this\s+)?afternoon\b", 14, 0.6),
    _anchor("evening", r"\b(?:in\s+the\s+|this\s+)?evening\b", 18, 0.6),
    _anchor("night", r"\b(?:(?:at\s+)?night|to-?ni(?:ght|te))\b", 20, 0.6),
)
