"""Calendar arithmetic shared by date and time calculators.

Weeks start on Monday (weekday 0), matching ``date.weekday()``. All
functions are pure and work on ``datetime.date`` values; month and year
arithmetic goes through ``dateutil.relativedelta`` so that "one month after
January 31st" clamps to the last day of February instead of overflowing.
"""

from __future__ import annotations

import calendar
from datetime import date, time, timedelta

from dateutil.relativedelta import relativedelta

WEEKDAYS: dict[str, int] = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}

MONTHS: dict[str, int] = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
    # Abbreviations
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "sept": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

# Spelled-out counts accepted where a number is expected
NUMBER_WORDS: dict[str, int] = {
    "a": 1,
    "an": 1,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
}

# Regex alternations built from the tables above
WEEKDAY_NAMES = "|".join(WEEKDAYS)
MONTH_NAMES = "|".join(sorted(MONTHS, key=len, reverse=True))
NUMBER_NAMES = "|".join(sorted(NUMBER_WORDS, key=len, reverse=True))


def weekday_number(name: str) -> int:
    """Look up a weekday name (Monday = 0).

    Raises:
        ValueError: If the name is not a weekday.
    """
    try:
        return WEEKDAYS[name.lower()]
    except KeyError:
        raise ValueError(f"unknown weekday: {name!r}") from None


def month_number(name: str) -> int:
    """Look up a month name or abbreviation (January = 1).

    Raises:
        ValueError: If the name is not a month.
    """
    try:
        return MONTHS[name.lower().rstrip(".")]
    except KeyError:
        raise ValueError(f"unknown month: {name!r}") from None


def parse_count(token: str) -> int:
    """Turn "3", "three" or "a" into an integer count.

    Raises:
        ValueError: If the token is neither digits nor a known number word.
    """
    token = token.lower()
    if token.isdigit():
        return int(token)
    try:
        return NUMBER_WORDS[token]
    except KeyError:
        raise ValueError(f"not a count: {token!r}") from None


def add_days(reference: date, days: int) -> date:
    """Shift a date by whole days."""
    return reference + timedelta(days=days)


def add_months(reference: date, months: int) -> date:
    """Shift a date by calendar months, clamping to the month's last day."""
    return reference + relativedelta(months=months)


def add_years(reference: date, years: int) -> date:
    """Shift a date by calendar years, clamping February 29th."""
    return reference + relativedelta(years=years)


def add_period(reference: date, amount: int, unit: str) -> date:
    """Shift a date by ``amount`` days, weeks, months or years.

    ``unit`` may be singular or plural ("day", "weeks", ...).

    Raises:
        ValueError: If the unit is not recognized.
    """
    unit = unit.lower().rstrip("s")
    if unit == "day":
        return add_days(reference, amount)
    if unit == "week":
        return add_days(reference, amount * 7)
    if unit == "month":
        return add_months(reference, amount)
    if unit == "year":
        return add_years(reference, amount)
    raise ValueError(f"unknown period unit: {unit!r}")


def start_of_week(reference: date) -> date:
    """Monday of the reference week."""
    return reference - timedelta(days=reference.weekday())


def upcoming_weekday(reference: date, weekday: int) -> date:
    """Nearest occurrence of ``weekday`` strictly after the reference day.

    Used for "this friday": said on a Wednesday it means two days later,
    said on a Friday it means a week later.
    """
    days = (weekday - reference.weekday()) % 7
    return add_days(reference, days or 7)


def weekday_next_week(reference: date, weekday: int) -> date:
    """``weekday`` inside the calendar week after the reference week.

    Used for "next friday": always lands in the following Monday-based
    week, never in the current one.
    """
    return add_days(start_of_week(reference), 7 + weekday)


def end_of_week(reference: date) -> date:
    """Sunday of the reference week."""
    return add_days(start_of_week(reference), 6)


def end_of_month(reference: date) -> date:
    """Last day of the reference month."""
    last_day = calendar.monthrange(reference.year, reference.month)[1]
    return reference.replace(day=last_day)


def end_of_year(reference: date) -> date:
    """December 31st of the reference year."""
    return date(reference.year, 12, 31)


def end_of_period(reference: date, unit: str) -> date:
    """Last day of the week, month or year containing ``reference``.

    Raises:
        ValueError: If the unit is not week, month or year.
    """
    unit = unit.lower()
    if unit == "week":
        return end_of_week(reference)
    if unit == "month":
        return end_of_month(reference)
    if unit == "year":
        return end_of_year(reference)
    raise ValueError(f"unknown period: {unit!r}")


def start_of_next_period(reference: date, unit: str) -> date:
    """First day of the week, month or year after the reference one.

    Raises:
        ValueError: If the unit is not week, month or year.
    """
    unit = unit.lower()
    if unit == "week":
        return add_days(start_of_week(reference), 7)
    if unit == "month":
        return add_months(reference.replace(day=1), 1)
    if unit == "year":
        return date(reference.year + 1, 1, 1)
    raise ValueError(f"unknown period: {unit!r}")


def weekend_saturday(reference: date, weeks_ahead: int = 0) -> date:
    """Saturday of the current weekend, or one ``weeks_ahead`` later.

    On a Saturday or Sunday "this weekend" is the weekend already under
    way, so the current day is returned rather than the past Saturday.
    """
    saturday = add_days(start_of_week(reference), 5 + 7 * weeks_ahead)
    return max(saturday, reference)


def next_annual_date(month: int, day: int, reference: date) -> date:
    """Next occurrence of month/day on or after the reference day.

    February 29th skips ahead to the next leap year.

    Raises:
        ValueError: If month/day never forms a valid date.
    """
    for year in range(reference.year, reference.year + 9):
        try:
            candidate = date(year, month, day)
        except ValueError:
            continue
        if candidate >= reference:
            return candidate
    raise ValueError(f"no valid date for month={month} day={day}")


def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> date:
    """The ``n``-th ``weekday`` of a month (n starts at 1)."""
    first = date(year, month, 1)
    offset = (weekday - first.weekday()) % 7
    return add_days(first, offset + 7 * (n - 1))


def expand_year(year: int) -> int:
    """Expand a two-digit year into the 2000s."""
    return year + 2000 if year < 100 else year


def clock_time(hour: int, minute: int = 0, meridiem: str | None = None) -> time:
    """Build a time from a 12- or 24-hour clock reading.

    Args:
        hour: Hour as spoken or written.
        minute: Minute of the hour.
        meridiem: "am", "pm" or None for a 24-hour reading.

    Raises:
        ValueError: If the reading is out of range (e.g. "13 pm", "9:75").
    """
    if meridiem is not None:
        meridiem = meridiem.lower().replace(".", "")
        if not 1 <= hour <= 12:
            raise ValueError(f"hour {hour} is not a 12-hour clock reading")
        if meridiem == "pm" and hour != 12:
            hour += 12
        elif meridiem == "am" and hour == 12:
            hour = 0
    return time(hour, minute)


def opposite_half_day(value: time) -> time:
    """The same clock reading twelve hours away."""
    return time((value.hour + 12) % 24, value.minute)
