"""Tests for the two-tier task parser."""

import random
import string
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, time, timedelta

import pytest
from pydantic import ValidationError as PydanticValidationError

from taskparse import ParseResult, parse
from taskparse.config import Settings
from taskparse.exceptions import ValidationError
from taskparse.parser import TaskParser, get_parser
from taskparse.patterns.calendar import start_of_week

REFERENCE = datetime(2026, 3, 4, 9, 0)


class TestEmptyInput:
    """Empty input is not an error."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    def test_blank(self, parser, reference, text):
        """Blank input gives an empty title and zero confidence."""
        result = parser.parse(text, reference)
        assert result.title == ""
        assert result.original_text == text
        assert result.overall_confidence == 0.0
        assert result.date is None
        assert result.time is None
        assert result.category is None
        assert result.date_confidence is None

    def test_non_string_rejected(self, parser):
        """Passing None is the caller's error."""
        with pytest.raises(ValidationError):
            parser.parse(None)  # type: ignore[arg-type]


class TestRelativeDates:
    """Date properties of parse()."""

    def test_tomorrow(self, parser, reference):
        """Tomorrow is the reference day plus one."""
        result = parser.parse("tomorrow", reference)
        assert result.date == reference.date() + timedelta(days=1)
        assert result.date_confidence == pytest.approx(0.9)

    def test_today(self, parser, reference):
        """Today is the reference calendar day."""
        result = parser.parse("today", reference)
        assert result.date == reference.date()
        assert result.date_confidence == pytest.approx(0.95)

    def test_in_three_days(self, parser, reference):
        """Counted offsets have day granularity."""
        assert parser.parse("in 3 days", reference).date == date(2026, 3, 7)

    @pytest.mark.parametrize("offset", range(7))
    def test_next_friday_is_in_the_following_week(self, parser, offset):
        """"next friday" is never the Friday of the current week."""
        reference = datetime(2026, 3, 2, 12, 0) + timedelta(days=offset)
        result = parser.parse("next friday", reference)
        assert result.date.weekday() == 4
        assert start_of_week(result.date) == start_of_week(reference.date()) + timedelta(days=7)

    @pytest.mark.parametrize("offset", range(7))
    def test_this_friday_is_the_upcoming_one(self, parser, offset):
        """"this friday" is the nearest Friday ahead."""
        reference = datetime(2026, 3, 2, 12, 0) + timedelta(days=offset)
        result = parser.parse("this friday", reference)
        assert result.date.weekday() == 4
        assert 1 <= (result.date - reference.date()).days <= 7

    def test_past_month_day_moves_to_next_year(self, parser):
        """Absolute month/day expressions never resolve to a past date."""
        result = parser.parse("March 15th", datetime(2026, 3, 20, 9, 0))
        assert result.date == date(2027, 3, 15)


class TestFullParse:
    """End-to-end parses."""

    def test_groceries(self, parser, reference):
        """The canonical quick-add example."""
        result = parser.parse("buy groceries tomorrow at 3 pm", reference)
        assert result.title == "Buy groceries"
        assert result.date == date(2026, 3, 5)
        assert result.time == time(15, 0)
        assert result.category == "household"
        assert result.overall_confidence > 0.8

    def test_dentist(self, parser, reference):
        """Command phrase, weekday, time and category together."""
        result = parser.parse("remind me to call the dentist next friday at 10am", reference)
        assert result.title == "Call the dentist"
        assert result.date == date(2026, 3, 13)
        assert result.time == time(10, 0)
        assert result.category == "health"

    def test_priority(self, parser, reference):
        """Priority words are suggested."""
        result = parser.parse("URGENT: call the plumber about the leak", reference)
        assert result.priority == "urgent"
        assert result.priority_confidence == pytest.approx(0.18)

    def test_description(self, parser, reference):
        """Long inputs split into title and description."""
        result = parser.parse(
            "Finish the quarterly report by friday. Include the sales figures from last quarter.",
            reference,
        )
        assert result.title == "Finish the quarterly report"
        assert result.description == "include the sales figures from last quarter"
        assert result.date == date(2026, 3, 6)

    def test_alternatives(self, parser, reference):
        """Ambiguous fragments report their other readings, date first."""
        result = parser.parse("dinner 3/4 at 7", reference)
        assert result.date == date(2026, 3, 4)
        assert result.time == time(19, 0)
        assert result.alternatives == ("2026-04-03", "07:00")

    @pytest.mark.parametrize(
        ("text", "title", "due"),
        [
            ("call the bank at 3 in the afternoon", "Call the bank", time(15, 0)),
            ("feed the cat tomorrow morning at 8", "Feed the cat", time(8, 0)),
        ],
    )
    def test_hour_with_part_of_day(self, parser, reference, text, title, due):
        """The written hour wins over the part of the day next to it."""
        result = parser.parse(text, reference)
        assert result.title == title
        assert result.time == due
        assert result.alternatives == ()

    def test_may_as_a_verb(self, parser, reference):
        """"may" followed by a count is left in the title."""
        result = parser.parse("I may 3 times check", reference)
        assert result.date is None
        assert result.title == "I may 3 times check"

    def test_unambiguous_has_no_alternatives(self, parser, reference):
        """Explicit readings leave nothing to choose from."""
        assert parser.parse("call mom today at 5pm", reference).alternatives == ()

    def test_result_is_frozen(self, parser, reference):
        """Results can be shared without copies."""
        result = parser.parse("call mom", reference)
        with pytest.raises(PydanticValidationError):
            result.title = "changed"  # type: ignore[misc]


class TestFallbackTier:
    """How the fallback resolver combines with the primary date."""

    def test_fallback_fills_missing_date(self, parser, reference):
        """Weekend phrases come from the fallback tier."""
        result = parser.parse("clean the garage this weekend", reference)
        assert result.title == "Clean the garage"
        assert result.date == date(2026, 3, 7)
        assert result.date_confidence == pytest.approx(0.8)

    def test_fallback_replaces_weak_primary(self, parser, reference):
        """A low-confidence primary date yields to a fallback date."""
        result = parser.parse("plan the trip next summer", reference)
        assert result.date == date(2027, 6, 21)
        assert result.date_confidence == pytest.approx(0.5)

    def test_weak_primary_kept_without_fallback(self, parser, reference):
        """A weak primary date survives when the fallback finds nothing."""
        result = parser.parse("buy gifts before christmas", reference)
        assert result.title == "Buy gifts"
        assert result.date == date(2026, 12, 18)
        assert result.date_confidence == pytest.approx(0.5)

    def test_confident_primary_never_overridden(self, parser, reference):
        """A primary date at or above the threshold wins."""
        result = parser.parse("call mom tomorrow, or this weekend", reference)
        assert result.date == date(2026, 3, 5)

    def test_threshold_is_configurable(self, reference):
        """Raising the threshold lets the fallback replace more dates."""
        strict = TaskParser(Settings(_env_file=None, fallback_threshold=0.95))
        result = strict.parse("this friday or this weekend", reference)
        assert result.date == date(2026, 3, 7)
        assert result.date_confidence == pytest.approx(0.8)

    def test_explicit_year_date(self, parser, reference):
        """Dates with an explicit year are resolved by the fallback tier."""
        result = parser.parse("Renew passport by 15 March 2027", reference)
        assert result.title == "Renew passport"
        assert result.date == date(2027, 3, 15)


class TestReferenceTime:
    """The reference time is captured once per call."""

    def test_now_captured_once(self, parser, monkeypatch):
        """Every relative expression sees the same instant."""
        calls = []

        class FrozenDatetime(datetime):
            @classmethod
            def now(cls, tz=None):
                calls.append(1)
                return REFERENCE

        monkeypatch.setattr("taskparse.parser.datetime", FrozenDatetime)
        result = parser.parse("tomorrow at 9, or in 3 days")
        assert result.date == date(2026, 3, 5)
        assert len(calls) == 1

    def test_module_level_parse(self, reference):
        """parse() uses the shared parser."""
        assert parse("call mom today", reference).date == date(2026, 3, 4)
        assert get_parser() is get_parser()


class TestProperties:
    """Properties that hold for any input."""

    @pytest.mark.parametrize(
        "text",
        [
            "Remind me to buy groceries tomorrow at 3 pm",
            "call the dentist next friday at 10am",
            "Meeting at 3:30 PM today",
            "clean the garage this weekend",
            "Renew passport by 15 March 2027",
            "pick up the kids at half past 3 on friday",
            "Dinner with Sam on the 15th at 7",
        ],
    )
    def test_title_is_a_fixed_point(self, parser, reference, text):
        """Re-parsing a title finds no date or time."""
        title = parser.parse(text, reference).title
        again = parser.parse(title, reference)
        assert again.date is None
        assert again.time is None

    @pytest.mark.parametrize(
        "text",
        ["!!!", "?", "a", "tomorrow", "at 3", "-", "   x   ", "\x00", "買い物 明日", "🙂"],
    )
    def test_non_empty_title(self, parser, reference, text):
        """Non-blank input always has a title."""
        assert parser.parse(text, reference).title

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "...,,,;;;!!!",
            "a" * 10_000,
            "tomorrow at 3pm " * 500,
            "in 99999 years",
            "in 99999999999999999999 days",
            "0000-00-00 99:99 0 am 00/00/00 the 0th",
        ],
    )
    def test_confidence_in_range(self, parser, reference, text):
        """Overall confidence stays in [0, 1] for awkward input."""
        result = parser.parse(text, reference)
        assert 0.0 <= result.overall_confidence <= 1.0

    def test_confidence_in_range_for_random_input(self, parser, reference):
        """Random strings never break parse()."""
        rng = random.Random(20260304)
        alphabet = string.ascii_letters + string.digits + string.punctuation + "     "
        for _ in range(200):
            text = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 80)))
            result = parser.parse(text, reference)
            assert isinstance(result, ParseResult)
            assert 0.0 <= result.overall_confidence <= 1.0

    def test_concurrent_calls_agree(self, parser, reference):
        """One parser can serve concurrent callers."""
        texts = [
            "buy groceries tomorrow at 3 pm",
            "call the dentist next friday at 10am",
            "clean the garage this weekend",
            "pay rent on the 1st",
        ] * 10
        expected = [parser.parse(text, reference) for text in texts]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda text: parser.parse(text, reference), texts))
        assert results == expected


class TestParseResult:
    """Tests for ParseResult helpers."""

    def test_due_datetime(self, parser, reference):
        """Date and time combine into the due moment."""
        result = parser.parse("buy groceries tomorrow at 3 pm", reference)
        assert result.due_datetime() == datetime(2026, 3, 5, 15, 0)
        assert result.has_schedule

    def test_due_datetime_without_time(self, parser, reference):
        """A date alone is due at midnight."""
        result = parser.parse("pay rent tomorrow", reference)
        assert result.due_datetime() == datetime(2026, 3, 5, 0, 0)

    def test_no_date(self, parser, reference):
        """Without a date there is no due moment."""
        result = parser.parse("call mom at 5pm", reference)
        assert result.due_datetime() is None
        assert result.has_schedule

    def test_empty_result(self):
        """ParseResult.empty keeps the original text."""
        result = ParseResult.empty("  ")
        assert result.original_text == "  "
        assert not result.has_schedule
