"""Pytest configuration and shared fixtures.

Every test that touches relative dates pins its reference time. The
default reference, 2026-03-04 09:00, is a Wednesday: Monday of that week is
March 2nd and the weekend is March 7th-8th.
"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from taskparse.config import Settings
from taskparse.parser import TaskParser

REFERENCE = datetime(2026, 3, 4, 9, 0)
REFERENCE_DAY = REFERENCE.date()


@pytest.fixture
def reference() -> datetime:
    """Reference time shared by parser tests (a Wednesday morning)."""
    return REFERENCE


@pytest.fixture
def ref_day() -> date:
    """Reference day shared by recognizer tests."""
    return REFERENCE_DAY


@pytest.fixture
def test_settings() -> Settings:
    """Settings with defaults only, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def parser(test_settings: Settings) -> TaskParser:
    """Parser built from default settings."""
    return TaskParser(test_settings)
