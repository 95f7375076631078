"""Date and time recognizer tables.

Example:
    ```python
    from datetime import date
    from taskparse.patterns import DATE_RECOGNIZERS, first_date

    candidate = first_date(DATE_RECOGNIZERS, "call mom tomorrow", date(2026, 3, 4))
    # candidate.value == date(2026, 3, 5), candidate.confidence == 0.9
    ```
"""

from .base import (
    DateRecognizer,
    TimeRecognizer,
    compile_pattern,
    first_date,
    first_time,
)
from .dates import DATE_RECOGNIZERS, holiday_date
from .times import TIME_RECOGNIZERS, daytime_hour

__all__ = [
    "DATE_RECOGNIZERS",
    "TIME_RECOGNIZERS",
    "DateRecognizer",
    "TimeRecognizer",
    "compile_pattern",
    "daytime_hour",
    "first_date",
    "first_time",
    "holiday_date",
]
