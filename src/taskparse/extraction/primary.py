"""Primary extractor: the first tier for every field.

Runs the date and time recognizer tables in declaration order, scores the
category and priority tables and derives the title and description. The
fallback tier for dates lives in fallback.py and is applied by the parser.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from taskparse.classification import (
    CATEGORY_RULES,
    PRIORITY_RULES,
    KeywordClassifier,
    suggest_category,
    suggest_priority,
)
from taskparse.config import Settings
from taskparse.config import settings as default_settings
from taskparse.models import CategoryCandidate, DateCandidate, PriorityCandidate, TimeCandidate
from taskparse.patterns import (
    DATE_RECOGNIZERS,
    TIME_RECOGNIZERS,
    DateRecognizer,
    TimeRecognizer,
    first_date,
    first_time,
)

from .title import TitleExtractor

logger = logging.getLogger(__name__)


class PrimaryExtraction(BaseModel):
    """Everything the primary tier found in one utterance.

    Attributes:
        title: Derived task title.
        description: Extracted description, if any.
        date: First date recognized, if any.
        time: First time recognized, if any.
        category: Best category suggestion, if any.
        priority: Best priority suggestion, if any.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str
    description: str | None = None
    date: DateCandidate | None = None
    time: TimeCandidate | None = None
    category: CategoryCandidate | None = None
    priority: PriorityCandidate | None = None


class PrimaryExtractor:
    """First-tier extraction over fixed recognizer and keyword tables.

    Example:
        ```python
        extractor = PrimaryExtractor()
        found = extractor.extract("call the dentist next friday", date(2026, 3, 4))
        # found.date.value == date(2026, 3, 13)
        # found.category.label == "health"
        ```
    """

    def __init__(
        self,
        settings: Settings | None = None,
        date_recognizers: Sequence[DateRecognizer] = DATE_RECOGNIZERS,
        time_recognizers: Sequence[TimeRecognizer] = TIME_RECOGNIZERS,
        title_extractor: TitleExtractor | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self.date_recognizers = tuple(date_recognizers)
        self.time_recognizers = tuple(time_recognizers)
        self.title_extractor = title_extractor or TitleExtractor(self.settings)
        self.category_classifier = KeywordClassifier(
            CATEGORY_RULES, self.settings.min_fragment_length
        )
        self.priority_classifier = KeywordClassifier(
            PRIORITY_RULES, self.settings.min_fragment_length
        )

    def extract_date(self, text: str, reference: date) -> DateCandidate | None:
        """First date recognizer to resolve a match."""
        return first_date(self.date_recognizers, text, reference)

    def extract_time(self, text: str, reference: date) -> TimeCandidate | None:
        """First time recognizer to resolve a match."""
        return first_time(self.time_recognizers, text, reference)

    def extract(self, text: str, reference: date) -> PrimaryExtraction:
        """Run every primary extraction step over ``text``.

        Args:
            text: Non-blank utterance.
            reference: Day that relative expressions resolve against.

        Returns:
            PrimaryExtraction with whatever was found.
        """
        date_candidate = self.extract_date(text, reference)
        time_candidate = self.extract_time(text, reference)
        category = suggest_category(text, self.category_classifier)
        priority = suggest_priority(text, self.priority_classifier)
        title = self.title_extractor.extract_title(text)
        description = self.title_extractor.extract_description(text, title)

        logger.debug(
            "Primary extraction: date=%s time=%s category=%s priority=%s",
            date_candidate.recognizer if date_candidate else None,
            time_candidate.recognizer if time_candidate else None,
            category.label if category else None,
            priority.label if priority else None,
        )

        return PrimaryExtraction(
            title=title,
            description=description,
            date=date_candidate,
            time=time_candidate,
            category=category,
            priority=priority,
        )
