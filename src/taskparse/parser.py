"""Parse utterances into structured task descriptions.

The parser runs the primary extractor, consults the fallback resolver when
the primary date is missing or weak, blends the confidences and assembles
one immutable ParseResult.

Example:
    ```python
    from datetime import datetime
    from taskparse import parse

    result = parse("buy groceries tomorrow at 3 pm", datetime(2026, 3, 4, 9, 0))
    # result.title == "Buy groceries"
    # result.date == date(2026, 3, 5), result.time == time(15, 0)
    # result.category == "household"
    ```
"""

from __future__ import annotations

from datetime import datetime

from taskparse.confidence import blend_confidence
from taskparse.config import Settings
from taskparse.config import settings as default_settings
from taskparse.exceptions import ValidationError
from taskparse.extraction import FallbackDateResolver, PrimaryExtraction, PrimaryExtractor
from taskparse.logging import get_logger
from taskparse.models import DateCandidate, ParseResult

logger = get_logger(__name__)


class TaskParser:
    """Two-tier task parser.

    Holds the settings and the extractors built from them. A parser has no
    per-call state, so one instance can serve concurrent callers.

    Args:
        settings: Parser settings; defaults to the global settings.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or default_settings
        self.primary = PrimaryExtractor(self.settings)
        self.fallback = FallbackDateResolver()

    def _resolve_date(
        self,
        text: str,
        primary: DateCandidate | None,
        reference: datetime,
    ) -> DateCandidate | None:
        """Pick between the primary date and the fallback tier.

        The fallback runs only when the primary date is missing or below
        the threshold. A weak primary date is kept when the fallback finds
        nothing.
        """
        if primary is not None and primary.confidence >= self.settings.fallback_threshold:
            return primary

        fallback = self.fallback.resolve(text, reference.date())
        if fallback is None:
            return primary

        logger.debug(
            "fallback_date_used",
            recognizer=fallback.recognizer,
            matched_text=fallback.matched_text,
            replaced=primary.recognizer if primary else None,
        )
        return fallback

    def _assemble(
        self,
        text: str,
        found: PrimaryExtraction,
        date_candidate: DateCandidate | None,
    ) -> ParseResult:
        time_candidate = found.time
        category = found.category
        priority = found.priority

        breakdown = blend_confidence(
            found.title,
            date_confidence=date_candidate.confidence if date_candidate else None,
            time_confidence=time_candidate.confidence if time_candidate else None,
            category_confidence=category.confidence if category else None,
            priority_confidence=priority.confidence if priority else None,
            description=found.description,
            weights=self.settings.confidence_weights,
            description_min_remainder=self.settings.description_min_remainder,
        )

        alternatives: list[str] = []
        if date_candidate is not None:
            alternatives.extend(date_candidate.alternatives)
        if time_candidate is not None:
            alternatives.extend(time_candidate.alternatives)

        return ParseResult(
            original_text=text,
            title=found.title,
            description=found.description,
            date=date_candidate.value if date_candidate else None,
            time=time_candidate.value if time_candidate else None,
            category=category.label if category else None,
            priority=priority.label if priority else None,
            overall_confidence=breakdown.total,
            date_confidence=date_candidate.confidence if date_candidate else None,
            time_confidence=time_candidate.confidence if time_candidate else None,
            category_confidence=category.confidence if category else None,
            priority_confidence=priority.confidence if priority else None,
            alternatives=tuple(dict.fromkeys(alternatives)),
        )

    def parse(self, text: str, reference_time: datetime | None = None) -> ParseResult:
        """Parse one utterance.

        Args:
            text: Voice transcript, pasted message or quick-add text.
            reference_time: "Now" for relative expressions; defaults to the
                current local time, captured once per call.

        Returns:
            ParseResult. Fields that were not recognized are None.

        Raises:
            ValidationError: If ``text`` is not a string.
        """
        if not isinstance(text, str):
            raise ValidationError("text", f"expected str, got {type(text).__name__}")
        if not text.strip():
            return ParseResult.empty(text)

        reference = reference_time or datetime.now()
        found = self.primary.extract(text, reference.date())
        date_candidate = self._resolve_date(text, found.date, reference)
        result = self._assemble(text, found, date_candidate)

        logger.debug(
            "task_parsed",
            title=result.title,
            date=result.date.isoformat() if result.date else None,
            date_source=date_candidate.source if date_candidate else None,
            time=result.time.isoformat() if result.time else None,
            category=result.category,
            priority=result.priority,
            confidence=result.overall_confidence,
        )
        return result


_default_parser: TaskParser | None = None


def get_parser() -> TaskParser:
    """Shared parser built from the global settings."""
    global _default_parser
    if _default_parser is None:
        _default_parser = TaskParser()
    return _default_parser


def parse(text: str, reference_time: datetime | None = None) -> ParseResult:
    """Parse one utterance with the shared default parser.

    Convenience wrapper around ``TaskParser.parse``.

    Example:
        >>> from datetime import datetime
        >>> parse("call mom today", datetime(2026, 3, 4)).date.isoformat()
        '2026-03-04'
    """
    return get_parser().parse(text, reference_time)
