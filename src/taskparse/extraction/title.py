"""Title and description derivation.

A title is what is left of the utterance once command phrases ("remind me
to ..."), every recognizable date and time phrase, and prepositions orphaned
by those removals are gone. Removal repeats until the text stops changing,
so the title never contains a phrase the recognizers would pick up again.

Example:
    >>> TitleExtractor().extract_title("Remind me to buy groceries tomorrow at 3 pm")
    'Buy groceries'
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from taskparse.config import Settings
from taskparse.config import settings as default_settings
from taskparse.patterns import DATE_RECOGNIZERS, TIME_RECOGNIZERS

from .fallback import FALLBACK_RECOGNIZERS

logger = logging.getLogger(__name__)

# Multi-word command phrases, stripped first
COMMAND_PHRASES = re.compile(
    r"^\s*(?:please\s+)?(?:remind\s+me\s+to|remember\s+to|add\s+(?:a\s+)?task\s+to|"
    r"create\s+(?:a\s+)?task\s+to|i\s+need\s+to|don'?t\s+forget\s+to|make\s+sure\s+to)\b[\s:,-]*",
    re.IGNORECASE,
)
# Single command words, stripped after the phrases
COMMAND_WORDS = re.compile(
    r"^\s*(?:remind|remember|add|create|note|task)\b[\s:,-]*",
    re.IGNORECASE,
)

CONNECTIVES = ("at", "on", "in", "by", "before", "after", "during", "for")

# Placeholder left where a date or time phrase was removed
_GAP = "\x00"
_CONNECTIVE = "|".join(CONNECTIVES)
_BEFORE_GAP = re.compile(rf"\b(?:(?:{_CONNECTIVE})\s+)+(?={_GAP})", re.IGNORECASE)
_AFTER_GAP = re.compile(
    rf"(?<={_GAP})(?:\s*\b(?:{_CONNECTIVE})\b)+(?=\s*(?:{_GAP}|$))",
    re.IGNORECASE,
)
_GAPS = re.compile(rf"\s*{_GAP}[\s{_GAP}]*")
_SPACE_BEFORE_PUNCT = re.compile(r"\s+([,;:.!?])")
_REPEATED_PUNCT = re.compile(r"([,;:])(?:\s*[,;:])+")
_EDGE_PUNCT = re.compile(r"^[\s,;:.!?\-]+|[\s,;:.!?\-]+$")
_WHITESPACE = re.compile(r"\s+")
_SENTENCE_BREAK = re.compile(r"(?<=[.!?;])\s+(?=\S)")


def strip_command(text: str) -> str:
    """Remove a leading command phrase such as "remind me to"."""
    text = COMMAND_PHRASES.sub("", text, count=1)
    return COMMAND_WORDS.sub("", text, count=1)


def capitalize_first(text: str) -> str:
    """Uppercase the first character, leaving the rest as typed."""
    return text[:1].upper() + text[1:]


class TitleExtractor:
    """Derive titles and descriptions from utterances.

    Args:
        settings: Source of the pass limit and description thresholds.
        patterns: Phrases to remove; defaults to every primary and fallback
            date recognizer and every time recognizer.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        patterns: Iterable[re.Pattern[str]] | None = None,
    ) -> None:
        self.settings = settings or default_settings
        if patterns is None:
            patterns = [
                r.pattern
                for r in (*DATE_RECOGNIZERS, *FALLBACK_RECOGNIZERS, *TIME_RECOGNIZERS)
            ]
        self.patterns = tuple(patterns)

    def schedule_spans(self, text: str) -> list[tuple[int, int]]:
        """Merged character spans of every date/time phrase in ``text``."""
        spans = sorted(
            match.span()
            for pattern in self.patterns
            for match in pattern.finditer(text)
            if match.end() > match.start()
        )
        merged: list[tuple[int, int]] = []
        for start, end in spans:
            if merged and start <= merged[-1][1]:
                merged[-1] = (merged[-1][0], max(merged[-1][1], end))
            else:
                merged.append((start, end))
        return merged

    def _strip_pass(self, text: str) -> str:
        pieces: list[str] = []
        cursor = 0
        for start, end in self.schedule_spans(text):
            pieces.append(text[cursor:start])
            pieces.append(f" {_GAP} ")
            cursor = end
        pieces.append(text[cursor:])
        text = "".join(pieces)

        text = _BEFORE_GAP.sub("", text)
        text = _AFTER_GAP.sub("", text)
        text = _GAPS.sub(" ", text)
        text = _WHITESPACE.sub(" ", text)
        text = _SPACE_BEFORE_PUNCT.sub(r"\1", text)
        text = _REPEATED_PUNCT.sub(r"\1", text)
        return _EDGE_PUNCT.sub("", text).strip()

    def strip_schedule(self, text: str) -> str:
        """Remove date/time phrases until nothing recognizable is left.

        Stops early once a pass leaves the text unchanged and never runs
        more than ``max_title_passes`` passes.
        """
        for _ in range(self.settings.max_title_passes):
            stripped = self._strip_pass(text)
            if stripped == text:
                break
            text = stripped
        else:
            logger.debug("Title stripping hit the pass limit for %r", text)
        return text

    def _first_sentence(self, text: str) -> str:
        parts = _SENTENCE_BREAK.split(text, maxsplit=1)
        return _EDGE_PUNCT.sub("", parts[0]).strip()

    def extract_title(self, text: str) -> str:
        """Task title for ``text``; never empty for non-blank input.

        Long inputs (at least ``description_min_length`` characters) keep
        only their first sentence so the rest can become the description.
        """
        title = self.strip_schedule(strip_command(text))
        if len(text) >= self.settings.description_min_length:
            title = self.strip_schedule(self._first_sentence(title))
        if not title:
            return text
        return capitalize_first(title)

    def extract_description(self, text: str, title: str) -> str | None:
        """Detail left over once the title and schedule phrases are removed.

        Returns:
            The remainder, or None when the input is short or nothing
            substantial is left.
        """
        if len(text) < self.settings.description_min_length:
            return None
        remainder = self.strip_schedule(strip_command(text.lower()))
        title_lower = title.lower()
        index = remainder.find(title_lower)
        if index == -1:
            return None
        remainder = remainder[:index] + remainder[index + len(title_lower) :]
        remainder = _EDGE_PUNCT.sub("", _WHITESPACE.sub(" ", remainder)).strip()
        if len(remainder) <= self.settings.description_min_remainder:
            return None
        return remainder
