"""Keyword scoring for category and priority suggestions.

Each rule is scored as

    score = (matching words / keyword count) * rule weight

where a word matches a rule when it contains one of the rule's keywords or,
for words of at least ``min_fragment_length`` characters, is contained in
one ("bills" matches "bill", "vitamin" matches "vitamins"). Keywords with a
space are matched as phrases against the whole text. The best score wins and
ties go to the first-declared rule.

Example:
    >>> from taskparse.classification import suggest_category
    >>> suggest_category("buy groceries tomorrow").label
    'household'
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from taskparse.models import CategoryCandidate, PriorityCandidate

from .rules import CATEGORY_RULES, PRIORITY_RULES, KeywordRule

_WORD = re.compile(r"[a-z0-9']+")


def tokenize(text: str) -> list[str]:
    """Distinct lowercase words of ``text`` in order of first appearance."""
    return list(dict.fromkeys(_WORD.findall(text.lower())))


class KeywordClassifier:
    """Score text against an ordered table of keyword rules."""

    def __init__(self, rules: Sequence[KeywordRule], min_fragment_length: int = 4) -> None:
        self.rules = tuple(rules)
        self.min_fragment_length = min_fragment_length

    def _word_matches(self, word: str, keywords: Sequence[str]) -> bool:
        for keyword in keywords:
            if keyword in word:
                return True
            if len(word) >= self.min_fragment_length and word in keyword:
                return True
        return False

    def match_count(self, rule: KeywordRule, text: str) -> int:
        """Number of distinct words and phrases in ``text`` that match ``rule``."""
        lowered = text.lower()
        words = [k for k in rule.keywords if " " not in k]
        phrases = [k for k in rule.keywords if " " in k]
        count = sum(1 for word in tokenize(lowered) if self._word_matches(word, words))
        count += sum(1 for phrase in phrases if phrase in lowered)
        return count

    def score(self, rule: KeywordRule, text: str) -> float:
        """Rule score for ``text``, clamped to [0, 1]."""
        count = self.match_count(rule, text)
        return min(1.0, count / len(rule.keywords) * rule.weight)

    def best(self, text: str) -> tuple[str, float] | None:
        """Winning (label, score), or None when no rule matched."""
        best_label: str | None = None
        best_score = 0.0
        for rule in self.rules:
            score = self.score(rule, text)
            # Strict comparison keeps the first-declared rule on ties
            if score > best_score:
                best_label, best_score = rule.label, score
        if best_label is None:
            return None
        return best_label, best_score


_category_classifier: KeywordClassifier | None = None
_priority_classifier: KeywordClassifier | None = None


def _default_classifiers() -> tuple[KeywordClassifier, KeywordClassifier]:
    global _category_classifier, _priority_classifier
    if _category_classifier is None or _priority_classifier is None:
        _category_classifier = KeywordClassifier(CATEGORY_RULES)
        _priority_classifier = KeywordClassifier(PRIORITY_RULES)
    return _category_classifier, _priority_classifier


def suggest_category(
    text: str,
    classifier: KeywordClassifier | None = None,
) -> CategoryCandidate | None:
    """Best category for ``text`` using the built-in rules by default."""
    if classifier is None:
        classifier = _default_classifiers()[0]
    best = classifier.best(text)
    if best is None:
        return None
    return CategoryCandidate(label=best[0], confidence=best[1])


def suggest_priority(
    text: str,
    classifier: KeywordClassifier | None = None,
) -> PriorityCandidate | None:
    """Best priority for ``text`` using the built-in rules by default."""
    if classifier is None:
        classifier = _default_classifiers()[1]
    best = classifier.best(text)
    if best is None:
        return None
    return PriorityCandidate(label=best[0], confidence=best[1])
