"""Keyword-based category and priority suggestions."""

from .rules import CATEGORY_RULES, PRIORITY_RULES, CategoryRule, KeywordRule, PriorityRule
from .scorer import KeywordClassifier, suggest_category, suggest_priority, tokenize

__all__ = [
    "CATEGORY_RULES",
    "PRIORITY_RULES",
    "CategoryRule",
    "KeywordClassifier",
    "KeywordRule",
    "PriorityRule",
    "suggest_category",
    "suggest_priority",
    "tokenize",
]
