"""Category and priority keyword tables.

Rules are scored in declaration order and a tie goes to the rule declared
first, so the order of CATEGORY_RULES and PRIORITY_RULES is significant.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class KeywordRule:
    """A label with the keywords that suggest it.

    Attributes:
        label: Suggested value when this rule wins.
        keywords: Keywords; entries with a space match as whole phrases.
        weight: Rule confidence weight in [0, 1].
    """

    label: str
    keywords: tuple[str, ...]
    weight: float

    def __post_init__(self) -> None:
        if not self.keywords:
            raise ValueError(f"rule {self.label!r} has no keywords")
        if not 0.0 <= self.weight <= 1.0:
            raise ValueError(f"rule {self.label!r} weight {self.weight} not in [0, 1]")


class CategoryRule(KeywordRule):
    """Keyword rule suggesting a task category."""


class PriorityRule(KeywordRule):
    """Keyword rule suggesting a task priority."""


CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        "personal",
        (
            "personal", "myself", "me", "self", "own", "private", "individual",
            "read", "book", "hobby", "learn", "study", "relax", "rest",
        ),
        1.0,
    ),
    CategoryRule(
        "household",
        (
            "household", "home", "house", "clean", "tidy", "organize", "cook",
            "kitchen", "laundry", "dishes", "vacuum", "garbage", "trash",
            "groceries", "shopping", "buy", "store", "repair", "fix", "maintain",
            "wash", "sweep", "mop", "dust", "declutter", "garden", "yard",
        ),
        0.9,
    ),
    CategoryRule(
        "work",
        (
            "work", "office", "job", "meeting", "deadline", "project", "email",
            "call", "presentation", "report", "task", "business", "colleague",
            "boss", "client", "conference", "interview", "submit", "complete",
            "review", "schedule", "plan", "prepare", "send", "finish",
        ),
        0.95,
    ),
    CategoryRule(
        "family",
        (
            "family", "mom", "dad", "mother", "father", "parent", "child",
            "kids", "children", "spouse", "wife", "husband", "sibling",
            "brother", "sister", "grandparent", "visit", "birthday", "anniversary",
        ),
        0.9,
    ),
    CategoryRule(
        "health",
        (
            "health", "doctor", "medical", "appointment", "medicine", "pill",
            "pharmacy", "exercise", "gym", "workout", "dentist", "hospital",
            "checkup", "therapy", "physical", "mental", "wellness", "diet",
            "nutrition", "vitamins", "prescription", "surgery", "specialist",
        ),
        0.95,
    ),
    CategoryRule(
        "finance",
        (
            "finance", "money", "pay", "bill", "bank", "budget", "expense",
            "income", "tax", "investment", "loan", "credit", "debt", "saving",
            "account", "transfer", "deposit", "withdraw", "insurance", "mortgage",
            "rent", "utilities", "subscription", "purchase", "payment",
        ),
        0.95,
    ),
)

PRIORITY_RULES: tuple[PriorityRule, ...] = (
    PriorityRule("urgent", ("urgent", "asap", "immediately", "critical", "emergency"), 0.9),
    PriorityRule("high", ("important", "priority", "crucial", "vital", "essential", "must"), 0.8),
    PriorityRule("medium", ("normal", "regular", "standard", "moderate"), 0.7),
    PriorityRule("low", ("low", "minor", "optional", "when possible", "eventually"), 0.8),
)
