"""Tests for keyword-based category and priority suggestions."""

import pytest

from taskparse.classification import (
    CATEGORY_RULES,
    PRIORITY_RULES,
    CategoryRule,
    KeywordClassifier,
    KeywordRule,
    suggest_category,
    suggest_priority,
    tokenize,
)


class TestKeywordRule:
    """Tests for rule validation."""

    def test_rules_are_frozen(self):
        """Rule tables are shared and must not be mutated."""
        rule = CATEGORY_RULES[0]
        with pytest.raises(AttributeError):
            rule.weight = 0.1  # type: ignore[misc]

    def test_empty_keywords_rejected(self):
        """A rule needs at least one keyword."""
        with pytest.raises(ValueError, match="no keywords"):
            KeywordRule("empty", (), 0.5)

    def test_weight_bounds(self):
        """Weights must be in [0, 1]."""
        with pytest.raises(ValueError):
            CategoryRule("heavy", ("x",), 1.5)

    def test_table_order(self):
        """Declaration order decides ties, so it is part of the contract."""
        assert [r.label for r in CATEGORY_RULES] == [
            "personal",
            "household",
            "work",
            "family",
            "health",
            "finance",
        ]
        assert [r.label for r in PRIORITY_RULES] == ["urgent", "high", "medium", "low"]


class TestTokenize:
    """Tests for word splitting."""

    def test_distinct_lowercase_words(self):
        """Words are lowercased and counted once."""
        assert tokenize("Buy milk, BUY eggs") == ["buy", "milk", "eggs"]

    def test_keeps_apostrophes(self):
        """Contractions stay one word."""
        assert tokenize("don't forget") == ["don't", "forget"]


class TestKeywordClassifier:
    """Tests for scoring."""

    def test_score_formula(self):
        """Score is matches / keyword count * weight."""
        rule = KeywordRule("fruit", ("apple", "pear", "plum", "kiwi"), 0.8)
        classifier = KeywordClassifier([rule])
        assert classifier.score(rule, "apple and pear") == pytest.approx(0.4)

    def test_word_containing_keyword_matches(self):
        """A word containing a keyword matches it."""
        rule = KeywordRule("fruit", ("apple",), 1.0)
        assert KeywordClassifier([rule]).match_count(rule, "crabapples") == 1

    def test_long_fragment_inside_keyword_matches(self):
        """A long enough word contained in a keyword matches it."""
        rule = KeywordRule("health", ("vitamins",), 1.0)
        assert KeywordClassifier([rule]).match_count(rule, "vitamin") == 1

    def test_short_fragment_does_not_match(self):
        """Short words like "the" must not match "father"."""
        rule = KeywordRule("family", ("father",), 1.0)
        classifier = KeywordClassifier([rule], min_fragment_length=4)
        assert classifier.match_count(rule, "call the plumber") == 0

    def test_short_fragment_limit_is_configurable(self):
        """With a lower limit short words match again."""
        rule = KeywordRule("family", ("father",), 1.0)
        classifier = KeywordClassifier([rule], min_fragment_length=1)
        assert classifier.match_count(rule, "the") == 1

    def test_phrases_match_whole_text(self):
        """Keywords with a space match as phrases."""
        rule = KeywordRule("low", ("when possible",), 1.0)
        assert KeywordClassifier([rule]).match_count(rule, "Fix it when possible") == 1

    def test_distinct_words_counted_once(self):
        """Repeating a word does not raise the score."""
        rule = KeywordRule("fruit", ("apple", "pear"), 1.0)
        assert KeywordClassifier([rule]).match_count(rule, "apple apple apple") == 1

    def test_score_clamped(self):
        """Scores never exceed 1."""
        rule = KeywordRule("greedy", ("a",), 1.0)
        assert KeywordClassifier([rule]).score(rule, "a aa aaa") == 1.0

    def test_no_match_is_none(self):
        """No matching rule means no suggestion."""
        rule = KeywordRule("fruit", ("apple",), 1.0)
        assert KeywordClassifier([rule]).best("xyz") is None

    def test_ties_go_to_first_declared_rule(self):
        """Two rules engineered to score equally resolve to the first one."""
        alpha = KeywordRule("alpha", ("apple", "pear"), 0.8)
        beta = KeywordRule("beta", ("plum", "kiwi"), 0.8)
        text = "apple and plum"

        assert KeywordClassifier([alpha, beta]).best(text) == ("alpha", pytest.approx(0.4))
        assert KeywordClassifier([beta, alpha]).best(text) == ("beta", pytest.approx(0.4))

    def test_highest_score_wins(self):
        """A higher score beats declaration order."""
        alpha = KeywordRule("alpha", ("apple", "pear"), 0.5)
        beta = KeywordRule("beta", ("plum", "kiwi"), 0.9)
        assert KeywordClassifier([alpha, beta]).best("apple and plum")[0] == "beta"


class TestSuggestions:
    """Tests for the built-in tables."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("buy groceries tomorrow", "household"),
            ("do the laundry", "household"),
            ("call the dentist", "health"),
            ("pay the electricity bill", "finance"),
            ("submit the quarterly report", "work"),
            ("visit grandma for her birthday", "family"),
        ],
    )
    def test_category(self, text, expected):
        """Obvious tasks should get the obvious category."""
        assert suggest_category(text).label == expected

    def test_category_confidence(self):
        """The confidence is the winning rule's score."""
        candidate = suggest_category("buy groceries")
        assert candidate.confidence == pytest.approx(2 / 27 * 0.9)

    def test_no_category(self):
        """Text without keywords gets no suggestion."""
        assert suggest_category("zzz qqq") is None

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("urgent: fix the leak", "urgent"),
            ("call back ASAP", "urgent"),
            ("important meeting notes", "high"),
            ("regular checkup", "medium"),
            ("clean the attic eventually", "low"),
            ("water plants when possible", "low"),
        ],
    )
    def test_priority(self, text, expected):
        """Priority words map to their level."""
        assert suggest_priority(text).label == expected

    def test_no_priority(self):
        """No priority words means no suggestion."""
        assert suggest_priority("water the plants") is None

    def test_custom_classifier(self):
        """A caller-supplied classifier replaces the built-in table."""
        classifier = KeywordClassifier([CategoryRule("garden", ("plants",), 1.0)])
        assert suggest_category("water the plants", classifier).label == "garden"
