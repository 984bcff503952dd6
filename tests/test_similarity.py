"""Unit tests for fuzzy similarity scoring."""

from __future__ import annotations

import pytest

from medbot.config.settings import GREETING_KEYWORDS, GREETING_THRESHOLD, HELP_KEYWORDS, HELP_THRESHOLD
from medbot.services.similarity import CONTAINMENT_SCORE, is_fuzzy_match, similarity


class TestSimilarity:
    def test_exact_match(self) -> None:
        assert similarity("help", "help", 0.85) == 1.0

    def test_case_and_whitespace_ignored(self) -> None:
        assert similarity("  HELP ", "help") == 1.0

    def test_containment(self) -> None:
        assert similarity("para", "paracetamol") == CONTAINMENT_SCORE
        assert similarity("paracetamol", "para") == CONTAINMENT_SCORE

    def test_edit_distance_score(self) -> None:
        assert similarity("docter", "doctor", 0.75) == pytest.approx(1 - 1 / 6)

    def test_below_threshold_is_zero(self) -> None:
        assert similarity("helo", "help", 0.85) == 0.0

    def test_threshold_is_inclusive(self) -> None:
        assert similarity("helo", "help", 0.7) == pytest.approx(0.75)

    def test_unrelated_words(self) -> None:
        assert similarity("insulin", "track") == 0.0


class TestIsFuzzyMatch:
    def test_typo_under_strict_threshold(self) -> None:
        assert not is_fuzzy_match("helo", HELP_KEYWORDS, HELP_THRESHOLD)

    def test_exact_keyword(self) -> None:
        assert is_fuzzy_match("menu", HELP_KEYWORDS, HELP_THRESHOLD)

    def test_close_greeting(self) -> None:
        assert is_fuzzy_match("hello", GREETING_KEYWORDS, GREETING_THRESHOLD)

    def test_empty_vocabulary(self) -> None:
        assert not is_fuzzy_match("hello", (), 0.8)
