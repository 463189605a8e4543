"""Tests for categorize() thresholds and style classes."""

from __future__ import annotations

import pytest

from doc_overlap.core.classifier import categorize, match_css_class
from doc_overlap.core.models import MatchCategory


class TestCategorize:
    @pytest.mark.parametrize(
        ("similarity", "expected"),
        [
            (100.0, MatchCategory.EXACT),
            (90.0001, MatchCategory.EXACT),
            (90.0, MatchCategory.HIGH),
            (70.5, MatchCategory.HIGH),
            (70.0, MatchCategory.MODERATE),
            (200 / 3, MatchCategory.MODERATE),
            (50.0001, MatchCategory.MODERATE),
            (50.0, MatchCategory.LOW),
            (0.0, MatchCategory.LOW),
        ],
    )
    def test_boundaries_are_strict(self, similarity: float, expected: MatchCategory) -> None:
        assert categorize(similarity) is expected


class TestMatchCssClass:
    @pytest.mark.parametrize(
        ("category", "expected"),
        [
            (MatchCategory.EXACT, "match-exact"),
            (MatchCategory.HIGH, "match-high"),
            (MatchCategory.MODERATE, "match-moderate"),
            (MatchCategory.LOW, "match-low"),
        ],
    )
    def test_from_category(self, category: MatchCategory, expected: str) -> None:
        assert match_css_class(category) == expected

    def test_from_score(self) -> None:
        assert match_css_class(60) == "match-moderate"
        assert match_css_class(95.5) == "match-exact"
