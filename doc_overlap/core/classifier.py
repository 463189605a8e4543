from typing import Union

from .models import MatchCategory

EXACT_THRESHOLD = 90
HIGH_THRESHOLD = 70
MODERATE_THRESHOLD = 50


def categorize(similarity: float) -> MatchCategory:
    """
    Map a percent similarity to its category.

    Thresholds are strict: exactly 90, 70 and 50 fall into the lower band.
    """
    if similarity > EXACT_THRESHOLD:
        return MatchCategory.EXACT
    if similarity > HIGH_THRESHOLD:
        return MatchCategory.HIGH
    if similarity > MODERATE_THRESHOLD:
        return MatchCategory.MODERATE
    return MatchCategory.LOW


def match_css_class(value: Union[MatchCategory, float]) -> str:
    """Style class for a category or a raw similarity, e.g. ``"match-exact"``."""
    category = value if isinstance(value, MatchCategory) else categorize(value)
    return f"match-{category.value.lower()}"
