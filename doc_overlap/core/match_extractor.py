from typing import List

from .logging_config import LoggerMixin
from .models import MatchSpan
from .validation import DocumentValidator, ParameterValidator, validate_inputs

DEFAULT_WINDOW_SIZE = 5


def find_matches(text1: str, text2: str, window_size: int = DEFAULT_WINDOW_SIZE) -> List[MatchSpan]:
    """
    Find literal substrings shared by two texts.

    Every ``window_size`` slice of ``text1`` is searched for in ``text2``; each
    occurrence is extended character by character while both texts agree.
    Every occurrence yields a span, so overlapping and nested spans are all
    reported. Spans are ordered by start offset in ``text1``, then in ``text2``.

    Args:
        text1: First raw text
        text2: Second raw text
        window_size: Minimum match length in characters

    Returns:
        List of MatchSpan, each at least ``window_size`` characters long

    Raises:
        ParameterValidationError: If window_size is not a positive integer
    """
    window_size = ParameterValidator.validate_positive_integer(window_size, "window_size")
    matches = []
    len1 = len(text1)
    len2 = len(text2)

    for i in range(len1 - window_size):
        pattern = text1[i:i + window_size]
        pos = text2.find(pattern)

        while pos >= 0:
            match_length = window_size
            while (i + match_length < len1
                   and pos + match_length < len2
                   and text1[i + match_length] == text2[pos + match_length]):
                match_length += 1

            matches.append(MatchSpan(i, i + match_length, pos, pos + match_length))
            pos = text2.find(pattern, pos + 1)

    return matches


class SubstringMatchExtractor(LoggerMixin):
    """
    Extracts the literal shared passages between two document texts using a
    sliding window with greedy extension.
    """

    @validate_inputs(
        window_size=lambda x: ParameterValidator.validate_positive_integer(x, "window_size")
    )
    def __init__(self, window_size: int = DEFAULT_WINDOW_SIZE):
        """
        Initialize the extractor.

        Args:
            window_size: Minimum character length for a match to be reported

        Raises:
            ParameterValidationError: If window_size is not a positive integer
        """
        self.window_size = window_size

    def extract(self, text1: str, text2: str) -> List[MatchSpan]:
        """
        Return the match spans between two texts.

        Raises:
            InvalidArgumentError: If either text is not a string
        """
        DocumentValidator.validate_text(text1, field="text1")
        DocumentValidator.validate_text(text2, field="text2")

        matches = find_matches(text1, text2, self.window_size)
        self.logger.debug(
            f"Found {len(matches)} matches (window={self.window_size}) between texts of "
            f"{len(text1)} and {len(text2)} characters"
        )
        return matches
