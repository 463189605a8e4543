import re
from typing import List

from .validation import DocumentValidator

DEFAULT_MIN_TOKEN_LENGTH = 4

_NON_WORD_PATTERN = re.compile(r'[^\w\s]')


def tokenize(text: str, min_length: int = DEFAULT_MIN_TOKEN_LENGTH) -> List[str]:
    """
    Split raw text into normalized content words.

    The text is lower-cased, every character that is neither a word character
    (letter, digit, underscore) nor whitespace is deleted, and the remainder is
    split on whitespace runs. Tokens shorter than ``min_length`` are dropped,
    so the default keeps words of four or more characters.

    Args:
        text: Raw document text
        min_length: Minimum token length to keep

    Returns:
        Ordered list of tokens; empty for empty text

    Raises:
        InvalidArgumentError: If text is None or not a string
    """
    DocumentValidator.validate_text(text)
    stripped = _NON_WORD_PATTERN.sub('', text.lower())
    return [token for token in stripped.split() if len(token) >= min_length]
