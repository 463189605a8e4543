"""
Term weighting over small ad-hoc corpora: normalized term frequency, inverse
document frequency and their TF-IDF product.
"""

import logging
import math
from collections import Counter
from typing import Dict, Sequence

from .models import TermVector
from .tokenizer import DEFAULT_MIN_TOKEN_LENGTH, tokenize
from .validation import DocumentValidator, ParameterValidator

logger = logging.getLogger(__name__)

SUBSTRING_CONTAINMENT = "substring"
TOKEN_CONTAINMENT = "token"
CONTAINMENT_MODES = (SUBSTRING_CONTAINMENT, TOKEN_CONTAINMENT)


def term_frequency(tokens: Sequence[str]) -> TermVector:
    """
    Count token occurrences normalized by sequence length.

    Args:
        tokens: Token sequence of one document

    Returns:
        Mapping token -> count / len(tokens); empty for an empty sequence
    """
    if not tokens:
        return {}
    total = len(tokens)
    return {token: count / total for token, count in Counter(tokens).items()}


def inverse_document_frequency(corpus: Sequence[str],
                               containment: str = SUBSTRING_CONTAINMENT,
                               min_length: int = DEFAULT_MIN_TOKEN_LENGTH) -> TermVector:
    """
    Compute ``ln(N / df)`` for every token found in the corpus.

    The vocabulary is the union of each document's tokenization; documents
    that tokenize to nothing contribute no vocabulary but still count towards
    ``N``.

    With ``"substring"`` containment a document contains a token when its raw
    text holds the token as a substring (so "cat" is found inside
    "category"), or when its own tokenization yields the token. With
    ``"token"`` containment only exact token-set membership counts.

    Args:
        corpus: Raw document texts
        containment: ``"substring"`` or ``"token"``
        min_length: Minimum token length passed to the tokenizer

    Returns:
        Mapping token -> idf weight

    Raises:
        InvalidArgumentError: If any corpus entry is not a string
        ParameterValidationError: If containment is unknown
    """
    ParameterValidator.validate_choice(containment, "containment", CONTAINMENT_MODES)
    texts = [DocumentValidator.validate_text(text, field="corpus") for text in corpus]
    token_sets = [set(tokenize(text, min_length)) for text in texts]
    total_documents = len(texts)

    idf: Dict[str, float] = {}
    for tokens in token_sets:
        for token in tokens:
            if token in idf:
                continue
            if containment == TOKEN_CONTAINMENT:
                count = sum(1 for doc_tokens in token_sets if token in doc_tokens)
            else:
                count = sum(
                    1 for text, doc_tokens in zip(texts, token_sets)
                    if token in text or token in doc_tokens
                )
            idf[token] = math.log(total_documents / count)

    logger.debug(f"Computed idf for {len(idf)} terms over {total_documents} documents")
    return idf


def tf_idf(tokens: Sequence[str], idf: TermVector) -> TermVector:
    """
    Weight each term frequency by its idf; terms missing from ``idf`` get 0.

    Args:
        tokens: Token sequence of one document
        idf: Corpus idf weights

    Returns:
        Mapping token -> tf * idf, with the same keys as the TF vector
    """
    return {token: weight * idf.get(token, 0.0) for token, weight in term_frequency(tokens).items()}
