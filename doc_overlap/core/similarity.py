"""
Pairwise document similarity metrics.

``lexical_overlap_similarity`` is the authoritative ranking score. Cosine
similarity over TF-IDF vectors and word n-gram Jaccard similarity are
available as alternative or diagnostic scores.
"""

import logging
from typing import List, Optional, Sequence, Set

import numpy as np

from .models import TermVector
from .term_weighting import SUBSTRING_CONTAINMENT, inverse_document_frequency, tf_idf
from .tokenizer import DEFAULT_MIN_TOKEN_LENGTH, tokenize

logger = logging.getLogger(__name__)

DEFAULT_NGRAM_SIZE = 4


def lexical_overlap_similarity(text1: str, text2: str,
                               min_length: int = DEFAULT_MIN_TOKEN_LENGTH) -> float:
    """
    Dice-style overlap of the two texts' tokens, in percent.

    Every token of ``text1`` that occurs anywhere in ``text2`` counts once per
    occurrence in ``text1``. The score is ``2 * common / (len1 + len2) * 100``,
    0 when both texts have no tokens, and capped at 100.

    Args:
        text1: First raw text
        text2: Second raw text
        min_length: Minimum token length passed to the tokenizer

    Returns:
        Similarity in [0, 100]
    """
    tokens1 = tokenize(text1, min_length)
    tokens2 = tokenize(text2, min_length)

    total = len(tokens1) + len(tokens2)
    if total == 0:
        return 0.0

    vocabulary2 = set(tokens2)
    common = sum(1 for token in tokens1 if token in vocabulary2)
    return min((2.0 * common) / total * 100, 100.0)


calculate_similarity = lexical_overlap_similarity


def _aligned_vectors(vector1: TermVector, vector2: TermVector):
    """Project two term vectors onto the sorted union of their keys."""
    basis = sorted(set(vector1) | set(vector2))
    return (
        np.array([vector1.get(term, 0.0) for term in basis], dtype=np.float64),
        np.array([vector2.get(term, 0.0) for term in basis], dtype=np.float64),
    )


def cosine_similarity(doc1: str, doc2: str,
                      corpus: Optional[Sequence[str]] = None,
                      containment: str = SUBSTRING_CONTAINMENT,
                      min_length: int = DEFAULT_MIN_TOKEN_LENGTH) -> float:
    """
    Cosine of the angle between the TF-IDF vectors of two documents.

    IDF is computed over ``[doc1, doc2]`` unless a wider corpus is given; in
    both cases the corpus is lower-cased first. In a two-document corpus every
    shared term has zero idf, so the score is only informative when a wider
    corpus is supplied.

    Returns:
        Similarity in [0, 1]; 0 when either vector has zero magnitude
    """
    if corpus is None:
        corpus = [doc1, doc2]
    idf = inverse_document_frequency([text.lower() for text in corpus], containment, min_length)

    vector1, vector2 = _aligned_vectors(
        tf_idf(tokenize(doc1, min_length), idf),
        tf_idf(tokenize(doc2, min_length), idf),
    )

    magnitude1 = np.linalg.norm(vector1)
    magnitude2 = np.linalg.norm(vector2)
    if magnitude1 == 0 or magnitude2 == 0:
        return 0.0

    score = float(np.dot(vector1, vector2) / (magnitude1 * magnitude2))
    return min(max(score, 0.0), 1.0)


def generate_ngrams(tokens: Sequence[str], n: int) -> List[str]:
    """Space-joined word n-grams of a token sequence, in order."""
    return [' '.join(tokens[i:i + n]) for i in range(len(tokens) - n + 1)]


def jaccard_similarity(set1: Set[str], set2: Set[str]) -> float:
    union = set1 | set2
    if not union:
        return 0.0
    return len(set1 & set2) / len(union)


def ngram_similarity(text1: str, text2: str, n: int = DEFAULT_NGRAM_SIZE,
                     min_length: int = DEFAULT_MIN_TOKEN_LENGTH) -> float:
    """
    Jaccard similarity of the word n-gram sets of two texts.

    Returns:
        Similarity in [0, 1]; 0 when neither text has ``n`` tokens
    """
    ngrams1 = set(generate_ngrams(tokenize(text1, min_length), n))
    ngrams2 = set(generate_ngrams(tokenize(text2, min_length), n))
    return jaccard_similarity(ngrams1, ngrams2)
