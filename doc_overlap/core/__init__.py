"""
Core functionality for document overlap analysis.

This package contains the main algorithms and processing logic:
- Tokenization and TF-IDF term weighting
- Lexical-overlap, cosine and n-gram similarity
- Sliding-window substring match extraction
- Match categorization and pairwise ranking
"""

from .classifier import categorize, match_css_class
from .comparison import CancellationToken, ComparisonOrchestrator, analyze_documents
from .config import AnalyzerConfig
from .document_store import DocumentStore
from .logging_config import setup_logging, configure_logging, get_logger, LoggerMixin
from .match_extractor import SubstringMatchExtractor, find_matches
from .models import ComparisonResult, Document, MatchCategory, MatchSpan
from .similarity import (
    calculate_similarity, cosine_similarity, generate_ngrams,
    jaccard_similarity, lexical_overlap_similarity, ngram_similarity
)
from .term_weighting import inverse_document_frequency, term_frequency, tf_idf
from .tokenizer import tokenize
from .validation import (
    ValidationError, InvalidArgumentError, DocumentValidationError,
    ParameterValidationError, DocumentNotFoundError,
    AnalysisCancelledError, AnalysisTimeoutError,
    DocumentValidator, ParameterValidator,
    validate_inputs, handle_exceptions
)

__all__ = [
    'categorize',
    'match_css_class',
    'CancellationToken',
    'ComparisonOrchestrator',
    'analyze_documents',
    'AnalyzerConfig',
    'DocumentStore',
    'setup_logging',
    'get_logger',
    'LoggerMixin',
    'configure_logging',
    'SubstringMatchExtractor',
    'find_matches',
    'ComparisonResult',
    'Document',
    'MatchCategory',
    'MatchSpan',
    'calculate_similarity',
    'cosine_similarity',
    'generate_ngrams',
    'jaccard_similarity',
    'lexical_overlap_similarity',
    'ngram_similarity',
    'inverse_document_frequency',
    'term_frequency',
    'tf_idf',
    'tokenize',
    'ValidationError',
    'InvalidArgumentError',
    'DocumentValidationError',
    'ParameterValidationError',
    'DocumentNotFoundError',
    'AnalysisCancelledError',
    'AnalysisTimeoutError',
    'DocumentValidator',
    'ParameterValidator',
    'validate_inputs',
    'handle_exceptions'
]
