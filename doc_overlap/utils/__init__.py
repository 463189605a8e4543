"""
Reporting helpers for analysis results.
"""

from .report import results_to_dataframe, category_summary, matched_snippets

__all__ = [
    'results_to_dataframe',
    'category_summary',
    'matched_snippets'
]
