from typing import Dict, Iterable, List, Optional

import pandas as pd

from ..core.models import ComparisonResult, MatchCategory

REPORT_COLUMNS = ['doc_a', 'doc_b', 'similarity', 'match_type', 'match_count', 'longest_match']


def results_to_dataframe(results: Iterable[ComparisonResult]) -> pd.DataFrame:
    """
    Tabulate ranked results, one row per document pair, keeping their order.

    Args:
        results: Comparison results, typically the output of ``analyze``

    Returns:
        DataFrame with columns doc_a, doc_b, similarity, match_type,
        match_count and longest_match
    """
    rows = [
        {
            'doc_a': result.doc_a,
            'doc_b': result.doc_b,
            'similarity': round(result.similarity, 2),
            'match_type': result.match_type.value,
            'match_count': result.match_count,
            'longest_match': result.longest_match,
        }
        for result in results
    ]
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def category_summary(results: Iterable[ComparisonResult]) -> Dict[str, int]:
    """Number of pairs per category, every category present, in severity order."""
    summary = {category.value: 0 for category in MatchCategory}
    for result in results:
        summary[result.match_type.value] += 1
    return summary


def matched_snippets(result: ComparisonResult, text_a: str, limit: Optional[int] = None) -> List[str]:
    """
    Distinct passages of the first document covered by a result's spans.

    Longest passages come first; ties keep span order.
    """
    seen = set()
    snippets = []
    for span in sorted(result.matches, key=lambda s: s.length, reverse=True):
        snippet = text_a[span.start1:span.end1]
        if snippet in seen:
            continue
        seen.add(snippet)
        snippets.append(snippet)
        if limit is not None and len(snippets) >= limit:
            break
    return snippets
