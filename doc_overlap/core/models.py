"""
Value types shared by the overlap analysis components.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

# Token sequence produced by the tokenizer and term -> weight vector
# produced by the term-weighting engine.
TokenSequence = List[str]
TermVector = Dict[str, float]


@dataclass(frozen=True)
class Document:
    """A caller-owned document: a unique id (e.g. a filename) and its raw text."""

    id: str
    text: str


@dataclass(frozen=True)
class MatchSpan:
    """
    A literal substring shared by two texts.

    ``start1:end1`` indexes the first text and ``start2:end2`` the second; both
    ranges are half-open and have the same length.
    """

    start1: int
    end1: int
    start2: int
    end2: int

    @property
    def length(self) -> int:
        return self.end1 - self.start1

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.start1, self.end1, self.start2, self.end2)


class MatchCategory(Enum):
    """Coarse similarity band of a document pair."""

    EXACT = "Exact"
    HIGH = "High"
    MODERATE = "Moderate"
    LOW = "Low"


@dataclass(frozen=True)
class ComparisonResult:
    """
    Outcome of comparing one unordered document pair.

    Attributes:
        doc_a: Id of the first document of the pair (ingestion order)
        doc_b: Id of the second document of the pair
        similarity: Pair score in percent, 0 to 100
        match_type: Category derived from ``similarity``
        matches: Shared substrings, ordered by offset in ``doc_a`` then ``doc_b``
    """

    doc_a: str
    doc_b: str
    similarity: float
    match_type: MatchCategory
    matches: Tuple[MatchSpan, ...] = field(default_factory=tuple)

    @property
    def match_count(self) -> int:
        return len(self.matches)

    @property
    def longest_match(self) -> int:
        return max((span.length for span in self.matches), default=0)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a plain record suitable for JSON persistence."""
        return {
            'docA': self.doc_a,
            'docB': self.doc_b,
            'similarity': float(self.similarity),
            'matchType': self.match_type.value,
            'matches': [list(span.as_tuple()) for span in self.matches],
        }

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "ComparisonResult":
        """Rebuild a result from the record produced by ``to_dict``."""
        return cls(
            doc_a=record['docA'],
            doc_b=record['docB'],
            similarity=float(record['similarity']),
            match_type=MatchCategory(record['matchType']),
            matches=tuple(MatchSpan(*span) for span in record['matches']),
        )
