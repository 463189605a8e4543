import itertools
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import List, Mapping, Optional, Sequence, Tuple

from tqdm import tqdm

from .classifier import categorize
from .config import COSINE_METRIC, NGRAM_METRIC, AnalyzerConfig
from .document_store import DocumentStore
from .logging_config import LoggerMixin
from .match_extractor import SubstringMatchExtractor
from .models import ComparisonResult, Document
from .similarity import cosine_similarity, lexical_overlap_similarity, ngram_similarity
from .validation import (
    AnalysisCancelledError, AnalysisTimeoutError, DocumentValidator,
    handle_exceptions
)


class CancellationToken:
    """Cooperative cancellation flag checked between pair evaluations."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise AnalysisCancelledError("Analysis was cancelled")


class ComparisonOrchestrator(LoggerMixin):
    """
    Compares every unordered pair of documents in a store and ranks the pairs
    by similarity.

    Each call to ``analyze`` rebuilds the full result list from the current
    documents; nothing is carried over between runs.
    """

    def __init__(self, store: Optional[DocumentStore] = None, config: Optional[AnalyzerConfig] = None):
        """
        Initialize the orchestrator.

        Args:
            store: Document store to analyze; a new empty store when omitted
            config: Analyzer settings; defaults when omitted
        """
        self.store = store if store is not None else DocumentStore()
        self.config = config if config is not None else AnalyzerConfig()
        self.extractor = SubstringMatchExtractor(self.config.window_size)
        self._results: Tuple[ComparisonResult, ...] = ()

    @property
    def results(self) -> Tuple[ComparisonResult, ...]:
        """Ranked results of the most recent run."""
        return self._results

    def ingest(self, doc_id: str, text: str) -> Document:
        return self.store.ingest(doc_id, text)

    def remove(self, doc_id: str) -> None:
        self.store.remove(doc_id)

    def remove_all(self) -> None:
        self.store.remove_all()
        self._results = ()

    def score(self, text1: str, text2: str, corpus: Optional[Sequence[str]] = None) -> float:
        """
        Similarity of two texts in percent under the configured ranking metric.

        Cosine and n-gram scores are natively in [0, 1] and are scaled by 100.
        """
        metric = self.config.ranking_metric
        if metric == COSINE_METRIC:
            return 100.0 * cosine_similarity(
                text1, text2, corpus=corpus,
                containment=self.config.idf_containment,
                min_length=self.config.min_token_length,
            )
        if metric == NGRAM_METRIC:
            return 100.0 * ngram_similarity(
                text1, text2, n=self.config.ngram_size, min_length=self.config.min_token_length
            )
        return lexical_overlap_similarity(text1, text2, min_length=self.config.min_token_length)

    def compare_pair(self, doc_a: str, text_a: str, doc_b: str, text_b: str,
                     corpus: Optional[Sequence[str]] = None) -> ComparisonResult:
        """
        Score, classify and extract matches for one document pair.

        Args:
            doc_a: Id of the first document
            text_a: Raw text of the first document
            doc_b: Id of the second document
            text_b: Raw text of the second document
            corpus: Texts used for idf when ranking by cosine similarity

        Returns:
            ComparisonResult for the pair
        """
        similarity = self.score(text_a, text_b, corpus)

        if self.config.log_cosine_diagnostic:
            cosine = cosine_similarity(
                text_a, text_b,
                containment=self.config.idf_containment,
                min_length=self.config.min_token_length,
            )
            self.logger.debug(f"Cosine similarity for ({doc_a}, {doc_b}): {cosine:.4f}",
                              extra={'doc_a': doc_a, 'doc_b': doc_b})

        matches = self.extractor.extract(text_a, text_b)
        return ComparisonResult(
            doc_a=doc_a,
            doc_b=doc_b,
            similarity=similarity,
            match_type=categorize(similarity),
            matches=tuple(matches),
        )

    @handle_exceptions()
    def analyze(self, documents: Optional[Mapping[str, str]] = None,
                cancel_token: Optional[CancellationToken] = None) -> Tuple[ComparisonResult, ...]:
        """
        Compare all unordered document pairs and rank them.

        Args:
            documents: Mapping of id to text to analyze instead of the store
            cancel_token: Optional token checked between pair evaluations

        Returns:
            Results sorted by descending similarity; ties keep pair order

        Raises:
            InvalidArgumentError: If documents is not a mapping of id to text
            AnalysisCancelledError: If the token is cancelled mid-run
            AnalysisTimeoutError: If the configured time budget is exceeded
        """
        if documents is None:
            items = self.store.documents()
        else:
            items = list(DocumentValidator.validate_documents(documents).items())

        pairs = list(itertools.combinations(range(len(items)), 2))
        corpus = [text for _, text in items] if self.config.ranking_metric == COSINE_METRIC else None
        workers = self.config.resolve_max_workers(len(pairs))

        with self.log_operation("analyze", document_count=len(items), pair_count=len(pairs),
                                metric=self.config.ranking_metric, max_workers=workers):
            if len(pairs) == 0:
                self.logger.warning(f"Need at least 2 documents to compare, got {len(items)}")
                results = []
            elif workers > 1:
                results = self._analyze_parallel(items, pairs, corpus, workers, cancel_token)
            else:
                results = self._analyze_sequential(items, pairs, corpus, cancel_token)

            # Stable, so equal scores keep pair enumeration order
            results.sort(key=lambda result: result.similarity, reverse=True)
            self._results = tuple(results)

        return self._results

    def _deadline(self) -> Optional[float]:
        if self.config.timeout_seconds is None:
            return None
        return time.monotonic() + self.config.timeout_seconds

    def _check_interrupts(self, cancel_token: Optional[CancellationToken], deadline: Optional[float],
                          completed: int, total: int) -> None:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        if deadline is not None and time.monotonic() > deadline:
            raise AnalysisTimeoutError(self.config.timeout_seconds, completed, total)

    def _analyze_sequential(self, items: List[Tuple[str, str]], pairs: List[Tuple[int, int]],
                            corpus: Optional[List[str]],
                            cancel_token: Optional[CancellationToken]) -> List[ComparisonResult]:
        deadline = self._deadline()
        results = []

        for i, j in tqdm(pairs, desc="Comparing documents", unit="pair", disable=not self.config.show_progress):
            self._check_interrupts(cancel_token, deadline, len(results), len(pairs))
            (doc_a, text_a), (doc_b, text_b) = items[i], items[j]
            result = self.compare_pair(doc_a, text_a, doc_b, text_b, corpus)
            results.append(result)
            self.logger.debug(f"Compared ({doc_a}, {doc_b}): {result.similarity:.2f}% {result.match_type.value}",
                              extra={'doc_a': doc_a, 'doc_b': doc_b})

        return results

    def _compare_pair_worker(self, items: List[Tuple[str, str]], pair: Tuple[int, int],
                             corpus: Optional[List[str]],
                             cancel_token: Optional[CancellationToken]) -> ComparisonResult:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        i, j = pair
        (doc_a, text_a), (doc_b, text_b) = items[i], items[j]
        return self.compare_pair(doc_a, text_a, doc_b, text_b, corpus)

    def _analyze_parallel(self, items: List[Tuple[str, str]], pairs: List[Tuple[int, int]],
                          corpus: Optional[List[str]], max_workers: int,
                          cancel_token: Optional[CancellationToken]) -> List[ComparisonResult]:
        """
        Evaluate pairs on a thread pool.

        Workers only read the immutable pair texts; each result is written to
        its own pair slot, so the returned list is in pair order regardless of
        completion order.
        On timeout or cancellation the pool is shut down without waiting for
        evaluations already in progress.
        """
        deadline = self._deadline()
        slots: List[Optional[ComparisonResult]] = [None] * len(pairs)
        completed = 0

        self.logger.info(f"Comparing {len(pairs)} document pairs using {max_workers} workers")

        executor = ThreadPoolExecutor(max_workers=max_workers)
        try:
            future_to_index = {
                executor.submit(self._compare_pair_worker, items, pair, corpus, cancel_token): index
                for index, pair in enumerate(pairs)
            }
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            with tqdm(total=len(pairs), desc="Comparing documents", unit="pair",
                      disable=not self.config.show_progress) as progress:
                for future in as_completed(future_to_index, timeout=remaining):
                    slots[future_to_index[future]] = future.result()
                    completed += 1
                    progress.update(1)
                    if completed < len(pairs):
                        self._check_interrupts(cancel_token, deadline, completed, len(pairs))
        except FuturesTimeoutError:
            # Pair evaluations already running are abandoned, not awaited
            executor.shutdown(wait=False, cancel_futures=True)
            raise AnalysisTimeoutError(self.config.timeout_seconds, completed, len(pairs))
        except BaseException:
            executor.shutdown(wait=False, cancel_futures=True)
            raise

        executor.shutdown()
        return list(slots)


def analyze_documents(documents: Mapping[str, str],
                      config: Optional[AnalyzerConfig] = None,
                      cancel_token: Optional[CancellationToken] = None) -> Tuple[ComparisonResult, ...]:
    """Rank all pairs of ``documents`` with a throwaway store and orchestrator."""
    orchestrator = ComparisonOrchestrator(config=config)
    return orchestrator.analyze(documents, cancel_token=cancel_token)
