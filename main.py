import os
import sys
from pathlib import Path

from doc_overlap.core.comparison import ComparisonOrchestrator
from doc_overlap.core.config import AnalyzerConfig
from doc_overlap.core.document_store import DocumentStore
from doc_overlap.core.logging_config import configure_logging, get_logger
from doc_overlap.utils.report import category_summary, matched_snippets, results_to_dataframe


def load_text_documents(store: DocumentStore, directory: Path) -> int:
    """Ingest every .txt file under a directory, keyed by its relative path."""
    count = 0
    for path in sorted(directory.rglob("*.txt")):
        store.ingest(path.relative_to(directory).as_posix(), path.read_text(encoding="utf-8", errors="replace"))
        count += 1
    return count


def main():
    config = AnalyzerConfig.from_env()
    configure_logging(config)
    logger = get_logger(__name__)

    # Directory containing the extracted .txt documents
    text_dir = Path(sys.argv[1] if len(sys.argv) > 1 else os.getenv("DOC_OVERLAP_INPUT_DIR", "."))
    if not text_dir.is_dir():
        print(f"Not a directory: {text_dir}")
        return 1

    # Step 1: Load documents
    store = DocumentStore()
    count = load_text_documents(store, text_dir)
    logger.info(f"Loaded {count} documents from {text_dir}", extra={'document_count': count})
    print(f"Found {count} text documents.")

    # Step 2: Compare all document pairs
    orchestrator = ComparisonOrchestrator(store, config)
    results = orchestrator.analyze()

    # Step 3: Display ranked pairs
    if not results:
        print("Need at least two documents to compare.")
        return 0

    texts = dict(store.documents())
    print(f"\nDocument pairs ranked by {config.ranking_metric} similarity:")
    print(results_to_dataframe(results).to_string(index=False))

    print("\nPairs per category:")
    for category, pairs in category_summary(results).items():
        print(f"{category}: {pairs}")

    print("\nLongest shared passages:")
    for result in results[:5]:
        for snippet in matched_snippets(result, texts[result.doc_a], limit=1):
            print(f"{result.doc_a} <-> {result.doc_b}: {snippet[:120]!r}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
