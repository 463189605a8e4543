from __future__ import annotations

import logging

import pytest

from doc_overlap.core.document_store import DocumentStore


@pytest.fixture
def sample_documents() -> dict[str, str]:
    return {
        "essay_a.txt": "The quick brown fox jumps over the lazy sleeping dog near the river bank.",
        "essay_b.txt": "The quick brown fox leaps over the lazy sleeping cat near the river bank.",
        "essay_c.txt": "Completely unrelated content about distributed database replication strategies.",
        "essay_d.txt": "",
    }


@pytest.fixture
def populated_store(sample_documents: dict[str, str]) -> DocumentStore:
    store = DocumentStore()
    store.ingest_many(sample_documents)
    return store


@pytest.fixture
def restore_root_logger():
    """Drop the handlers installed by setup_logging and restore the root level."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
