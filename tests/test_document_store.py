"""Tests for DocumentStore."""

from __future__ import annotations

import pytest

from doc_overlap.core.document_store import DocumentStore
from doc_overlap.core.models import Document
from doc_overlap.core.validation import (
    DocumentNotFoundError,
    DocumentValidationError,
    InvalidArgumentError,
)


class TestIngest:
    def test_ingest_returns_document(self) -> None:
        store = DocumentStore()
        assert store.ingest("a.txt", "alpha") == Document("a.txt", "alpha")
        assert len(store) == 1
        assert "a.txt" in store

    def test_reingest_overwrites_and_keeps_position(self) -> None:
        store = DocumentStore()
        store.ingest("a.txt", "first")
        store.ingest("b.txt", "second")
        store.ingest("a.txt", "replaced")
        assert store.documents() == [("a.txt", "replaced"), ("b.txt", "second")]

    def test_empty_text_is_accepted(self) -> None:
        store = DocumentStore()
        store.ingest("empty.txt", "")
        assert store.get("empty.txt").text == ""

    def test_ingest_many_preserves_order(self, sample_documents: dict[str, str]) -> None:
        store = DocumentStore()
        store.ingest_many(sample_documents)
        assert store.ids == list(sample_documents)

    @pytest.mark.parametrize("doc_id", ["", "   ", None, 42])
    def test_invalid_id(self, doc_id: object) -> None:
        with pytest.raises(DocumentValidationError):
            DocumentStore().ingest(doc_id, "text")  # type: ignore[arg-type]

    def test_none_text(self) -> None:
        with pytest.raises(InvalidArgumentError):
            DocumentStore().ingest("a.txt", None)  # type: ignore[arg-type]

    def test_ingest_many_rejects_non_mapping(self) -> None:
        with pytest.raises(InvalidArgumentError):
            DocumentStore().ingest_many([("a.txt", "text")])  # type: ignore[arg-type]


class TestRemove:
    def test_remove(self, populated_store: DocumentStore) -> None:
        populated_store.remove("essay_a.txt")
        assert "essay_a.txt" not in populated_store
        assert len(populated_store) == 3

    def test_remove_unknown_id(self) -> None:
        with pytest.raises(DocumentNotFoundError):
            DocumentStore().remove("missing.txt")

    def test_not_found_is_a_key_error(self) -> None:
        with pytest.raises(KeyError):
            DocumentStore().get("missing.txt")

    def test_remove_all(self, populated_store: DocumentStore) -> None:
        populated_store.remove_all()
        assert len(populated_store) == 0
        assert populated_store.documents() == []


class TestIsolation:
    def test_stores_do_not_share_state(self) -> None:
        first = DocumentStore()
        second = DocumentStore()
        first.ingest("a.txt", "alpha")
        assert len(second) == 0

    def test_snapshot_is_detached(self, populated_store: DocumentStore) -> None:
        snapshot = populated_store.documents()
        populated_store.ingest("new.txt", "text")
        assert len(snapshot) == 4
