import threading
from typing import Dict, List, Mapping, Tuple

from .logging_config import LoggerMixin
from .models import Document
from .validation import DocumentNotFoundError, DocumentValidator


class DocumentStore(LoggerMixin):
    """
    Session-scoped store of plain-text documents keyed by id.

    Ids act as primary keys: ingesting an existing id replaces its text but
    keeps its original position in the ingestion order. Each analysis session
    owns its own store.
    """

    def __init__(self):
        self._documents: Dict[str, str] = {}
        self._lock = threading.Lock()

    def ingest(self, doc_id: str, text: str) -> Document:
        """
        Insert or overwrite a document.

        Args:
            doc_id: Unique document id, e.g. the source filename
            text: Already-extracted plain text

        Returns:
            The stored Document

        Raises:
            DocumentValidationError: If the id is invalid
            InvalidArgumentError: If the text is not a string
        """
        DocumentValidator.validate_document_id(doc_id)
        DocumentValidator.validate_text(text)

        with self._lock:
            replaced = doc_id in self._documents
            self._documents[doc_id] = text

        if replaced:
            self.logger.info(f"Replaced document {doc_id} ({len(text)} characters)", extra={'document_id': doc_id})
        else:
            self.logger.info(f"Ingested document {doc_id} ({len(text)} characters)", extra={'document_id': doc_id})
        return Document(doc_id, text)

    def ingest_many(self, documents: Mapping[str, str]) -> List[Document]:
        validated = DocumentValidator.validate_documents(documents)
        return [self.ingest(doc_id, text) for doc_id, text in validated.items()]

    def get(self, doc_id: str) -> Document:
        with self._lock:
            if doc_id not in self._documents:
                raise DocumentNotFoundError(doc_id)
            return Document(doc_id, self._documents[doc_id])

    def remove(self, doc_id: str) -> None:
        """
        Remove one document.

        Raises:
            DocumentNotFoundError: If no document has this id
        """
        with self._lock:
            if doc_id not in self._documents:
                raise DocumentNotFoundError(doc_id)
            del self._documents[doc_id]
        self.logger.info(f"Removed document {doc_id}", extra={'document_id': doc_id})

    def remove_all(self) -> None:
        with self._lock:
            count = len(self._documents)
            self._documents.clear()
        self.logger.info(f"Cleared {count} documents", extra={'document_count': count})

    def documents(self) -> List[Tuple[str, str]]:
        """Snapshot of ``(id, text)`` pairs in ingestion order."""
        with self._lock:
            return list(self._documents.items())

    @property
    def ids(self) -> List[str]:
        with self._lock:
            return list(self._documents)

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)

    def __contains__(self, doc_id) -> bool:
        with self._lock:
            return doc_id in self._documents
