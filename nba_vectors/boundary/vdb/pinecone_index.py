"""
Pinecone index adapters.

Two independently provisioned indices:
- dense: integrated embedding, accepts raw text records (upsert_records)
- sparse: accepts explicit sparse vectors (upsert)

SDK errors are translated into the pipeline's error taxonomy so the upload
pipeline can decide between retry, per-target abort and run failure.

Dependencies: pinecone, nba_vectors.core.exceptions, nba_vectors.models
System role: Vector store adapter for the upload pipeline and smoke tests
"""

import logging
from typing import Any

from pinecone.exceptions import PineconeApiException, PineconeException

from nba_vectors.core.exceptions import (
    IndexConfigurationError,
    RateLimitError,
    TransientServiceError,
    VectorStoreError,
)
from nba_vectors.models import Document, Hit, SparseVector

logger = logging.getLogger(__name__)

SPARSE_ID_SUFFIX = "_sparse"

# Lowercased fragments of service messages that mean the index was created
# with the wrong vector type or without integrated embedding.
_MISCONFIGURATION_MARKERS = (
    "dense vectors must contain at least one non-zero value",
    "sparse vectors are not supported",
    "does not support sparse",
    "integrated inference is not configured",
    "does not have integrated inference",
)

_SDK_ERRORS = (PineconeApiException, PineconeException)


def _status_code(exc: Exception) -> int | None:
    """HTTP status of an SDK error; newer SDKs use status_code, older ones status."""
    for attribute in ("status_code", "status"):
        value = getattr(exc, attribute, None)
        if isinstance(value, int):
            return value
    return None


def translate_error(exc: Exception, target: str, operation: str) -> Exception:
    """
    Map a Pinecone SDK exception to the pipeline error taxonomy.

    Args:
        exc: Exception raised by the SDK (PineconeApiException or PineconeException)
        target: Index name
        operation: Operation that failed (upsert, query, describe)

    Returns:
        Exception: RateLimitError, TransientServiceError,
            IndexConfigurationError or VectorStoreError
    """
    status = _status_code(exc)
    text = f"{exc} {getattr(exc, 'body', '') or ''}".lower()

    if status == 429:
        return RateLimitError(f"Rate limit reached on {target}", status=status, target=target)
    if status is not None and status >= 500:
        return TransientServiceError(
            f"Index service error on {target}: {exc}", status=status, target=target
        )
    if any(marker in text for marker in _MISCONFIGURATION_MARKERS):
        return IndexConfigurationError(
            f"Index '{target}' rejected the payload; check its vector type: {exc}",
            target=target,
        )
    return VectorStoreError(
        f"Pinecone {operation} failed on {target}: {exc}",
        operation=operation,
        details={"target": target, "status": status},
    )


def dense_record(document: Document) -> dict[str, Any]:
    """Shape a document as an integrated-embedding record."""
    return {
        "_id": document.id,
        "text": document.text,
        "category": document.category,
        **document.metadata,
    }


def sparse_record(document: Document, sparse_vector: SparseVector) -> dict[str, Any]:
    """
    Shape a document and its sparse vector as an upsert entry.

    Raises:
        ValueError: When the vector is empty (the index rejects those)
    """
    if sparse_vector.is_empty:
        raise ValueError(f"Document {document.id} has an empty sparse vector")
    return {
        "id": f"{document.id}{SPARSE_ID_SUFFIX}",
        "sparse_values": sparse_vector.to_payload(),
        "metadata": {
            "text": document.text,
            "category": document.category,
            "searchType": "sparse",
            **document.metadata,
        },
    }


def _read(obj: Any, key: str, default: Any = None) -> Any:
    """Read a field from an SDK response object or a plain dict."""
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


def _as_dict(obj: Any) -> dict[str, Any]:
    if obj is None:
        return {}
    if isinstance(obj, dict):
        return obj
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return dict(obj)


class PineconeDenseIndex:
    """Dense index with integrated (server-side) embedding."""

    def __init__(self, index: Any, name: str, namespace: str) -> None:
        """
        Initialize dense index adapter.

        Args:
            index: pinecone Index handle
            name: Index name (for logs and errors)
            namespace: Namespace records are written to
        """
        self._index = index
        self.name = name
        self._namespace = namespace

    def upsert_batch(self, records: list[dict[str, Any]]) -> None:
        try:
            self._index.upsert_records(self._namespace, records)
        except _SDK_ERRORS as e:
            raise translate_error(e, self.name, "upsert") from e

    def search(self, text: str, top_k: int = 5) -> list[Hit]:
        """
        Search by text; the service embeds the query.

        Returns:
            list[Hit]: Hits in score order

        Raises:
            VectorStoreError: When the search fails
        """
        try:
            response = self._index.search_records(
                namespace=self._namespace,
                query={"inputs": {"text": text}, "top_k": top_k},
            )
        except _SDK_ERRORS as e:
            raise translate_error(e, self.name, "query") from e

        hits = _read(_read(response, "result"), "hits", []) or []
        return [
            Hit(
                id=str(_read(hit, "_id", "")),
                score=float(_read(hit, "_score", 0.0)),
                fields=_as_dict(_read(hit, "fields")),
            )
            for hit in hits
        ]

    def describe_stats(self) -> dict[str, Any]:
        try:
            return _as_dict(self._index.describe_index_stats())
        except _SDK_ERRORS as e:
            raise translate_error(e, self.name, "describe") from e


class PineconeSparseIndex:
    """Sparse index holding explicit TF-IDF vectors."""

    def __init__(self, index: Any, name: str, namespace: str = "") -> None:
        """
        Initialize sparse index adapter.

        Args:
            index: pinecone Index handle
            name: Index name (for logs and errors)
            namespace: Namespace vectors are written to ("" is the default namespace)
        """
        self._index = index
        self.name = name
        self._namespace = namespace

    def upsert_batch(self, records: list[dict[str, Any]]) -> None:
        try:
            self._index.upsert(vectors=records, namespace=self._namespace)
        except _SDK_ERRORS as e:
            raise translate_error(e, self.name, "upsert") from e

    def search(self, sparse_vector: SparseVector, top_k: int = 5) -> list[Hit]:
        """
        Query with a sparse vector.

        Returns:
            list[Hit]: Matches in score order (empty for an empty query vector)

        Raises:
            VectorStoreError: When the query fails
        """
        if sparse_vector.is_empty:
            logger.info(f"{__name__}:search - Query has no in-vocabulary terms, skipping {self.name}")
            return []
        try:
            response = self._index.query(
                namespace=self._namespace,
                sparse_vector=sparse_vector.to_payload(),
                top_k=top_k,
                include_metadata=True,
            )
        except _SDK_ERRORS as e:
            raise translate_error(e, self.name, "query") from e

        matches = _read(response, "matches", []) or []
        return [
            Hit(
                id=str(_read(match, "id", "")),
                score=float(_read(match, "score", 0.0)),
                fields=_as_dict(_read(match, "metadata")),
            )
            for match in matches
        ]

    def describe_stats(self) -> dict[str, Any]:
        try:
            return _as_dict(self._index.describe_index_stats())
        except _SDK_ERRORS as e:
            raise translate_error(e, self.name, "describe") from e
