"""
Index client interfaces.

Structural types the upload pipeline and the vectorize service depend on,
so the Pinecone adapters can be swapped for fakes in tests.

Dependencies: typing (stdlib)
System role: Contract between core logic and the vector store boundary
"""

from typing import Any, Protocol

from nba_vectors.models import Hit, SparseVector


class IndexWriter(Protocol):
    """Index target that accepts batch upserts."""

    name: str

    def upsert_batch(self, records: list[dict[str, Any]]) -> None:
        """
        Upsert one batch of records.

        Raises:
            RateLimitError: Service answered 429
            TransientServiceError: Service answered 5xx
            IndexConfigurationError: Index shape does not match the payload
            VectorStoreError: Any other failure
        """
        ...

    def describe_stats(self) -> dict[str, Any]:
        ...


class DenseSearchIndex(IndexWriter, Protocol):
    """Index computing embeddings server-side and searchable by text."""

    def search(self, text: str, top_k: int = 5) -> list[Hit]:
        ...


class SparseSearchIndex(IndexWriter, Protocol):
    """Index storing explicit sparse vectors."""

    def search(self, sparse_vector: SparseVector, top_k: int = 5) -> list[Hit]:
        ...
