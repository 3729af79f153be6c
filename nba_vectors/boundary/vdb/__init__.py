"""
Vector database boundary layer.

Provides Pinecone adapters for the two upload targets:
- PineconeDenseIndex: integrated embedding, raw text records
- PineconeSparseIndex: explicit TF-IDF sparse vectors

Dependencies: pinecone
System role: Vector store adapters for upload and smoke-test queries
"""

from nba_vectors.boundary.vdb.index_client import DenseSearchIndex, IndexWriter, SparseSearchIndex


def get_index_targets(*args, **kwargs):
    """Lazy import for the Pinecone factory so core modules import without the SDK set up."""
    from nba_vectors.boundary.vdb.index_factory import get_index_targets as factory

    return factory(*args, **kwargs)


__all__ = [
    "IndexWriter",
    "DenseSearchIndex",
    "SparseSearchIndex",
    "get_index_targets",
]
