"""
Application layer.

Exports: DocumentLoader, LoadResult, parse_document, parse_documents, VectorizeService
"""

from nba_vectors.application.document_loader import (
    DocumentLoader,
    LoadResult,
    parse_document,
    parse_documents,
)
from nba_vectors.application.vectorize_service import VectorizeService

__all__ = [
    "DocumentLoader",
    "LoadResult",
    "parse_document",
    "parse_documents",
    "VectorizeService",
]
