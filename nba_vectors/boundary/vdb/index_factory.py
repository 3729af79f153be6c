"""
Index factory for the dense and sparse Pinecone targets.

Creates one Pinecone client and wraps both indices in adapters.

Dependencies: pinecone, nba_vectors.configs
System role: Vector store instantiation
"""

import logging

from pinecone import Pinecone

from nba_vectors.boundary.vdb.pinecone_index import PineconeDenseIndex, PineconeSparseIndex
from nba_vectors.configs.vector_store import PineconeSettings
from nba_vectors.core.exceptions import SettingsError

logger = logging.getLogger(__name__)


def get_index_targets(settings: PineconeSettings) -> tuple[PineconeDenseIndex, PineconeSparseIndex]:
    """
    Build the dense and sparse index adapters.

    Args:
        settings: Pinecone credentials and index names

    Returns:
        tuple[PineconeDenseIndex, PineconeSparseIndex]: Upload targets

    Raises:
        SettingsError: If the API key is not configured
    """
    api_key = settings.api_key.get_secret_value() if settings.api_key else ""
    if not api_key:
        raise SettingsError("PINECONE_API_KEY environment variable not set")

    client = Pinecone(api_key=api_key)
    logger.info(
        f"{__name__}:get_index_targets - Targeting indexes "
        f"{settings.dense_index} (dense) and {settings.sparse_index} (sparse)"
    )
    dense = PineconeDenseIndex(
        client.Index(settings.dense_index),
        name=settings.dense_index,
        namespace=settings.dense_namespace,
    )
    sparse = PineconeSparseIndex(
        client.Index(settings.sparse_index),
        name=settings.sparse_index,
        namespace=settings.sparse_namespace,
    )
    return dense, sparse
