"""
Vector store configuration settings.

Manages Pinecone credentials and the names of the dense and sparse indices.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for upload and smoke-test queries
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from nba_vectors.configs.base import ENV_FILES


class PineconeSettings(BaseSettings):
    """Pinecone configuration (dense index with integrated embedding, sparse index)."""

    model_config = SettingsConfigDict(
        env_prefix="PINECONE_",
        env_file=ENV_FILES,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: SecretStr | None = Field(default=None, description="Pinecone API key")
    dense_index: str = Field(
        default="nba-dense",
        description="Index with integrated embedding (receives raw text)",
    )
    sparse_index: str = Field(
        default="nba-sparse",
        description="Index provisioned for sparse vectors",
    )
    dense_namespace: str = Field(default="nba-data", description="Namespace for dense records")
    sparse_namespace: str = Field(
        default="",
        description="Namespace for sparse vectors ('' is the default namespace)",
    )
