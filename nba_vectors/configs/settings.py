"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from nba_vectors.configs.base import BaseSettings
from nba_vectors.configs.ingestion import IngestionSettings
from nba_vectors.configs.upload import UploadSettings
from nba_vectors.configs.vector_store import PineconeSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    pinecone: PineconeSettings = Field(default_factory=PineconeSettings)
    upload: UploadSettings = Field(default_factory=UploadSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables and .env files are read once, on first call.

    Returns:
        Settings: Application settings instance

    Usage:
        from nba_vectors.configs import get_settings
        settings = get_settings()
    """
    return Settings()
