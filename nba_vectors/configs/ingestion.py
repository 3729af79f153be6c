"""
Ingestion configuration settings.

Locations of the JSON files written by the historical and upcoming data
fetchers, and the sampling rate for historical games.

Dependencies: pydantic, pydantic_settings
System role: Input configuration for DocumentLoader
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from nba_vectors.configs.base import ENV_FILES


class IngestionSettings(BaseSettings):
    """Data file locations for the document loader."""

    model_config = SettingsConfigDict(
        env_prefix="INGEST_",
        env_file=ENV_FILES,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    data_root: Path = Field(default=Path("."), description="Project root holding the data folders")
    historical_dir: str = Field(
        default="historical-data/data",
        description="Directory with nba-data-YYYY.json season files (relative to data_root)",
    )
    upcoming_file: str = Field(
        default="upcoming-data/data/nba-upcoming.json",
        description="Upcoming games and injuries file (relative to data_root)",
    )
    sample_every: int = Field(
        default=10,
        ge=1,
        description="Keep every n-th historical game of each season",
    )

    @property
    def historical_path(self) -> Path:
        return self.data_root / self.historical_dir

    @property
    def upcoming_path(self) -> Path:
        return self.data_root / self.upcoming_file
