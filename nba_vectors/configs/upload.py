"""
Upload configuration settings.

Batch sizes are sized to the payload the index service accepts; the delays
keep the run under the service's global rate limit.

Dependencies: pydantic, pydantic_settings
System role: Timing and batching policy for BatchUpsertPipeline
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from nba_vectors.configs.base import ENV_FILES


class UploadSettings(BaseSettings):
    """Batching, retry and smoke-test settings."""

    model_config = SettingsConfigDict(
        env_prefix="UPLOAD_",
        env_file=ENV_FILES,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    dense_batch_size: int = Field(
        default=96,
        ge=1,
        description="Max text records per integrated-embedding upsert",
    )
    sparse_batch_size: int = Field(default=100, ge=1, description="Max sparse vectors per upsert")
    inter_batch_delay_seconds: float = Field(
        default=3.0,
        ge=0.0,
        description="Pause between consecutive successful batches of one target",
    )
    rate_limit_cooldown_seconds: float = Field(
        default=60.0,
        ge=0.0,
        description="Pause before retrying a rate-limited batch",
    )
    max_retries: int = Field(
        default=1, ge=0, le=1, description="Retries per batch after a transient failure (0 or 1)"
    )
    settle_seconds: float = Field(
        default=15.0,
        ge=0.0,
        description="Wait after upload before reading stats and querying",
    )
    smoke_test_enabled: bool = Field(default=True, description="Query both indices after upload")
    smoke_test_query: str = Field(
        default="Boston Celtics winning games with high three-point shooting",
        description="Query used for the post-upload smoke test",
    )
    smoke_test_top_k: int = Field(default=5, ge=1, le=100, description="Hits per smoke-test query")
