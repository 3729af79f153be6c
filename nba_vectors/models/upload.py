"""
Upload and search result models.

Reports returned by the batch upsert pipeline and the vectorize service,
plus the Hit shape returned by smoke-test queries.

Dependencies: pydantic
System role: Return types for BatchUpsertPipeline.run() and VectorizeService.run()
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class TargetStatus(str, Enum):
    """Final status of one upload phase."""

    COMPLETED = "completed"
    ABORTED = "aborted"


class Hit(BaseModel):
    """Single result from a similarity query."""

    id: str = Field(default="", description="Record identifier")
    score: float = Field(description="Similarity score reported by the index")
    fields: dict[str, Any] = Field(
        default_factory=dict,
        description="Stored fields (text, category, metadata)",
    )


class TargetReport(BaseModel):
    """Outcome of uploading all batches of one index target."""

    target: str = Field(description="Index target name")
    status: TargetStatus = Field(description="completed or aborted")
    batches_total: int = Field(description="Number of batches planned")
    batches_done: int = Field(description="Number of batches accepted by the index")
    records_upserted: int = Field(description="Number of records accepted by the index")
    retries: int = Field(default=0, description="Batches that needed a retry")
    error: str | None = Field(default=None, description="Reason for an aborted target")
    batch_history: list[list[str]] = Field(
        default_factory=list,
        description="State transitions per batch, in batch order",
    )


class UploadReport(BaseModel):
    """Outcome of all upload phases of a run."""

    targets: list[TargetReport] = Field(default_factory=list)

    def for_target(self, target: str) -> TargetReport | None:
        """Return the report of the named target, if it ran."""
        for report in self.targets:
            if report.target == target:
                return report
        return None


class VectorizeReport(BaseModel):
    """Result of a full vectorization run."""

    document_count: int = Field(description="Documents in the corpus")
    vocabulary_size: int = Field(description="Distinct terms in the vocabulary")
    dense_records: int = Field(description="Records prepared for the dense index")
    sparse_records: int = Field(description="Records prepared for the sparse index")
    sparse_omitted: int = Field(
        default=0,
        description="Documents omitted from the sparse index (no nonzero weight)",
    )
    upload: UploadReport = Field(description="Per-target upload outcome")
    dense_hits: list[Hit] = Field(default_factory=list)
    sparse_hits: list[Hit] = Field(default_factory=list)
    processing_time_ms: float = Field(description="Total processing time in milliseconds")
