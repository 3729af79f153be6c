"""
Batch upload of encoded records to index targets.

Exports: BatchUpsertPipeline, UploadPhase, Batch, BatchState, BatchTracker, partition,
Sleeper, CancellableSleeper
"""

from .batching import Batch, BatchState, BatchTracker, partition
from .timers import CancellableSleeper, Sleeper
from .upsert_pipeline import BatchUpsertPipeline, UploadPhase

__all__ = [
    "BatchUpsertPipeline",
    "UploadPhase",
    "Batch",
    "BatchState",
    "BatchTracker",
    "partition",
    "Sleeper",
    "CancellableSleeper",
]
