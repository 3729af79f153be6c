"""
Batched, retrying upsert pipeline.

Delivers encoded records to index targets one phase at a time. Within a
phase, batches go out strictly one after another with a fixed delay between
them so the global rate limit of the index service is respected.

Failure handling per batch:
- TransientServiceError (429, 5xx): wait the cooldown, retry the same batch
  once; a second failure propagates and fails the run.
- IndexConfigurationError: abort the remaining batches of this target only.
- Anything else propagates.

Dependencies: tenacity, nba_vectors.core.upload, nba_vectors.boundary.vdb
System role: Upload stage of the vectorization pipeline
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from tenacity import RetryCallState, Retrying, retry_if_exception_type, stop_after_attempt, wait_fixed

from nba_vectors.boundary.vdb.index_client import IndexWriter
from nba_vectors.core.exceptions import IndexConfigurationError, TransientServiceError
from nba_vectors.core.upload.batching import Batch, BatchState, BatchTracker, partition
from nba_vectors.core.upload.timers import CancellableSleeper, Sleeper
from nba_vectors.models import TargetReport, TargetStatus, UploadReport

logger = logging.getLogger(__name__)

DENSE_BATCH_SIZE = 96
SPARSE_BATCH_SIZE = 100
INTER_BATCH_DELAY_SECONDS = 3.0
RATE_LIMIT_COOLDOWN_SECONDS = 60.0


@dataclass(frozen=True)
class UploadPhase:
    """Records destined for one index target."""

    writer: IndexWriter
    records: Sequence[dict[str, Any]]
    batch_size: int


class BatchUpsertPipeline:
    """Upload records to index targets in sequential, size-bounded batches."""

    def __init__(
        self,
        sleeper: Sleeper | None = None,
        inter_batch_delay_seconds: float = INTER_BATCH_DELAY_SECONDS,
        rate_limit_cooldown_seconds: float = RATE_LIMIT_COOLDOWN_SECONDS,
        max_retries: int = 1,
    ) -> None:
        """
        Initialize pipeline timing and retry policy.

        Args:
            sleeper: Wait primitive (CancellableSleeper if None)
            inter_batch_delay_seconds: Pause after each successful batch except the last
            rate_limit_cooldown_seconds: Pause before retrying a failed batch
            max_retries: Retries per batch after a transient failure

        Raises:
            ValueError: When a duration is negative or max_retries is not 0 or 1
        """
        if inter_batch_delay_seconds < 0 or rate_limit_cooldown_seconds < 0:
            raise ValueError("Delays cannot be negative")
        if not 0 <= max_retries <= 1:
            raise ValueError(f"max_retries must be 0 or 1, got {max_retries}")

        self._sleeper = sleeper or CancellableSleeper()
        self._inter_batch_delay = inter_batch_delay_seconds
        self._cooldown = rate_limit_cooldown_seconds
        self._max_retries = max_retries

    def run(self, phases: Sequence[UploadPhase]) -> UploadReport:
        """
        Upload every phase in order.

        A misconfigured target ends its own phase early; the next phase still
        runs. Any error that propagates out of a phase stops the run.

        Args:
            phases: Upload phases, typically dense then sparse

        Returns:
            UploadReport: One TargetReport per phase
        """
        return UploadReport(targets=[self.upload_target(phase) for phase in phases])

    def upload_target(self, phase: UploadPhase) -> TargetReport:
        """
        Upload all batches of one target.

        Args:
            phase: Target writer, its records and batch size

        Returns:
            TargetReport: COMPLETED, or ABORTED on index misconfiguration

        Raises:
            TransientServiceError: When a batch still fails after its retries
            UploadCancelledError: When a wait was cancelled
            NbaVectorsException: Any other error raised by the writer
        """
        target = phase.writer.name
        batches = partition(target, phase.records, phase.batch_size)
        trackers: list[BatchTracker] = []

        logger.info(
            f"{__name__}:upload_target - Upserting {len(phase.records)} records to {target}",
            extra={"target": target, "batches": len(batches), "batch_size": phase.batch_size},
        )

        for position, batch in enumerate(batches):
            tracker = BatchTracker(batch=batch, max_retries=self._max_retries)
            trackers.append(tracker)

            try:
                self._submit(phase.writer, tracker)
            except IndexConfigurationError as e:
                tracker.transition(BatchState.ABORTED)
                logger.warning(
                    f"{__name__}:upload_target - {target} rejected batch {batch.number}: "
                    f"index appears misconfigured, skipping its remaining batches",
                    extra={"target": target, "batch": batch.number, "error": str(e)},
                )
                return self._report(target, batches, trackers, TargetStatus.ABORTED, error=str(e))
            except Exception:
                if not tracker.is_terminal:
                    tracker.transition(BatchState.ABORTED)
                raise

            logger.info(
                f"{__name__}:upload_target - Upserted {target} batch {batch.number} "
                f"({len(batch)} records)" + (" [retry]" if tracker.retries else "")
            )

            if position < len(batches) - 1:
                self._sleeper.sleep(self._inter_batch_delay)

        logger.info(f"{__name__}:upload_target - Upserted {len(phase.records)} records to {target}")
        return self._report(target, batches, trackers, TargetStatus.COMPLETED)

    def _submit(self, writer: IndexWriter, tracker: BatchTracker) -> None:
        """Send one batch, retrying transient failures after the cooldown."""
        retrying = Retrying(
            retry=retry_if_exception_type(TransientServiceError),
            stop=stop_after_attempt(self._max_retries + 1),
            wait=wait_fixed(self._cooldown),
            sleep=self._sleeper.sleep,
            before_sleep=lambda retry_state: self._before_retry(tracker, retry_state),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                tracker.transition(BatchState.IN_FLIGHT)
                writer.upsert_batch(list(tracker.batch.records))
        tracker.transition(BatchState.DONE)

    def _before_retry(self, tracker: BatchTracker, retry_state: RetryCallState) -> None:
        tracker.transition(BatchState.RETRYING)
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            f"{__name__}:_submit - {tracker.batch.target} batch {tracker.batch.number} failed "
            f"({error}), waiting {self._cooldown:.0f}s before retry",
            extra={"target": tracker.batch.target, "batch": tracker.batch.number},
        )

    @staticmethod
    def _report(
        target: str,
        batches: list[Batch],
        trackers: list[BatchTracker],
        status: TargetStatus,
        error: str | None = None,
    ) -> TargetReport:
        done = [tracker for tracker in trackers if tracker.state is BatchState.DONE]
        return TargetReport(
            target=target,
            status=status,
            batches_total=len(batches),
            batches_done=len(done),
            records_upserted=sum(len(tracker.batch) for tracker in done),
            retries=sum(1 for tracker in trackers if tracker.retries),
            error=error,
            batch_history=[[state.value for state in tracker.history] for tracker in trackers],
        )
