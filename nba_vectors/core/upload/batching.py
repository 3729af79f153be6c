"""
Batch partitioning and per-batch state tracking.

Dependencies: dataclasses, enum (stdlib)
System role: Data structures driven by BatchUpsertPipeline
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class BatchState(str, Enum):
    """Lifecycle of one batch."""

    PENDING = "pending"
    IN_FLIGHT = "in_flight"
    RETRYING = "retrying"
    DONE = "done"
    ABORTED = "aborted"


# Number of RETRYING visits is bounded separately by BatchTracker.max_retries.
_TRANSITIONS: dict[BatchState, frozenset[BatchState]] = {
    BatchState.PENDING: frozenset({BatchState.IN_FLIGHT}),
    BatchState.IN_FLIGHT: frozenset({BatchState.DONE, BatchState.RETRYING, BatchState.ABORTED}),
    BatchState.RETRYING: frozenset({BatchState.IN_FLIGHT, BatchState.ABORTED}),
    BatchState.DONE: frozenset(),
    BatchState.ABORTED: frozenset(),
}


@dataclass(frozen=True)
class Batch:
    """Contiguous, order-preserving slice of records for one upload call."""

    target: str
    number: int
    records: tuple[dict[str, Any], ...]

    def __len__(self) -> int:
        return len(self.records)


@dataclass
class BatchTracker:
    """State machine of one batch; records every transition."""

    batch: Batch
    max_retries: int = 1
    state: BatchState = BatchState.PENDING
    history: list[BatchState] = field(default_factory=lambda: [BatchState.PENDING])
    retries: int = 0

    def transition(self, new_state: BatchState) -> None:
        """
        Move to a new state.

        Raises:
            RuntimeError: When the transition is not allowed
        """
        if new_state not in _TRANSITIONS[self.state]:
            raise RuntimeError(
                f"Illegal batch transition {self.state.value} -> {new_state.value} "
                f"(target={self.batch.target}, batch={self.batch.number})"
            )
        if new_state is BatchState.RETRYING:
            if self.retries >= self.max_retries:
                raise RuntimeError(
                    f"Batch {self.batch.number} of {self.batch.target} exceeded "
                    f"{self.max_retries} retries"
                )
            self.retries += 1
        self.state = new_state
        self.history.append(new_state)

    @property
    def is_terminal(self) -> bool:
        return not _TRANSITIONS[self.state]


def partition(
    target: str,
    records: Sequence[dict[str, Any]],
    batch_size: int,
) -> list[Batch]:
    """
    Split records into consecutive batches of at most batch_size.

    Args:
        target: Name of the index the batches go to
        records: Records in upload order
        batch_size: Maximum records per batch

    Returns:
        list[Batch]: Batches numbered from 1

    Raises:
        ValueError: When batch_size is not positive
    """
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    return [
        Batch(target=target, number=offset // batch_size + 1, records=tuple(records[offset : offset + batch_size]))
        for offset in range(0, len(records), batch_size)
    ]
