"""
Test suite for batch partitioning, the batch state machine and sleepers.

System role: Verification of upload building blocks
"""

import threading

import pytest

from nba_vectors.core.exceptions import UploadCancelledError
from nba_vectors.core.upload import Batch, BatchState, BatchTracker, CancellableSleeper, partition


def _records(count: int) -> list[dict]:
    return [{"_id": f"r{i}", "text": f"record {i}"} for i in range(count)]


class TestPartition:
    """Test partition() slicing."""

    def test_partition_should_split_250_records_into_96_96_58(self) -> None:
        """Should produce full batches then a remainder."""
        batches = partition("nba-dense", _records(250), 96)

        assert [len(batch) for batch in batches] == [96, 96, 58]
        assert [batch.number for batch in batches] == [1, 2, 3]
        assert all(batch.target == "nba-dense" for batch in batches)

    def test_partition_should_preserve_record_order(self) -> None:
        """Should keep records contiguous and in order across batches."""
        records = _records(10)

        batches = partition("t", records, 3)

        flattened = [record for batch in batches for record in batch.records]
        assert flattened == records

    def test_partition_should_return_no_batches_for_no_records(self) -> None:
        """Should not create an empty batch."""
        assert partition("t", [], 96) == []

    def test_partition_should_give_single_batch_when_records_fit(self) -> None:
        """Should use one batch when records fit exactly."""
        assert [len(batch) for batch in partition("t", _records(100), 100)] == [100]

    @pytest.mark.parametrize("size", [0, -1])
    def test_partition_should_reject_non_positive_size(self, size: int) -> None:
        """Should raise ValueError for a batch size below 1."""
        with pytest.raises(ValueError, match="batch_size must be positive"):
            partition("t", _records(3), size)


class TestBatchTracker:
    """Test the per-batch state machine."""

    @pytest.fixture
    def tracker(self) -> BatchTracker:
        return BatchTracker(batch=Batch(target="t", number=1, records=()))

    def test_tracker_should_record_successful_path(self, tracker: BatchTracker) -> None:
        """Should go PENDING -> IN_FLIGHT -> DONE."""
        tracker.transition(BatchState.IN_FLIGHT)
        tracker.transition(BatchState.DONE)

        assert tracker.history == [BatchState.PENDING, BatchState.IN_FLIGHT, BatchState.DONE]
        assert tracker.is_terminal

    def test_tracker_should_allow_one_retry(self, tracker: BatchTracker) -> None:
        """Should allow IN_FLIGHT -> RETRYING -> IN_FLIGHT once."""
        tracker.transition(BatchState.IN_FLIGHT)
        tracker.transition(BatchState.RETRYING)
        tracker.transition(BatchState.IN_FLIGHT)
        tracker.transition(BatchState.DONE)

        assert tracker.retries == 1
        assert tracker.state is BatchState.DONE

    def test_tracker_should_reject_second_retry(self, tracker: BatchTracker) -> None:
        """Should refuse to retry more than max_retries times."""
        tracker.transition(BatchState.IN_FLIGHT)
        tracker.transition(BatchState.RETRYING)
        tracker.transition(BatchState.IN_FLIGHT)

        with pytest.raises(RuntimeError, match="exceeded 1 retries"):
            tracker.transition(BatchState.RETRYING)

    @pytest.mark.parametrize(
        "path",
        [
            [BatchState.DONE],
            [BatchState.RETRYING],
            [BatchState.IN_FLIGHT, BatchState.DONE, BatchState.IN_FLIGHT],
            [BatchState.IN_FLIGHT, BatchState.ABORTED, BatchState.IN_FLIGHT],
        ],
    )
    def test_tracker_should_reject_illegal_transitions(self, tracker: BatchTracker, path) -> None:
        """Should raise RuntimeError on a transition the state machine forbids."""
        with pytest.raises(RuntimeError, match="Illegal batch transition"):
            for state in path:
                tracker.transition(state)

    def test_tracker_should_allow_abort_while_retrying(self, tracker: BatchTracker) -> None:
        """Should allow a cancelled cooldown to abort the batch."""
        tracker.transition(BatchState.IN_FLIGHT)
        tracker.transition(BatchState.RETRYING)
        tracker.transition(BatchState.ABORTED)

        assert tracker.is_terminal


class TestCancellableSleeper:
    """Test cancellable waits."""

    def test_sleep_should_return_after_short_wait(self) -> None:
        """Should return normally when not cancelled."""
        sleeper = CancellableSleeper()

        sleeper.sleep(0)

        assert not sleeper.cancelled

    def test_sleep_should_raise_after_cancel(self) -> None:
        """Should fail every wait once cancelled."""
        sleeper = CancellableSleeper()
        sleeper.cancel()

        with pytest.raises(UploadCancelledError):
            sleeper.sleep(60)
        assert sleeper.cancelled

    def test_cancel_should_wake_pending_wait(self) -> None:
        """Should interrupt a wait in progress from another thread."""
        sleeper = CancellableSleeper()
        timer = threading.Timer(0.05, sleeper.cancel)
        timer.start()

        try:
            with pytest.raises(UploadCancelledError):
                sleeper.sleep(30)
        finally:
            timer.cancel()
