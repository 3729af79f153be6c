"""
Injectable wait primitives.

All waits of the upload pipeline (inter-batch delay, rate-limit cooldown,
post-upload settle time) go through a Sleeper so tests can record them and
callers can cancel a long-running job.

Dependencies: threading (stdlib)
System role: Clock abstraction for BatchUpsertPipeline and VectorizeService
"""

import logging
import threading
from typing import Protocol

from nba_vectors.core.exceptions import UploadCancelledError

logger = logging.getLogger(__name__)


class Sleeper(Protocol):
    """Blocking wait that may be interrupted."""

    def sleep(self, seconds: float) -> None:
        ...


class CancellableSleeper:
    """Sleeper backed by a threading.Event so waits can be cut short."""

    def __init__(self) -> None:
        self._cancelled = threading.Event()

    def sleep(self, seconds: float) -> None:
        """
        Wait for the given number of seconds.

        Args:
            seconds: Wait duration; non-positive values only check cancellation

        Raises:
            UploadCancelledError: When cancel() was called before or during the wait
        """
        if self._cancelled.wait(timeout=max(seconds, 0.0)):
            raise UploadCancelledError(
                "Wait cancelled",
                details={"requested_seconds": seconds},
            )

    def cancel(self) -> None:
        """Wake any pending wait and fail all future waits."""
        logger.info(f"{__name__}:cancel - Cancelling pending waits")
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()
