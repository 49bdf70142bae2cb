"""Cooperative cancellation for long-running listings."""

import threading
import time
from typing import Optional


class CancellationToken:
    """Thread-safe cancellation flag with an optional deadline.

    A listing checks the token before each page fetch. The token may be
    cancelled from another thread, or expire once ``timeout`` seconds have
    elapsed since it was created.
    """

    def __init__(self, timeout: Optional[float] = None):
        self._event = threading.Event()
        self._deadline = None if timeout is None else time.monotonic() + timeout

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def deadline_exceeded(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set() or self.deadline_exceeded
