"""Per-request cancellation and deadline context."""

import threading
import time

from calproxy.exceptions import RequestCancelledError


class RequestContext:
    """Deadline and cancellation flag shared by every fetch of one request.

    Usage:
        ctx = RequestContext(timeout=30.0)
        fetcher.fetch(url, ctx)      # timeout clamped to ctx.remaining()
        ctx.cancel()                 # pending fetches fail fast
    """

    def __init__(self, timeout: float | None = None):
        self._cancelled = threading.Event()
        self.deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set() or self.expired

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None without one."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def check(self) -> None:
        """Raise if the request has been cancelled or its deadline passed."""
        if self._cancelled.is_set():
            raise RequestCancelledError("Request cancelled")
        if self.expired:
            raise RequestCancelledError("Request deadline exceeded")

    def clamp_timeout(self, timeout: float) -> float:
        """Limit a per-call timeout to the time remaining.

        Raises:
            RequestCancelledError: If no time remains
        """
        remaining = self.remaining()
        if remaining is None:
            return timeout
        if remaining <= 0:
            raise RequestCancelledError("Request deadline exceeded")
        return min(timeout, remaining)
