import threading
import time


class CancellationToken:
    """Cooperative cancellation flag with an optional deadline.

    Extraction adapters poll it between units of work; ``reset()`` on the
    controller and the configured timeout both trip it.
    """

    def __init__(self, timeout_seconds: float | None = None) -> None:
        self._timeout_seconds = timeout_seconds
        self._deadline = (
            time.monotonic() + timeout_seconds if timeout_seconds is not None else None
        )
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set() or self.expired

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None when unbounded."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def reason(self) -> str:
        if self._cancelled.is_set():
            return "Text extraction cancelled"
        return f"Text extraction timed out after {self._timeout_seconds:g}s"
