"""Per-call cancellation and deadline handling."""

from __future__ import annotations

import dataclasses
import threading
import time

from modelscope_store._errors import OperationCancelled


@dataclasses.dataclass(frozen=True)
class CallContext:
    """Cancellation signal threaded through every request of one call.

    :param cancel_event: Set by the caller to abort the call.
    :param deadline: Absolute ``time.monotonic()`` value after which the call is abandoned.
    """

    cancel_event: threading.Event | None = None
    deadline: float | None = None

    @classmethod
    def with_timeout(cls, seconds: float, cancel_event: threading.Event | None = None) -> CallContext:
        return cls(cancel_event=cancel_event, deadline=time.monotonic() + seconds)

    @property
    def cancelled(self) -> bool:
        if self.cancel_event is not None and self.cancel_event.is_set():
            return True
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or ``None`` without one."""
        if self.deadline is None:
            return None
        return max(self.deadline - time.monotonic(), 0.0)

    def check(self, *, backend: str | None = None, path: str | None = None) -> None:
        """Raise if the call was cancelled or its deadline passed.

        :raises OperationCancelled: If the context is no longer live.
        """
        if self.cancelled:
            raise OperationCancelled("Operation cancelled", path=path, backend=backend)

    def request_timeout(self, *, backend: str | None = None, path: str | None = None) -> float | None:
        """Return the timeout for the next request, or ``None`` without a deadline.

        The deadline is read once, so a positive timeout is always returned
        when the call is still live.

        :raises OperationCancelled: If the call was cancelled or no time is left.
        """
        timeout = self.remaining()
        if (self.cancel_event is not None and self.cancel_event.is_set()) or timeout == 0.0:
            raise OperationCancelled("Operation cancelled", path=path, backend=backend)
        return timeout


BACKGROUND = CallContext()
