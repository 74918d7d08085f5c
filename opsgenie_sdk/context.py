"""Per-call cancellation and deadline."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field

from opsgenie_sdk.exceptions import RequestCancelledError


@dataclass
class CallContext:
    """Cancellation signal and optional deadline for one ``execute`` call.

    The executor checks the context before every attempt and while reading
    each response body, and caps each attempt's HTTP timeout to the time
    left until the deadline.

    Attributes:
        deadline: ``time.monotonic()`` value after which the call is abandoned
        cancel_event: set to cancel the call; remaining attempts are skipped

    Example:
        >>> ctx = CallContext.with_timeout(10)
        >>> client.execute(request, result, context=ctx)
    """

    deadline: float | None = None
    cancel_event: threading.Event = field(default_factory=threading.Event)

    @classmethod
    def with_timeout(cls, seconds: float) -> CallContext:
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        """Cancel the call.

        Remaining attempts are skipped and a response body still being
        received is abandoned between chunks. An attempt still waiting for
        response headers is bounded by its timeout, which never exceeds the
        deadline.
        """
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def remaining(self) -> float | None:
        """Seconds left until the deadline, None without a deadline."""
        if self.deadline is None:
            return None
        return max(self.deadline - time.monotonic(), 0.0)

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def raise_if_done(self) -> None:
        if self.cancelled:
            raise RequestCancelledError("Request was cancelled")
        if self.expired:
            raise RequestCancelledError("Request deadline exceeded")
