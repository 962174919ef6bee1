"""
Cancellation tokens for crawl and scoring passes.

Each trigger gets its own token. When a newer trigger supersedes it, the token
is cancelled and a pass still running on another thread stops at its next
check.
"""

import threading

from ..errors import SearchCancelled


class CancellationToken:
    """Thread-safe flag shared between a trigger and the pass it started."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise SearchCancelled if this token has been cancelled."""
        if self._event.is_set():
            raise SearchCancelled("Search was superseded by a newer trigger")
