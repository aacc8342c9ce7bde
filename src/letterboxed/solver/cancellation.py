"""Cooperative cancellation for long-running searches."""

import threading


class CancellationToken:
    """A flag that a search polls at fixed checkpoints.

    The search only reads the token; whoever owns the search calls `cancel()`, possibly from
    another thread.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request that any search polling this token stop as soon as possible."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled})"
