"""Cooperative event queue used by the docking model for deferred deletions."""

from __future__ import annotations

from collections import deque
from typing import Callable, Deque


class EventLoop:
    """Single-threaded queue of deferred callbacks (``deleteLater`` style)."""

    def __init__(self) -> None:
        self._pending: Deque[Callable[[], None]] = deque()

    def post(self, callback: Callable[[], None]) -> None:
        self._pending.append(callback)

    def process_events(self) -> int:
        """
        Run the callbacks queued so far and return how many ran.

        Callbacks posted while draining are left for the next call, so a
        deletion scheduled from inside another deletion still needs one more
        pump of the loop.
        """
        batch = len(self._pending)
        for _ in range(batch):
            callback = self._pending.popleft()
            callback()
        return batch

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)
