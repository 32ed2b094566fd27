"""
In-Process Position Sink

PositionSink backed by an asyncio.Queue, for a store that runs in the same
process (e.g. a task that writes positions to a database).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

logger = logging.getLogger(__name__)

# Default queue size (drop-oldest when full)
_DEFAULT_QUEUE_SIZE = 64


class InProcessPositionSink:
    """PositionSink backed by an asyncio.Queue.

    The store reads from .queue. When the queue is full the oldest entry is
    dropped: every position message is absolute, so losing an older one
    never loses the latest state.
    """

    def __init__(self, maxsize: int = _DEFAULT_QUEUE_SIZE) -> None:
        self._queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=maxsize)
        self.dropped = 0

    # ----------------------------------------------------------
    # Public accessors
    # ----------------------------------------------------------

    @property
    def queue(self) -> asyncio.Queue[dict[str, Any]]:
        return self._queue

    @property
    def is_connected(self) -> bool:
        """Always connected (in-process)."""
        return True

    # ----------------------------------------------------------
    # Lifecycle
    # ----------------------------------------------------------

    def connect(self) -> None:
        pass

    def disconnect(self) -> None:
        pass

    # ----------------------------------------------------------
    # PositionSink protocol methods
    # ----------------------------------------------------------

    async def send_position(self, position: dict[str, Any]) -> None:
        self._push({"type": "position", "data": dict(position)})

    async def send_marks(self, marks: dict[str, Any]) -> None:
        self._push({"type": "marks", "data": dict(marks)})

    def drain(self) -> list[dict[str, Any]]:
        """Remove and return every queued event (oldest first)."""
        events = []
        while True:
            try:
                events.append(self._queue.get_nowait())
            except asyncio.QueueEmpty:
                return events

    # ----------------------------------------------------------
    # Helpers
    # ----------------------------------------------------------

    def _push(self, event: dict[str, Any]) -> None:
        """Push event, dropping oldest if queue is full."""
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            try:
                self._queue.get_nowait()
                self.dropped += 1
            except asyncio.QueueEmpty:
                pass
            self._queue.put_nowait(event)
            logger.debug("Position queue full, dropped oldest event")
