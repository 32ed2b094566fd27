"""
Position Bridge

One-way outbox between the navigation core and a PositionSink.

notify_*() never awaits: it appends to the outbox and, when an event loop
is running, makes sure a single drain task is delivering. Only one drainer
exists at a time, so messages reach the sink in the order they were
committed. Each position message carries the full absolute position and a
sequence number, so a store that receives them late can keep the highest
sequence (last write wins).

A failing sink is logged and skipped; it never reaches the caller.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from typing import Any

from rowguide_core.protocols import PositionSink

logger = logging.getLogger(__name__)


class PositionBridge:
    """Fire-and-forget delivery of position and mark changes."""

    def __init__(self, sink: PositionSink):
        self._sink = sink
        self._outbox: deque[tuple[str, dict[str, Any]]] = deque()
        self._sequence = 0
        self._drain_task: asyncio.Task[None] | None = None

        self.delivered = 0
        self.failed = 0

    @property
    def sink(self) -> PositionSink:
        return self._sink

    @property
    def pending(self) -> int:
        """Messages not yet handed to the sink."""
        return len(self._outbox)

    @property
    def sequence(self) -> int:
        return self._sequence

    # ----------------------------------------------------------
    # Producer side (synchronous)
    # ----------------------------------------------------------

    def notify_position(self, row: int, step: int) -> int:
        """Queue a committed position; returns its sequence number."""
        self._sequence += 1
        self._enqueue("position", {
            "row": row,
            "step": step,
            "sequence": self._sequence,
            "timestamp": time.time(),
        })
        return self._sequence

    def notify_marks(self, marks: dict[str, Any]) -> int:
        """Queue the full mark maps; returns the sequence number."""
        self._sequence += 1
        self._enqueue("marks", {**marks, "sequence": self._sequence})
        return self._sequence

    def _enqueue(self, msg_type: str, payload: dict[str, Any]) -> None:
        self._outbox.append((msg_type, payload))
        self._schedule_drain()

    def _schedule_drain(self) -> None:
        """Start the drain task if an event loop is running."""
        if self._drain_task is not None and not self._drain_task.done():
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running event loop; flush() delivers later
            return
        self._drain_task = loop.create_task(self._drain())

    # ----------------------------------------------------------
    # Consumer side
    # ----------------------------------------------------------

    async def _drain(self) -> None:
        while self._outbox:
            msg_type, payload = self._outbox.popleft()
            try:
                if msg_type == "position":
                    await self._sink.send_position(payload)
                else:
                    await self._sink.send_marks(payload)
                self.delivered += 1
            except Exception as e:
                self.failed += 1
                logger.error(f"Failed to persist {msg_type} #{payload.get('sequence')}: {e}")

    async def flush(self) -> None:
        """Deliver everything queued so far."""
        while self._outbox or (self._drain_task is not None and not self._drain_task.done()):
            if self._drain_task is None or self._drain_task.done():
                self._drain_task = asyncio.get_running_loop().create_task(self._drain())
            await self._drain_task
