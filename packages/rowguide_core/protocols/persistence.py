"""
Persistence Protocols

Abstract interfaces between the navigation core and the external store.

Data Flow:
    rowguide_nav                     storage
    ────────────                     ───────
    PositionBridge ── queue ──►  PositionSink
    NavigationEngine ─────────►  ResetHook

The core never awaits a sink before returning a navigation result.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PositionSink(Protocol):
    """
    Position persistence interface (Core → Store).

    Implementations:
        - InProcessPositionSink: asyncio.Queue consumed in-process
        - PositionPublisher: ZeroMQ PUB socket
        - MockPositionSink: Test double for unit tests
    """

    def connect(self) -> None:
        """Connect to the store."""
        ...

    def disconnect(self) -> None:
        """Disconnect from the store."""
        ...

    async def send_position(self, position: dict[str, Any]) -> None:
        """
        Send a committed position.

        Args:
            position: Absolute position (row, step) plus sequence number
        """
        ...

    async def send_marks(self, marks: dict[str, Any]) -> None:
        """
        Send the current step and row marks.

        Args:
            marks: {"marked_steps": {...}, "marked_rows": {...}}
        """
        ...

    @property
    def is_connected(self) -> bool:
        """Whether connected to the store."""
        ...


@runtime_checkable
class ResetHook(Protocol):
    """
    Called after navigation runs off either end of the pattern.

    Implementations:
        - MockResetHook: Test double for unit tests
    """

    def on_reset(self, forward: bool) -> None:
        """
        Handle a project reset.

        Args:
            forward: True when advancing past the end, False when
                retreating past the start
        """
        ...
