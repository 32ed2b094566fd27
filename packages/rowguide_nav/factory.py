"""
Rowguide Navigation Factory

Factory functions for creating production Navigator instances.
Separates object creation from navigation logic (DI pattern).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, cast

from rowguide_core.ir.project import Project
from rowguide_core.protocols import PositionSink, ResetHook
from rowguide_zipper import Zipper

from .config import Settings
from .config import settings as default_settings
from .engine import MarkOverlay, NavigationEngine, Transition
from .ipc import InProcessPositionSink, PositionBridge, PositionPublisher
from .result import CommandResult
from .state import MarkModeContext


@dataclass
class Navigator:
    """An engine, its mark overlay and the bridge they share."""

    engine: NavigationEngine
    overlay: MarkOverlay
    bridge: PositionBridge

    def start(self) -> None:
        """Connect the position sink"""
        self.bridge.sink.connect()

    def stop(self) -> None:
        """Disconnect the position sink"""
        self.bridge.sink.disconnect()

    def open(self, project: Project) -> Transition:
        """Load project marks and position."""
        self.overlay.load(project)
        return self.engine.load(project)

    def handle(self, command: str, payload: dict[str, Any] | None = None) -> CommandResult:
        return self.engine.handle(command, payload)


def create_navigator(
    settings: Settings | None = None,
    position_sink: PositionSink | None = None,
    reset_hook: ResetHook | None = None,
    mark_context: MarkModeContext | None = None,
    publish: bool = False,
) -> Navigator:
    """
    Create a Navigator with real persistence dependencies.

    Args:
        settings: Navigation settings (default: module settings)
        position_sink: PositionSink implementation (default: InProcessPositionSink)
        reset_hook: Called after a project reset
        mark_context: Shared mark mode (default: a fresh context)
        publish: Use a ZeroMQ PositionPublisher on settings.position_port
            instead of the in-process sink

    Returns:
        Configured Navigator instance
    """
    settings = settings or default_settings
    if position_sink is None:
        if publish:
            position_sink = PositionPublisher(port=settings.position_port)
        else:
            position_sink = InProcessPositionSink(maxsize=settings.position_queue_size)
    sink = cast(PositionSink, position_sink)

    bridge = PositionBridge(sink)
    engine = NavigationEngine(
        bridge=bridge,
        settings=settings,
        reset_hook=reset_hook,
        zipper=Zipper(),
    )
    overlay = MarkOverlay(engine, context=mark_context)
    return Navigator(engine=engine, overlay=overlay, bridge=bridge)
