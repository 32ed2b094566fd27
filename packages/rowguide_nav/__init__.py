"""
Rowguide Navigation

Current-position state machine, mark overlay and position persistence.
"""

__version__ = "0.3.0"

from .engine import Boundary, MarkOverlay, NavigationEngine, Transition
from .factory import Navigator, create_navigator
from .ipc import InProcessPositionSink, PositionBridge, PositionPublisher

__all__ = [
    "Boundary",
    "create_navigator",
    "InProcessPositionSink",
    "MarkOverlay",
    "NavigationEngine",
    "Navigator",
    "PositionBridge",
    "PositionPublisher",
    "Transition",
]
