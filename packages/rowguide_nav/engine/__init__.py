"""Rowguide Navigation Engine"""

from .mark_overlay import Activation, MarkOverlay
from .navigation_engine import NavigationEngine
from .transitions import Boundary, Transition

__all__ = [
    "Activation",
    "Boundary",
    "MarkOverlay",
    "NavigationEngine",
    "Transition",
]
