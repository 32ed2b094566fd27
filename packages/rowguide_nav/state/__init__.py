"""Rowguide Navigation State Management"""

from .mark_mode import MarkModeContext
from .mark_state import MarkState, check_mark, toggle_mark
from .navigation_state import NavigationState

__all__ = [
    "MarkModeContext",
    "MarkState",
    "NavigationState",
    "check_mark",
    "toggle_mark",
]
