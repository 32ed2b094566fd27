"""Position persistence bridge for Rowguide"""

from .bridge import PositionBridge
from .in_process import InProcessPositionSink
from .position_publisher import PositionPublisher

__all__ = [
    "InProcessPositionSink",
    "PositionBridge",
    "PositionPublisher",
]
