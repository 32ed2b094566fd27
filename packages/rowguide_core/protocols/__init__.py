"""
Protocol interfaces for rowguide_core.

This module exports protocol definitions for:
- Position persistence (PositionSink)
- Project reset notification (ResetHook)
"""

from rowguide_core.protocols.persistence import PositionSink, ResetHook

__all__ = [
    "PositionSink",
    "ResetHook",
]
