"""
Mark Mode Context

Single owner of the active mark mode (0 = inactive, 1..6 = mark class).
Passed explicitly to the mark overlay instead of living in a global.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from rowguide_core.constants.marks import MARK_HISTORY_LIMIT, MARK_MODE_COUNT, UNMARKED

from .mark_state import check_mark


@dataclass
class MarkModeContext:
    """Current mark mode plus a short history for undo."""

    current_mode: int = UNMARKED
    previous_mode: int | None = None
    history: list[int] = field(default_factory=list)
    change_count: int = 0
    last_updated: float = field(default_factory=time.time)

    @property
    def active(self) -> bool:
        return self.current_mode != UNMARKED

    def set_mode(self, mode: int) -> int:
        check_mark(mode)
        self.previous_mode = self.current_mode
        self.current_mode = mode
        self.history = [*self.history, mode][-MARK_HISTORY_LIMIT:]
        self.change_count += 1
        self.last_updated = time.time()
        return mode

    def cycle(self) -> int:
        """0 -> 1 -> ... -> 6 -> 0"""
        return self.set_mode((self.current_mode + 1) % MARK_MODE_COUNT)

    def reset(self) -> int:
        return self.set_mode(UNMARKED)

    def undo(self) -> bool:
        """Restore the previous mode; False if there is none."""
        if self.previous_mode is None:
            return False
        self.set_mode(self.previous_mode)
        return True
