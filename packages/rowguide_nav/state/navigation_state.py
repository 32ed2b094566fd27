"""
Rowguide Navigation State

Holds the state of one open pattern view: the effective rows (after
row combine), the current position, the step it addresses, and which
rows have been shown.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from rowguide_core.ir.position import Position
from rowguide_core.ir.project import Project
from rowguide_core.ir.row import Row
from rowguide_core.ir.step import Step


@dataclass
class NavigationState:
    """
    Navigation state for one pattern view.

    position and current_step are always updated together by commit();
    a None position means no pattern is loaded (or it has no steps).
    """

    project: Project | None = None
    rows: tuple[Row, ...] = field(default_factory=tuple)
    combined: bool = False

    position: Position | None = None
    current_step: Step | None = None
    shown_rows: set[int] = field(default_factory=set)

    @property
    def is_loaded(self) -> bool:
        return self.position is not None

    def load(self, project: Project, rows: tuple[Row, ...], combined: bool) -> None:
        """Replace the pattern; the caller commits the starting position."""
        self.project = project
        self.rows = rows
        self.combined = combined
        self.position = None
        self.current_step = None
        self.shown_rows = set()

    def commit(self, position: Position) -> None:
        """Make position current and show its row."""
        self.position = position
        self.current_step = self.rows[position.row].steps[position.step]
        self.shown_rows.add(position.row)

    def step_at(self, position: Position) -> Step | None:
        if not 0 <= position.row < len(self.rows):
            return None
        steps = self.rows[position.row].steps
        if not 0 <= position.step < len(steps):
            return None
        return steps[position.step]

    def bead_count(self) -> int:
        """Beads in the current row up to and including the current step."""
        if self.position is None:
            return 0
        steps = self.rows[self.position.row].steps
        return sum(step.count for step in steps[: self.position.step + 1])

    def to_status_dict(self) -> dict[str, Any]:
        """Summary for status output."""
        status: dict[str, Any] = {
            "loaded": self.is_loaded,
            "total_rows": len(self.rows),
            "combined": self.combined,
            "position": self.position.to_dict() if self.position else None,
        }
        if self.position is not None:
            status["row_length"] = len(self.rows[self.position.row].steps)
            status["bead_count"] = self.bead_count()
            if self.current_step is not None:
                status["step"] = self.current_step.to_dict()
        return status
