"""
Mark State

Sparse per-step and per-row marks. A mark reverting to 0 removes the
entry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from rowguide_core.constants.marks import MAX_MARK, UNMARKED
from rowguide_core.ir.project import Project, step_mark_key


def check_mark(mark: int) -> int:
    if not UNMARKED <= mark <= MAX_MARK:
        raise ValueError(f"Mark must be between {UNMARKED} and {MAX_MARK}: {mark}")
    return mark


def toggle_mark(current: int, mode: int) -> int:
    """Activating with the same mode clears; any other mode overwrites."""
    return UNMARKED if current == mode else mode


@dataclass
class MarkState:
    """Step marks keyed by (row, step) and row marks keyed by row."""

    steps: dict[tuple[int, int], int] = field(default_factory=dict)
    rows: dict[int, int] = field(default_factory=dict)

    @classmethod
    def from_project(cls, project: Project) -> MarkState:
        return cls(steps=dict(project.marked_steps), rows=dict(project.marked_rows))

    def step_mark(self, row: int, step: int) -> int:
        return self.steps.get((row, step), UNMARKED)

    def row_mark(self, row: int) -> int:
        return self.rows.get(row, UNMARKED)

    def set_step_mark(self, row: int, step: int, mark: int) -> None:
        if check_mark(mark) == UNMARKED:
            self.steps.pop((row, step), None)
        else:
            self.steps[(row, step)] = mark

    def set_row_mark(self, row: int, mark: int) -> None:
        if check_mark(mark) == UNMARKED:
            self.rows.pop(row, None)
        else:
            self.rows[row] = mark

    def toggle_step(self, row: int, step: int, mode: int) -> int:
        mark = toggle_mark(self.step_mark(row, step), mode)
        self.set_step_mark(row, step, mark)
        return mark

    def toggle_row(self, row: int, mode: int) -> int:
        mark = toggle_mark(self.row_mark(row), mode)
        self.set_row_mark(row, mark)
        return mark

    def clear(self) -> None:
        self.steps.clear()
        self.rows.clear()

    def to_dict(self) -> dict[str, Any]:
        """Serialized form ("row-step" keys), as stored with the project."""
        return {
            "marked_steps": {
                step_mark_key(row, step): mark
                for (row, step), mark in sorted(self.steps.items())
            },
            "marked_rows": {str(row): mark for row, mark in sorted(self.rows.items())},
        }
