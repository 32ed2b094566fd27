"""Project model for Rowguide.

A project is an ordered sequence of rows plus the saved position and the
persisted step/row marks. Rows and steps are addressed by index
(``Position``); there are no parent or sibling references.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from .position import Position
from .row import Row
from .step import Step


def step_mark_key(row: int, step: int) -> str:
    """Serialized key for a step mark ("row-step")."""
    return f"{row}-{step}"


def parse_step_mark_key(key: str) -> tuple[int, int]:
    """Inverse of step_mark_key."""
    row, _, step = key.partition("-")
    return int(row), int(step)


@dataclass(frozen=True)
class Project:
    """Beading project (pattern).

    ``marked_steps`` and ``marked_rows`` are sparse: unmarked entries
    are absent, never stored as 0.
    """

    rows: tuple[Row, ...] = field(default_factory=tuple)
    position: Position | None = None
    id: int | None = None
    name: str | None = None
    marked_steps: dict[tuple[int, int], int] = field(default_factory=dict)
    marked_rows: dict[int, int] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        rows: list[Row] | tuple[Row, ...] | None = None,
        position: Position | None = None,
        id: int | None = None,
        name: str | None = None,
        marked_steps: dict[tuple[int, int], int] | None = None,
        marked_rows: dict[int, int] | None = None,
    ) -> Project:
        """Create a project, normalizing name and position."""
        clean_name = name.strip() if isinstance(name, str) else None
        if position is not None:
            position = Position.create(position.row, position.step)
        return cls(
            rows=tuple(rows or ()),
            position=position,
            id=id,
            name=clean_name or None,
            marked_steps={k: v for k, v in (marked_steps or {}).items() if v},
            marked_rows={k: v for k, v in (marked_rows or {}).items() if v},
        )

    # ------------------------------------------------------------------
    # Safe access
    # ------------------------------------------------------------------

    def row_at(self, index: int) -> Row | None:
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def step_at(self, position: Position) -> Step | None:
        row = self.row_at(position.row)
        if row is None or not 0 <= position.step < len(row.steps):
            return None
        return row.steps[position.step]

    def is_valid_position(self, position: Position) -> bool:
        return self.step_at(position) is not None

    def clamp_position(self, position: Position) -> Position | None:
        """Clamp a position into the pattern.

        Returns None when the pattern has no non-empty row. If the clamped
        row is empty, the nearest preceding non-empty row is used, then the
        nearest following one.
        """
        candidates = [i for i, r in enumerate(self.rows) if not r.is_empty]
        if not candidates:
            return None
        row_index = max(0, min(position.row, len(self.rows) - 1))
        if self.rows[row_index].is_empty:
            before = [i for i in candidates if i < row_index]
            row_index = before[-1] if before else candidates[0]
        steps = self.rows[row_index].steps
        return Position(row_index, max(0, min(position.step, len(steps) - 1)))

    def with_position(self, position: Position | None) -> Project:
        return replace(self, position=position)

    def with_rows(self, rows: list[Row] | tuple[Row, ...]) -> Project:
        return replace(self, rows=tuple(rows))

    # ------------------------------------------------------------------
    # Calculations
    # ------------------------------------------------------------------

    @property
    def total_steps(self) -> int:
        return sum(len(row.steps) for row in self.rows)

    @property
    def total_beads(self) -> int:
        return sum(row.bead_count for row in self.rows)

    @property
    def longest_row(self) -> int:
        """Bead count of the longest row (0 for an empty project)."""
        return max((row.bead_count for row in self.rows), default=0)

    @property
    def total_colors(self) -> int:
        """Number of distinct non-empty step descriptions."""
        return len({
            step.description
            for row in self.rows
            for step in row.steps
            if step.description
        })

    def bead_count(self, position: Position) -> int:
        """Beads in the row up to and including the step at position."""
        row = self.row_at(position.row)
        if row is None:
            return 0
        return sum(step.count for step in row.steps[: position.step + 1])

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {
            "rows": [r.to_dict() for r in self.rows],
            "marked_steps": {
                step_mark_key(row, step): mark
                for (row, step), mark in sorted(self.marked_steps.items())
            },
            "marked_rows": {
                str(row): mark for row, mark in sorted(self.marked_rows.items())
            },
        }
        if self.id is not None:
            result["id"] = self.id
        if self.name is not None:
            result["name"] = self.name
        if self.position is not None:
            result["position"] = self.position.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Project:
        """Create from dictionary (deserialization)."""
        position_data = data.get("position")
        return cls.create(
            rows=[Row.from_dict(r) for r in data.get("rows", [])],
            position=Position.from_dict(position_data) if position_data else None,
            id=data.get("id"),
            name=data.get("name"),
            marked_steps={
                parse_step_mark_key(k): int(v)
                for k, v in data.get("marked_steps", {}).items()
            },
            marked_rows={int(k): int(v) for k, v in data.get("marked_rows", {}).items()},
        )
