"""
Pure navigation transitions.

Every function takes the rows and the current position and returns a
Transition; nothing here holds state. A boundary result always carries
the last valid position, never an out-of-range index.

Empty rows are skipped by row transitions: they are never a target.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from rowguide_core.exceptions import OutOfRangeError
from rowguide_core.ir.position import Position
from rowguide_core.ir.row import Row


class Boundary(Enum):
    """Boundary signal reported by a transition"""
    NONE = "none"
    ROW_END = "row_end"
    ROW_START = "row_start"
    PATTERN_END = "pattern_end"
    PATTERN_START = "pattern_start"
    NO_POSITION = "no_position"
    OUT_OF_RANGE = "out_of_range"


@dataclass(frozen=True, slots=True)
class Transition:
    """Outcome of a navigation transition."""

    position: Position | None
    boundary: Boundary = Boundary.NONE
    moved: bool = False
    steps_taken: int = 0

    @property
    def at_boundary(self) -> bool:
        return self.boundary is not Boundary.NONE

    def to_dict(self) -> dict[str, object]:
        return {
            "position": self.position.to_dict() if self.position else None,
            "boundary": self.boundary.value,
            "moved": self.moved,
            "steps_taken": self.steps_taken,
        }


def check_position(rows: Sequence[Row], position: Position) -> Row:
    """Return the row at position, raising if position is not a step."""
    if not 0 <= position.row < len(rows):
        raise OutOfRangeError(position, f"Row index {position.row} is out of bounds")
    row = rows[position.row]
    if not 0 <= position.step < len(row.steps):
        raise OutOfRangeError(
            position,
            f"Step index {position.step} is out of bounds for row {position.row}",
        )
    return row


def first_position(rows: Sequence[Row]) -> Position | None:
    """First step of the first non-empty row."""
    for index, row in enumerate(rows):
        if not row.is_empty:
            return Position(index, 0)
    return None


def last_position(rows: Sequence[Row]) -> Position | None:
    """Last step of the last non-empty row."""
    for index in range(len(rows) - 1, -1, -1):
        if not rows[index].is_empty:
            return Position(index, len(rows[index].steps) - 1)
    return None


def step_forward(rows: Sequence[Row], position: Position) -> Transition:
    row = check_position(rows, position)
    if position.step + 1 < len(row.steps):
        return Transition(Position(position.row, position.step + 1), moved=True, steps_taken=1)
    return Transition(position, Boundary.ROW_END)


def step_backward(rows: Sequence[Row], position: Position) -> Transition:
    check_position(rows, position)
    if position.step > 0:
        return Transition(Position(position.row, position.step - 1), moved=True, steps_taken=1)
    return Transition(position, Boundary.ROW_START)


def row_forward(rows: Sequence[Row], position: Position) -> Transition:
    """Move to the first step of the next non-empty row."""
    check_position(rows, position)
    for index in range(position.row + 1, len(rows)):
        if not rows[index].is_empty:
            return Transition(Position(index, 0), moved=True)
    return Transition(position, Boundary.PATTERN_END)


def row_backward(rows: Sequence[Row], position: Position) -> Transition:
    """Move to the *last* step of the previous non-empty row."""
    check_position(rows, position)
    for index in range(position.row - 1, -1, -1):
        if not rows[index].is_empty:
            return Transition(Position(index, len(rows[index].steps) - 1), moved=True)
    return Transition(position, Boundary.PATTERN_START)


def row_end(rows: Sequence[Row], position: Position) -> Transition:
    """Snap to the last step of the current row."""
    row = check_position(rows, position)
    target = Position(position.row, len(row.steps) - 1)
    return Transition(target, moved=target != position)


def advance(rows: Sequence[Row], position: Position, count: int) -> Transition:
    """
    Step forward up to count times.

    Stops at the first row end without crossing into the next row; the
    remaining count is discarded.
    """
    return _repeat(step_forward, rows, position, count)


def retreat(rows: Sequence[Row], position: Position, count: int) -> Transition:
    """Step backward up to count times, stopping at the row start."""
    return _repeat(step_backward, rows, position, count)


def _repeat(move, rows: Sequence[Row], position: Position, count: int) -> Transition:
    if count < 0:
        raise ValueError(f"Step count must be non-negative: {count}")
    check_position(rows, position)

    taken = 0
    current = position
    for _ in range(count):
        result = move(rows, current)
        if result.at_boundary:
            return Transition(current, result.boundary, moved=taken > 0, steps_taken=taken)
        current = result.position
        taken += 1
    return Transition(current, moved=taken > 0, steps_taken=taken)
