"""Position model for Rowguide."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Position:
    """Current (row, step) coordinate in a pattern.

    Zero-based indices into ``Project.rows`` and ``Row.steps``.
    Positions are values: copy freely, never share for mutation.
    """

    row: int = 0
    step: int = 0

    @classmethod
    def create(cls, row: float = 0, step: float = 0) -> Position:
        """Create a position, flooring and clamping both indices to >= 0."""
        return cls(row=max(0, math.floor(row)), step=max(0, math.floor(step)))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for IPC"""
        return {"row": self.row, "step": self.step}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Position:
        return cls.create(data.get("row", 0), data.get("step", 0))

    def __str__(self) -> str:
        return f"({self.row}, {self.step})"
