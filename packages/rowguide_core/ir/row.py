"""Row model for Rowguide."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from .step import Step


@dataclass(frozen=True, slots=True)
class Row:
    """Ordered sequence of steps.

    Step order is the traversal order. A row may be empty while a pattern
    is being built, but an empty row is never a navigation target.
    """

    id: int
    steps: tuple[Step, ...] = field(default_factory=tuple)

    @classmethod
    def create(cls, id: int, steps: list[Step] | tuple[Step, ...] | None = None) -> Row:
        """Create a row from any step sequence."""
        return cls(id=int(id), steps=tuple(steps or ()))

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    @property
    def is_empty(self) -> bool:
        return not self.steps

    @property
    def bead_count(self) -> int:
        """Total beads in the row (sum of step counts)."""
        return sum(step.count for step in self.steps)

    def with_steps(self, steps: list[Step] | tuple[Step, ...]) -> Row:
        """Return a copy of this row holding different steps."""
        return Row(id=self.id, steps=tuple(steps))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "steps": [s.to_dict() for s in self.steps],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Row:
        """Create from dictionary (deserialization)."""
        steps = [Step.from_dict(s) for s in data.get("steps", [])]
        return cls.create(id=data.get("id", 0), steps=steps)
