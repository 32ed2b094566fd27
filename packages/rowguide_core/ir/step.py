"""Step model for Rowguide.

A step is the smallest counted, labeled element of a pattern: a run of
``count`` identical beads (or stitches) described by ``description``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Step:
    """Pattern step (count beads of one description).

    Steps are immutable value records. Use ``Step.create`` to build one from
    untrusted input: the count is clamped to at least 1 and the
    description is trimmed.
    """

    id: int
    count: int = 1
    description: str = ""

    @classmethod
    def create(cls, id: int = 0, count: Any = 1, description: Any = "") -> Step:
        """Create a sanitized step."""
        try:
            count = int(count)
        except (TypeError, ValueError):
            count = 1
        text = description.strip() if isinstance(description, str) else ""
        return cls(id=int(id), count=max(1, count), description=text)

    def with_count(self, count: int) -> Step:
        """Return a copy with a different count (clamped to >= 1)."""
        return Step.create(id=self.id, count=count, description=self.description)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "count": self.count,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Step:
        """Create from dictionary (deserialization)."""
        return cls.create(
            id=data.get("id", 0),
            count=data.get("count", 1),
            description=data.get("description", ""),
        )
