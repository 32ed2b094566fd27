"""
Pattern document models with Pydantic validation.

These models check the structure of a stored project document before it
is turned into the frozen IR in rowguide_core. Counts are not rejected
here: Step.create clamps them, so a count of 0 loads as 1.
"""

from typing import Annotated

from pydantic import BaseModel, Field, field_validator

from rowguide_core.constants.marks import MAX_MARK, UNMARKED

Mark = Annotated[int, Field(ge=UNMARKED, le=MAX_MARK)]


class StepConfig(BaseModel):
    """
    One step of a stored pattern.

    Example:
        >>> StepConfig(id=1, count=3, description="A")
    """

    id: int = Field(default=0, ge=0, description="Step identifier within the row")
    count: int = Field(default=1, description="Bead count (clamped to >= 1)")
    description: str = Field(..., description="Bead colour / type label")

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        return v.strip()


class RowConfig(BaseModel):
    """One row of a stored pattern."""

    id: int = Field(default=0, ge=0, description="Row identifier")
    steps: list[StepConfig] = Field(default_factory=list)


class PositionConfig(BaseModel):
    """Saved cursor."""

    row: int = Field(default=0, ge=0)
    step: int = Field(default=0, ge=0)


class PatternDocument(BaseModel):
    """
    A stored project.

    Example:
        >>> doc = PatternDocument(
        ...     name="Sunset Bracelet",
        ...     rows=[{"id": 1, "steps": [{"id": 1, "count": 3, "description": "A"}]}],
        ... )
    """

    id: int | None = Field(default=None, gt=0)
    name: str | None = None
    rows: list[RowConfig] = Field(default_factory=list)
    position: PositionConfig | None = None
    marked_steps: dict[str, Mark] = Field(default_factory=dict)
    marked_rows: dict[int, Mark] = Field(default_factory=dict)

    @field_validator("marked_steps")
    @classmethod
    def validate_step_keys(cls, v: dict[str, int]) -> dict[str, int]:
        """Keys must look like "row-step" with non-negative integers."""
        for key in v:
            row, sep, step = key.partition("-")
            if not sep or not row.isdigit() or not step.isdigit():
                raise ValueError(f"Step mark key must be 'row-step': {key!r}")
        return v
