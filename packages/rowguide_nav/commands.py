"""
Pydantic models for command validation.

Each navigation or mark command has a model that validates its payload,
so handlers can be driven from untyped input (keyboard bindings, CLI
actions, IPC).
"""

from pydantic import BaseModel, Field

from rowguide_core.constants.marks import MAX_MARK, UNMARKED


class ResetCommand(BaseModel):
    """
    Project reset payload.

    Fields:
        forward: True when running off the end, False when running off the start
    """

    forward: bool = True


class AdvanceCommand(BaseModel):
    """
    Multi-step advance / retreat payload.

    Fields:
        count: Steps to move (defaults to the multiadvance setting)
    """

    count: int | None = Field(default=None, ge=1)


class SelectCommand(BaseModel):
    """
    Step selection payload.

    Fields:
        row: Row index
        step: Step index within the row
    """

    row: int = Field(ge=0)
    step: int = Field(ge=0)


class MarkModeCommand(BaseModel):
    """
    Mark mode change payload.

    Fields:
        mode: 0 (inactive) to 6
    """

    mode: int = Field(ge=UNMARKED, le=MAX_MARK)


class MarkStepCommand(BaseModel):
    """Activate a step through the mark overlay."""

    row: int = Field(ge=0)
    step: int = Field(ge=0)


class MarkRowCommand(BaseModel):
    """Activate a row through the mark overlay."""

    row: int = Field(ge=0)
