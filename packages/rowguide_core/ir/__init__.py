"""IR models for Rowguide."""

from .position import Position
from .project import Project, parse_step_mark_key, step_mark_key
from .row import Row
from .step import Step

__all__ = [
    "Position",
    "Project",
    "Row",
    "Step",
    "step_mark_key",
    "parse_step_mark_key",
]
