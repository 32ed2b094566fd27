"""
Pattern source for Rowguide.

Loads stored projects (YAML / JSON) and validates them with Pydantic.
"""

from .loader import load_pattern, load_pattern_from_file, save_pattern_to_file
from .pattern_models import PatternDocument, PositionConfig, RowConfig, StepConfig

__all__ = [
    "PatternDocument",
    "PositionConfig",
    "RowConfig",
    "StepConfig",
    "load_pattern",
    "load_pattern_from_file",
    "save_pattern_to_file",
]
