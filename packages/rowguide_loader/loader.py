"""
Pattern loader.

Loads stored projects from YAML or JSON files with validation.
"""

from pathlib import Path
from typing import Any
import json
import yaml

from rowguide_core.ir import Position, Project, Row, Step, parse_step_mark_key

from .pattern_models import PatternDocument


def load_pattern(data: dict[str, Any]) -> Project:
    """
    Validate a project document and build the Project IR.

    Args:
        data: Dictionary in the PatternDocument shape

    Returns:
        Project with sanitized steps

    Raises:
        pydantic.ValidationError: If validation fails

    Example:
        >>> project = load_pattern({
        ...     "rows": [
        ...         {"id": 1, "steps": [{"id": 1, "count": 3, "description": "A"}]},
        ...         {"id": 2, "steps": [{"id": 1, "count": 2, "description": "B"}]},
        ...     ]
        ... })
        >>> project.total_beads
        5
    """
    document = PatternDocument.model_validate(data)

    rows = [
        Row.create(
            id=row.id,
            steps=[Step.create(s.id, s.count, s.description) for s in row.steps],
        )
        for row in document.rows
    ]
    position = (
        Position.create(document.position.row, document.position.step)
        if document.position is not None
        else None
    )
    return Project.create(
        rows=rows,
        position=position,
        id=document.id,
        name=document.name,
        marked_steps={parse_step_mark_key(k): v for k, v in document.marked_steps.items()},
        marked_rows=dict(document.marked_rows),
    )


def load_pattern_from_file(file_path: Path | str) -> Project:
    """
    Load a project from a YAML or JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is invalid
        pydantic.ValidationError: If the document fails validation
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Pattern file not found: {path}")

    content = path.read_text(encoding="utf-8")

    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
    elif suffix == ".json":
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        raise ValueError(
            f"Unsupported file format: {suffix}. Use .yaml, .yml, or .json"
        )

    if not isinstance(data, dict):
        raise ValueError(f"Pattern must be a dictionary, got {type(data).__name__}")

    return load_pattern(data)


def save_pattern_to_file(project: Project, file_path: Path | str) -> Path:
    """Write a project back as YAML or JSON (chosen by suffix)."""
    path = Path(file_path)
    data = project.to_dict()

    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    elif suffix == ".json":
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    else:
        raise ValueError(
            f"Unsupported file format: {suffix}. Use .yaml, .yml, or .json"
        )
    return path
