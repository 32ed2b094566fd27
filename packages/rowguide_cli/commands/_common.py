"""Shared helpers for pattern-file commands"""

import click
from pydantic import ValidationError
from rowguide_core.ir import Project
from rowguide_loader import load_pattern_from_file


def load_or_abort(formatter, pattern_file: str) -> Project:
    """Load a pattern file, reporting failures through the formatter"""
    try:
        return load_pattern_from_file(pattern_file)
    except (ValueError, FileNotFoundError) as e:
        formatter.error("Failed to load pattern", str(e))
        raise click.Abort()
    except ValidationError as e:
        formatter.error("Invalid pattern document", str(e))
        raise click.Abort()
