"""
Step data validation for the compression engine.

Collects every problem in the input instead of stopping at the first one,
so a rejected transform can be logged with the full list.
"""

from __future__ import annotations

from typing import Any, Sequence

from rowguide_core.constants.limits import (
    MAX_EXPAND_COUNT,
    MAX_STEPS_PER_CALL,
    MAX_TOTAL_COUNT,
)


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def step_issues(step: Any, index: int) -> list[str]:
    """Problems with a single step (missing description, bad count)."""
    if step is None:
        return [f"Step at index {index} is missing"]

    issues: list[str] = []
    description = getattr(step, "description", None)
    if not isinstance(description, str) or not description:
        issues.append(f"Step at index {index} has invalid description: {description!r}")

    count = getattr(step, "count", None)
    if not _is_count(count):
        issues.append(f"Step at index {index} has invalid count: {count!r}")
    return issues


def validate_for_expand(steps: Sequence[Any]) -> list[str]:
    """Issues that make a sequence unsafe to expand."""
    issues: list[str] = []
    if len(steps) > MAX_STEPS_PER_CALL:
        issues.append(f"Too many steps ({len(steps)}, max {MAX_STEPS_PER_CALL})")

    for index, step in enumerate(steps):
        found = step_issues(step, index)
        issues.extend(found)
        if not found and step.count > MAX_EXPAND_COUNT:
            issues.append(
                f"Step at index {index} has excessive count for expansion: {step.count}"
            )
    return issues


def validate_for_compress(steps: Sequence[Any]) -> list[str]:
    """Issues that make a sequence unsafe to compress."""
    issues: list[str] = []
    if len(steps) > MAX_STEPS_PER_CALL:
        issues.append(f"Too many steps ({len(steps)}, max {MAX_STEPS_PER_CALL})")

    total = 0
    for index, step in enumerate(steps):
        found = step_issues(step, index)
        issues.extend(found)
        if found:
            continue
        if step.count <= 0:
            issues.append(f"Step at index {index} has non-positive count: {step.count}")
        else:
            total += step.count

    if total > MAX_TOTAL_COUNT:
        issues.append(f"Total step count too large ({total}, max {MAX_TOTAL_COUNT})")
    return issues
