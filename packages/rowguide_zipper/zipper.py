"""
Step compression engine.

expand → interleave → compress: the alternation logic stays independent of
run-length bookkeeping at the cost of an O(total beads) intermediate list.

These functions raise on bad input; the Zipper facade in service.py maps
errors to the fallback each caller expects.
"""

from __future__ import annotations

from typing import Sequence

from rowguide_core.constants.limits import ZIP_LENGTH_TOLERANCE
from rowguide_core.exceptions import LengthMismatchError, MalformedUnitError
from rowguide_core.ir.step import Step

from .validation import validate_for_compress, validate_for_expand


def expand_steps(steps: Sequence[Step]) -> list[Step]:
    """
    Expand counted steps into single-bead steps.

    A step of count n becomes n steps of count 1 with the same
    description. Ids are reassigned sequentially from 1. Steps with a
    count of 0 or less contribute nothing.

    Raises:
        MalformedUnitError: A step lacks a description or an integer count
    """
    issues = validate_for_expand(steps)
    if issues:
        raise MalformedUnitError(issues)

    expanded: list[Step] = []
    for step in steps:
        if step.count <= 0:
            continue
        for _ in range(step.count):
            expanded.append(Step(id=len(expanded) + 1, count=1, description=step.description))
    return expanded


def compress_steps(steps: Sequence[Step]) -> list[Step]:
    """
    Run-length encode adjacent steps with equal descriptions.

    The output is maximal: no two adjacent steps share a description.
    Ids are reassigned sequentially from 1.

    Raises:
        MalformedUnitError: A step lacks a description or an integer count,
            or has a count of 0 or less
    """
    issues = validate_for_compress(steps)
    if issues:
        raise MalformedUnitError(issues)

    compressed: list[Step] = []
    description: str | None = None
    count = 0
    for step in steps:
        if step.description == description:
            count += step.count
            continue
        if description is not None:
            compressed.append(Step(id=len(compressed) + 1, count=count, description=description))
        description = step.description
        count = step.count

    if description is not None:
        compressed.append(Step(id=len(compressed) + 1, count=count, description=description))
    return compressed


def zip_steps(first: Sequence[Step], second: Sequence[Step]) -> list[Step]:
    """
    Interleave two rows bead by bead, then compress.

    Beads alternate first[0], second[0], first[1], second[1], ...; once the
    shorter row is exhausted the longer one contributes alone.

    Raises:
        MalformedUnitError: Either row has malformed steps
        LengthMismatchError: Bead totals differ by more than one
    """
    expanded_first = expand_steps(first)
    expanded_second = expand_steps(second)

    if abs(len(expanded_first) - len(expanded_second)) > ZIP_LENGTH_TOLERANCE:
        raise LengthMismatchError(len(expanded_first), len(expanded_second))

    interleaved: list[Step] = []
    for index in range(max(len(expanded_first), len(expanded_second))):
        if index < len(expanded_first):
            interleaved.append(expanded_first[index])
        if index < len(expanded_second):
            interleaved.append(expanded_second[index])

    return compress_steps(interleaved)
