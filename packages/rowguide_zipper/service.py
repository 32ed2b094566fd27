"""
Zipper facade.

Wraps the raising functions in zipper.py with the recoverable contract the
navigation layer relies on: every call returns a TransformResult whose
steps are either the transform output or the operation's fallback, and
whose error records what went wrong.

Fallbacks:
    expand   -> empty sequence
    compress -> the original, unmodified sequence
    zip      -> empty sequence
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from rowguide_core.exceptions import LengthMismatchError, MalformedUnitError, RowguideError
from rowguide_core.ir.row import Row
from rowguide_core.ir.step import Step

from .zipper import compress_steps, expand_steps, zip_steps

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformResult:
    """
    Result of a step transform.

    Attributes:
        steps: Transform output, or the fallback when error is set
        error: The failure that triggered the fallback, if any
    """

    steps: tuple[Step, ...]
    error: RowguideError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, steps: Sequence[Step]) -> TransformResult:
        return cls(steps=tuple(steps))

    @classmethod
    def failure(cls, error: RowguideError, fallback: Sequence[Step] = ()) -> TransformResult:
        return cls(steps=tuple(fallback), error=error)


class Zipper:
    """Expand, compress and zip step sequences without raising."""

    def expand(self, steps: Sequence[Step]) -> TransformResult:
        try:
            return TransformResult.success(expand_steps(steps))
        except MalformedUnitError as e:
            logger.warning(f"Unable to expand step data: {e}")
            return TransformResult.failure(e)

    def compress(self, steps: Sequence[Step]) -> TransformResult:
        try:
            return TransformResult.success(compress_steps(steps))
        except MalformedUnitError as e:
            logger.warning(f"Unable to compress step data, keeping original: {e}")
            return TransformResult.failure(e, fallback=steps)

    def zip(self, first: Sequence[Step], second: Sequence[Step]) -> TransformResult:
        try:
            return TransformResult.success(zip_steps(first, second))
        except LengthMismatchError as e:
            logger.warning(
                f"Cannot combine rows with mismatched step counts: "
                f"{e.first_length} vs {e.second_length}"
            )
            return TransformResult.failure(e)
        except MalformedUnitError as e:
            logger.warning(f"Unable to combine rows: {e}")
            return TransformResult.failure(e)


def combine_rows(
    rows: Sequence[Row],
    zipper: Zipper | None = None,
) -> tuple[tuple[Row, ...], TransformResult | None]:
    """
    Merge the first two rows into one by zipping them.

    Row 0 keeps its id and receives the zipped steps; row 1 is dropped.
    When the zip fails (or there are fewer than two rows) the rows are
    returned unchanged.

    Returns:
        (rows, result) where result is None if no zip was attempted
    """
    if len(rows) < 2:
        return tuple(rows), None

    zipper = zipper or Zipper()
    result = zipper.zip(rows[0].steps, rows[1].steps)
    if not result.steps:
        return tuple(rows), result

    merged = rows[0].with_steps(result.steps)
    logger.info(
        f"Combined rows {rows[0].id} and {rows[1].id} into {len(result.steps)} steps"
    )
    return (merged, *rows[2:]), result
