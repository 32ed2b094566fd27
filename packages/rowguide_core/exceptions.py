"""Custom exceptions for Rowguide"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rowguide_core.ir.position import Position


class RowguideError(Exception):
    """Base exception for all Rowguide errors"""
    pass


class MalformedUnitError(RowguideError):
    """Step data is missing a description, has a bad count, or exceeds limits"""

    def __init__(self, issues: list[str]):
        self.issues = list(issues)
        super().__init__("; ".join(self.issues) or "Malformed step data")


class LengthMismatchError(RowguideError):
    """Rows cannot be zipped because their bead totals differ too much"""

    def __init__(self, first_length: int, second_length: int):
        self.first_length = first_length
        self.second_length = second_length
        super().__init__(f"Step length mismatch: {first_length} vs {second_length}")


class OutOfRangeError(RowguideError):
    """Position does not address a step of the pattern"""

    def __init__(self, position: Position | None, message: str | None = None):
        self.position = position
        super().__init__(message or f"Position out of range: {position}")


class SanityCheckError(RowguideError, AssertionError):
    """Engine's current step disagrees with its position"""
    pass
