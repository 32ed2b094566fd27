"""
Command result type for error handling.

Provides a standardized way to return success/failure status from
navigation and mark command handlers.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class CommandResult:
    """
    Result of a command execution.

    Attributes:
        success: True if command succeeded, False otherwise
        message: Optional error or success message
        data: Optional result data (position, boundary, marks)
    """

    success: bool
    message: str | None = None
    data: dict[str, Any] | None = None

    @classmethod
    def ok(cls, message: str | None = None, data: dict[str, Any] | None = None) -> "CommandResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def error(cls, message: str, data: dict[str, Any] | None = None) -> "CommandResult":
        return cls(success=False, message=message, data=data)
