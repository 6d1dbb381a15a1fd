"""
Result types and error hierarchy for daynote.

This module provides:
1. Result[T, E] type for explicit error handling around external commands
2. Domain-specific exception hierarchy

Usage:
    from daynote.core.result import Ok, Err, Result, DaynoteError

    async def run(tokens: list[str]) -> Result[CommandResult, ToolExecutionError]:
        if missing:
            return Err(ToolExecutionError("Command not found"))
        return Ok(result)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Represents a successful result containing a value."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Represents a failed result containing an error."""

    error: E


Result = Ok[T] | Err[E]


# ---------------------------------------------------------------------------
# Domain-specific error hierarchy
# ---------------------------------------------------------------------------


class DaynoteError(Exception):
    """Base exception for all daynote errors.

    Everything the CLI reports to the user and turns into exit code 1
    derives from this class.
    """

    def __init__(self, message: str, *, context: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


class UsageError(DaynoteError):
    """Raised for malformed invocations.

    Carries the offending token in ``self.token``.
    """

    def __init__(self, message: str, token: str) -> None:
        super().__init__(message)
        self.token = token


class UnknownOptionError(UsageError):
    def __init__(self, token: str) -> None:
        super().__init__(f"Unknown option: {token}", token)


class UnknownArgumentError(UsageError):
    def __init__(self, token: str) -> None:
        super().__init__(f"Unknown argument: {token}", token)


class MissingOptionValueError(UsageError):
    def __init__(self, token: str) -> None:
        super().__init__(f"Option {token} requires a value", token)


class ConfigurationError(DaynoteError):
    """Raised for configuration issues.

    Examples:
    - Config file parse errors
    - Config root that is not a mapping
    """


class DateCommandUnsupportedError(DaynoteError):
    """Raised when the date command cannot parse a free-form description."""


class ToolExecutionError(DaynoteError):
    """Raised when an external tool fails to execute.

    Examples:
    - Executable not found
    - Non-zero exit status
    """


class DateCommandError(ToolExecutionError):
    """Raised when the date command fails in offset mode."""


class EditorError(ToolExecutionError):
    """Raised when the editor cannot be launched."""


class NotebookError(ToolExecutionError):
    """Raised when the notebook backend cannot answer or write."""


__all__ = [
    # Result types
    "Ok",
    "Err",
    "Result",
    # Error hierarchy
    "DaynoteError",
    "UsageError",
    "UnknownOptionError",
    "UnknownArgumentError",
    "MissingOptionValueError",
    "ConfigurationError",
    "DateCommandUnsupportedError",
    "ToolExecutionError",
    "DateCommandError",
    "EditorError",
    "NotebookError",
]
