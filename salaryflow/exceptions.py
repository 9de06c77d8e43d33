"""
Module: exceptions

Purpose: Domain-specific exception hierarchy for the salary dashboard.

All exceptions carry a context dict so callers can log what failed without
re-deriving it from the message.
"""

from pathlib import Path
from typing import Any


class SalaryFlowError(Exception):
    """Base exception for all salaryflow errors."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


class DatasetLoadError(SalaryFlowError):
    """Raised when the salary dataset cannot be read."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if path is not None:
            ctx["path"] = str(path)
        super().__init__(message, context=ctx)
        self.path = Path(path) if path is not None else None


class DataValidationError(SalaryFlowError):
    """Raised when a value fails schema or business validation."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if field is not None:
            ctx["field"] = field
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx)
        self.field = field
        self.value = value


class ConfigurationError(SalaryFlowError):
    """Raised when dashboard configuration is missing or invalid."""

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if key is not None:
            ctx["key"] = key
        super().__init__(message, context=ctx)
        self.key = key
