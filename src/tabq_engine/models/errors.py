"""Engine error hierarchy.

Callers (typically an LLM tool-calling layer) branch on :attr:`TabqEngineError.kind`
rather than on exception classes, so every error serializes to a small dict.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Categorization for failures surfaced to callers."""

    COLUMN_NOT_FOUND = "column_not_found"
    INVALID_PARAMETER = "invalid_parameter"
    UNKNOWN_OPERATION = "unknown_operation"
    EMPTY_INPUT = "empty_input"
    INPUT_ERROR = "input_error"
    CONFIG_ERROR = "config_error"


class TabqEngineError(Exception):
    """Base class for engine-specific exceptions."""

    kind: ErrorKind = ErrorKind.INVALID_PARAMETER

    def __init__(self, message: str, *, operation: str | None = None, parameter: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.parameter = parameter

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "operation": self.operation,
            "parameter": self.parameter,
        }


class ColumnNotFoundError(TabqEngineError):
    """Raised when a column argument matches no header."""

    kind = ErrorKind.COLUMN_NOT_FOUND

    def __init__(self, column: str, *, operation: str | None = None, parameter: str | None = "column") -> None:
        super().__init__(f'Column "{column}" not found', operation=operation, parameter=parameter)
        self.column = column

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["column"] = self.column
        return out


class InvalidParameterError(TabqEngineError):
    """Raised when an operation receives parameters it cannot use."""

    kind = ErrorKind.INVALID_PARAMETER


class UnknownOperationError(TabqEngineError):
    """Raised when an operation name is not registered."""

    kind = ErrorKind.UNKNOWN_OPERATION


class EmptyInputError(TabqEngineError):
    """Raised when there is nothing to resolve against (e.g. no headers)."""

    kind = ErrorKind.EMPTY_INPUT


class InputError(TabqEngineError):
    """Raised when source files or sheets are unusable."""

    kind = ErrorKind.INPUT_ERROR


class ConfigError(TabqEngineError):
    """Raised when settings or the synonym table are invalid."""

    kind = ErrorKind.CONFIG_ERROR


__all__ = [
    "ColumnNotFoundError",
    "ConfigError",
    "EmptyInputError",
    "ErrorKind",
    "InputError",
    "InvalidParameterError",
    "TabqEngineError",
    "UnknownOperationError",
]
