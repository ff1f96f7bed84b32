"""
Log capture custom exceptions.

Matching never raises: a filter that cannot match simply reports no match.
These exceptions cover caller-input bugs such as an unknown severity label.
"""

from typing import Any, Dict, Optional


class LogCaptureError(Exception):
    """Base exception for all log capture errors."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.context = context or {}

    def __str__(self) -> str:
        if self.operation:
            return f"[{self.operation}] {self.message}"
        return self.message


class ConfigurationError(LogCaptureError):
    """Exception raised when a query or capture is configured with invalid input."""

    pass


class UnknownLevelError(ConfigurationError):
    """Exception raised when a severity label cannot be resolved to a level."""

    def __init__(self, label: Any, operation: Optional[str] = None):
        super().__init__(
            message=f"Unknown log level: {label!r}",
            operation=operation,
            context={"label": label},
        )
        self.label = label
