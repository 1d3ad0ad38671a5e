"""
Custom exceptions for DNS Bench.

Per-query failures are never raised; they are recorded on the
QueryOutcome. Only configuration and output problems propagate.
"""

from typing import Any, Optional


class DNSBenchError(Exception):
    """Base exception for all DNS Bench errors."""

    def __init__(self, message: str,
                 details: Optional[dict[str, Any]] = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(DNSBenchError):
    """Raised when the benchmark cannot start with the given settings."""


class OutputError(DNSBenchError):
    """Raised when a report file cannot be written."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.path = path
