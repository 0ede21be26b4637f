"""Base exception class for pricing and monitoring errors.

Every error carries a human-readable message, a `details` dict of context
(parameter names, symbols, store operations) and a `retryable` flag that
tells callers whether repeating the same call can succeed.
"""

from __future__ import annotations

from typing import Any


class OptionRiskError(Exception):
    """Base exception for all optionrisk errors."""

    retryable: bool = False
    """True when the failure is transient (e.g. an unreachable store)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize optionrisk error.

        Args:
            message: Human-readable error message.
            details: Additional error context (parameter, symbol, operation...).
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def symbol(self) -> str | None:
        """Symbol the error relates to, when known."""
        return self.details.get("symbol")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for alert and API payloads."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }
