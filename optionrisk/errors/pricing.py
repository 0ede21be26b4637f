"""Pricing-related errors.

Only these errors cross the pricing API boundary. They are never retried.
"""

from __future__ import annotations

from typing import Any

from .base import OptionRiskError


class PricingValidationError(OptionRiskError):
    """Base exception for rejected pricing inputs."""

    pass


class InvalidParameterError(PricingValidationError):
    """
    Raised when an option parameter violates the model's domain.

    Covers non-positive underlying price, strike, time to expiry or
    volatility, and option types other than CALL or PUT.
    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if parameter:
            details["parameter"] = parameter
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.parameter = parameter
        self.value = value
