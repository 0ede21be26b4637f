"""Errors raised inside the delta threshold monitor.

These are absorbed by the monitor on the event path; they only surface to
callers of explicit threshold writes.
"""

from __future__ import annotations

from typing import Any

from .base import OptionRiskError


class MonitoringError(OptionRiskError):
    """Base exception for monitoring failures."""

    pass


class ThresholdStoreError(MonitoringError):
    """
    Raised when the threshold store is unreachable, fails or times out.

    Reads fall back to the default threshold. Writes raise this after the
    configured number of attempts.
    """

    retryable = True

    def __init__(
        self,
        message: str,
        symbol: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if symbol:
            details["symbol"] = symbol
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class MalformedEventError(MonitoringError):
    """Raised when a market-data snapshot lacks a symbol or a delta."""

    def __init__(
        self,
        message: str,
        missing_fields: list[str] | None = None,
        symbol: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if missing_fields:
            details["missing_fields"] = missing_fields
        if symbol:
            details["symbol"] = symbol
        super().__init__(message, details)
        self.missing_fields = missing_fields or []
