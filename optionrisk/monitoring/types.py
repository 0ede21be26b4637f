"""Data models for delta threshold monitoring.

Defines the market-data snapshot consumed by the monitor, the per-symbol
threshold state it owns, and the alert events it emits.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from optionrisk.greeks.types import OptionType


class AlertPriority(str, Enum):
    """Alert priority tiers, lowest first."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class AlertType(str, Enum):
    """Kinds of alerts emitted by the monitor."""

    DELTA_THRESHOLD_BREACH = "DELTA_THRESHOLD_BREACH"


# camelCase keys used by upstream market-data publishers
_SNAPSHOT_ALIASES = {
    "underlyingPrice": "underlying_price",
    "strikePrice": "strike_price",
    "impliedVolatility": "implied_volatility",
    "timeToExpiry": "time_to_expiry",
    "riskFreeRate": "risk_free_rate",
    "dividendYield": "dividend_yield",
    "optionType": "option_type",
}


@dataclass(frozen=True)
class MarketDataSnapshot:
    """Per-symbol Greeks snapshot delivered by the market-data feed.

    Every field is optional; the monitor decides what it needs.
    """

    symbol: str | None = None
    delta: float | None = None
    gamma: float | None = None
    theta: float | None = None
    vega: float | None = None
    rho: float | None = None
    underlying_price: float | None = None
    strike_price: float | None = None
    implied_volatility: float | None = None
    timestamp: datetime | None = None
    time_to_expiry: float | None = None
    risk_free_rate: float | None = None
    dividend_yield: float | None = None
    option_type: OptionType | str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MarketDataSnapshot:
        """Build a snapshot from a camelCase or snake_case mapping.

        Unknown keys are ignored.
        """
        known = cls.__dataclass_fields__
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _SNAPSHOT_ALIASES.get(key, key)
            if name in known:
                values[name] = value

        timestamp = values.get("timestamp")
        if isinstance(timestamp, str):
            values["timestamp"] = datetime.fromisoformat(timestamp)
        return cls(**values)

    @property
    def has_pricing_inputs(self) -> bool:
        """True when the snapshot carries enough inputs to reprice."""
        return all(
            value is not None
            for value in (
                self.underlying_price,
                self.strike_price,
                self.time_to_expiry,
                self.implied_volatility,
                self.option_type,
            )
        )


@dataclass
class ThresholdState:
    """Mutable monitoring state for one symbol."""

    symbol: str
    threshold_value: float
    last_delta: float | None = None
    last_alert_time: datetime | None = None
    last_seen: datetime | None = None

    def in_cooldown(self, now: datetime, cooldown_seconds: float) -> bool:
        """True when an alert fired less than `cooldown_seconds` ago."""
        if self.last_alert_time is None:
            return False
        return (now - self.last_alert_time).total_seconds() < cooldown_seconds


@dataclass(frozen=True)
class AlertRouting:
    """Delivery metadata handed to the alert sink with each event."""

    account_number: str | None = None
    user_id: str | None = None
    phone_number: str | None = None
    email: str | None = None
    push_token: str | None = None


@dataclass(frozen=True)
class AlertEvent:
    """A delta threshold breach, handed once to the alert sink."""

    symbol: str
    current_delta: float
    threshold: float
    priority: AlertPriority
    timestamp: datetime
    formatted_message: str
    previous_delta: float | None = None
    alert_type: AlertType = AlertType.DELTA_THRESHOLD_BREACH
    alert_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "alert_id": self.alert_id,
            "alert_type": self.alert_type.value,
            "symbol": self.symbol,
            "current_delta": self.current_delta,
            "threshold": self.threshold,
            "previous_delta": self.previous_delta,
            "priority": self.priority.value,
            "timestamp": self.timestamp.isoformat(),
            "message": self.formatted_message,
        }


def format_alert_message(
    symbol: str,
    current_delta: float,
    threshold: float,
    previous_delta: float | None,
    timestamp: datetime,
) -> str:
    """Human-readable alert text."""
    return (
        f"Delta threshold breach detected for {symbol}. "
        f"Current delta: {current_delta}, Threshold: {threshold}. "
        f"Previous delta: {previous_delta}. Time: {timestamp.isoformat()}"
    )


def utc_now() -> datetime:
    """Default monitor clock."""
    return datetime.now(UTC)
