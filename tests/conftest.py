"""Shared pytest fixtures for optionrisk tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from optionrisk.greeks import OptionParameters, OptionType
from optionrisk.monitoring import CollectingAlertSink, InMemoryThresholdStore


class FakeClock:
    """Manually advanced clock for cooldown tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 15, 14, 30, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock fixed at 2024-01-15 14:30 UTC."""
    return FakeClock()


@pytest.fixture
def atm_call() -> OptionParameters:
    """One-year at-the-money call."""
    return OptionParameters(
        underlying_price=100.0,
        strike_price=100.0,
        time_to_expiry=1.0,
        risk_free_rate=0.05,
        volatility=0.2,
        option_type=OptionType.CALL,
    )


@pytest.fixture
def threshold_store() -> InMemoryThresholdStore:
    """Create an empty in-memory threshold store."""
    return InMemoryThresholdStore()


@pytest.fixture
def alert_sink() -> CollectingAlertSink:
    """Create an alert sink that records every event."""
    return CollectingAlertSink()
