"""
Monitoring Protocol Definitions

Provides protocol interfaces for the external collaborators of the delta
threshold monitor, plus in-memory implementations for tests and local runs.
"""

from __future__ import annotations

import asyncio
from typing import Protocol

from .types import AlertEvent, AlertRouting


class ThresholdStore(Protocol):
    """Protocol for the per-symbol threshold key-value service."""

    async def get(self, symbol: str) -> float | None:
        """Get the threshold for a symbol, or None when unset."""
        ...

    async def set(self, symbol: str, value: float) -> None:
        """Store the threshold for a symbol."""
        ...


class AlertSink(Protocol):
    """Protocol for the service that delivers alerts (SMS, email, push...)."""

    async def publish(self, event: AlertEvent, routing: AlertRouting | None = None) -> None:
        """Hand an alert to the delivery layer."""
        ...


class InMemoryThresholdStore:
    """Dictionary-backed threshold store."""

    def __init__(self, thresholds: dict[str, float] | None = None) -> None:
        self._thresholds: dict[str, float] = dict(thresholds or {})

    async def get(self, symbol: str) -> float | None:
        return self._thresholds.get(symbol)

    async def set(self, symbol: str, value: float) -> None:
        self._thresholds[symbol] = value


class CollectingAlertSink:
    """Alert sink that keeps every published event in memory."""

    def __init__(self) -> None:
        self.events: list[AlertEvent] = []
        self.routings: list[AlertRouting | None] = []
        self._lock = asyncio.Lock()

    async def publish(self, event: AlertEvent, routing: AlertRouting | None = None) -> None:
        async with self._lock:
            self.events.append(event)
            self.routings.append(routing)

    def for_symbol(self, symbol: str) -> list[AlertEvent]:
        """Events published for one symbol, oldest first."""
        return [event for event in self.events if event.symbol == symbol]


__all__ = [
    "AlertSink",
    "CollectingAlertSink",
    "InMemoryThresholdStore",
    "ThresholdStore",
]
