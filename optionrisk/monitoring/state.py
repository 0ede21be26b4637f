"""
Per-Symbol State Store

Holds one ThresholdState per symbol, each guarded by its own asyncio.Lock.
There is no store-wide lock: events for different symbols never wait on
each other, and events for the same symbol run their read-modify-write
one at a time.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import datetime

from .types import ThresholdState

logger = logging.getLogger(__name__)


class SymbolStateStore:
    """
    Lazily-created, lock-per-symbol monitoring state.

    Example:
        store = SymbolStateStore()

        async with store.locked("SPY", default_threshold=0.1) as state:
            previous = state.last_delta
            state.last_delta = 0.42
    """

    def __init__(self) -> None:
        self._states: dict[str, ThresholdState] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        # Tasks holding or waiting for each symbol's lock
        self._users: dict[str, int] = {}

    def _lock_for(self, symbol: str) -> asyncio.Lock:
        # No await between lookup and insert, so one lock per symbol per loop
        lock = self._locks.get(symbol)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[symbol] = lock
        return lock

    @asynccontextmanager
    async def locked(
        self, symbol: str, default_threshold: float
    ) -> AsyncIterator[ThresholdState]:
        """
        Hold the symbol's lock and yield its mutable state.

        The state is created on first use with `default_threshold`.

        Args:
            symbol: Symbol to lock
            default_threshold: Threshold for a newly created state

        Yields:
            The live ThresholdState for the symbol
        """
        self._users[symbol] = self._users.get(symbol, 0) + 1
        try:
            async with self._lock_for(symbol):
                state = self._states.get(symbol)
                if state is None:
                    state = ThresholdState(symbol=symbol, threshold_value=default_threshold)
                    self._states[symbol] = state
                    logger.debug(f"Created monitoring state for {symbol}")
                yield state
        finally:
            remaining = self._users[symbol] - 1
            if remaining:
                self._users[symbol] = remaining
            else:
                del self._users[symbol]

    def snapshot(self, symbol: str) -> ThresholdState | None:
        """Copy of a symbol's state, or None if the symbol was never seen."""
        state = self._states.get(symbol)
        return replace(state) if state is not None else None

    def get_last_delta(self, symbol: str) -> float | None:
        """Last observed delta for a symbol."""
        state = self._states.get(symbol)
        return state.last_delta if state is not None else None

    def set_threshold_value(self, symbol: str, value: float) -> None:
        """Record a threshold on an existing state (no-op for unseen symbols)."""
        state = self._states.get(symbol)
        if state is not None:
            state.threshold_value = value

    def symbols(self) -> list[str]:
        """Symbols with monitoring state."""
        return list(self._states.keys())

    def evict_idle(self, now: datetime, idle_seconds: float) -> list[str]:
        """
        Drop state for symbols not observed within `idle_seconds`.

        Symbols whose lock is held or awaited are kept, so a symbol never
        ends up with two locks.

        Returns:
            Evicted symbols
        """
        evicted = []
        for symbol, state in list(self._states.items()):
            if self._users.get(symbol):
                continue
            if state.last_seen is None:
                continue
            if (now - state.last_seen).total_seconds() >= idle_seconds:
                del self._states[symbol]
                self._locks.pop(symbol, None)
                evicted.append(symbol)

        if evicted:
            logger.info(f"Evicted idle monitoring state for {len(evicted)} symbols")
        return evicted

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._states


__all__ = ["SymbolStateStore"]
