"""
Delta Threshold Monitor

Consumes per-symbol Greeks snapshots, tracks the last delta seen for each
symbol, and emits prioritized alerts when a symbol's delta breaches its
threshold.

Per observation for a symbol:
1. Resolve the symbol's threshold (store value, else the default)
2. Read the previous delta and overwrite it with the current one
3. Breach when |delta| > |threshold| or delta moved more than the
   movement sensitivity since the previous observation
4. Alert on breach unless the symbol alerted within the cooldown window

Steps 2-4 run under the symbol's own lock.
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Callable
from datetime import datetime

from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from optionrisk.errors import (
    InvalidParameterError,
    MalformedEventError,
    ThresholdStoreError,
)
from optionrisk.greeks.calculator import compute_greeks
from optionrisk.greeks.types import OptionParameters, OptionType

from .classifier import classify_priority
from .config import MonitorConfig
from .protocols import AlertSink, ThresholdStore
from .state import SymbolStateStore
from .types import (
    AlertEvent,
    AlertRouting,
    MarketDataSnapshot,
    ThresholdState,
    format_alert_message,
    utc_now,
)

logger = logging.getLogger(__name__)


def is_breach(
    current_delta: float,
    previous_delta: float | None,
    threshold: float,
    movement_sensitivity: float,
) -> bool:
    """
    Decide whether an observation breaches.

    Args:
        current_delta: Delta just observed
        previous_delta: Delta observed before it, if any
        threshold: Threshold in force for the symbol
        movement_sensitivity: Minimum move between observations that breaches

    Returns:
        True on breach
    """
    if abs(current_delta) > abs(threshold):
        return True
    if previous_delta is not None:
        return abs(current_delta - previous_delta) > movement_sensitivity
    return False


def _is_retryable(error: BaseException) -> bool:
    # Foreign errors (connection, timeout) are assumed transient
    return getattr(error, "retryable", True)


class DeltaThresholdMonitor:
    """
    Stateful per-symbol delta threshold monitor.

    **Thresholds:**
    - Looked up per event from the threshold store
    - Lookup failures and timeouts fall back to `config.default_threshold`
    - `enable_adaptive_threshold` derives and writes back a threshold from
      the last observed delta

    **Alerting:**
    - At most one alert per symbol per cooldown window
    - Priority from the delta/threshold ratio
    - Sink failures are logged; monitoring state is not rolled back

    Example:
        ```python
        monitor = DeltaThresholdMonitor(
            threshold_store=InMemoryThresholdStore({"SPY": 0.25}),
            alert_sink=CollectingAlertSink(),
        )

        alert = await monitor.process_event(
            MarketDataSnapshot(symbol="SPY", delta=0.8)
        )
        ```
    """

    def __init__(
        self,
        threshold_store: ThresholdStore,
        alert_sink: AlertSink | None = None,
        config: MonitorConfig | None = None,
        clock: Callable[[], datetime] = utc_now,
        routing_resolver: Callable[[str], AlertRouting | None] | None = None,
    ) -> None:
        """
        Initialize the monitor.

        Args:
            threshold_store: Per-symbol threshold key-value service
            alert_sink: Delivery layer for alerts (None only builds events)
            config: Monitor configuration
            clock: Returns the current time (timezone-aware)
            routing_resolver: Maps a symbol to delivery metadata
        """
        self.threshold_store = threshold_store
        self.alert_sink = alert_sink
        self.config = config or MonitorConfig()
        self._clock = clock
        self._routing_resolver = routing_resolver
        self._states = SymbolStateStore()

    # ------------------------------------------------------------------
    # Event path
    # ------------------------------------------------------------------

    async def process_event(self, snapshot: MarketDataSnapshot) -> AlertEvent | None:
        """
        Process one market-data snapshot.

        Never raises: malformed snapshots are dropped and unexpected errors
        are logged so other symbols keep being monitored.

        Args:
            snapshot: Per-symbol Greeks snapshot

        Returns:
            The AlertEvent emitted, or None
        """
        try:
            symbol, current_delta = self._extract_delta(snapshot)
            return await self.observe(symbol, current_delta)
        except MalformedEventError as e:
            logger.debug(f"Dropping market data event: {e}")
            return None
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(
                f"Error processing delta monitoring for {snapshot.symbol}: {e}",
                exc_info=True,
            )
            return None

    def _extract_delta(self, snapshot: MarketDataSnapshot) -> tuple[str, float]:
        """Pick the symbol and delta to monitor, repricing when configured."""
        if not snapshot.symbol:
            raise MalformedEventError(
                "Market data event has no symbol", missing_fields=["symbol"]
            )

        if self.config.reprice_from_parameters and snapshot.has_pricing_inputs:
            try:
                return snapshot.symbol, self._reprice_delta(snapshot)
            except InvalidParameterError as e:
                raise MalformedEventError(
                    f"Cannot reprice {snapshot.symbol}: {e}",
                    symbol=snapshot.symbol,
                    details={"parameter": e.parameter},
                ) from e
            except (TypeError, ValueError) as e:
                raise MalformedEventError(
                    f"Non-numeric pricing input for {snapshot.symbol}: {e}",
                    symbol=snapshot.symbol,
                ) from e

        if snapshot.delta is None:
            raise MalformedEventError(
                f"Market data event for {snapshot.symbol} has no delta",
                missing_fields=["delta"],
                symbol=snapshot.symbol,
            )
        try:
            current_delta = float(snapshot.delta)
        except (TypeError, ValueError) as e:
            raise MalformedEventError(
                f"Market data event for {snapshot.symbol} has a non-numeric delta: "
                f"{snapshot.delta!r}",
                symbol=snapshot.symbol,
                details={"delta": snapshot.delta},
            ) from e
        if not math.isfinite(current_delta):
            raise MalformedEventError(
                f"Market data event for {snapshot.symbol} has a non-finite delta: "
                f"{current_delta}",
                symbol=snapshot.symbol,
            )
        return snapshot.symbol, current_delta

    def _reprice_delta(self, snapshot: MarketDataSnapshot) -> float:
        risk_free_rate = snapshot.risk_free_rate
        if risk_free_rate is None:
            risk_free_rate = self.config.default_risk_free_rate
        dividend_yield = snapshot.dividend_yield
        if dividend_yield is None:
            dividend_yield = self.config.default_dividend_yield

        params = OptionParameters(
            underlying_price=float(snapshot.underlying_price),
            strike_price=float(snapshot.strike_price),
            time_to_expiry=float(snapshot.time_to_expiry),
            risk_free_rate=float(risk_free_rate),
            volatility=float(snapshot.implied_volatility),
            option_type=OptionType.parse(snapshot.option_type),
            dividend_yield=float(dividend_yield),
        )
        greeks = compute_greeks(params, symbol=snapshot.symbol)
        logger.debug(f"Repriced {snapshot.symbol}: delta={greeks.delta}")
        return greeks.delta

    async def observe(self, symbol: str, current_delta: float) -> AlertEvent | None:
        """
        Apply one delta observation to a symbol's state.

        Args:
            symbol: Symbol observed
            current_delta: Delta observed

        Returns:
            The AlertEvent emitted, or None when there was no breach or the
            symbol is cooling down
        """
        threshold = await self.resolve_threshold(symbol)

        async with self._states.locked(symbol, self.config.default_threshold) as state:
            now = self._clock()
            previous_delta = state.last_delta
            state.last_delta = current_delta
            state.threshold_value = threshold
            state.last_seen = now

            if not is_breach(
                current_delta,
                previous_delta,
                threshold,
                self.config.delta_movement_sensitivity,
            ):
                return None

            if state.in_cooldown(now, self.config.cooldown_seconds):
                logger.debug(f"Skipping alert for {symbol} - still in cooldown period")
                return None

            state.last_alert_time = now

        logger.info(
            f"Delta threshold exceeded for {symbol}: "
            f"current={current_delta}, threshold={threshold}"
        )
        event = AlertEvent(
            symbol=symbol,
            current_delta=current_delta,
            threshold=threshold,
            previous_delta=previous_delta,
            priority=classify_priority(current_delta, threshold),
            timestamp=now,
            formatted_message=format_alert_message(
                symbol, current_delta, threshold, previous_delta, now
            ),
        )
        await self._publish(event)
        return event

    async def _publish(self, event: AlertEvent) -> None:
        if self.alert_sink is None:
            return

        routing = self._routing_resolver(event.symbol) if self._routing_resolver else None
        try:
            await self.alert_sink.publish(event, routing)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(
                f"Failed to deliver alert {event.alert_id} for {event.symbol}: {e}"
            )
            return

        logger.info(
            f"Delta threshold alert triggered for symbol: {event.symbol} - "
            f"Alert ID: {event.alert_id} ({event.priority.value})"
        )

    # ------------------------------------------------------------------
    # Thresholds
    # ------------------------------------------------------------------

    async def resolve_threshold(self, symbol: str) -> float:
        """
        Threshold for a symbol, falling back to the default.

        Store failures and timeouts are logged as warnings and never raised.
        """
        try:
            value = await asyncio.wait_for(
                self.threshold_store.get(symbol),
                timeout=self.config.threshold_lookup_timeout,
            )
        except asyncio.CancelledError:
            raise
        except TimeoutError:
            logger.warning(
                f"Threshold lookup for {symbol} timed out after "
                f"{self.config.threshold_lookup_timeout}s, using default "
                f"{self.config.default_threshold}"
            )
            return self.config.default_threshold
        except Exception as e:
            logger.warning(
                f"Threshold lookup for {symbol} failed ({e}), using default "
                f"{self.config.default_threshold}"
            )
            return self.config.default_threshold

        if value is None:
            return self.config.default_threshold
        return float(value)

    async def get_threshold(self, symbol: str) -> float:
        """Threshold currently in force for a symbol."""
        return await self.resolve_threshold(symbol)

    def get_last_delta(self, symbol: str) -> float | None:
        """Last delta observed for a symbol, if any."""
        return self._states.get_last_delta(symbol)

    async def set_threshold(self, symbol: str, value: float) -> None:
        """
        Write a threshold to the store.

        Retries with exponential backoff up to `config.store_write_attempts`
        times. Errors whose `retryable` flag is False (a store rejecting the
        value, for instance) are not retried.

        Raises:
            ThresholdStoreError: If every attempt fails
        """
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.config.store_write_attempts),
                wait=wait_exponential(
                    multiplier=0.1, min=0, max=self.config.store_retry_max_wait
                ),
                retry=retry_if_exception(_is_retryable),
                reraise=True,
            ):
                with attempt:
                    await asyncio.wait_for(
                        self.threshold_store.set(symbol, value),
                        timeout=self.config.threshold_lookup_timeout,
                    )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Error setting threshold for {symbol}: {e}")
            raise ThresholdStoreError(
                f"Failed to set threshold for {symbol}",
                symbol=symbol,
                operation="set",
                details={"value": value},
            ) from e

        self._states.set_threshold_value(symbol, value)
        logger.info(f"Set delta threshold for {symbol}: {value}")

    def calculate_adaptive_threshold(self, symbol: str) -> float:
        """
        Threshold scaled by the symbol's last delta.

        adaptive = min(base + |last_delta| * adaptive_factor, adaptive_cap)

        The base is the default threshold. Without a last delta the base is
        returned (still capped).
        """
        threshold = self.config.default_threshold
        last_delta = self._states.get_last_delta(symbol)
        if last_delta is not None:
            threshold += abs(last_delta) * self.config.adaptive_factor
        return min(threshold, self.config.adaptive_cap)

    async def enable_adaptive_threshold(self, symbol: str) -> float:
        """
        Compute the adaptive threshold and write it to the store.

        Returns:
            The threshold written

        Raises:
            ThresholdStoreError: If the write fails
        """
        threshold = self.calculate_adaptive_threshold(symbol)
        await self.set_threshold(symbol, threshold)
        logger.info(
            f"Enabled adaptive thresholds for symbol: {symbol} with threshold: {threshold}"
        )
        return threshold

    # ------------------------------------------------------------------
    # Housekeeping
    # ------------------------------------------------------------------

    def get_state(self, symbol: str) -> ThresholdState | None:
        """Read-only copy of a symbol's state, or None."""
        return self._states.snapshot(symbol)

    def monitored_symbols(self) -> list[str]:
        """Symbols the monitor has observed."""
        return self._states.symbols()

    def evict_idle(self, idle_seconds: float | None = None) -> list[str]:
        """
        Drop state for symbols not observed recently.

        Args:
            idle_seconds: Idle period (default: config.idle_eviction_seconds)

        Returns:
            Evicted symbols (empty when no idle period is configured)
        """
        if idle_seconds is None:
            idle_seconds = self.config.idle_eviction_seconds
        if idle_seconds is None:
            return []
        return self._states.evict_idle(self._clock(), idle_seconds)
