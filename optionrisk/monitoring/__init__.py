"""
Delta Threshold Monitoring

This package tracks per-symbol delta exposure against configurable
thresholds and emits prioritized alerts on breach.

Exports:
- DeltaThresholdMonitor: Per-symbol breach/cooldown state machine
- MonitorWorker: asyncio queue runner for the monitor
- MonitorConfig: Monitor configuration
- classify_priority: Delta/threshold ratio -> AlertPriority
- ThresholdStore, AlertSink: Collaborator protocols

Example:
    ```python
    from optionrisk.monitoring import (
        CollectingAlertSink,
        DeltaThresholdMonitor,
        InMemoryThresholdStore,
        MarketDataSnapshot,
    )

    monitor = DeltaThresholdMonitor(InMemoryThresholdStore(), CollectingAlertSink())
    alert = await monitor.process_event(MarketDataSnapshot(symbol="SPY", delta=0.35))
    ```
"""

from optionrisk.monitoring.classifier import classify_priority, delta_ratio
from optionrisk.monitoring.config import MonitorConfig
from optionrisk.monitoring.monitor import DeltaThresholdMonitor, is_breach
from optionrisk.monitoring.protocols import (
    AlertSink,
    CollectingAlertSink,
    InMemoryThresholdStore,
    ThresholdStore,
)
from optionrisk.monitoring.state import SymbolStateStore
from optionrisk.monitoring.types import (
    AlertEvent,
    AlertPriority,
    AlertRouting,
    AlertType,
    MarketDataSnapshot,
    ThresholdState,
)
from optionrisk.monitoring.worker import MonitorWorker

__all__ = [
    "AlertEvent",
    "AlertPriority",
    "AlertRouting",
    "AlertSink",
    "AlertType",
    "CollectingAlertSink",
    "DeltaThresholdMonitor",
    "InMemoryThresholdStore",
    "MarketDataSnapshot",
    "MonitorConfig",
    "MonitorWorker",
    "SymbolStateStore",
    "ThresholdState",
    "ThresholdStore",
    "classify_priority",
    "delta_ratio",
    "is_breach",
]
