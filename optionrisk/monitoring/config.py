"""
Monitor Configuration Module

Provides the configuration dataclass for the delta threshold monitor.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields

ENV_PREFIX = "OPTIONRISK_"


@dataclass(frozen=True)
class MonitorConfig:
    """Configuration for delta threshold monitoring."""

    # Thresholds
    default_threshold: float = 0.1
    """Threshold used when the store has none for a symbol or cannot be reached."""

    delta_movement_sensitivity: float = 0.05
    """Delta move between consecutive observations that counts as a breach."""

    # Alerting
    cooldown_seconds: float = 300.0
    """Minimum seconds between two alerts for the same symbol."""

    # Adaptive thresholds
    adaptive_factor: float = 0.1
    """Share of |last delta| added to the base threshold."""

    adaptive_cap: float = 0.3
    """Upper bound for an adaptive threshold."""

    # Threshold store
    threshold_lookup_timeout: float = 1.0
    """Seconds to wait on a threshold lookup before using the default."""

    store_write_attempts: int = 3
    """Attempts for explicit threshold writes before giving up."""

    store_retry_max_wait: float = 2.0
    """Upper bound in seconds on the exponential backoff between write attempts."""

    # Repricing
    reprice_from_parameters: bool = False
    """Recompute delta from option parameters when the snapshot carries them."""

    default_risk_free_rate: float = 0.05
    """Risk-free rate used for repricing when the snapshot has none."""

    default_dividend_yield: float = 0.0
    """Dividend yield used for repricing when the snapshot has none."""

    # State housekeeping
    idle_eviction_seconds: float | None = None
    """Evict symbols unseen for this long when `evict_idle` runs (None keeps all)."""

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> MonitorConfig:
        """Build a config from `OPTIONRISK_*` environment variables.

        Each field maps to the upper-cased field name, e.g.
        OPTIONRISK_COOLDOWN_SECONDS. Unset variables keep their defaults.
        """
        values: dict[str, object] = {}
        for config_field in fields(cls):
            raw = os.getenv(f"{prefix}{config_field.name.upper()}")
            if raw is None or raw == "":
                continue
            values[config_field.name] = _coerce(config_field.name, raw)
        return cls(**values)


def _coerce(name: str, raw: str) -> object:
    if name == "reprice_from_parameters":
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if name == "store_write_attempts":
        return int(raw)
    if name == "idle_eviction_seconds" and raw.strip().lower() == "none":
        return None
    return float(raw)


__all__ = ["MonitorConfig"]
