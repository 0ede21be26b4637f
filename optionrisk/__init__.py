"""optionrisk - Option Greeks pricing and delta threshold monitoring.

This package provides:
- Black-Scholes-Merton price and Greeks for European options
- Newton-Raphson implied volatility solver
- Per-symbol delta threshold monitoring with cooldown and prioritized alerts
"""

__version__ = "0.1.0"

from .errors import (
    InvalidParameterError,
    MalformedEventError,
    OptionRiskError,
    PricingValidationError,
    ThresholdStoreError,
)
from .greeks import (
    GreeksResult,
    ImpliedVolatilitySolver,
    OptionParameters,
    OptionType,
    compute_greeks,
    implied_volatility_newton_raphson,
)
from .monitoring import (
    AlertEvent,
    AlertPriority,
    DeltaThresholdMonitor,
    MarketDataSnapshot,
    MonitorConfig,
    MonitorWorker,
    classify_priority,
)
from .service import GreeksCalculationRequest, PricingService

__all__ = [
    # Errors
    "InvalidParameterError",
    "MalformedEventError",
    "OptionRiskError",
    "PricingValidationError",
    "ThresholdStoreError",
    # Pricing
    "GreeksCalculationRequest",
    "GreeksResult",
    "ImpliedVolatilitySolver",
    "OptionParameters",
    "OptionType",
    "PricingService",
    "compute_greeks",
    "implied_volatility_newton_raphson",
    # Monitoring
    "AlertEvent",
    "AlertPriority",
    "DeltaThresholdMonitor",
    "MarketDataSnapshot",
    "MonitorConfig",
    "MonitorWorker",
    "classify_priority",
]
