"""
optionrisk Error Definitions

Provides the error hierarchy for pricing and monitoring.

Example:
    from optionrisk.errors import InvalidParameterError

    try:
        result = compute_greeks(params)
    except InvalidParameterError as e:
        logger.warning(f"Rejected pricing request: {e}")
"""

from .base import OptionRiskError
from .monitoring import MalformedEventError, MonitoringError, ThresholdStoreError
from .pricing import InvalidParameterError, PricingValidationError

__all__ = [
    "InvalidParameterError",
    "MalformedEventError",
    "MonitoringError",
    "OptionRiskError",
    "PricingValidationError",
    "ThresholdStoreError",
]
