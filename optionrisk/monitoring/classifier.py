"""Alert priority classification from the delta/threshold ratio."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from .types import AlertPriority

CRITICAL_RATIO = Decimal("3.0")
HIGH_RATIO = Decimal("2.0")
MEDIUM_RATIO = Decimal("1.5")

_RATIO_QUANTUM = Decimal("0.01")
# quantize() needs the integer digits to fit the decimal context precision
_MAX_QUANTIZED_RATIO = Decimal("1e6")


def delta_ratio(current_delta: float, threshold: float) -> Decimal:
    """|delta| / |threshold| rounded half-up to two decimals.

    Rounding keeps ratios such as 0.3 / 0.1 on the tier boundary instead of
    just below it.
    """
    ratio = abs(Decimal(repr(current_delta))) / abs(Decimal(repr(threshold)))
    if ratio > _MAX_QUANTIZED_RATIO:
        return ratio
    return ratio.quantize(_RATIO_QUANTUM, rounding=ROUND_HALF_UP)


def classify_priority(current_delta: float | None, threshold: float | None) -> AlertPriority:
    """
    Map |delta| / |threshold| to a priority tier.

    Tiers:
    - ratio >= 3.0 -> CRITICAL
    - ratio >= 2.0 -> HIGH
    - ratio >= 1.5 -> MEDIUM
    - otherwise LOW (also when delta or threshold is missing or zero)

    Args:
        current_delta: Observed delta
        threshold: Configured threshold

    Returns:
        AlertPriority
    """
    if current_delta is None or not threshold:
        return AlertPriority.LOW

    ratio = delta_ratio(current_delta, threshold)

    if ratio >= CRITICAL_RATIO:
        return AlertPriority.CRITICAL
    elif ratio >= HIGH_RATIO:
        return AlertPriority.HIGH
    elif ratio >= MEDIUM_RATIO:
        return AlertPriority.MEDIUM
    return AlertPriority.LOW
