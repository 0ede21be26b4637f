"""Convenience functions for computing all Greeks at once.

Provides a unified interface for calculating price and Greeks for a given
option, and for deriving time to expiry from a calendar date.
"""

from __future__ import annotations

from datetime import UTC, date, datetime

from .formulas import option_price, round_significant, validate_inputs
from .greeks import DAYS_PER_YEAR, delta, gamma, rho, theta, vega
from .types import GreeksResult, OptionParameters, OptionType


def compute_greeks(params: OptionParameters, symbol: str | None = None) -> GreeksResult:
    """Compute price and first-order Greeks for a European option.

    Every output is rounded to 10 significant digits (half-up) so results
    are reproducible across implementations.

    Args:
        params: Option parameters
        symbol: Optional symbol to tag the result with

    Returns:
        GreeksResult with price, delta, gamma, theta, vega and rho

    Raises:
        InvalidParameterError: If a parameter is non-positive or the option
            type is neither CALL nor PUT
    """
    option_type = OptionType.parse(params.option_type)
    S = params.underlying_price
    K = params.strike_price
    T = params.time_to_expiry
    r = params.risk_free_rate
    sigma = params.volatility
    q = params.dividend_yield

    validate_inputs(S, K, T, sigma)

    if option_type is not params.option_type:
        params = OptionParameters(
            underlying_price=S,
            strike_price=K,
            time_to_expiry=T,
            risk_free_rate=r,
            volatility=sigma,
            option_type=option_type,
            dividend_yield=q,
        )

    return GreeksResult(
        price=round_significant(option_price(S, K, T, r, sigma, q, option_type)),
        delta=round_significant(delta(S, K, T, r, sigma, q, option_type)),
        gamma=round_significant(gamma(S, K, T, r, sigma, q)),
        theta=round_significant(theta(S, K, T, r, sigma, q, option_type)),
        vega=round_significant(vega(S, K, T, r, sigma, q)),
        rho=round_significant(rho(S, K, T, r, sigma, q, option_type)),
        parameters=params,
        symbol=symbol,
    )


def time_to_expiry(expiration: date, today: date | None = None) -> float:
    """Convert an expiration date to a year fraction (calendar days / 365).

    Args:
        expiration: Option expiration date
        today: Valuation date (default: current UTC date)

    Returns:
        Years to expiry, or 0.0 when the option has expired or expires today
    """
    if today is None:
        today = datetime.now(UTC).date()
    days_to_expiry = (expiration - today).days

    if days_to_expiry <= 0:
        return 0.0

    return days_to_expiry / DAYS_PER_YEAR
