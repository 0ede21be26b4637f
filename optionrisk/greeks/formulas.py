"""Pricing primitives for European options with a continuous dividend yield.

Holds the domain checks every pricing entry point runs first, the d1/d2
terms, the standard normal density and distribution, the call and put
prices, and the significant-digit rounding applied to published values.

Notation: S underlying, K strike, T years to expiry, r risk-free rate,
sigma volatility, q dividend yield (rates and volatility annualized).

References:
- Black, F., & Scholes, M. (1973). The Pricing of Options and Corporate Liabilities.
- Merton, R. C. (1973). Theory of Rational Option Pricing.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Context
from math import exp, log, sqrt
from typing import assert_never

from scipy import stats

from optionrisk.errors import InvalidParameterError

from .types import OptionType

SIGNIFICANT_DIGITS = 10
"""Precision of every value returned by the calculator."""

_ROUNDING_CONTEXT = Context(prec=SIGNIFICANT_DIGITS, rounding=ROUND_HALF_UP)


def validate_inputs(S: float, K: float, T: float, sigma: float) -> None:
    """Validate Black-Scholes input parameters.

    Args:
        S: Current stock price
        K: Strike price
        T: Time to expiration (years)
        sigma: Volatility (annualized)

    Raises:
        InvalidParameterError: If any parameter is not strictly positive (NaN included)
    """
    if not S > 0:
        raise InvalidParameterError(
            "Underlying price must be positive", parameter="underlying_price", value=S
        )
    if not K > 0:
        raise InvalidParameterError(
            "Strike price must be positive", parameter="strike_price", value=K
        )
    if not T > 0:
        raise InvalidParameterError(
            "Time to expiry must be positive", parameter="time_to_expiry", value=T
        )
    if not sigma > 0:
        raise InvalidParameterError(
            "Volatility must be positive", parameter="volatility", value=sigma
        )


def d1(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Calculate d1 parameter for Black-Scholes formula.

    d1 = [ln(S/K) + (r - q + sigma^2/2)T] / (sigma * sqrt(T))

    Args:
        S: Current stock price
        K: Strike price
        T: Time to expiration (years)
        r: Risk-free rate (annualized)
        sigma: Volatility (annualized)
        q: Dividend yield (continuous)

    Returns:
        d1 parameter
    """
    validate_inputs(S, K, T, sigma)
    return (log(S / K) + (r - q + 0.5 * sigma**2) * T) / (sigma * sqrt(T))


def d2(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Calculate d2 parameter for Black-Scholes formula.

    d2 = d1 - sigma * sqrt(T)
    """
    return d1(S, K, T, r, sigma, q) - sigma * sqrt(T)


def norm_pdf(x: float) -> float:
    """Standard normal probability density function."""
    return float(stats.norm.pdf(x))


def norm_cdf(x: float) -> float:
    """Standard normal cumulative distribution function."""
    return float(stats.norm.cdf(x))


def option_price(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    q: float,
    option_type: OptionType,
) -> float:
    """Calculate a European option price using Black-Scholes-Merton.

    C = S*e^(-qT)*N(d1) - K*e^(-rT)*N(d2)
    P = K*e^(-rT)*(1 - N(d2)) - S*e^(-qT)*(1 - N(d1))

    Args:
        S: Current stock price
        K: Strike price
        T: Time to expiration (years)
        r: Risk-free rate (annualized)
        sigma: Volatility (annualized)
        q: Dividend yield (continuous)
        option_type: CALL or PUT

    Returns:
        Option price
    """
    d1_val = d1(S, K, T, r, sigma, q)
    d2_val = d1_val - sigma * sqrt(T)
    n_d1 = norm_cdf(d1_val)
    n_d2 = norm_cdf(d2_val)

    match option_type:
        case OptionType.CALL:
            price = S * exp(-q * T) * n_d1 - K * exp(-r * T) * n_d2
        case OptionType.PUT:
            price = K * exp(-r * T) * (1 - n_d2) - S * exp(-q * T) * (1 - n_d1)
        case _:
            assert_never(option_type)
    return float(price)


def call_price(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Calculate European call option price."""
    return option_price(S, K, T, r, sigma, q, OptionType.CALL)


def put_price(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Calculate European put option price."""
    return option_price(S, K, T, r, sigma, q, OptionType.PUT)


def round_significant(value: float, digits: int = SIGNIFICANT_DIGITS) -> float:
    """Round to a fixed number of significant digits, half-up.

    The shortest decimal representation of the float is rounded, so
    0.15 rounds the way it reads rather than the way it is stored.

    Args:
        value: Value to round
        digits: Significant digits to keep

    Returns:
        Rounded value
    """
    context = (
        _ROUNDING_CONTEXT
        if digits == SIGNIFICANT_DIGITS
        else Context(prec=digits, rounding=ROUND_HALF_UP)
    )
    return float(context.create_decimal(repr(value)))
