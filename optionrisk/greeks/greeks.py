"""Greeks calculations using Black-Scholes model.

Implements the first-order Greeks:
- Delta: Rate of change of option price w.r.t. underlying price
- Gamma: Rate of change of delta w.r.t. underlying price
- Theta: Rate of change of option price w.r.t. time (per calendar day)
- Vega: Rate of change of option price w.r.t. volatility (per 1% move)
- Rho: Rate of change of option price w.r.t. interest rate (per 1% move)

Delta and gamma are per unit move in the underlying while vega and rho are
pre-divided by 100. Downstream consumers depend on these exact divisors.
"""

from __future__ import annotations

from math import exp, sqrt
from typing import assert_never

from .formulas import d1, norm_cdf, norm_pdf
from .types import OptionType

DAYS_PER_YEAR = 365.0
PERCENT_SCALE = 100.0

# ============================================================================
# Delta
# ============================================================================


def delta(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    q: float,
    option_type: OptionType,
) -> float:
    """Calculate option delta.

    Delta_call = e^(-qT) * N(d1)
    Delta_put = e^(-qT) * (N(d1) - 1)

    For calls, delta ranges from 0 to e^(-qT); for puts from -e^(-qT) to 0.

    Args:
        S: Current stock price
        K: Strike price
        T: Time to expiration (years)
        r: Risk-free rate (annualized)
        sigma: Volatility (annualized)
        q: Dividend yield (continuous)
        option_type: CALL or PUT

    Returns:
        Option delta
    """
    n_d1 = norm_cdf(d1(S, K, T, r, sigma, q))

    match option_type:
        case OptionType.CALL:
            return float(exp(-q * T) * n_d1)
        case OptionType.PUT:
            return float(exp(-q * T) * (n_d1 - 1))
        case _:
            assert_never(option_type)


# ============================================================================
# Gamma
# ============================================================================


def gamma(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Calculate option gamma.

    Gamma = [e^(-qT) * phi(d1)] / [S * sigma * sqrt(T)]

    Gamma is identical for calls and puts.
    """
    d1_val = d1(S, K, T, r, sigma, q)
    return float(exp(-q * T) * norm_pdf(d1_val) / (S * sigma * sqrt(T)))


# ============================================================================
# Theta
# ============================================================================


def theta(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    q: float,
    option_type: OptionType,
) -> float:
    """Calculate option theta (per calendar day).

    Theta_call = -[S*phi(d1)*sigma*e^(-qT)] / [2*sqrt(T)]
                 - q*S*N(d1)*e^(-qT) - r*K*e^(-rT)*N(d2)
    Theta_put  = -[S*phi(d1)*sigma*e^(-qT)] / [2*sqrt(T)]
                 + q*S*(1 - N(d1))*e^(-qT) + r*K*e^(-rT)*(1 - N(d2))

    The annualized value is divided by 365.

    Args:
        S: Current stock price
        K: Strike price
        T: Time to expiration (years)
        r: Risk-free rate (annualized)
        sigma: Volatility (annualized)
        q: Dividend yield (continuous)
        option_type: CALL or PUT

    Returns:
        Theta per day
    """
    d1_val = d1(S, K, T, r, sigma, q)
    d2_val = d1_val - sigma * sqrt(T)
    n_d1 = norm_cdf(d1_val)
    n_d2 = norm_cdf(d2_val)

    decay = -(S * norm_pdf(d1_val) * sigma * exp(-q * T)) / (2 * sqrt(T))

    match option_type:
        case OptionType.CALL:
            theta_annual = (
                decay - q * S * n_d1 * exp(-q * T) - r * K * exp(-r * T) * n_d2
            )
        case OptionType.PUT:
            theta_annual = (
                decay
                + q * S * (1 - n_d1) * exp(-q * T)
                + r * K * exp(-r * T) * (1 - n_d2)
            )
        case _:
            assert_never(option_type)
    return float(theta_annual / DAYS_PER_YEAR)


# ============================================================================
# Vega
# ============================================================================


def vega(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Calculate option vega (per 1% change in volatility).

    nu = S * e^(-qT) * phi(d1) * sqrt(T) / 100

    Vega is identical for calls and puts. Multiply by 100 to recover the
    true derivative dPrice/dSigma.
    """
    d1_val = d1(S, K, T, r, sigma, q)
    return float(S * exp(-q * T) * norm_pdf(d1_val) * sqrt(T) / PERCENT_SCALE)


# ============================================================================
# Rho
# ============================================================================


def rho(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    q: float,
    option_type: OptionType,
) -> float:
    """Calculate option rho (per 1% change in interest rate).

    rho_call = K * T * e^(-rT) * N(d2) / 100
    rho_put = -K * T * e^(-rT) * (1 - N(d2)) / 100

    Returns:
        Rho per 1% rate change
    """
    d1_val = d1(S, K, T, r, sigma, q)
    n_d2 = norm_cdf(d1_val - sigma * sqrt(T))

    match option_type:
        case OptionType.CALL:
            rho_value = K * T * exp(-r * T) * n_d2
        case OptionType.PUT:
            rho_value = -K * T * exp(-r * T) * (1 - n_d2)
        case _:
            assert_never(option_type)
    return float(rho_value / PERCENT_SCALE)
