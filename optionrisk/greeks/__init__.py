"""Greeks Computation Engine

This module provides Greeks computation for a single European option:
- Price and first-order Greeks: Delta, Gamma, Theta, Vega, Rho
- Implied Volatility solver (Newton-Raphson method)
- Position-level Greeks aggregation and hedging helpers

Based on the Black-Scholes-Merton model with continuous dividend yield.

References:
- Hull, J. C. (2018). Options, Futures, and Other Derivatives (10th ed.)
- Haug, E. G. (2007). The Complete Guide to Option Pricing Formulas (2nd ed.)
"""

from optionrisk.greeks.calculator import compute_greeks, time_to_expiry
from optionrisk.greeks.formulas import (
    call_price,
    d1,
    d2,
    option_price,
    put_price,
    round_significant,
)
from optionrisk.greeks.greeks import delta, gamma, rho, theta, vega
from optionrisk.greeks.implied_volatility import (
    ImpliedVolatilitySolver,
    SolverResult,
    implied_volatility_newton_raphson,
    solve,
)
from optionrisk.greeks.portfolio import (
    PortfolioGreeks,
    PositionGreeks,
    aggregate_greeks,
    delta_hedge_quantity,
    gamma_scaling,
    theta_decay,
)
from optionrisk.greeks.types import GreeksResult, OptionParameters, OptionType

__all__ = [
    # Types
    "GreeksResult",
    "OptionParameters",
    "OptionType",
    # Pricing
    "call_price",
    "put_price",
    "option_price",
    "d1",
    "d2",
    "round_significant",
    # First-order Greeks
    "delta",
    "gamma",
    "theta",
    "vega",
    "rho",
    # Calculator
    "compute_greeks",
    "time_to_expiry",
    # Implied volatility
    "ImpliedVolatilitySolver",
    "SolverResult",
    "implied_volatility_newton_raphson",
    "solve",
    # Positions
    "PortfolioGreeks",
    "PositionGreeks",
    "aggregate_greeks",
    "delta_hedge_quantity",
    "gamma_scaling",
    "theta_decay",
]
