"""Implied Volatility Computation

Solves for implied volatility given a market option price using
Newton-Raphson iteration over the Black-Scholes-Merton price.

Implied volatility (IV) is the volatility parameter sigma that makes the
Black-Scholes theoretical price equal to the observed market price.

Mathematical formulation:
    Given market price P_market, find sigma such that:
    BS(S, K, T, r, sigma, q) = P_market

The solver never raises on numeric grounds. When vega collapses or the
iteration budget runs out it returns its last estimate, clamped to the
configured bounds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .calculator import compute_greeks
from .formulas import round_significant
from .greeks import PERCENT_SCALE
from .types import OptionParameters

logger = logging.getLogger(__name__)

MIN_VEGA = 1e-10
"""Derivative magnitude below which the iteration stops."""


@dataclass(frozen=True)
class ImpliedVolatilitySolver:
    """Configuration for implied volatility solver.

    Attributes:
        initial_guess: Starting volatility (default 0.20 = 20%)
        min_vol: Minimum volatility bound (default 0.01 = 1%)
        max_vol: Maximum volatility bound (default 5.0 = 500%)
        max_iterations: Maximum number of iterations
        tolerance: Convergence tolerance (absolute error in price)
    """

    initial_guess: float = 0.20
    min_vol: float = 0.01
    max_vol: float = 5.0
    max_iterations: int = 100
    tolerance: float = 0.0001

    def clamp(self, sigma: float) -> float:
        """Clamp a volatility into the solver bounds."""
        return max(self.min_vol, min(self.max_vol, sigma))


@dataclass(frozen=True)
class SolverResult:
    """Outcome of an implied volatility solve."""

    volatility: float
    """Best volatility estimate (rounded to 10 significant digits)."""

    iterations: int
    """Number of pricing evaluations performed."""

    converged: bool
    """True when the price error dropped below tolerance."""

    stopped_on_flat_vega: bool = False
    """True when the loop ended because vega was too small to divide by."""


def solve(
    params: OptionParameters,
    market_price: float,
    config: ImpliedVolatilitySolver | None = None,
) -> SolverResult:
    """Run Newton-Raphson over volatility and report how it ended.

    Newton-Raphson iteration:
        sigma_(n+1) = clamp(sigma_n - [BS(sigma_n) - P_market] / (vega(sigma_n) * 100))

    Vega is per 1% (0.01), so it is multiplied by 100 to get dPrice/dSigma.

    Args:
        params: Option parameters (the volatility field is ignored)
        market_price: Observed market price of the option
        config: Solver configuration (optional)

    Returns:
        SolverResult with the best estimate

    Raises:
        InvalidParameterError: If a non-volatility parameter is invalid
    """
    if config is None:
        config = ImpliedVolatilitySolver()

    sigma = config.initial_guess
    iteration = 0

    for iteration in range(1, config.max_iterations + 1):
        greeks = compute_greeks(params.with_volatility(sigma))

        price_diff = greeks.price - market_price
        if abs(price_diff) < config.tolerance:
            return SolverResult(
                volatility=round_significant(sigma),
                iterations=iteration,
                converged=True,
            )

        derivative = greeks.vega * PERCENT_SCALE
        if abs(derivative) < MIN_VEGA:
            logger.debug(
                f"Vega too small ({derivative}) at iteration {iteration}, "
                f"returning sigma={sigma:.6f}"
            )
            return SolverResult(
                volatility=round_significant(sigma),
                iterations=iteration,
                converged=False,
                stopped_on_flat_vega=True,
            )

        sigma = config.clamp(sigma - price_diff / derivative)

    logger.debug(
        f"Implied volatility did not converge after {config.max_iterations} "
        f"iterations, last sigma={sigma:.6f}"
    )
    return SolverResult(
        volatility=round_significant(sigma),
        iterations=iteration,
        converged=False,
    )


def implied_volatility_newton_raphson(
    params: OptionParameters,
    market_price: float,
    config: ImpliedVolatilitySolver | None = None,
) -> float:
    """Calculate implied volatility using Newton-Raphson method.

    Args:
        params: Option parameters (the volatility field is ignored)
        market_price: Observed market price of the option
        config: Solver configuration (optional)

    Returns:
        Implied volatility (annualized), best effort
    """
    return solve(params, market_price, config).volatility
