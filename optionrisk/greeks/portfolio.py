"""Position-level Greeks aggregation and hedging helpers.

Aggregates already-computed Greeks across option positions and provides
the first-order hedging arithmetic risk desks use alongside the monitor.

Key risk metrics:
- Net Delta: Directional exposure (equivalent underlying units)
- Net Gamma: Delta convexity
- Net Theta: Time decay (P&L per day)
- Net Vega: Volatility exposure (P&L per 1% vol change)
- Net Rho: Interest rate exposure (P&L per 1% rate change)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .types import GreeksResult

PORTFOLIO_SYMBOL = "PORTFOLIO"


@dataclass(frozen=True)
class PositionGreeks:
    """Greeks for a position of `quantity` contracts (negative for short).

    Attributes:
        symbol: Option or underlying symbol
        quantity: Signed position size
        greeks: Per-contract Greeks
    """

    symbol: str
    quantity: float
    greeks: GreeksResult


@dataclass(frozen=True)
class PortfolioGreeks:
    """Quantity-weighted Greeks totals across positions."""

    delta: float = 0.0
    gamma: float = 0.0
    theta: float = 0.0
    vega: float = 0.0
    rho: float = 0.0
    symbol: str = PORTFOLIO_SYMBOL
    position_count: int = 0


def aggregate_greeks(positions: Iterable[PositionGreeks]) -> PortfolioGreeks:
    """Sum Greeks across positions, weighting each by its quantity.

    Args:
        positions: Positions to aggregate

    Returns:
        Portfolio totals (all zero for no positions)
    """
    total_delta = 0.0
    total_gamma = 0.0
    total_theta = 0.0
    total_vega = 0.0
    total_rho = 0.0
    count = 0

    for position in positions:
        quantity = position.quantity
        greeks = position.greeks
        total_delta += greeks.delta * quantity
        total_gamma += greeks.gamma * quantity
        total_theta += greeks.theta * quantity
        total_vega += greeks.vega * quantity
        total_rho += greeks.rho * quantity
        count += 1

    return PortfolioGreeks(
        delta=total_delta,
        gamma=total_gamma,
        theta=total_theta,
        vega=total_vega,
        rho=total_rho,
        position_count=count,
    )


def delta_hedge_quantity(option_delta: float, option_quantity: float) -> float:
    """Underlying units to trade to flatten an option position's delta.

    hedge = -(delta * quantity)
    """
    return -(option_delta * option_quantity)


def gamma_scaling(option_gamma: float, underlying_price_move: float) -> float:
    """Estimated change in delta for a given underlying price move."""
    return option_gamma * underlying_price_move


def theta_decay(option_theta: float, days: int) -> float:
    """Theoretical price decay over a number of days (theta is per day)."""
    return option_theta * days
