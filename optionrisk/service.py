"""
Pricing Service

The exposed pricing API: Greeks, implied volatility, time to expiry and
position-risk helpers, with request logging.

Only InvalidParameterError crosses this boundary as a failure.

Example:
    service = PricingService()

    greeks = service.compute_greeks(
        OptionParameters(
            underlying_price=152.5,
            strike_price=150.0,
            time_to_expiry=0.0548,
            risk_free_rate=0.05,
            volatility=0.25,
            option_type=OptionType.CALL,
            dividend_yield=0.02,
        )
    )
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from optionrisk.greeks import portfolio
from optionrisk.greeks.calculator import compute_greeks, time_to_expiry
from optionrisk.greeks.implied_volatility import ImpliedVolatilitySolver, solve
from optionrisk.greeks.portfolio import PortfolioGreeks, PositionGreeks
from optionrisk.greeks.types import GreeksResult, OptionParameters, OptionType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GreeksCalculationRequest:
    """Pricing request expressed with a calendar expiration date."""

    symbol: str
    underlying_price: float
    strike_price: float
    expiration_date: date
    option_type: OptionType | str
    volatility: float
    risk_free_rate: float = 0.05
    dividend_yield: float = 0.0


class PricingService:
    """
    Stateless facade over the Greeks engine and the IV solver.

    Safe to share between threads and tasks.
    """

    def __init__(self, solver_config: ImpliedVolatilitySolver | None = None) -> None:
        """
        Initialize pricing service.

        Args:
            solver_config: Implied volatility solver settings
        """
        self.solver_config = solver_config or ImpliedVolatilitySolver()

    def compute_greeks(
        self, params: OptionParameters, symbol: str | None = None
    ) -> GreeksResult:
        """
        Compute price and Greeks.

        Raises:
            InvalidParameterError: If the parameters are outside the model domain
        """
        logger.debug(
            f"Calculating Greeks for: S={params.underlying_price}, "
            f"K={params.strike_price}, T={params.time_to_expiry}, "
            f"r={params.risk_free_rate}, sigma={params.volatility}, "
            f"type={params.option_type}"
        )
        greeks = compute_greeks(params, symbol=symbol)
        logger.debug(
            f"Calculated Greeks: delta={greeks.delta}, gamma={greeks.gamma}, "
            f"theta={greeks.theta}, vega={greeks.vega}, rho={greeks.rho}"
        )
        return greeks

    async def compute_greeks_async(
        self, params: OptionParameters, symbol: str | None = None
    ) -> GreeksResult:
        """Compute Greeks in a worker thread, off the event loop."""
        return await asyncio.to_thread(self.compute_greeks, params, symbol)

    def compute_greeks_for_request(
        self, request: GreeksCalculationRequest, today: date | None = None
    ) -> GreeksResult:
        """
        Price a request that carries an expiration date.

        Raises:
            InvalidParameterError: If the option has expired or any other
                parameter is invalid
        """
        params = OptionParameters(
            underlying_price=request.underlying_price,
            strike_price=request.strike_price,
            time_to_expiry=self.time_to_expiry(request.expiration_date, today),
            risk_free_rate=request.risk_free_rate,
            volatility=request.volatility,
            option_type=OptionType.parse(request.option_type),
            dividend_yield=request.dividend_yield,
        )
        return self.compute_greeks(params, symbol=request.symbol)

    def solve_implied_volatility(
        self, params: OptionParameters, market_price: float
    ) -> float:
        """
        Best-effort implied volatility for a market price.

        The volatility field of `params` is ignored.
        """
        logger.debug(f"Calculating implied volatility for market price: {market_price}")
        result = solve(params, market_price, self.solver_config)
        if not result.converged:
            logger.debug(
                f"Implied volatility did not converge "
                f"(iterations={result.iterations}, flat_vega={result.stopped_on_flat_vega})"
            )
        logger.debug(f"Calculated implied volatility: {result.volatility}")
        return result.volatility

    @staticmethod
    def time_to_expiry(expiration: date, today: date | None = None) -> float:
        """Years to expiry for a calendar date (0.0 once expired)."""
        return time_to_expiry(expiration, today)

    @staticmethod
    def portfolio_greeks(positions: Iterable[PositionGreeks]) -> PortfolioGreeks:
        """Quantity-weighted Greeks totals."""
        return portfolio.aggregate_greeks(positions)

    @staticmethod
    def delta_hedge(greeks: GreeksResult, quantity: float) -> float:
        """Underlying units that flatten `quantity` contracts' delta."""
        return portfolio.delta_hedge_quantity(greeks.delta, quantity)

    @staticmethod
    def gamma_scaling(greeks: GreeksResult, underlying_price_move: float) -> float:
        """Estimated delta change for an underlying price move."""
        return portfolio.gamma_scaling(greeks.gamma, underlying_price_move)

    @staticmethod
    def theta_decay(greeks: GreeksResult, days: int) -> float:
        """Price decay over `days` days."""
        return portfolio.theta_decay(greeks.theta, days)
