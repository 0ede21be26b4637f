"""Type definitions for Black-Scholes Greeks computation.

Contains the option side enum and the immutable request/result values used
throughout the greeks package.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from optionrisk.errors import InvalidParameterError


class OptionType(str, Enum):
    """European option side."""

    CALL = "CALL"
    PUT = "PUT"

    @classmethod
    def parse(cls, value: OptionType | str) -> OptionType:
        """Parse an option type, case-insensitively.

        Raises:
            InvalidParameterError: If value is neither CALL nor PUT
        """
        if isinstance(value, OptionType):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise InvalidParameterError(
                "Option type must be either CALL or PUT",
                parameter="option_type",
                value=value,
            ) from None


@dataclass(frozen=True)
class OptionParameters:
    """Inputs for pricing a single European option.

    Attributes:
        underlying_price: Current underlying price (S)
        strike_price: Strike price (K)
        time_to_expiry: Time to expiration in years (T)
        risk_free_rate: Risk-free rate, annualized (r)
        volatility: Volatility, annualized (sigma)
        option_type: CALL or PUT
        dividend_yield: Continuous dividend yield (q)
    """

    underlying_price: float
    strike_price: float
    time_to_expiry: float
    risk_free_rate: float
    volatility: float
    option_type: OptionType
    dividend_yield: float = 0.0

    def with_volatility(self, volatility: float) -> OptionParameters:
        """Return a copy priced at a different volatility."""
        return replace(self, volatility=volatility)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "underlying_price": self.underlying_price,
            "strike_price": self.strike_price,
            "time_to_expiry": self.time_to_expiry,
            "risk_free_rate": self.risk_free_rate,
            "volatility": self.volatility,
            "option_type": getattr(self.option_type, "value", self.option_type),
            "dividend_yield": self.dividend_yield,
        }


@dataclass(frozen=True)
class GreeksResult:
    """Price and first-order Greeks for one option.

    Attributes:
        price: Option theoretical value
        delta: Rate of change of option price w.r.t. underlying price
        gamma: Rate of change of delta w.r.t. underlying price
        theta: Rate of change of option price w.r.t. time (per day)
        vega: Rate of change of option price w.r.t. volatility (per 1% change)
        rho: Rate of change of option price w.r.t. interest rate (per 1% change)
        parameters: The inputs the Greeks were computed from
        calculated_at: When the computation ran (UTC)
        symbol: Optional symbol the request was tagged with
    """

    price: float
    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float
    parameters: OptionParameters
    calculated_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    symbol: str | None = None

    def with_symbol(self, symbol: str) -> GreeksResult:
        """Return a copy tagged with a symbol."""
        return replace(self, symbol=symbol)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "symbol": self.symbol,
            "price": self.price,
            "delta": self.delta,
            "gamma": self.gamma,
            "theta": self.theta,
            "vega": self.vega,
            "rho": self.rho,
            "parameters": self.parameters.to_dict(),
            "calculated_at": self.calculated_at.isoformat(),
        }
