"""Tests for option type parsing, result values and time to expiry."""

from datetime import date

import pytest

from optionrisk.errors import InvalidParameterError
from optionrisk.greeks import OptionParameters, OptionType, compute_greeks, time_to_expiry


class TestOptionType:
    """Test option type parsing."""

    @pytest.mark.parametrize("raw", ["CALL", "call", "Call", OptionType.CALL])
    def test_parse_call(self, raw) -> None:
        """Test CALL in any case."""
        assert OptionType.parse(raw) is OptionType.CALL

    def test_parse_put(self) -> None:
        """Test PUT parsing."""
        assert OptionType.parse("put") is OptionType.PUT

    @pytest.mark.parametrize("raw", ["", "STRADDLE", "C", None])
    def test_parse_invalid(self, raw) -> None:
        """Test anything else is rejected."""
        with pytest.raises(InvalidParameterError) as exc_info:
            OptionType.parse(raw)
        assert exc_info.value.parameter == "option_type"


class TestResultValues:
    """Test parameter and result value objects."""

    def test_with_volatility(self, atm_call: OptionParameters) -> None:
        """Test copying parameters with another volatility."""
        bumped = atm_call.with_volatility(0.3)

        assert bumped.volatility == 0.3
        assert atm_call.volatility == 0.2
        assert bumped.strike_price == atm_call.strike_price

    def test_parameters_to_dict(self, atm_call: OptionParameters) -> None:
        """Test parameter serialization."""
        d = atm_call.to_dict()
        assert d["option_type"] == "CALL"
        assert d["dividend_yield"] == 0.0

    def test_result_to_dict(self, atm_call: OptionParameters) -> None:
        """Test result serialization."""
        result = compute_greeks(atm_call).with_symbol("SPY")
        d = result.to_dict()

        assert d["symbol"] == "SPY"
        assert d["price"] == result.price
        assert d["delta"] == result.delta

    def test_result_immutable(self, atm_call: OptionParameters) -> None:
        """Test results cannot be modified."""
        result = compute_greeks(atm_call)
        with pytest.raises(AttributeError):
            result.delta = 1.0  # type: ignore[misc]


class TestTimeToExpiry:
    """Test calendar date to year fraction conversion."""

    def test_twenty_days(self) -> None:
        """Test 20 calendar days."""
        assert time_to_expiry(date(2024, 2, 4), today=date(2024, 1, 15)) == 20 / 365

    def test_one_year(self) -> None:
        """Test 365 calendar days is one year."""
        assert time_to_expiry(date(2025, 1, 15), today=date(2024, 1, 16)) == 1.0

    def test_expires_today(self) -> None:
        """Test an option expiring today has no time left."""
        assert time_to_expiry(date(2024, 1, 15), today=date(2024, 1, 15)) == 0.0

    def test_expired(self) -> None:
        """Test past expirations are clamped to zero."""
        assert time_to_expiry(date(2023, 12, 1), today=date(2024, 1, 15)) == 0.0

    def test_defaults_to_today(self) -> None:
        """Test the valuation date defaults to the current date."""
        assert time_to_expiry(date(2000, 1, 1)) == 0.0
