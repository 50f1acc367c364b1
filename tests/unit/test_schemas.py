"""
Unit Tests for Oracle Schemas

These tests verify that:
- Symbols are normalized to uppercase
- The validity predicate rejects zero, negative and non-finite prices
- Funding rates are annualized with the fixed hourly factor
- Observations are immutable

Run with:
    pytest tests/unit/test_schemas.py -v
"""

import math

import pytest
from pydantic import ValidationError

from core.schemas import (
    FUNDING_ANNUALIZATION_FACTOR,
    FundingRate,
    Quote,
    annualize_funding_rate,
    is_valid_price,
)


class TestQuote:
    """Tests for the Quote model"""

    def test_symbol_is_uppercased(self):
        quote = Quote(symbol="sei", price=0.42, timestamp=1704110400000, source="CoinGecko", confidence=0.95)
        assert quote.symbol == "SEI"

    def test_valid_quote(self):
        quote = Quote(symbol="BTC", price=65000.5, timestamp=1704110400000, source="CoinGecko", confidence=0.95)
        assert quote.is_valid() is True

    @pytest.mark.parametrize("price", [0.0, -1.0, float("nan"), float("inf")])
    def test_invalid_prices_build_but_are_not_valid(self, price):
        """Raw adapter output may be invalid; is_valid() is the gate"""
        quote = Quote(symbol="BTC", price=price, timestamp=1704110400000, source="x", confidence=0.5)
        assert quote.is_valid() is False

    def test_confidence_must_be_within_unit_interval(self):
        with pytest.raises(ValidationError):
            Quote(symbol="BTC", price=1.0, timestamp=0, source="x", confidence=1.5)

    def test_quote_is_immutable(self):
        quote = Quote(symbol="BTC", price=1.0, timestamp=0, source="x", confidence=0.5)
        with pytest.raises(ValidationError):
            quote.price = 2.0


class TestFundingRate:
    """Tests for the FundingRate model and annualization"""

    def test_annualization_factor_is_hourly(self):
        assert FUNDING_ANNUALIZATION_FACTOR == 8760

    def test_annualize_funding_rate(self):
        assert annualize_funding_rate(0.0001) == pytest.approx(0.876)
        assert annualize_funding_rate(-0.00005) == pytest.approx(-0.438)

    def test_nan_rate_is_invalid(self):
        fr = FundingRate(symbol="btc", rate=float("nan"), timestamp=0, exchange="OKX", next_funding_time=0)
        assert fr.symbol == "BTC"
        assert fr.is_valid() is False

    def test_negative_rate_is_valid(self):
        """Negative funding (shorts pay longs) is a normal observation"""
        fr = FundingRate(symbol="ETH", rate=-0.2, timestamp=0, exchange="Bybit", next_funding_time=0)
        assert fr.is_valid() is True


class TestIsValidPrice:
    """Tests for the shared validity predicate"""

    def test_accepts_positive_finite(self):
        assert is_valid_price(1e-9) is True

    def test_rejects_non_numbers(self):
        assert is_valid_price(None) is False

    def test_rejects_nan(self):
        assert is_valid_price(math.nan) is False
