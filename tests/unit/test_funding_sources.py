"""
Unit Tests for Exchange Funding Sources

These tests verify that each exchange parser:
- Reads the raw periodic rate from the exchange-specific payload
- Annualizes it with the fixed x8760 factor
- Converts API errors and malformed payloads into None

Run with:
    pytest tests/unit/test_funding_sources.py -v
"""

import pytest

from core.exceptions import SourceRequestError
from sources.binance import BinanceFundingSource
from sources.bybit import BybitFundingSource
from sources.okx import OkxFundingSource


# ============================================
# Binance
# ============================================

class TestBinanceFundingSource:
    """Tests for /premiumIndex parsing"""

    @pytest.mark.asyncio
    async def test_parses_and_annualizes(self, http):
        http.responses["/premiumIndex"] = {
            "symbol": "BTCUSDT",
            "lastFundingRate": "0.00010000",
            "nextFundingTime": 1704124800000,
        }

        fr = await BinanceFundingSource(http).fetch_funding_rate("btc")

        assert fr.symbol == "BTC"
        assert fr.exchange == "Binance"
        assert fr.rate == pytest.approx(0.876)
        assert fr.next_funding_time == 1704124800000
        assert http.calls[0][1] == {"symbol": "BTCUSDT"}

    @pytest.mark.asyncio
    async def test_negative_rate(self, http):
        http.responses["/premiumIndex"] = {"lastFundingRate": "-0.00005", "nextFundingTime": 0}
        fr = await BinanceFundingSource(http).fetch_funding_rate("ETH")
        assert fr.rate == pytest.approx(-0.438)

    @pytest.mark.asyncio
    async def test_http_error_returns_none(self, http):
        http.responses["/premiumIndex"] = SourceRequestError("HTTP 451")
        assert await BinanceFundingSource(http).fetch_funding_rate("BTC") is None


# ============================================
# Bybit
# ============================================

class TestBybitFundingSource:
    """Tests for /market/tickers parsing"""

    @pytest.mark.asyncio
    async def test_parses_and_annualizes(self, http):
        http.responses["/market/tickers"] = {
            "retCode": 0,
            "retMsg": "OK",
            "result": {
                "category": "linear",
                "list": [{"symbol": "ETHUSDT", "fundingRate": "0.0002", "nextFundingTime": "1704124800000"}],
            },
        }

        fr = await BybitFundingSource(http).fetch_funding_rate("ETH")

        assert fr.exchange == "Bybit"
        assert fr.rate == pytest.approx(1.752)
        assert fr.next_funding_time == 1704124800000
        assert http.calls[0][1] == {"category": "linear", "symbol": "ETHUSDT"}

    @pytest.mark.asyncio
    async def test_non_zero_ret_code_returns_none(self, http):
        http.responses["/market/tickers"] = {"retCode": 10001, "retMsg": "params error", "result": {}}
        assert await BybitFundingSource(http).fetch_funding_rate("XYZ") is None

    @pytest.mark.asyncio
    async def test_empty_list_returns_none(self, http):
        http.responses["/market/tickers"] = {"retCode": 0, "result": {"list": []}}
        assert await BybitFundingSource(http).fetch_funding_rate("BTC") is None


# ============================================
# OKX
# ============================================

class TestOkxFundingSource:
    """Tests for /public/funding-rate parsing"""

    @pytest.mark.asyncio
    async def test_parses_and_annualizes(self, http):
        http.responses["/public/funding-rate"] = {
            "code": "0",
            "data": [{
                "instId": "SEI-USDT-SWAP",
                "fundingRate": "0.00015",
                "fundingTime": "1704110400000",
                "nextFundingTime": "1704139200000",
            }],
        }

        fr = await OkxFundingSource(http).fetch_funding_rate("SEI")

        assert fr.exchange == "OKX"
        assert fr.rate == pytest.approx(1.314)
        assert fr.timestamp == 1704110400000
        assert fr.next_funding_time == 1704139200000
        assert http.calls[0][1] == {"instId": "SEI-USDT-SWAP"}

    @pytest.mark.asyncio
    async def test_empty_data_returns_none(self, http):
        http.responses["/public/funding-rate"] = {"code": "51001", "msg": "Instrument ID does not exist", "data": []}
        assert await OkxFundingSource(http).fetch_funding_rate("XYZ") is None
