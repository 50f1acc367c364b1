"""
Unit Tests for FundingRateAggregator

These tests verify that:
- Every exchange is requested concurrently, not one after another
- Failing exchanges are dropped and the rest are returned
- Non-empty results are cached; empty results are not

Run with:
    pytest tests/unit/test_funding_aggregator.py -v
"""

import asyncio

import pytest

from core.exceptions import SourceRequestError
from core.funding_aggregator import FundingRateAggregator
from core.schemas import FundingRate
from core.source_interface import FundingSource
from sources.binance import BinanceFundingSource
from sources.bybit import BybitFundingSource
from sources.okx import OkxFundingSource
from storage.memory_cache import TTLCache
from tests.fakes import StaticFundingSource, make_funding_rate


def make_aggregator(sources, clock):
    return FundingRateAggregator(sources, TTLCache(ttl_seconds=30, clock=clock))


class BarrierFundingSource(FundingSource):
    """Completes only once every peer has started, proving concurrent fan-out."""

    def __init__(self, exchange: str, started: list, expected: int):
        super().__init__()
        self.exchange = exchange
        self.started = started
        self.expected = expected

    async def _fetch_funding_rate(self, symbol: str):
        self.started.append(self.exchange)
        while len(self.started) < self.expected:
            await asyncio.sleep(0)
        return make_funding_rate(exchange=self.exchange, symbol=symbol)


class ExplodingFundingSource(StaticFundingSource):
    async def fetch_funding_rate(self, symbol: str):
        raise RuntimeError("unexpected")


class TestFanOut:
    """Tests for concurrent collection"""

    @pytest.mark.asyncio
    async def test_bybit_failure_keeps_others(self, http, clock):
        http.responses["/premiumIndex"] = {"lastFundingRate": "0.0001", "nextFundingTime": 1704124800000}
        http.responses["/market/tickers"] = SourceRequestError("HTTP 503")
        http.responses["/public/funding-rate"] = {
            "data": [{"fundingRate": "-0.00005", "fundingTime": "1704110400000", "nextFundingTime": "1704139200000"}]
        }
        aggregator = make_aggregator(
            [BinanceFundingSource(http), BybitFundingSource(http), OkxFundingSource(http)], clock
        )

        rates = await aggregator.get_funding_rates("BTC")

        assert [r.exchange for r in rates] == ["Binance", "OKX"]
        assert rates[0].rate == pytest.approx(0.0001 * 8760)
        assert rates[1].rate == pytest.approx(-0.00005 * 8760)

    @pytest.mark.asyncio
    async def test_requests_run_concurrently(self, clock):
        started = []
        sources = [BarrierFundingSource(name, started, 3) for name in ("Binance", "Bybit", "OKX")]

        rates = await asyncio.wait_for(make_aggregator(sources, clock).get_funding_rates("ETH"), timeout=2)

        assert len(rates) == 3

    @pytest.mark.asyncio
    async def test_exception_from_public_method_is_dropped(self, clock):
        sources = [ExplodingFundingSource("Binance"), StaticFundingSource("OKX", rate=0.5)]
        rates = await make_aggregator(sources, clock).get_funding_rates("BTC")
        assert [r.exchange for r in rates] == ["OKX"]

    @pytest.mark.asyncio
    async def test_nan_rate_is_dropped(self, clock):
        sources = [StaticFundingSource("Binance", rate=float("nan")), StaticFundingSource("Bybit", rate=0.1)]
        rates = await make_aggregator(sources, clock).get_funding_rates("BTC")
        assert [r.exchange for r in rates] == ["Bybit"]
        assert all(isinstance(r, FundingRate) for r in rates)


class TestFundingCache:
    """Tests for cache interaction"""

    @pytest.mark.asyncio
    async def test_non_empty_result_is_cached(self, clock):
        source = StaticFundingSource("Binance", rate=0.876)
        aggregator = make_aggregator([source], clock)

        first = await aggregator.get_funding_rates("BTC")
        clock.advance(29)
        second = await aggregator.get_funding_rates("BTC")

        assert second == first
        assert source.calls == ["BTC"]

    @pytest.mark.asyncio
    async def test_cache_expires_at_ttl(self, clock):
        source = StaticFundingSource("Binance", rate=0.876)
        aggregator = make_aggregator([source], clock)

        await aggregator.get_funding_rates("BTC")
        clock.advance(30)
        await aggregator.get_funding_rates("BTC")

        assert source.calls == ["BTC", "BTC"]

    @pytest.mark.asyncio
    async def test_empty_result_is_not_cached(self, clock):
        sources = [StaticFundingSource("Binance"), StaticFundingSource("Bybit", error=ValueError("bad"))]
        aggregator = make_aggregator(sources, clock)

        assert await aggregator.get_funding_rates("XYZ") == []
        assert await aggregator.get_funding_rates("XYZ") == []
        assert sources[0].calls == ["XYZ", "XYZ"]

    @pytest.mark.asyncio
    async def test_returned_list_does_not_alias_cache(self, clock):
        aggregator = make_aggregator([StaticFundingSource("OKX", rate=0.2)], clock)

        rates = await aggregator.get_funding_rates("SEI")
        rates.clear()

        assert len(await aggregator.get_funding_rates("SEI")) == 1
