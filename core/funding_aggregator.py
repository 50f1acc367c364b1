"""
Funding Rate Aggregator — Concurrent Exchange Fan-Out

Collects the current funding rate for a symbol from several exchanges at
once. Unlike prices, the results are not reduced to one value: each
exchange's rate is a distinct, simultaneously valid data point.

Flow:
    1. Funding cache hit (non-empty list younger than the TTL) -> return it
    2. Otherwise request every exchange concurrently and wait for all
    3. Drop exceptions, empty results and non-finite rates
    4. Cache and return the survivors; return [] if none survived
"""

import asyncio
from typing import List, Sequence

from core.logging import get_logger
from core.schemas import FundingRate
from core.source_interface import FundingSource
from storage.memory_cache import TTLCache


class FundingRateAggregator:
    """
    Cache-first funding-rate fan-out.

    Example:
        >>> aggregator = FundingRateAggregator(funding_sources, TTLCache(ttl_seconds=30))
        >>> for fr in await aggregator.get_funding_rates("BTC"):
        ...     print(f"{fr.exchange}: {fr.rate * 100:.4f}%")
    """

    def __init__(self, sources: Sequence[FundingSource], cache: TTLCache):
        self.sources: List[FundingSource] = list(sources)
        self.cache = cache
        self.logger = get_logger(__name__)

    async def get_funding_rates(self, symbol: str) -> List[FundingRate]:
        """
        Get annualized funding rates for a symbol from every reachable exchange.

        Args:
            symbol: Asset ticker (case-insensitive)

        Returns:
            List of FundingRate, possibly empty
        """
        symbol = symbol.upper()

        cached = self.cache.get(symbol)
        if cached:
            self.logger.debug(f"Funding cache hit for {symbol} ({len(cached)} exchanges)")
            return list(cached)

        results = await asyncio.gather(
            *(source.fetch_funding_rate(symbol) for source in self.sources),
            return_exceptions=True
        )

        rates: List[FundingRate] = []
        for source, result in zip(self.sources, results):
            if isinstance(result, BaseException):
                self.logger.error(f"{source.exchange} funding rate error for {symbol}: {result}")
                continue
            if result is None:
                continue
            if not result.is_valid():
                self.logger.warning(f"{source.exchange} returned invalid funding rate for {symbol}: {result.rate}")
                continue
            rates.append(result)

        if rates:
            self.cache.set(symbol, list(rates))
            self.logger.info(
                f"Funding rates for {symbol}: "
                + ", ".join(f"{r.exchange} {r.rate * 100:.4f}%" for r in rates)
            )
        else:
            self.logger.info(f"No funding rate data available for {symbol}")

        return rates
