"""
Oracle Manager — Public Entry Point of the Oracle Core

This module wires every component of the oracle core together and exposes
the interface used by the rest of the system:

    get_price(symbol)            -> Quote | None
    get_funding_rates(symbol)    -> List[FundingRate]  (possibly empty)
    start_periodic_refresh()
    stop_periodic_refresh()

Ownership:
    OracleManager owns the HTTP client, the chain client, both caches, the
    price/funding adapters, the PriceResolver, the FundingRateAggregator and
    the RefreshScheduler. Construct one per process at startup and pass it by
    reference; there is no hidden global instance.

Example Usage:
    async with OracleManager() as oracle:
        await oracle.start_periodic_refresh()
        quote = await oracle.get_price("SEI")
        rates = await oracle.get_funding_rates("BTC")
"""

import time
from typing import Callable, List, Optional, Sequence

from core.config import Settings, settings as default_settings
from core.funding_aggregator import FundingRateAggregator
from core.logging import logger
from core.price_resolver import PriceResolver
from core.schemas import FundingRate, Quote
from core.source_interface import FundingSource, SourceAdapter
from services.refresh_scheduler import RefreshScheduler
from sources.binance import BinanceFundingSource, BinanceSpotSource
from sources.bybit import BybitFundingSource
from sources.chain_client import ChainClient
from sources.coingecko import CoinGeckoSource
from sources.http_client import HTTPJSONClient
from sources.okx import OkxFundingSource
from sources.pyth import PythSource
from sources.yei_legacy import Api3DapiSource, RedstoneClassicSource, YeiLegacyOracleSource
from sources.yei_multi_oracle import YeiMultiOracleSource
from storage.memory_cache import TTLCache


# ============================================
# Source Factories
# ============================================

def build_price_sources(config: Settings, http: HTTPJSONClient, chain: ChainClient) -> List[SourceAdapter]:
    """
    Build the price adapters in their fixed cascade order.

    Args:
        config: Settings providing contract addresses and base URLs
        http: Shared REST client
        chain: Shared chain client

    Returns:
        [YEI Multi-Oracle, CoinGecko, YEI legacy, Pyth, Binance]
    """
    pyth = PythSource(chain, config.yei_pyth_contract)

    return [
        YeiMultiOracleSource(chain, config.multi_oracle_addresses),
        CoinGeckoSource(http, config.coingecko_base_url),
        YeiLegacyOracleSource([
            Api3DapiSource(chain, config.yei_api3_contract),
            pyth,
            RedstoneClassicSource(chain, config.yei_redstone_contract),
        ]),
        pyth,
        BinanceSpotSource(http, config.binance_base_url),
    ]


def build_funding_sources(config: Settings, http: HTTPJSONClient) -> List[FundingSource]:
    """Build the exchange funding adapters queried concurrently."""
    return [
        BinanceFundingSource(http, config.binance_base_url),
        BybitFundingSource(http, config.bybit_base_url),
        OkxFundingSource(http, config.okx_base_url),
    ]


# ============================================
# Oracle Manager
# ============================================

class OracleManager:
    """
    Central owner of the oracle core's components and lifecycle.

    Args:
        config: Settings (defaults to the global settings)
        price_sources: Override the default price adapters (tests, custom deployments)
        funding_sources: Override the default funding adapters
        clock: Monotonic clock used by both caches

    Example:
        >>> oracle = OracleManager()
        >>> await oracle.initialize()
        >>> quote = await oracle.get_price("BTC")
        >>> await oracle.shutdown()
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        price_sources: Optional[Sequence[SourceAdapter]] = None,
        funding_sources: Optional[Sequence[FundingSource]] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        self.config = config or default_settings

        self.http = HTTPJSONClient(timeout=self.config.request_timeout)
        self.chain = ChainClient(self.config.rpc_url, timeout=self.config.request_timeout)

        if price_sources is None:
            price_sources = build_price_sources(self.config, self.http, self.chain)
        if funding_sources is None:
            funding_sources = build_funding_sources(self.config, self.http)

        self.price_resolver = PriceResolver(
            price_sources, TTLCache(ttl_seconds=self.config.cache_ttl, clock=clock)
        )
        self.funding_aggregator = FundingRateAggregator(
            funding_sources, TTLCache(ttl_seconds=self.config.funding_cache_ttl, clock=clock)
        )
        self.scheduler = RefreshScheduler(
            self.price_resolver.get_price,
            self.funding_aggregator.get_funding_rates,
            self.config.refresh_symbols_list,
            interval=self.config.refresh_interval
        )

        logger.info(
            f"OracleManager configured for {self.config.sei_network} with "
            f"{len(self.price_resolver.sources)} price source(s): {', '.join(self.list_sources())}"
        )

    # ============================================
    # Lifecycle Management
    # ============================================

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.shutdown()

    async def initialize(self) -> None:
        """Open the shared HTTP session."""
        await self.http.open()
        logger.info("OracleManager initialized")

    async def shutdown(self) -> None:
        """
        Stop the scheduler and release clients.

        Never raises; errors are logged so shutdown always completes.
        """
        logger.info("Shutting down OracleManager...")

        try:
            await self.scheduler.stop()
        except Exception as e:
            logger.error(f"Error stopping refresh scheduler: {e}")

        try:
            await self.http.close()
        except Exception as e:
            logger.error(f"Error closing HTTP client: {e}")

        await self.chain.close()
        logger.info("OracleManager shut down")

    # ============================================
    # Public Interface
    # ============================================

    async def get_price(self, symbol: str) -> Optional[Quote]:
        """Resolve a validated price (cache first, then the source cascade)."""
        return await self.price_resolver.get_price(symbol)

    async def get_funding_rates(self, symbol: str) -> List[FundingRate]:
        """Annualized funding rates from every reachable exchange (possibly empty)."""
        return await self.funding_aggregator.get_funding_rates(symbol)

    async def start_periodic_refresh(self) -> None:
        await self.scheduler.start()

    async def stop_periodic_refresh(self) -> None:
        await self.scheduler.stop()

    def list_sources(self) -> List[str]:
        return self.price_resolver.list_sources()

    def __repr__(self) -> str:
        return f"<OracleManager(network='{self.config.sei_network}', sources={self.list_sources()})>"
