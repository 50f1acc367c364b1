"""
Price Resolver — Fixed-Priority Price Cascade

Resolves a spot price for a symbol by consulting the price cache and, on a
miss, walking the source adapters in their fixed priority order:

    1. YEI Multi-Oracle
    2. CoinGecko
    3. YEI legacy oracle (API3 -> Pyth -> Redstone)
    4. Pyth
    5. Binance

The first Quote with a finite, strictly positive price wins. The order is
part of the contract: callers display the winning source.

"No quote" is a normal outcome and is returned as None, never raised.
"""

from functools import partial
from typing import List, Optional, Sequence

from core.cascade import run_cascade
from core.logging import get_logger
from core.schemas import Quote
from core.source_interface import SourceAdapter
from storage.memory_cache import TTLCache


class PriceResolver:
    """
    Cache-first price cascade.

    Attributes:
        sources: Price adapters in priority order
        cache: Price cache (symbol -> Quote)

    Example:
        >>> resolver = PriceResolver(sources, TTLCache(ttl_seconds=30))
        >>> quote = await resolver.get_price("SEI")
        >>> if quote:
        ...     print(f"{quote.symbol}: ${quote.price:.4f} ({quote.source})")
    """

    def __init__(self, sources: Sequence[SourceAdapter], cache: TTLCache):
        self.sources: List[SourceAdapter] = list(sources)
        self.cache = cache
        self.logger = get_logger(__name__)

    async def get_price(self, symbol: str) -> Optional[Quote]:
        """
        Resolve a validated Quote for a symbol.

        Args:
            symbol: Asset ticker (case-insensitive)

        Returns:
            Cached Quote if younger than the TTL, otherwise the first valid
            Quote from the cascade (which is then cached), or None if every
            source failed
        """
        symbol = symbol.upper()

        cached = self.cache.get(symbol)
        if cached is not None:
            self.logger.debug(f"Price cache hit for {symbol} ({cached.source})")
            return cached

        steps = [(source.name, partial(source.fetch_quote, symbol)) for source in self.sources]
        quote = await run_cascade(steps, Quote.is_valid, context=symbol)

        if quote is None:
            self.logger.info(f"No price source available for {symbol}")
            return None

        self.cache.set(symbol, quote)
        self.logger.info(f"Using {quote.source} price for {symbol}: ${quote.price}")
        return quote

    def list_sources(self) -> List[str]:
        """Source names in cascade order."""
        return [source.name for source in self.sources]
