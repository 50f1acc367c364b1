"""
Source Interface — Abstract Contract for All Oracle Sources

This module defines the abstract base classes every price and funding-rate
source implements. By enforcing a consistent interface, we ensure:
- PriceResolver walks any list of adapters the same way
- FundingRateAggregator fans out over any list of exchanges the same way
- No source failure ever escapes as an exception

Design Philosophy:
    "Program to an interface, not an implementation"

    Subclasses implement only the raw fetch (_fetch_quote / _fetch_funding_rate)
    and are free to raise. The public methods (fetch_quote / fetch_funding_rate)
    normalize the symbol, enforce the supported-symbol allow-list, and convert
    every fault into None.

Example:
    class CoinGeckoSource(SourceAdapter):
        name = "CoinGecko"
        confidence = 0.95

        async def _fetch_quote(self, symbol):
            data = await self.http.get_json(...)
            return Quote(...)

    quote = await CoinGeckoSource(http).fetch_quote("btc")  # Quote or None
"""

from abc import ABC, abstractmethod
from typing import FrozenSet, Optional

from core.exceptions import InvalidPriceError, UnsupportedSymbolError
from core.logging import get_logger
from core.schemas import FundingRate, Quote
from core.utils.time import age_ms

MAX_ORACLE_AGE_MS = 3_600_000
"""Freshness bound for on-chain observations (1 hour)."""


# ============================================
# Price Sources
# ============================================

class SourceAdapter(ABC):
    """
    Abstract Base Class for Price Sources

    Class Attributes:
        name: Identifier shown as Quote.source
        confidence: Static reliability score attached to every Quote
        supported_symbols: Allow-list of symbols, or None for "ask the source"

    Abstract Methods (MUST be implemented):
        - _fetch_quote: Fetch and normalize one Quote; may raise

    Notes:
        - Adapters hold only fixed configuration (addresses, ids, URLs) and
          shared client handles; they keep no per-request state
    """

    name: str
    """Source identifier. Example: "CoinGecko", "pyth" """

    confidence: float = 0.95
    """Static confidence score in [0, 1]"""

    supported_symbols: Optional[FrozenSet[str]] = None
    """Symbols this source is allowed to serve (None = no restriction)"""

    def __init__(self):
        self.logger = get_logger(f"sources.{self.__class__.__name__}")

    @abstractmethod
    async def _fetch_quote(self, symbol: str) -> Optional[Quote]:
        """
        Fetch a Quote for an uppercase symbol.

        Implementations apply their own scaling (decimals / exponent) and may
        raise on any fault; fetch_quote() turns that into None.
        """
        ...

    async def fetch_quote(self, symbol: str) -> Optional[Quote]:
        """
        Fetch a normalized Quote, never raising.

        Args:
            symbol: Asset ticker (case-insensitive)

        Returns:
            Quote, or None if unsupported, unavailable or malformed
        """
        symbol = symbol.upper()
        if not self.supports(symbol):
            return None
        try:
            return await self._fetch_quote(symbol)
        except UnsupportedSymbolError as e:
            self.logger.debug(f"{self.name} skipped {symbol}: {e}")
            return None
        except InvalidPriceError as e:
            self.logger.warning(f"{self.name} rejected {symbol}: {e}")
            return None
        except Exception as e:
            self.logger.error(f"{self.name} price fetch error for {symbol}: {e}")
            return None

    def supports(self, symbol: str) -> bool:
        """Check the symbol against the allow-list, if any."""
        if self.supported_symbols is None:
            return True
        return symbol.upper() in self.supported_symbols

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name='{self.name}')>"


# ============================================
# Funding Rate Sources
# ============================================

class FundingSource(ABC):
    """
    Abstract Base Class for Exchange Funding Rate Sources

    Class Attributes:
        exchange: Identifier shown as FundingRate.exchange

    Abstract Methods (MUST be implemented):
        - _fetch_funding_rate: Fetch and annualize one FundingRate; may raise
    """

    exchange: str

    def __init__(self):
        self.logger = get_logger(f"sources.{self.__class__.__name__}")

    @abstractmethod
    async def _fetch_funding_rate(self, symbol: str) -> Optional[FundingRate]:
        ...

    async def fetch_funding_rate(self, symbol: str) -> Optional[FundingRate]:
        """Fetch an annualized FundingRate, or None on any failure."""
        symbol = symbol.upper()
        try:
            return await self._fetch_funding_rate(symbol)
        except Exception as e:
            self.logger.error(f"{self.exchange} funding rate error for {symbol}: {e}")
            return None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(exchange='{self.exchange}')>"


# ============================================
# Helper Functions
# ============================================

def is_fresh(quote: Quote, max_age_ms: int = MAX_ORACLE_AGE_MS, now_ms: Optional[int] = None) -> bool:
    """
    Check that a quote's observation is no older than max_age_ms.

    Args:
        quote: Quote to check
        max_age_ms: Freshness bound (default 1 hour)
        now_ms: Reference time (defaults to now)

    Example:
        >>> is_fresh(quote)  # observed 10 minutes ago
        True
    """
    return age_ms(quote.timestamp, now_ms) <= max_age_ms


def is_valid_and_fresh(quote: Quote) -> bool:
    """Acceptance predicate for on-chain cascades that hard-reject stale data."""
    return quote.is_valid() and is_fresh(quote)
