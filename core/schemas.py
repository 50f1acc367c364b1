"""
Normalized Oracle Schemas

This module defines Pydantic models for the two observation types this core
produces. Every source adapter (on-chain oracle, index REST API, exchange
REST API) normalizes its raw payload into one of these models, so callers
never see source-specific formats or scaling.

Models:
    - Quote: One spot price observation in USD
    - FundingRate: One exchange's perpetual funding observation (annualized)

Validity:
    Models are permissive on construction; a raw zero price still builds a
    Quote. The cascade decides what is usable through is_valid(), and only
    valid observations are ever cached or returned.

Timestamps:
    All timestamps are integer milliseconds since epoch. On-chain sources
    report seconds and are converted by the adapter.
"""

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================
# Constants
# ============================================

FUNDING_ANNUALIZATION_FACTOR = 8760
"""Hourly funding periods per year. Applied to every exchange's raw rate as-is."""


# ============================================
# Base Observation Model
# ============================================

class BaseObservation(BaseModel):
    """
    Base model for all oracle observations.

    Fields shared by Quote and FundingRate:
        - symbol: Uppercase ticker (e.g., "BTC", not "BTCUSDT")
        - timestamp: When the value was produced or observed (ms since epoch)

    Observations are immutable. A newer observation replaces an older one in
    the cache; nothing mutates a stored instance.
    """

    symbol: str = Field(
        ...,
        description="Asset ticker in uppercase",
        examples=["BTC", "ETH", "SEI"]
    )

    timestamp: int = Field(
        ...,
        description="Observation time in milliseconds since epoch"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator('symbol')
    @classmethod
    def validate_symbol(cls, v: str) -> str:
        """Ensure symbol is uppercase"""
        return v.strip().upper()


# ============================================
# Quote Schema
# ============================================

class Quote(BaseObservation):
    """
    Spot Price Observation

    Produced by a SourceAdapter and returned by PriceResolver.get_price().

    Additional Attributes:
        price: USD price, already scaled (decimals / exponent applied)
        source: Identifier of the adapter that produced it, shown to users
        confidence: Static per-adapter reliability score in [0, 1]

    Example:
        >>> q = Quote(
        ...     symbol="btc",
        ...     price=65000.5,
        ...     timestamp=1704110400000,
        ...     source="CoinGecko",
        ...     confidence=0.95
        ... )
        >>> q.symbol
        'BTC'
        >>> q.is_valid()
        True
    """

    price: float = Field(
        ...,
        description="Price in USD"
    )

    source: str = Field(
        ...,
        description="Identifier of the producing adapter",
        examples=["YEI Multi-Oracle", "CoinGecko", "pyth"]
    )

    confidence: float = Field(
        ...,
        ge=0,
        le=1,
        description="Static reliability score of the producing adapter"
    )

    def is_valid(self) -> bool:
        """True if price is finite and strictly positive."""
        return is_valid_price(self.price)


# ============================================
# Funding Rate Schema
# ============================================

class FundingRate(BaseObservation):
    """
    Perpetual Funding Rate Observation

    One exchange's current funding rate for a symbol. Several exchanges'
    rates are meaningful simultaneously, so FundingRateAggregator returns a
    list rather than reducing them to one value.

    Additional Attributes:
        rate: Annualized fraction (raw periodic rate x 8760). Do not re-annualize.
        exchange: Exchange identifier (e.g., "Binance", "Bybit", "OKX")
        next_funding_time: Next funding settlement (ms since epoch)

    Example:
        >>> fr = FundingRate(
        ...     symbol="BTC",
        ...     rate=annualize_funding_rate(0.0001),
        ...     timestamp=1704110400000,
        ...     exchange="Binance",
        ...     next_funding_time=1704124800000
        ... )
        >>> round(fr.rate, 4)
        0.876
    """

    rate: float = Field(
        ...,
        description="Annualized funding rate as a fraction"
    )

    exchange: str = Field(
        ...,
        description="Exchange identifier",
        examples=["Binance", "Bybit", "OKX"]
    )

    next_funding_time: int = Field(
        ...,
        description="Next funding time in milliseconds since epoch"
    )

    def is_valid(self) -> bool:
        """True if the annualized rate is a finite number."""
        return math.isfinite(self.rate)


# ============================================
# Helper Functions
# ============================================

def is_valid_price(value: float) -> bool:
    """
    Validity predicate shared by every price path.

    Args:
        value: Candidate price

    Returns:
        True if value is a finite number greater than zero

    Example:
        >>> is_valid_price(65000.5)
        True
        >>> is_valid_price(0)
        False
        >>> is_valid_price(float("nan"))
        False
    """
    try:
        return math.isfinite(value) and value > 0
    except TypeError:
        return False


def annualize_funding_rate(raw_rate: float) -> float:
    """Convert a raw periodic funding rate to the annualized form stored on FundingRate."""
    return raw_rate * FUNDING_ANNUALIZATION_FACTOR
