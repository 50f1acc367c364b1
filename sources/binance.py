"""
Binance Sources

Two capabilities against the Binance Futures REST API:
- BinanceSpotSource: last price, the fifth (final) source of the price cascade
- BinanceFundingSource: current funding rate for FundingRateAggregator

API Documentation:
    https://binance-docs.github.io/apidocs/futures/en/

Endpoints Used:
    GET /ticker/price?symbol=<SYM>USDT     {"symbol": "BTCUSDT", "price": "65000.50"}
    GET /premiumIndex?symbol=<SYM>USDT     {"lastFundingRate": "0.00010000", "nextFundingTime": 1704124800000, ...}

Binance may be geo-blocked; that is why it sits last in the price cascade.
"""

from typing import Optional

from core.schemas import FundingRate, Quote, annualize_funding_rate, is_valid_price
from core.source_interface import FundingSource, SourceAdapter
from core.utils.time import current_utc_timestamp
from sources.http_client import HTTPJSONClient


BINANCE_BASE_URL = "https://fapi.binance.com/fapi/v1"


class BinanceSpotSource(SourceAdapter):
    """Binance last-price reader, limited to a fixed allow-list."""

    name = "Binance"
    confidence = 0.95
    supported_symbols = frozenset({"BTC", "ETH", "SEI", "USDC", "SOL", "AVAX"})

    def __init__(self, http: HTTPJSONClient, base_url: str = BINANCE_BASE_URL):
        super().__init__()
        self.http = http
        self.base_url = base_url.rstrip("/")

    async def _fetch_quote(self, symbol: str) -> Optional[Quote]:
        data = await self.http.get_json(
            f"{self.base_url}/ticker/price",
            {"symbol": f"{symbol}USDT"},
            source=self.name
        )

        price = float(data["price"])
        if not is_valid_price(price):
            return None

        return Quote(
            symbol=symbol,
            price=price,
            timestamp=current_utc_timestamp(milliseconds=True),
            source=self.name,
            confidence=self.confidence
        )


class BinanceFundingSource(FundingSource):
    """
    Binance premium-index funding reader.

    The raw lastFundingRate is annualized with the fixed hourly factor (x8760).
    """

    exchange = "Binance"

    def __init__(self, http: HTTPJSONClient, base_url: str = BINANCE_BASE_URL):
        super().__init__()
        self.http = http
        self.base_url = base_url.rstrip("/")

    async def _fetch_funding_rate(self, symbol: str) -> Optional[FundingRate]:
        data = await self.http.get_json(
            f"{self.base_url}/premiumIndex",
            {"symbol": f"{symbol}USDT"},
            source=self.exchange
        )

        return FundingRate(
            symbol=symbol,
            rate=annualize_funding_rate(float(data["lastFundingRate"])),
            timestamp=current_utc_timestamp(milliseconds=True),
            exchange=self.exchange,
            next_funding_time=int(data["nextFundingTime"])
        )
