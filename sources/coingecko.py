"""
CoinGecko Price Source

Second source in the price cascade: a REST price index with no geo-blocking.

API Documentation:
    https://docs.coingecko.com/reference/simple-price

Endpoint:
    GET /simple/price?ids=<coin id>&vs_currencies=usd

Response Format:
    {"bitcoin": {"usd": 65000.5}}

Symbols outside COINGECKO_IDS are never requested (fail closed).
"""

from typing import Dict, Optional

from core.schemas import Quote, is_valid_price
from core.source_interface import SourceAdapter
from core.utils.time import current_utc_timestamp
from sources.http_client import HTTPJSONClient


COINGECKO_IDS: Dict[str, str] = {
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "SEI": "sei-network",
    "USDC": "usd-coin",
    "USDT": "tether",
    "SOL": "solana",
    "AVAX": "avalanche-2",
    "ATOM": "cosmos",
    "DAI": "dai",
}


class CoinGeckoSource(SourceAdapter):
    """
    CoinGecko simple-price reader.

    Args:
        http: Shared HTTPJSONClient
        base_url: CoinGecko API base URL
    """

    name = "CoinGecko"
    confidence = 0.95
    supported_symbols = frozenset(COINGECKO_IDS)

    def __init__(self, http: HTTPJSONClient, base_url: str = "https://api.coingecko.com/api/v3"):
        super().__init__()
        self.http = http
        self.base_url = base_url.rstrip("/")

    async def _fetch_quote(self, symbol: str) -> Optional[Quote]:
        coin_id = COINGECKO_IDS[symbol]
        data = await self.http.get_json(
            f"{self.base_url}/simple/price",
            {"ids": coin_id, "vs_currencies": "usd"},
            source=self.name
        )

        price = (data.get(coin_id) or {}).get("usd")
        if price is None or not is_valid_price(float(price)):
            return None

        return Quote(
            symbol=symbol,
            price=float(price),
            timestamp=current_utc_timestamp(milliseconds=True),
            source=self.name,
            confidence=self.confidence
        )
