"""
Bybit Funding Source

API Documentation:
    https://bybit-exchange.github.io/docs/v5/market/tickers

Endpoint:
    GET /market/tickers?category=linear&symbol=<SYM>USDT

Response Format:
    {
      "retCode": 0,
      "retMsg": "OK",
      "result": {
        "category": "linear",
        "list": [{"symbol": "BTCUSDT", "fundingRate": "0.0001", "nextFundingTime": "1704124800000", ...}]
      }
    }

A non-zero retCode is an API error even on HTTP 200.
"""

from typing import Optional

from core.exceptions import SourceRequestError
from core.schemas import FundingRate, annualize_funding_rate
from core.source_interface import FundingSource
from core.utils.time import current_utc_timestamp
from sources.http_client import HTTPJSONClient


class BybitFundingSource(FundingSource):
    """Bybit linear-perpetual ticker funding reader."""

    exchange = "Bybit"

    def __init__(self, http: HTTPJSONClient, base_url: str = "https://api.bybit.com/v5"):
        super().__init__()
        self.http = http
        self.base_url = base_url.rstrip("/")

    async def _fetch_funding_rate(self, symbol: str) -> Optional[FundingRate]:
        data = await self.http.get_json(
            f"{self.base_url}/market/tickers",
            {"category": "linear", "symbol": f"{symbol}USDT"},
            source=self.exchange
        )

        if data.get("retCode") != 0:
            raise SourceRequestError(f"Bybit API error: {data.get('retMsg', 'Unknown error')}")

        ticker = data["result"]["list"][0]

        return FundingRate(
            symbol=symbol,
            rate=annualize_funding_rate(float(ticker["fundingRate"])),
            timestamp=current_utc_timestamp(milliseconds=True),
            exchange=self.exchange,
            next_funding_time=int(ticker["nextFundingTime"])
        )
