"""
OKX Funding Source

API Documentation:
    https://www.okx.com/docs-v5/en/#public-data-rest-api-get-funding-rate

Endpoint:
    GET /public/funding-rate?instId=<SYM>-USDT-SWAP

Response Format:
    {
      "code": "0",
      "data": [{"instId": "BTC-USDT-SWAP", "fundingRate": "0.0001",
                "fundingTime": "1704110400000", "nextFundingTime": "1704139200000"}]
    }

Unlike Binance and Bybit, the observation timestamp comes from the payload
(fundingTime) rather than the local clock.
"""

from typing import Optional

from core.schemas import FundingRate, annualize_funding_rate
from core.source_interface import FundingSource
from sources.http_client import HTTPJSONClient


class OkxFundingSource(FundingSource):
    exchange = "OKX"

    def __init__(self, http: HTTPJSONClient, base_url: str = "https://www.okx.com/api/v5"):
        super().__init__()
        self.http = http
        self.base_url = base_url.rstrip("/")

    async def _fetch_funding_rate(self, symbol: str) -> Optional[FundingRate]:
        data = await self.http.get_json(
            f"{self.base_url}/public/funding-rate",
            {"instId": f"{symbol}-USDT-SWAP"},
            source=self.exchange
        )

        funding = data["data"][0]

        return FundingRate(
            symbol=symbol,
            rate=annualize_funding_rate(float(funding["fundingRate"])),
            timestamp=int(funding["fundingTime"]),
            exchange=self.exchange,
            next_funding_time=int(funding["nextFundingTime"])
        )
