"""
YEI Finance Multi-Oracle Price Source

Primary price source. YEI Finance deploys one aggregator contract per asset
on SEI EVM; each exposes getLatestPrice().

Contract Call:
    getLatestPrice() -> (uint256 price, uint256 timestamp, uint8 decimals)

Scaling:
    price / 10 ** decimals

Staleness:
    An observation older than one hour is logged as a warning but still
    returned. This source is not hard-rejected on age.
"""

from typing import Dict, Optional

from core.exceptions import InvalidPriceError, UnsupportedSymbolError
from core.schemas import Quote
from core.source_interface import MAX_ORACLE_AGE_MS, SourceAdapter
from core.utils.time import age_ms, seconds_to_ms
from sources.chain_client import ChainClient


GET_LATEST_PRICE_ABI = [
    {
        "name": "getLatestPrice",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {"name": "price", "type": "uint256"},
            {"name": "timestamp", "type": "uint256"},
            {"name": "decimals", "type": "uint8"},
        ],
    }
]


class YeiMultiOracleSource(SourceAdapter):
    """
    Per-asset YEI Multi-Oracle reader.

    Args:
        chain: Shared ChainClient
        oracle_addresses: Symbol -> oracle contract address (settings.multi_oracle_addresses)
    """

    name = "YEI Multi-Oracle"
    confidence = 0.98

    def __init__(self, chain: ChainClient, oracle_addresses: Dict[str, str]):
        super().__init__()
        self.chain = chain
        self.oracle_addresses = {s.upper(): a for s, a in oracle_addresses.items() if a}

    async def _fetch_quote(self, symbol: str) -> Optional[Quote]:
        oracle_address = self.oracle_addresses.get(symbol)
        if not oracle_address:
            raise UnsupportedSymbolError(f"no YEI Multi-Oracle address configured for {symbol}")

        price, timestamp, decimals = await self.chain.call(
            oracle_address, GET_LATEST_PRICE_ABI, "getLatestPrice"
        )

        if not price:
            raise InvalidPriceError(f"YEI Multi-Oracle returned zero price for {symbol}")

        formatted_price = price / 10 ** decimals
        timestamp_ms = seconds_to_ms(timestamp)
        age = age_ms(timestamp_ms)

        if age > MAX_ORACLE_AGE_MS:
            # Still returned; only logged
            self.logger.warning(f"YEI Multi-Oracle price too old for {symbol}: {age // 1000}s ago")

        self.logger.info(
            f"YEI Multi-Oracle price for {symbol}: ${formatted_price:.6f} "
            f"(decimals: {decimals}, age: {age // 1000}s)"
        )

        return Quote(
            symbol=symbol,
            price=formatted_price,
            timestamp=timestamp_ms,
            source=self.name,
            confidence=self.confidence
        )
