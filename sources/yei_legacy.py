"""
YEI Finance Legacy Oracle Cascade

Third source in the price cascade, only for the assets YEI Finance lists
(BTC, ETH, SEI, USDC, USDT). It is itself a smaller cascade over three
on-chain feeds, walked with the same run_cascade() primitive as the outer
PriceResolver:

    1. API3 dAPI        readDataFeed(bytes32 dApiId) -> (int224 value, uint32 timestamp)
                        value / 1e18
    2. Pyth             getPriceUnsafe(bytes32 id)   (see sources/pyth.py)
    3. Redstone classic getLatestRoundData(bytes32 feedId) -> (int256 price, uint256 timestamp)
                        price / 1e8, USDT and USDC only

Every level must pass the validity predicate AND be no older than one hour
before it is accepted. The winning quote is re-labelled as this source.
"""

from functools import partial
from typing import Dict, Optional, Sequence

from core.cascade import run_cascade
from core.exceptions import StaleDataError
from core.schemas import Quote
from core.source_interface import MAX_ORACLE_AGE_MS, SourceAdapter, is_valid_and_fresh
from core.utils.time import age_ms, seconds_to_ms
from sources.chain_client import ChainClient
from sources.pyth import hex_to_bytes32


YEI_SUPPORTED_SYMBOLS = frozenset({"BTC", "ETH", "SEI", "USDC", "USDT"})

API3_DAPI_IDS: Dict[str, str] = {
    "BTC": "0xe62df6c8b4a85fe1a67db44dc12de5db330f7ac66b72dc658afedf0f4a415b43",
    "ETH": "0xff61491a931112ddf1bd8147cd1b641375f79f5825126d665480874634fd0ace",
    "SEI": "0x53614f1cb0c031d4af66c04cb9c756234adad0e1cee85303795091499a4084eb",
    "USDC": "0xeaa020c61cc479712813461ce153894a96a6c00b21ed0cfc2798d1f9a9e9c94a",
}

READ_DATA_FEED_ABI = [
    {
        "name": "readDataFeed",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "dApiId", "type": "bytes32"}],
        "outputs": [
            {"name": "value", "type": "int224"},
            {"name": "timestamp", "type": "uint32"},
        ],
    }
]

GET_LATEST_ROUND_DATA_ABI = [
    {
        "name": "getLatestRoundData",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "feedId", "type": "bytes32"}],
        "outputs": [
            {"name": "price", "type": "int256"},
            {"name": "timestamp", "type": "uint256"},
        ],
    }
]


def string_to_bytes32(value: str) -> bytes:
    """
    Encode an ASCII feed name as a right-padded bytes32.

    Example:
        >>> string_to_bytes32("USDT/USD").hex()[:16]
        '555344542f555344'
    """
    raw = value.encode("utf-8")
    if len(raw) > 32:
        raise ValueError(f"'{value}' does not fit in bytes32")
    return raw.ljust(32, b"\x00")


# ============================================
# Cascade Levels
# ============================================

class Api3DapiSource(SourceAdapter):
    """API3 dAPI reader; raises StaleDataError for observations older than one hour."""

    name = "API3"
    confidence = 0.95

    def __init__(self, chain: ChainClient, contract_address: str, dapi_ids: Optional[Dict[str, str]] = None):
        super().__init__()
        self.chain = chain
        self.contract_address = contract_address
        self.dapi_ids = dict(dapi_ids or API3_DAPI_IDS)
        self.supported_symbols = frozenset(self.dapi_ids)

    async def _fetch_quote(self, symbol: str) -> Optional[Quote]:
        value, timestamp = await self.chain.call(
            self.contract_address,
            READ_DATA_FEED_ABI,
            "readDataFeed",
            hex_to_bytes32(self.dapi_ids[symbol])
        )

        timestamp_ms = seconds_to_ms(timestamp)
        if age_ms(timestamp_ms) > MAX_ORACLE_AGE_MS:
            raise StaleDataError(f"API3 price data too old for {symbol}")

        return Quote(
            symbol=symbol,
            price=value / 1e18,
            timestamp=timestamp_ms,
            source=self.name,
            confidence=self.confidence
        )


class RedstoneClassicSource(SourceAdapter):
    """Redstone classic feed reader for the USD stablecoins."""

    name = "Redstone"
    confidence = 0.95
    supported_symbols = frozenset({"USDT", "USDC"})

    def __init__(self, chain: ChainClient, contract_address: str):
        super().__init__()
        self.chain = chain
        self.contract_address = contract_address

    async def _fetch_quote(self, symbol: str) -> Optional[Quote]:
        price, timestamp = await self.chain.call(
            self.contract_address,
            GET_LATEST_ROUND_DATA_ABI,
            "getLatestRoundData",
            string_to_bytes32(f"{symbol}/USD")
        )

        return Quote(
            symbol=symbol,
            price=price / 1e8,
            timestamp=seconds_to_ms(timestamp),
            source=self.name,
            confidence=self.confidence
        )


# ============================================
# Legacy Oracle (nested cascade)
# ============================================

class YeiLegacyOracleSource(SourceAdapter):
    """
    Nested cascade over the YEI legacy feeds.

    Args:
        levels: Sub-adapters in priority order (API3, Pyth, Redstone)

    Example:
        >>> legacy = YeiLegacyOracleSource([
        ...     Api3DapiSource(chain, settings.yei_api3_contract),
        ...     PythSource(chain, settings.yei_pyth_contract),
        ...     RedstoneClassicSource(chain, settings.yei_redstone_contract),
        ... ])
        >>> quote = await legacy.fetch_quote("USDT")
        >>> quote.source
        'yei-legacy-oracle'
    """

    name = "yei-legacy-oracle"
    confidence = 0.95
    supported_symbols = YEI_SUPPORTED_SYMBOLS

    def __init__(self, levels: Sequence[SourceAdapter]):
        super().__init__()
        self.levels = list(levels)

    async def _fetch_quote(self, symbol: str) -> Optional[Quote]:
        steps = [(f"YEI {level.name}", partial(level.fetch_quote, symbol)) for level in self.levels]
        quote = await run_cascade(steps, is_valid_and_fresh, context=symbol)

        if quote is None:
            self.logger.warning(f"All YEI oracle sources failed for {symbol}")
            return None

        self.logger.info(f"YEI {quote.source} price for {symbol}: {quote.price}")
        return quote.model_copy(update={"source": self.name, "confidence": self.confidence})
