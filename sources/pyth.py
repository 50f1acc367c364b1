"""
Pyth Network Price Source

Reads Pyth price feeds from the Pyth contract deployed on SEI EVM.

Contract Call:
    getPriceUnsafe(bytes32 id) -> (int64 price, uint64 conf, int32 expo, uint256 publishTime)

Scaling:
    price * 10 ** expo  (expo is negative for USD feeds, e.g. -8)

Used twice: as the fourth adapter of the price cascade, and as the second
level of the YEI legacy oracle cascade.
"""

from typing import Dict, Optional

from core.exceptions import InvalidPriceError
from core.schemas import Quote
from core.source_interface import SourceAdapter
from core.utils.time import seconds_to_ms
from sources.chain_client import ChainClient


PYTH_PRICE_FEEDS: Dict[str, str] = {
    "BTC": "0xe62df6c8b4a85fe1a67db44dc12de5db330f7ac66b72dc658afedf0f4a415b43",
    "ETH": "0xff61491a931112ddf1bd8147cd1b641375f79f5825126d665480874634fd0ace",
    "SEI": "0x53614f1cb0c031d4af66c04cb9c756234adad0e1cee85303795091499a4084eb",
    "USDC": "0xeaa020c61cc479712813461ce153894a96a6c00b21ed0cfc2798d1f9a9e9c94a",
}

GET_PRICE_UNSAFE_ABI = [
    {
        "name": "getPriceUnsafe",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "id", "type": "bytes32"}],
        "outputs": [
            {
                "name": "price",
                "type": "tuple",
                "components": [
                    {"name": "price", "type": "int64"},
                    {"name": "conf", "type": "uint64"},
                    {"name": "expo", "type": "int32"},
                    {"name": "publishTime", "type": "uint256"},
                ],
            }
        ],
    }
]


def hex_to_bytes32(value: str) -> bytes:
    """Decode a 0x-prefixed 32-byte hex id."""
    raw = bytes.fromhex(value[2:] if value.startswith("0x") else value)
    if len(raw) != 32:
        raise ValueError(f"Expected 32 bytes, got {len(raw)}")
    return raw


class PythSource(SourceAdapter):
    """
    Pyth on-chain price feed reader.

    Args:
        chain: Shared ChainClient
        contract_address: Pyth contract on SEI EVM
        feed_ids: Symbol -> Pyth price feed id (defaults to PYTH_PRICE_FEEDS)

    Example:
        >>> pyth = PythSource(chain, settings.yei_pyth_contract)
        >>> quote = await pyth.fetch_quote("ETH")
    """

    name = "pyth"
    confidence = 0.90

    def __init__(self, chain: ChainClient, contract_address: str, feed_ids: Optional[Dict[str, str]] = None):
        super().__init__()
        self.chain = chain
        self.contract_address = contract_address
        self.feed_ids = dict(feed_ids or PYTH_PRICE_FEEDS)
        self.supported_symbols = frozenset(self.feed_ids)

    async def _fetch_quote(self, symbol: str) -> Optional[Quote]:
        feed_id = hex_to_bytes32(self.feed_ids[symbol])
        price, _conf, expo, publish_time = await self.chain.call(
            self.contract_address, GET_PRICE_UNSAFE_ABI, "getPriceUnsafe", feed_id
        )

        if price == 0:
            raise InvalidPriceError(f"Pyth returned zero price for {symbol}")

        return Quote(
            symbol=symbol,
            price=price * 10 ** expo,
            timestamp=seconds_to_ms(publish_time),
            source=self.name,
            confidence=self.confidence
        )
