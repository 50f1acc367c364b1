"""
SEI EVM Chain Client

Thin async wrapper around web3's AsyncWeb3 for read-only contract calls.
Every on-chain source (YEI Multi-Oracle, API3, Pyth, Redstone) goes through
one shared ChainClient, so there is a single RPC connection pool per process.

A read is (contract address, ABI fragment, function name, args) -> decoded
output. Faults (RPC errors, reverts, decode errors) propagate to the calling
adapter, which turns them into "no data".

Usage:
    chain = ChainClient("https://evm-rpc.sei-apis.com")
    price, ts, decimals = await chain.call(address, GET_LATEST_PRICE_ABI, "getLatestPrice")
    await chain.close()
"""

from typing import Any, List, Optional

import aiohttp
from web3 import AsyncWeb3
from web3.providers import AsyncHTTPProvider

from core.logging import get_logger, log_chain_call


class ChainClient:
    """
    Read-only contract caller over an AsyncHTTPProvider.

    Attributes:
        rpc_url: SEI EVM JSON-RPC endpoint
        w3: AsyncWeb3 instance
    """

    def __init__(self, rpc_url: str, timeout: float = 10, w3: Optional[AsyncWeb3] = None):
        self.rpc_url = rpc_url
        self.logger = get_logger(__name__)
        self.w3 = w3 or AsyncWeb3(
            AsyncHTTPProvider(
                rpc_url,
                request_kwargs={"timeout": aiohttp.ClientTimeout(total=timeout)}
            )
        )

    async def call(self, address: str, abi: List[dict], function_name: str, *args: Any) -> Any:
        """
        Call a view function and return its decoded output.

        Args:
            address: Contract address (any case; checksummed here)
            abi: ABI fragment containing the function
            function_name: Name of the view function
            *args: Function arguments (bytes32 values as bytes)

        Returns:
            Single value for one output, list of values for several outputs

        Raises:
            Exception: Any web3 / RPC / decode error
        """
        log_chain_call(address, function_name, args)
        contract = self.w3.eth.contract(address=AsyncWeb3.to_checksum_address(address), abi=abi)
        function = getattr(contract.functions, function_name)
        return await function(*args).call()

    async def close(self) -> None:
        """Release the provider's cached HTTP sessions."""
        try:
            await self.w3.provider.disconnect()
            self.logger.debug("ChainClient provider disconnected")
        except Exception as e:
            self.logger.warning(f"Error disconnecting chain provider: {e}")

    def __repr__(self) -> str:
        return f"<ChainClient(rpc_url='{self.rpc_url}')>"
