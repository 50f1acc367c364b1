"""
Configuration Management Module

This module handles loading, validating, and providing access to application configuration
from environment variables (.env file).

Uses Pydantic Settings for automatic validation and type conversion.

Key Features:
- Loads configuration from .env file
- Selects the SEI EVM RPC endpoint from the configured network
- Holds oracle contract addresses (YEI multi-oracle per asset, API3, Pyth, Redstone)
- Holds REST base URLs for CoinGecko, Binance, Bybit and OKX
- Converts the comma-separated refresh watch-list to a list

Usage:
    from core.config import settings

    # Access configuration values
    print(settings.rpc_url)
    print(settings.refresh_symbols_list)  # Returns a list of strings
"""

from typing import Dict, List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from web3 import Web3


SEI_RPC_URLS: Dict[str, str] = {
    "sei-mainnet": "https://evm-rpc.sei-apis.com",
    "sei-testnet": "https://evm-rpc-testnet.sei-apis.com",
}


class Settings(BaseSettings):
    """
    Application Settings

    This class defines all configuration parameters for the oracle core.
    Values are automatically loaded from environment variables or .env file.

    Attributes:
        sei_network: SEI network name ("sei-mainnet" or "sei-testnet")
        sei_rpc_url: Explicit RPC URL (overrides the network default when set)
        yei_api3_contract: API3 dAPI proxy contract used by the legacy cascade
        yei_pyth_contract: Pyth contract on SEI EVM
        yei_redstone_contract: Redstone classic feed contract
        yei_*_oracle: Per-asset YEI Multi-Oracle contract addresses
        coingecko_base_url: CoinGecko REST API base URL
        binance_base_url: Binance Futures REST base URL
        bybit_base_url: Bybit v5 REST base URL
        okx_base_url: OKX v5 REST base URL
        cache_ttl: Price cache time-to-live in seconds
        funding_cache_ttl: Funding-rate cache time-to-live in seconds
        refresh_interval: Background refresh period in seconds
        refresh_symbols: Comma-separated watch-list for background refresh
        request_timeout: Timeout for HTTP and RPC requests in seconds
    """

    # ============================================
    # Chain Configuration
    # ============================================

    sei_network: str = Field(
        default="sei-testnet",
        description="SEI network (sei-mainnet, sei-testnet)"
    )

    sei_rpc_url: str = Field(
        default="",
        description="SEI EVM RPC URL (empty = network default)"
    )

    # ============================================
    # Oracle Contract Addresses
    # ============================================

    yei_api3_contract: str = Field(
        default="0x2880aB155794e7179c9eE2e38200202908C17B43",
        description="API3 dAPI contract"
    )

    yei_pyth_contract: str = Field(
        default="0x2880aB155794e7179c9eE2e38200202908C17B43",
        description="Pyth price feed contract"
    )

    yei_redstone_contract: str = Field(
        default="0x1111111111111111111111111111111111111111",
        description="Redstone classic feed contract"
    )

    yei_sei_oracle: str = Field(
        default="0xa2aCDc40e5ebCE7f8554E66eCe6734937A48B3f3",
        description="YEI Multi-Oracle contract for SEI"
    )

    yei_usdc_oracle: str = Field(
        default="0xEAb459AD7611D5223A408A2e73b69173F61bb808",
        description="YEI Multi-Oracle contract for USDC"
    )

    yei_usdt_oracle: str = Field(
        default="0x284db472a483e115e3422dd30288b24182E36DdB",
        description="YEI Multi-Oracle contract for USDT"
    )

    yei_eth_oracle: str = Field(
        default="0x3E45Fb956D2Ba2CB5Fa561c40E5912225E64F7B2",
        description="YEI Multi-Oracle contract for ETH"
    )

    yei_btc_oracle: str = Field(
        default="",
        description="YEI Multi-Oracle contract for BTC (no default deployment)"
    )

    # ============================================
    # REST API Configuration
    # ============================================

    coingecko_base_url: str = Field(
        default="https://api.coingecko.com/api/v3",
        description="CoinGecko API base URL"
    )

    binance_base_url: str = Field(
        default="https://fapi.binance.com/fapi/v1",
        description="Binance Futures API base URL"
    )

    bybit_base_url: str = Field(
        default="https://api.bybit.com/v5",
        description="Bybit v5 API base URL"
    )

    okx_base_url: str = Field(
        default="https://www.okx.com/api/v5",
        description="OKX v5 API base URL"
    )

    request_timeout: int = Field(
        default=10,
        description="HTTP and RPC request timeout in seconds"
    )

    # ============================================
    # Caching & Refresh Configuration
    # ============================================

    cache_ttl: float = Field(
        default=30,
        description="Price cache TTL in seconds"
    )

    funding_cache_ttl: float = Field(
        default=30,
        description="Funding-rate cache TTL in seconds"
    )

    refresh_interval: float = Field(
        default=30,
        description="Background refresh period in seconds (matches cache TTL)"
    )

    refresh_symbols: str = Field(
        default="BTC,ETH,SEI",
        description="Comma-separated list of symbols refreshed in the background"
    )

    # ============================================
    # Application Configuration
    # ============================================

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # ============================================
    # Pydantic Settings Configuration
    # ============================================

    model_config = SettingsConfigDict(
        # Look for .env file in the project root
        env_file=".env",
        # Ignore extra fields in .env that aren't defined here
        extra="ignore",
        # Case-insensitive environment variable matching
        case_sensitive=False
    )

    # ============================================
    # Custom Properties
    # ============================================

    @property
    def rpc_url(self) -> str:
        """
        Resolve the SEI EVM RPC endpoint.

        Returns:
            sei_rpc_url when set, otherwise the default endpoint for sei_network.
            Unknown networks fall back to testnet.
        """
        if self.sei_rpc_url:
            return self.sei_rpc_url
        return SEI_RPC_URLS.get(self.sei_network, SEI_RPC_URLS["sei-testnet"])

    @property
    def refresh_symbols_list(self) -> List[str]:
        """
        Convert comma-separated refresh symbols string to a list.

        Example:
            >>> settings.refresh_symbols_list
            ['BTC', 'ETH', 'SEI']
        """
        return [s.strip().upper() for s in self.refresh_symbols.split(",") if s.strip()]

    @property
    def multi_oracle_addresses(self) -> Dict[str, str]:
        """
        Per-asset YEI Multi-Oracle addresses, skipping assets with no address.

        Example:
            >>> sorted(settings.multi_oracle_addresses)
            ['ETH', 'SEI', 'USDC', 'USDT']
        """
        addresses = {
            "SEI": self.yei_sei_oracle,
            "USDC": self.yei_usdc_oracle,
            "USDT": self.yei_usdt_oracle,
            "ETH": self.yei_eth_oracle,
            "BTC": self.yei_btc_oracle,
        }
        return {symbol: address for symbol, address in addresses.items() if address}


# ============================================
# Global Settings Instance
# ============================================

# Loaded once and shared; OracleManager takes an explicit Settings for tests
settings = Settings()


# ============================================
# Configuration Validation
# ============================================

def validate_configuration(config: Settings = None) -> None:
    """
    Validate critical configuration settings on startup.

    Args:
        config: Settings to validate (defaults to the global settings)

    Raises:
        ValueError: If required configuration is missing or invalid
    """
    # Import logger here to avoid circular import
    # (logging.py imports config.py, so we can't import at module level)
    from core.logging import logger

    config = config or settings

    if config.sei_network not in SEI_RPC_URLS:
        raise ValueError(
            f"Invalid SEI_NETWORK: '{config.sei_network}'. "
            f"Must be one of: {', '.join(SEI_RPC_URLS)}"
        )

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if config.log_level.upper() not in valid_log_levels:
        raise ValueError(
            f"Invalid LOG_LEVEL: '{config.log_level}'. "
            f"Must be one of: {', '.join(valid_log_levels)}"
        )

    if config.cache_ttl <= 0 or config.funding_cache_ttl <= 0:
        raise ValueError("CACHE_TTL and FUNDING_CACHE_TTL must be positive")

    if config.refresh_interval <= 0:
        raise ValueError(f"Invalid REFRESH_INTERVAL: {config.refresh_interval}. Must be positive")

    for symbol in config.refresh_symbols_list:
        if not symbol.isalnum():
            raise ValueError(f"Invalid symbol '{symbol}' in REFRESH_SYMBOLS")

    contracts = {
        "YEI_API3_CONTRACT": config.yei_api3_contract,
        "YEI_PYTH_CONTRACT": config.yei_pyth_contract,
        "YEI_REDSTONE_CONTRACT": config.yei_redstone_contract,
    }
    contracts.update({f"YEI_{s}_ORACLE": a for s, a in config.multi_oracle_addresses.items()})
    # Checksum casing is applied at call time, so only the hex format is checked here
    for name, address in contracts.items():
        if not Web3.is_address(address.lower()):
            raise ValueError(f"{name} is not a valid contract address: '{address}'")

    logger.info("Configuration validated successfully")
    logger.info(f"SEI network: {config.sei_network} ({config.rpc_url})")
    logger.info(f"Multi-oracle assets: {', '.join(config.multi_oracle_addresses)}")
    logger.info(f"Refresh watch-list: {', '.join(config.refresh_symbols_list)} every {config.refresh_interval}s")
    logger.info(f"Log level: {config.log_level.upper()}")
