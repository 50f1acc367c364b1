"""
Unit Tests for Configuration Module

These tests verify that the configuration system works correctly:
- Default values are applied when no .env is present
- The RPC endpoint follows the configured network
- Validation catches invalid configurations
- Property methods work as expected

Run with:
    pytest tests/unit/test_config.py -v
"""

import pytest

from core.config import SEI_RPC_URLS, Settings, validate_configuration


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestDefaults:
    """Test default values"""

    def test_refresh_defaults_match_cache_ttl(self):
        config = make_settings()
        assert config.cache_ttl == 30
        assert config.funding_cache_ttl == 30
        assert config.refresh_interval == 30

    def test_rest_base_urls_are_https(self):
        config = make_settings()
        for url in (config.coingecko_base_url, config.binance_base_url,
                    config.bybit_base_url, config.okx_base_url):
            assert url.startswith("https://")

    def test_request_timeout_is_positive(self):
        assert make_settings().request_timeout > 0

    def test_unknown_env_keys_are_ignored(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        config = make_settings()
        assert "environment" not in Settings.model_fields
        assert not hasattr(config, "environment")

    def test_environment_variable_override(self, monkeypatch):
        """Environment variables are matched case-insensitively"""
        monkeypatch.setenv("CACHE_TTL", "15")
        assert make_settings().cache_ttl == 15


class TestRpcUrl:
    """Test network -> RPC endpoint resolution"""

    def test_testnet_default(self):
        assert make_settings().rpc_url == SEI_RPC_URLS["sei-testnet"]

    def test_mainnet(self):
        assert make_settings(sei_network="sei-mainnet").rpc_url == SEI_RPC_URLS["sei-mainnet"]

    def test_explicit_url_wins(self):
        config = make_settings(sei_network="sei-mainnet", sei_rpc_url="http://localhost:8545")
        assert config.rpc_url == "http://localhost:8545"


class TestConfigurationProperties:
    """Test property methods and computed values"""

    def test_refresh_symbols_are_parsed(self):
        config = make_settings(refresh_symbols=" btc, eth ,,SEI ")
        assert config.refresh_symbols_list == ["BTC", "ETH", "SEI"]

    def test_multi_oracle_addresses_skip_empty(self):
        """BTC has no default multi-oracle deployment"""
        addresses = make_settings().multi_oracle_addresses
        assert sorted(addresses) == ["ETH", "SEI", "USDC", "USDT"]

    def test_multi_oracle_btc_when_configured(self):
        config = make_settings(yei_btc_oracle="0x3E45Fb956D2Ba2CB5Fa561c40E5912225E64F7B2")
        assert "BTC" in config.multi_oracle_addresses


class TestConfigurationValidation:
    """Test configuration validation function"""

    def test_defaults_are_valid(self):
        validate_configuration(make_settings())

    def test_unknown_network(self):
        with pytest.raises(ValueError, match="SEI_NETWORK"):
            validate_configuration(make_settings(sei_network="sei-devnet"))

    def test_invalid_log_level(self):
        with pytest.raises(ValueError, match="LOG_LEVEL"):
            validate_configuration(make_settings(log_level="LOUD"))

    def test_non_positive_ttl(self):
        with pytest.raises(ValueError):
            validate_configuration(make_settings(cache_ttl=0))

    def test_non_positive_interval(self):
        with pytest.raises(ValueError, match="REFRESH_INTERVAL"):
            validate_configuration(make_settings(refresh_interval=-1))

    def test_bad_symbol(self):
        with pytest.raises(ValueError, match="REFRESH_SYMBOLS"):
            validate_configuration(make_settings(refresh_symbols="BTC,ETH-USD"))

    def test_bad_contract_address(self):
        with pytest.raises(ValueError, match="YEI_PYTH_CONTRACT"):
            validate_configuration(make_settings(yei_pyth_contract="0x1234"))
