"""Shared test fixtures for the oracle core."""

import pytest

from core.config import Settings
from tests.fakes import FakeChainClient, FakeClock, FakeHTTPClient


@pytest.fixture
def test_settings() -> Settings:
    """Return Settings with test defaults, ignoring any local .env file."""
    return Settings(
        _env_file=None,
        sei_network="sei-testnet",
        log_level="DEBUG",
        cache_ttl=30,
        funding_cache_ttl=30,
        refresh_interval=0.05,
        refresh_symbols="BTC,ETH,SEI",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def chain() -> FakeChainClient:
    return FakeChainClient()


@pytest.fixture
def http() -> FakeHTTPClient:
    return FakeHTTPClient()
