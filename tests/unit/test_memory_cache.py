"""
Unit Tests for the In-Memory TTL Cache

Run with:
    pytest tests/unit/test_memory_cache.py -v
"""

import pytest

from storage.memory_cache import TTLCache
from tests.fakes import make_quote


class TestTTLCache:
    """Tests for TTL expiry and overwrite semantics"""

    def test_get_missing_key_returns_none(self, clock):
        cache = TTLCache(ttl_seconds=30, clock=clock)
        assert cache.get("BTC") is None

    def test_entry_readable_before_ttl(self, clock):
        cache = TTLCache(ttl_seconds=30, clock=clock)
        quote = make_quote()
        cache.set("BTC", quote)

        clock.advance(29.9)
        assert cache.get("BTC") is quote

    def test_entry_expires_at_ttl(self, clock):
        """An entry aged exactly TTL is a miss (strict less-than)"""
        cache = TTLCache(ttl_seconds=30, clock=clock)
        cache.set("BTC", make_quote())

        clock.advance(30)
        assert cache.get("BTC") is None
        assert "BTC" not in cache

    def test_expired_entry_is_not_purged(self, clock):
        cache = TTLCache(ttl_seconds=30, clock=clock)
        cache.set("BTC", make_quote())
        clock.advance(60)

        cache.get("BTC")
        assert len(cache) == 1

    def test_set_overwrites_and_resets_age(self, clock):
        cache = TTLCache(ttl_seconds=30, clock=clock)
        old = make_quote(price=1.0)
        new = make_quote(price=2.0)

        cache.set("BTC", old)
        clock.advance(25)
        cache.set("BTC", new)
        clock.advance(25)

        assert cache.get("BTC") is new

    def test_keys_are_independent(self, clock):
        cache = TTLCache(ttl_seconds=30, clock=clock)
        cache.set("BTC", make_quote(symbol="BTC"))
        clock.advance(20)
        cache.set("ETH", make_quote(symbol="ETH"))
        clock.advance(15)

        assert cache.get("BTC") is None
        assert cache.get("ETH") is not None

    def test_clear(self, clock):
        cache = TTLCache(ttl_seconds=30, clock=clock)
        cache.set("BTC", make_quote())
        cache.clear()
        assert len(cache) == 0

    def test_rejects_non_positive_ttl(self):
        with pytest.raises(ValueError):
            TTLCache(ttl_seconds=0)
