"""
In-Memory TTL Cache

A time-bounded key -> value store holding the most recent valid observation
per symbol. Used twice by the oracle core: once for Quotes (price namespace)
and once for FundingRate lists (funding namespace).

Semantics:
    - get() returns the value only while now - inserted_at < ttl
    - An expired entry is treated as a miss but left in place; the next
      successful fetch overwrites it (no eviction thread)
    - set() overwrites unconditionally (last write wins)

Concurrency:
    The oracle core runs on a single asyncio event loop and get()/set() never
    await, so a read-then-write for a key cannot interleave with another task.
    No locks are needed.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Hashable, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A cached value and the clock reading at insertion."""

    value: T
    inserted_at: float


class TTLCache(Generic[T]):
    """
    Single-TTL in-memory cache.

    Args:
        ttl_seconds: How long an entry stays readable after insertion
        clock: Monotonic clock in seconds (injectable for tests)

    Example:
        >>> cache = TTLCache(ttl_seconds=30)
        >>> cache.set("BTC", quote)
        >>> cache.get("BTC") is quote
        True
    """

    def __init__(self, ttl_seconds: float = 30.0, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[Hashable, CacheEntry[T]] = {}

    def get(self, key: Hashable) -> Optional[T]:
        """Return the value for key if it is younger than the TTL, else None."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.inserted_at < self.ttl_seconds:
            return entry.value
        return None

    def set(self, key: Hashable, value: T) -> None:
        """Store value under key, replacing any previous entry."""
        self._entries[key] = CacheEntry(value=value, inserted_at=self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<TTLCache(ttl={self.ttl_seconds}s, entries={len(self._entries)})>"
