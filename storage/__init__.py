"""
Storage Package

Handles in-process caching of oracle observations.

Current implementation:
- TTLCache: time-bounded in-memory cache for Quotes and FundingRate lists

Nothing is persisted beyond the process; expired entries are ignored on read.
"""

from storage.memory_cache import CacheEntry, TTLCache

__all__ = ["CacheEntry", "TTLCache"]
