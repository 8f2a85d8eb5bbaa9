"""In-memory caching for market data."""

from .memory_cache import CacheEntry, CacheKeys, TTLCache

__all__ = ["CacheEntry", "CacheKeys", "TTLCache"]
