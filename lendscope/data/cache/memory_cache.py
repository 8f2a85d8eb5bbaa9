"""In-memory keyed cache with TTL expiry and bounded size."""

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """A cached value stamped with its insertion time and network."""

    key: str
    data: Any
    timestamp: float
    network_id: str


class TTLCache:
    """
    Keyed store with a fixed time-to-live and maximum size.

    Expired entries are evicted lazily: on read, and in a sweep before each
    insert. When full, the oldest-inserted entry is evicted (insertion
    order, not LRU). The cache is domain-agnostic; see CacheKeys for the
    key convention that keeps per-network invalidation correct.
    """

    def __init__(
        self,
        ttl: Optional[float] = None,
        max_size: Optional[int] = None,
        settings: Optional[Settings] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl is None or max_size is None:
            settings = settings or get_settings()
            ttl = settings.cache_ttl_seconds if ttl is None else ttl
            max_size = settings.cache_max_size if max_size is None else max_size
        if ttl < 0:
            raise ValueError(f"Cache TTL must be non-negative, got {ttl}")
        if max_size < 1:
            raise ValueError(f"Cache max_size must be at least 1, got {max_size}")

        self.ttl = ttl
        self.max_size = max_size
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.timestamp > self.ttl

    def _fresh_entry(self, key: str) -> Optional[CacheEntry]:
        """Return the entry for key if fresh, deleting it if expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._is_expired(entry, self._clock()):
            del self._entries[key]
            logger.debug(f"Cache entry expired: {key}")
            return None
        return entry

    def _clean_expired(self) -> int:
        now = self._clock()
        expired = [k for k, e in self._entries.items() if self._is_expired(e, now)]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def set(self, key: str, data: Any, network_id: str) -> None:
        """
        Store a value.

        Args:
            key: Cache key
            data: Value to cache
            network_id: Network the value belongs to
        """
        self._clean_expired()

        # Re-inserting moves the key to the newest position
        self._entries.pop(key, None)

        if len(self._entries) >= self.max_size:
            oldest_key, _ = self._entries.popitem(last=False)
            logger.debug(f"Cache full, evicted oldest entry: {oldest_key}")

        self._entries[key] = CacheEntry(
            key=key,
            data=data,
            timestamp=self._clock(),
            network_id=network_id,
        )

    def get(self, key: str) -> Optional[Any]:
        """
        Get a value from the cache.

        Args:
            key: Cache key

        Returns:
            Cached value, or None if missing or expired
        """
        entry = self._fresh_entry(key)
        return entry.data if entry is not None else None

    def get_entry(self, key: str) -> Optional[CacheEntry]:
        """Get the full cache entry for a key, or None if missing or expired."""
        return self._fresh_entry(key)

    def has(self, key: str) -> bool:
        """Check whether a fresh entry exists for key."""
        return self._fresh_entry(key) is not None

    def get_by_network(self, network_id: str) -> List[CacheEntry]:
        """
        Get all fresh entries for a network.

        Expired entries found during the scan are evicted.
        """
        now = self._clock()
        results = []
        for key, entry in list(self._entries.items()):
            if entry.network_id != network_id:
                continue
            if self._is_expired(entry, now):
                del self._entries[key]
            else:
                results.append(entry)
        return results

    def delete(self, key: str) -> bool:
        """
        Delete a value from the cache.

        Returns:
            True if key existed and was deleted
        """
        return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        """
        Clear all values from the cache.

        Returns:
            Number of items cleared
        """
        count = len(self._entries)
        self._entries.clear()
        return count

    def clear_by_network(self, network_id: str) -> int:
        """
        Clear all values belonging to a network.

        Returns:
            Number of items cleared
        """
        keys = [k for k, e in self._entries.items() if e.network_id == network_id]
        for key in keys:
            del self._entries[key]
        if keys:
            logger.info(f"Cleared {len(keys)} cached items for {network_id}")
        return len(keys)

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        return {
            "size": len(self._entries),
            "max_size": self.max_size,
            "ttl": self.ttl,
        }


class CacheKeys:
    """Standard cache key patterns: {domain}-{network}-{discriminators}."""

    @staticmethod
    def market_info(network_id: str, pool_id: str, market_id: str) -> str:
        return f"market-info-{network_id}-{pool_id}-{market_id}"

    @staticmethod
    def market_prices(network_id: str) -> str:
        return f"market-prices-{network_id}"

    @staticmethod
    def total_deposits(network_id: str) -> str:
        return f"total-deposits-{network_id}"

    @staticmethod
    def total_locked_value(network_id: str) -> str:
        return f"total-locked-value-{network_id}"

    @staticmethod
    def combined_tlv() -> str:
        return "combined-total-locked-value"
