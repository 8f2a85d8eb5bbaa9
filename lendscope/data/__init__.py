"""Data layer - market fetchers, cache and fetch orchestration."""

from .cache import CacheEntry, CacheKeys, TTLCache
from .catalog import NetworkConfig, TokenCatalog, TokenConfig
from .clients import LendingPoolClient, MarketInfoFetcher, MarketInfoParser
from .orchestrator import FetchOrchestrator
from .refresh import PeriodicRefresh

__all__ = [
    "CacheEntry",
    "CacheKeys",
    "TTLCache",
    "NetworkConfig",
    "TokenCatalog",
    "TokenConfig",
    "LendingPoolClient",
    "MarketInfoFetcher",
    "MarketInfoParser",
    "FetchOrchestrator",
    "PeriodicRefresh",
]
