"""Market data fetchers."""

from .base import MarketInfoFetcher
from .lending import LendingPoolClient, MarketInfoParser

__all__ = ["MarketInfoFetcher", "LendingPoolClient", "MarketInfoParser"]
