"""Lending pool indexer client."""

from .client import LendingPoolClient
from .parser import MarketInfoParser

__all__ = ["LendingPoolClient", "MarketInfoParser"]
