"""Market data fetcher interface.

Defines the abstract collaborator the FetchOrchestrator loads market state
through, so the orchestrator works with any data source (indexer, node,
fixtures in tests).
"""

from abc import ABC, abstractmethod
from typing import Optional

from lendscope.core.models import MarketInfo


class MarketInfoFetcher(ABC):
    """Abstract base class for market data sources."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return a human-readable name for the data source."""
        ...

    @abstractmethod
    async def fetch(
        self,
        pool_id: str,
        asset_id: str,
        network_id: str,
    ) -> Optional[MarketInfo]:
        """Fetch the current state of one market.

        Args:
            pool_id: Lending pool identifier
            asset_id: Asset identifier of the market within the pool
            network_id: Network the pool lives on

        Returns:
            MarketInfo, or None when the source has no data for the market

        Raises:
            Exception: Transport or server errors; callers contain them
        """
        ...

    async def close(self) -> None:
        """Close any open connections and clean up resources."""
        return None
