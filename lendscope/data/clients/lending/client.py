"""Lending pool indexer client implementing the MarketInfoFetcher interface."""

import logging
from typing import Any, Dict, Optional

from aiolimiter import AsyncLimiter
from gql import Client, gql
from gql.transport.aiohttp import AIOHTTPTransport

from config.settings import Settings, get_settings
from lendscope.core.errors import FetchFailure
from lendscope.core.models import MarketInfo
from lendscope.data.clients.base import MarketInfoFetcher
from lendscope.data.clients.lending.parser import MarketInfoParser
from lendscope.protocols.lending.config import (
    LENDING_API_RATE_LIMIT,
    LENDING_API_RATE_WINDOW,
)
from lendscope.protocols.lending.queries import LendingQueries

logger = logging.getLogger(__name__)


class LendingPoolClient(MarketInfoFetcher):
    """GraphQL client for the lending pool indexer."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._rate_limiter = AsyncLimiter(
            getattr(self.settings, "market_api_rate_limit", None) or LENDING_API_RATE_LIMIT,
            getattr(self.settings, "market_api_rate_window", None) or LENDING_API_RATE_WINDOW,
        )
        self._parser = MarketInfoParser()

    @property
    def source_name(self) -> str:
        return "Lending pool indexer"

    async def _execute(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """Execute a GraphQL query with rate limiting."""
        async with self._rate_limiter:
            transport = AIOHTTPTransport(url=self.settings.market_api_url)
            client = Client(transport=transport, fetch_schema_from_transport=False)
            async with client as session:
                result = await session.execute(gql(query), variable_values=variables)
                return result

    async def fetch(
        self,
        pool_id: str,
        asset_id: str,
        network_id: str,
    ) -> Optional[MarketInfo]:
        """Fetch one market's state from the indexer.

        Returns None when the indexer does not know the market.

        Raises:
            FetchFailure: If the indexer request fails
        """
        logger.debug(f"Fetching market {asset_id} in pool {pool_id} on {network_id}")
        try:
            result = await self._execute(
                LendingQueries.MARKET_QUERY,
                {"network": network_id, "poolId": str(pool_id), "marketId": str(asset_id)},
            )
        except Exception as e:
            logger.error(f"Failed to fetch market {asset_id} on {network_id}: {e}")
            raise FetchFailure(f"Indexer request failed: {e}", key=asset_id) from e

        market_data = (result or {}).get("market")
        if not market_data:
            logger.info(f"No market data for {asset_id} in pool {pool_id} on {network_id}")
            return None

        return self._parser.parse_market(market_data, pool_id, network_id)

    async def close(self) -> None:
        """Nothing to release: each query opens and closes its own session."""
        return None
