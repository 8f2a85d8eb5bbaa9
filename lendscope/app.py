"""Dashboard core composition root.

Builds the shared cache, market fetcher and one orchestrator per enabled
network, and ties their lifetime to application startup and shutdown.
"""

import logging
from typing import Callable, Dict, List, Optional

from config.settings import Settings, get_settings
from lendscope.data.cache.memory_cache import TTLCache
from lendscope.data.catalog import TokenCatalog
from lendscope.data.clients.base import MarketInfoFetcher
from lendscope.data.clients.lending.client import LendingPoolClient
from lendscope.data.orchestrator import FetchOrchestrator
from lendscope.data.refresh import PeriodicRefresh
from lendscope.engine.risk import RiskThresholds, SizingConfig

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings."""
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.WARNING))


class DashboardCore:
    """Process-wide services handed to the presentation layer."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        fetcher: Optional[MarketInfoFetcher] = None,
        catalog: Optional[TokenCatalog] = None,
        cache: Optional[TTLCache] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize the dashboard core.

        Args:
            settings: Application settings
            fetcher: Market data source (defaults to the indexer client)
            catalog: Token catalog (defaults to the built-in networks)
            cache: Shared cache instance
            clock: Time source for cache and throttle, for tests
        """
        self.settings = settings or get_settings()
        self.catalog = catalog or TokenCatalog()
        self.fetcher = fetcher or LendingPoolClient(self.settings)

        clock_kwargs = {"clock": clock} if clock is not None else {}
        self.cache = cache or TTLCache(settings=self.settings, **clock_kwargs)

        self.sizing_config = SizingConfig(require_close_factor=self.settings.require_close_factor)
        self.risk_thresholds = RiskThresholds()

        self.orchestrators: Dict[str, FetchOrchestrator] = {}
        for network_id in self.settings.networks:
            if network_id not in self.catalog.network_ids:
                logger.warning(f"Network {network_id} is not in the token catalog, skipping")
                continue
            self.orchestrators[network_id] = FetchOrchestrator(
                self.fetcher,
                network_id,
                catalog=self.catalog,
                cache=self.cache,
                settings=self.settings,
                **clock_kwargs,
            )

        self._refreshers: List[PeriodicRefresh] = []

    @property
    def available_networks(self) -> List[str]:
        return list(self.orchestrators.keys())

    def orchestrator(self, network_id: Optional[str] = None) -> FetchOrchestrator:
        """Get the orchestrator for a network.

        Raises:
            ValueError: If the network is not enabled
        """
        network_id = network_id or self.settings.default_network
        if network_id not in self.orchestrators:
            raise ValueError(
                f"No orchestrator for network: {network_id}. "
                f"Available: {self.available_networks}"
            )
        return self.orchestrators[network_id]

    def switch_network(self, previous: str, current: str) -> FetchOrchestrator:
        """Drop cached data of the previous network and return the new one's orchestrator."""
        cleared = self.cache.clear_by_network(previous)
        logger.info(f"Switched network {previous} -> {current}, dropped {cleared} cached items")
        return self.orchestrator(current)

    async def start(self, auto_refresh: bool = True) -> None:
        """Load the default network and start periodic refresh."""
        configure_logging(self.settings)
        orchestrator = self.orchestrator()
        await orchestrator.load_all_markets()
        if auto_refresh:
            refresher = PeriodicRefresh(orchestrator, self.settings.ui_refresh_interval)
            refresher.start()
            self._refreshers.append(refresher)

    async def close(self) -> None:
        """Stop refresh tasks, release the fetcher and drop cached data."""
        for refresher in self._refreshers:
            await refresher.stop()
        self._refreshers.clear()

        try:
            await self.fetcher.close()
        except Exception as e:
            logger.warning(f"Error closing fetcher {self.fetcher.source_name}: {e}")
        self.cache.clear()

    async def __aenter__(self) -> "DashboardCore":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
