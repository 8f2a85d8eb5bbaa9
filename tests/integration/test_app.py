"""Integration tests for the dashboard core composition root."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from lendscope.app import DashboardCore
from lendscope.data.clients.base import MarketInfoFetcher
from lendscope.data.orchestrator import NO_DATA_ERROR


@pytest.fixture
def mock_fetcher(sample_market_info):
    """Create a mock fetcher that only knows the VOI market."""
    fetcher = MagicMock(spec=MarketInfoFetcher)
    fetcher.source_name = "mock"

    async def fetch(pool_id, asset_id, network_id):
        return sample_market_info if asset_id == "VOI" else None

    fetcher.fetch = AsyncMock(side_effect=fetch)
    fetcher.close = AsyncMock()
    return fetcher


@pytest.fixture
def core(settings, mock_fetcher, clock):
    return DashboardCore(settings=settings, fetcher=mock_fetcher, clock=clock)


class TestDashboardCore:
    """Tests for DashboardCore."""

    def test_orchestrator_per_network(self, core):
        assert core.available_networks == ["voi-mainnet", "algorand-mainnet"]

    def test_orchestrators_share_cache(self, core):
        voi = core.orchestrator("voi-mainnet")
        algo = core.orchestrator("algorand-mainnet")
        assert voi.cache is algo.cache is core.cache

    def test_default_orchestrator(self, core):
        assert core.orchestrator().network_id == "voi-mainnet"

    def test_unknown_network(self, core):
        with pytest.raises(ValueError, match="No orchestrator"):
            core.orchestrator("ethereum-mainnet")

    def test_unknown_enabled_network_skipped(self, settings, mock_fetcher):
        settings.enabled_networks = ["voi-mainnet", "ethereum-mainnet"]
        core = DashboardCore(settings=settings, fetcher=mock_fetcher)
        assert core.available_networks == ["voi-mainnet"]

    def test_sizing_config_from_settings(self, settings, mock_fetcher):
        settings.require_close_factor = True
        core = DashboardCore(settings=settings, fetcher=mock_fetcher)
        assert core.sizing_config.require_close_factor is True

    @pytest.mark.asyncio
    async def test_start_loads_default_network(self, core):
        await core.start(auto_refresh=False)

        orchestrator = core.orchestrator()
        voi = orchestrator.state(orchestrator.market_key("VOI"))
        usdc = orchestrator.state(orchestrator.market_key("USDC"))

        assert voi.is_loaded and voi.error is None
        assert usdc.error == NO_DATA_ERROR
        assert len(core.cache) == 1

    @pytest.mark.asyncio
    async def test_switch_network_drops_previous_cache(self, core):
        await core.start(auto_refresh=False)

        orchestrator = core.switch_network("voi-mainnet", "algorand-mainnet")

        assert orchestrator.network_id == "algorand-mainnet"
        assert len(core.cache) == 0

    @pytest.mark.asyncio
    async def test_context_manager_lifecycle(self, core, mock_fetcher):
        async with core:
            assert len(core._refreshers) == 1
            refresher = core._refreshers[0]
            assert refresher.running

        assert not refresher.running
        assert core._refreshers == []
        mock_fetcher.close.assert_awaited_once()
        assert len(core.cache) == 0
