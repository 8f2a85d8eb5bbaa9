"""Unit tests for the lending pool indexer client and parser."""

import pytest
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, patch

from lendscope.core.errors import FetchFailure
from lendscope.core.models import MarketInfo
from lendscope.data.clients.lending.client import LendingPoolClient
from lendscope.data.clients.lending.parser import MarketInfoParser


@pytest.fixture
def raw_market():
    """Raw VOI market as served by the indexer."""
    return {
        "marketId": "VOI",
        "paused": False,
        "maxTotalDeposits": "5000000000000",
        "maxTotalBorrows": "4000000000000",
        "liquidationBonus": "500",
        "collateralFactor": "7500",
        "liquidationThreshold": "8000",
        "reserveFactor": "1000",
        "borrowRate": "500",
        "slope": "1000",
        "totalScaledDeposits": "1000000000000",
        "totalScaledBorrows": "500000000000",
        "lastUpdateTime": 1700000000,
        "price": "2000000000000000",
        "closeFactor": "5000",
        "token": {"symbol": "VOI", "name": "VOI", "decimals": 6},
    }


class TestMarketInfoParser:
    """Tests for MarketInfoParser."""

    @pytest.fixture
    def parser(self):
        return MarketInfoParser()

    def test_parse_decimal_none(self, parser):
        assert parser.parse_decimal(None) == Decimal("0")

    def test_parse_decimal_string(self, parser):
        assert parser.parse_decimal("0.123") == Decimal("0.123")

    def test_parse_decimal_invalid(self, parser):
        assert parser.parse_decimal("invalid") == Decimal("0")
        assert parser.parse_decimal("NaN") == Decimal("0")

    def test_parse_timestamp_int(self, parser):
        result = parser.parse_timestamp(1700000000)
        assert isinstance(result, datetime)
        assert result.tzinfo == timezone.utc

    def test_parse_timestamp_iso(self, parser):
        result = parser.parse_timestamp("2024-01-01T00:00:00Z")
        assert result == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_from_bps(self, parser):
        assert parser.from_bps("7500") == Decimal("0.75")

    def test_parse_market(self, parser, raw_market):
        """Test raw units are converted and rates recomputed."""
        info = parser.parse_market(raw_market, "1", "voi-mainnet")

        assert isinstance(info, MarketInfo)
        assert info.total_deposits == Decimal("1000000")
        assert info.total_borrows == Decimal("500000")
        assert info.utilization_rate == Decimal("0.5")
        assert info.borrow_rate_current == Decimal("0.10")
        assert info.supply_rate == Decimal("0.045")
        assert info.collateral_factor == Decimal("0.75")
        assert info.liquidation_threshold == Decimal("0.8")
        assert info.liquidation_bonus == Decimal("0.05")
        assert info.reserve_factor == Decimal("0.1")
        assert info.max_total_deposits == Decimal("5000000")
        assert info.price == Decimal("0.002")
        assert info.close_factor == Decimal("0.5")
        assert info.network_id == "voi-mainnet"
        assert info.symbol == "VOI"
        assert info.decimals == 6

    def test_parameters_round_trip_to_bps(self, parser, raw_market):
        params = parser.parse_market(raw_market, "1", "voi-mainnet").to_parameters()

        assert params.base_borrow_rate_bps == 500
        assert params.slope_bps == 1000
        assert params.reserve_factor_bps == 1000

    def test_zero_close_factor_is_missing(self, parser, raw_market):
        raw_market["closeFactor"] = "0"
        info = parser.parse_market(raw_market, "1", "voi-mainnet")
        assert info.close_factor is None

    def test_missing_fields(self, parser):
        """Test a sparse response parses to an empty market."""
        info = parser.parse_market({"token": {"symbol": "POW", "decimals": 6}}, "1", "voi-mainnet")

        assert info.total_deposits == Decimal("0")
        assert info.utilization_rate == Decimal("0")
        assert info.close_factor is None
        assert info.has_rate_parameters is False

    def test_decimals_override(self, parser, raw_market):
        info = parser.parse_market(raw_market, "1", "voi-mainnet", decimals=8)
        assert info.total_deposits == Decimal("10000")


class TestLendingPoolClient:
    """Tests for LendingPoolClient."""

    @pytest.fixture
    def client(self, settings):
        return LendingPoolClient(settings)

    def test_source_name(self, client):
        assert client.source_name == "Lending pool indexer"

    @pytest.mark.asyncio
    async def test_fetch_market(self, client, raw_market):
        with patch.object(client, "_execute", new_callable=AsyncMock) as mock_execute:
            mock_execute.return_value = {"market": raw_market}

            info = await client.fetch("1", "VOI", "voi-mainnet")

            assert info is not None
            assert info.total_deposits == Decimal("1000000")
            variables = mock_execute.call_args[0][1]
            assert variables == {"network": "voi-mainnet", "poolId": "1", "marketId": "VOI"}

    @pytest.mark.asyncio
    async def test_fetch_unknown_market(self, client):
        with patch.object(client, "_execute", new_callable=AsyncMock) as mock_execute:
            mock_execute.return_value = {"market": None}

            assert await client.fetch("1", "NOPE", "voi-mainnet") is None

    @pytest.mark.asyncio
    async def test_fetch_transport_error(self, client):
        with patch.object(client, "_execute", new_callable=AsyncMock) as mock_execute:
            mock_execute.side_effect = ConnectionError("indexer down")

            with pytest.raises(FetchFailure, match="indexer down") as exc_info:
                await client.fetch("1", "VOI", "voi-mainnet")

            assert exc_info.value.key == "VOI"

    @pytest.mark.asyncio
    async def test_close(self, client):
        await client.close()
