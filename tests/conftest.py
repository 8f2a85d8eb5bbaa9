"""Pytest configuration and fixtures."""

import pytest
from datetime import datetime, timezone
from decimal import Decimal

from config.settings import Settings
from lendscope.core.models import (
    AssetPosition,
    LiquidationAccount,
    MarketInfo,
    MarketParameters,
    MarketState,
    RiskTier,
)


class FakeClock:
    """Manually advanced clock in seconds."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Create a controllable clock."""
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    """Create settings with explicit test values."""
    return Settings(
        default_network="voi-mainnet",
        enabled_networks=["voi-mainnet", "algorand-mainnet"],
        market_api_url="https://indexer.test/graphql",
        cache_ttl_seconds=30,
        cache_max_size=200,
        fetch_throttle_seconds=60,
        ui_refresh_interval=60,
        require_close_factor=False,
        log_level="DEBUG",
    )


@pytest.fixture
def sample_params() -> MarketParameters:
    """5% base rate, 10% slope, 10% reserve factor."""
    return MarketParameters(base_borrow_rate_bps=500, slope_bps=1000, reserve_factor_bps=1000)


@pytest.fixture
def sample_state() -> MarketState:
    """Market at 80% utilization."""
    return MarketState(
        total_scaled_deposits=Decimal("1000000"),
        total_scaled_borrows=Decimal("800000"),
    )


@pytest.fixture
def sample_market_info() -> MarketInfo:
    """Create a sample VOI market."""
    return MarketInfo(
        total_deposits=Decimal("1000000"),
        total_borrows=Decimal("800000"),
        supply_rate=Decimal("0.09"),
        borrow_rate_current=Decimal("0.13"),
        utilization_rate=Decimal("0.8"),
        collateral_factor=Decimal("0.75"),
        liquidation_threshold=Decimal("0.8"),
        liquidation_bonus=Decimal("0.05"),
        reserve_factor=Decimal("0.1"),
        max_total_deposits=Decimal("5000000"),
        price=Decimal("0.002"),
        base_borrow_rate=Decimal("0.05"),
        slope=Decimal("0.1"),
        close_factor=Decimal("0.5"),
        network_id="voi-mainnet",
        pool_id="1",
        market_id="VOI",
        symbol="VOI",
        decimals=6,
        last_updated=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def make_account():
    """Factory for liquidation accounts."""

    def _make(
        address: str,
        health_factor: str,
        supplied: str = "1000",
        borrowed: str = "500",
        risk_level: RiskTier = RiskTier.SAFE,
    ) -> LiquidationAccount:
        return LiquidationAccount(
            wallet_address=address,
            health_factor=Decimal(health_factor),
            total_supplied=Decimal(supplied),
            total_borrowed=Decimal(borrowed),
            ltv=Decimal(borrowed) / Decimal(supplied),
            risk_level=risk_level,
            collateral_assets=[
                AssetPosition(symbol="VOI", amount=Decimal("10"), value_usd=Decimal(supplied)),
            ],
        )

    return _make
