"""Core data models for LendScope."""

from .market import (
    APYBreakdown,
    APYCalculationResult,
    APYColorTier,
    MarketInfo,
    MarketParameters,
    MarketState,
)
from .account import (
    AssetPosition,
    LiquidationAccount,
    LiquidationSizing,
    LiquidationStats,
    RiskTier,
    SizingStatus,
)
from .fetch import FetchState, MarketKey, OnDemandMarketData

__all__ = [
    "APYBreakdown",
    "APYCalculationResult",
    "APYColorTier",
    "MarketInfo",
    "MarketParameters",
    "MarketState",
    "AssetPosition",
    "LiquidationAccount",
    "LiquidationSizing",
    "LiquidationStats",
    "RiskTier",
    "SizingStatus",
    "FetchState",
    "MarketKey",
    "OnDemandMarketData",
]
