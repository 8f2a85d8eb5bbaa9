"""Core module - models, constants and errors."""

from .errors import ComputationError, FetchFailure
from .models import (
    APYBreakdown,
    APYCalculationResult,
    APYColorTier,
    AssetPosition,
    FetchState,
    LiquidationAccount,
    LiquidationSizing,
    LiquidationStats,
    MarketInfo,
    MarketKey,
    MarketParameters,
    MarketState,
    OnDemandMarketData,
    RiskTier,
    SizingStatus,
)

__all__ = [
    "ComputationError",
    "FetchFailure",
    "APYBreakdown",
    "APYCalculationResult",
    "APYColorTier",
    "AssetPosition",
    "FetchState",
    "LiquidationAccount",
    "LiquidationSizing",
    "LiquidationStats",
    "MarketInfo",
    "MarketKey",
    "MarketParameters",
    "MarketState",
    "OnDemandMarketData",
    "RiskTier",
    "SizingStatus",
]
