"""Liquidation account, sizing and risk tier models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Tuple


class RiskTier(Enum):
    """Liquidation risk tier derived from a health factor."""

    LIQUIDATABLE = "liquidatable"
    DANGER = "danger"
    MODERATE = "moderate"
    SAFE = "safe"

    @property
    def label(self) -> str:
        """Display label."""
        return _TIER_LABELS[self]

    @property
    def rank(self) -> int:
        """Sort order, most at risk first."""
        return _TIER_RANKS[self]


_TIER_LABELS = {
    RiskTier.LIQUIDATABLE: "CRITICAL",
    RiskTier.DANGER: "HIGH RISK",
    RiskTier.MODERATE: "MODERATE",
    RiskTier.SAFE: "SAFE",
}

_TIER_RANKS = {
    RiskTier.LIQUIDATABLE: 0,
    RiskTier.DANGER: 1,
    RiskTier.MODERATE: 2,
    RiskTier.SAFE: 3,
}


class SizingStatus(Enum):
    """Outcome of a liquidation sizing computation."""

    OK = "ok"
    DIVISION_UNDEFINED = "division_undefined"  # position amount is zero
    CLOSE_FACTOR_MISSING = "close_factor_missing"
    INVALID_INPUT = "invalid_input"


@dataclass
class AssetPosition:
    """A collateral or borrowed asset held by an account."""

    symbol: str
    amount: Decimal
    value_usd: Decimal
    close_factor: Optional[Decimal] = None  # fraction, from market data when known


@dataclass
class LiquidationAccount:
    """Borrower account monitored for liquidation risk."""

    wallet_address: str
    health_factor: Decimal
    total_supplied: Decimal
    total_borrowed: Decimal
    ltv: Decimal
    risk_level: RiskTier
    collateral_assets: List[AssetPosition] = field(default_factory=list)
    borrowed_assets: List[AssetPosition] = field(default_factory=list)
    last_updated: Optional[datetime] = None


@dataclass(frozen=True)
class LiquidationSizing:
    """Maximum amount of a collateral position seizable in one liquidation."""

    close_factor: Decimal
    collateral_value_usd: Decimal
    max_liquidatable_usd: Decimal
    max_liquidatable_amount: Decimal
    asset_price: Decimal
    status: SizingStatus = SizingStatus.OK
    close_factor_assumed: bool = False

    @property
    def is_valid(self) -> bool:
        """True when the amount fields can be displayed."""
        return self.status == SizingStatus.OK

    @property
    def close_factor_percent(self) -> Decimal:
        """Close factor as a percentage."""
        return self.close_factor * 100


@dataclass(frozen=True)
class LiquidationStats:
    """Aggregate risk figures over a set of accounts."""

    total_accounts: int
    liquidatable_accounts: int
    danger_zone_accounts: int
    moderate_risk_accounts: int
    safe_accounts: int
    total_value_at_risk: Decimal
    average_health_factor: Decimal
    risk_distribution: List[Tuple[str, int, Decimal]] = field(default_factory=list)
