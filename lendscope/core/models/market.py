"""Market parameter, state and rate result models."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

from lendscope.core.constants import BPS_DENOMINATOR


@dataclass(frozen=True)
class MarketParameters:
    """Interest rate parameters of a lending market, in basis points."""

    base_borrow_rate_bps: int
    slope_bps: int
    reserve_factor_bps: int

    def __post_init__(self):
        if self.base_borrow_rate_bps < 0 or self.slope_bps < 0:
            raise ValueError("Rate parameters must be non-negative")
        if not 0 <= self.reserve_factor_bps <= int(BPS_DENOMINATOR):
            raise ValueError(f"Reserve factor out of range: {self.reserve_factor_bps}")


@dataclass
class MarketState:
    """Current scaled totals of a lending market."""

    total_scaled_deposits: Decimal
    total_scaled_borrows: Decimal
    last_update_time: Optional[datetime] = None


@dataclass(frozen=True)
class APYCalculationResult:
    """Rates derived from market parameters and state.

    Rates are fractions (0.1 = 10%); ``apy`` is a percentage (4.6 = 4.6%).
    """

    utilization_rate: Decimal
    borrow_rate: Decimal
    supply_rate: Decimal
    apy: Decimal
    apy_formatted: str

    @classmethod
    def zero(cls) -> "APYCalculationResult":
        """Fallback result used when inputs cannot be computed."""
        return cls(
            utilization_rate=Decimal("0"),
            borrow_rate=Decimal("0"),
            supply_rate=Decimal("0"),
            apy=Decimal("0"),
            apy_formatted="0.00%",
        )


@dataclass(frozen=True)
class APYBreakdown:
    """Pre-formatted APY components for tooltip display."""

    utilization_rate: str
    borrow_rate: str
    supply_rate: str
    reserve_factor: str
    apy: str


class APYColorTier(Enum):
    """Presentation tier of an APY value."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    MINIMAL = "minimal"


@dataclass
class MarketInfo:
    """Raw market fields as returned by a market data fetcher.

    Rate-like fields (collateral factor, reserve factor, base borrow rate,
    slope, ...) are fractions already divided by 10000. Token amounts are
    whole-token units.

    Numeric fields accept Decimals, numbers or decimal strings and are
    stored as Decimals. The rate model inputs (base_borrow_rate, slope) are
    optional; without them only the reported rates are usable.
    """

    total_deposits: Decimal
    total_borrows: Decimal
    supply_rate: Decimal
    borrow_rate_current: Decimal
    utilization_rate: Decimal
    collateral_factor: Decimal
    liquidation_threshold: Decimal
    liquidation_bonus: Decimal
    reserve_factor: Decimal
    max_total_deposits: Decimal
    price: Decimal

    base_borrow_rate: Optional[Decimal] = None
    slope: Optional[Decimal] = None
    close_factor: Optional[Decimal] = None
    max_total_borrows: Decimal = Decimal("0")

    network_id: str = ""
    pool_id: str = ""
    market_id: str = ""
    symbol: str = ""
    decimals: int = 0
    is_paused: bool = False
    last_updated: Optional[datetime] = None

    def __post_init__(self):
        for name in _MARKET_INFO_DECIMAL_FIELDS:
            setattr(self, name, _coerce_decimal(getattr(self, name)))
        for name in _MARKET_INFO_OPTIONAL_FIELDS:
            value = getattr(self, name)
            if value is not None:
                setattr(self, name, _coerce_decimal(value))

    @property
    def has_rate_parameters(self) -> bool:
        """True when base rate and slope are known."""
        return self.base_borrow_rate is not None and self.slope is not None

    def to_parameters(self) -> MarketParameters:
        """Convert fractional rate fields back to basis points.

        Raises:
            ValueError: If base rate or slope is missing
        """
        if not self.has_rate_parameters:
            raise ValueError(f"Market {self.symbol or self.market_id} has no rate parameters")
        return MarketParameters(
            base_borrow_rate_bps=int((self.base_borrow_rate * BPS_DENOMINATOR).to_integral_value()),
            slope_bps=int((self.slope * BPS_DENOMINATOR).to_integral_value()),
            reserve_factor_bps=int((self.reserve_factor * BPS_DENOMINATOR).to_integral_value()),
        )

    def to_state(self) -> MarketState:
        """Market totals as a MarketState."""
        return MarketState(
            total_scaled_deposits=self.total_deposits,
            total_scaled_borrows=self.total_borrows,
            last_update_time=self.last_updated,
        )


_MARKET_INFO_DECIMAL_FIELDS = (
    "total_deposits",
    "total_borrows",
    "supply_rate",
    "borrow_rate_current",
    "utilization_rate",
    "collateral_factor",
    "liquidation_threshold",
    "liquidation_bonus",
    "reserve_factor",
    "max_total_deposits",
    "price",
    "max_total_borrows",
)

_MARKET_INFO_OPTIONAL_FIELDS = ("base_borrow_rate", "slope", "close_factor")


def _coerce_decimal(value: Any) -> Decimal:
    """Parse a fetcher value to Decimal; missing or unusable values become 0."""
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        return Decimal("0")
    return result if result.is_finite() else Decimal("0")
