"""Per-market fetch state models."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .market import MarketInfo


@dataclass(frozen=True, order=True)
class MarketKey:
    """Identifies one market row: a network and a lower-cased asset symbol."""

    network_id: str
    asset: str

    @classmethod
    def for_symbol(cls, network_id: str, symbol: str) -> "MarketKey":
        return cls(network_id=network_id, asset=symbol.lower())

    def __str__(self) -> str:
        return f"{self.network_id}:{self.asset}"


@dataclass
class OnDemandMarketData:
    """Display row for one market, derived from a fetched MarketInfo.

    APY, utilization and factor fields are percentages.
    """

    asset: str
    total_supply: Decimal = Decimal("0")
    total_supply_usd: Decimal = Decimal("0")
    supply_apy: Decimal = Decimal("0")
    total_borrow: Decimal = Decimal("0")
    total_borrow_usd: Decimal = Decimal("0")
    borrow_apy: Decimal = Decimal("0")
    utilization: Decimal = Decimal("0")
    collateral_factor: Decimal = Decimal("0")
    supply_cap: Decimal = Decimal("0")
    supply_cap_usd: Decimal = Decimal("0")
    max_ltv: Decimal = Decimal("0")
    liquidation_threshold: Decimal = Decimal("0")
    liquidation_penalty: Decimal = Decimal("0")
    reserve_factor: Decimal = Decimal("0")
    market_info: Optional[MarketInfo] = None


@dataclass
class FetchState:
    """Loading state of one market key, owned by the FetchOrchestrator."""

    key: MarketKey
    is_loading: bool = False
    is_loaded: bool = False
    last_fetched: Optional[float] = None  # clock seconds
    error: Optional[str] = None
    data: Optional[OnDemandMarketData] = None

    @property
    def has_error(self) -> bool:
        return self.error is not None
