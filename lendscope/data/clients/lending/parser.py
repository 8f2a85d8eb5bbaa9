"""Lending pool indexer response parser.

Converts raw on-chain market fields into MarketInfo:
- rates, factors and bonuses are basis points (divide by 10000)
- deposit/borrow totals and caps are base units (divide by 10^decimals)
- prices carry 18 decimals
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional

from lendscope.core.constants import BPS_DENOMINATOR
from lendscope.core.models import MarketInfo
from lendscope.engine.rate_model import RateModel
from lendscope.protocols.lending.config import RAW_PRICE_DECIMALS


class MarketInfoParser:
    """Parser for lending pool indexer responses."""

    @staticmethod
    def parse_decimal(value: Any) -> Decimal:
        """Safely parse a value to Decimal."""
        if value is None:
            return Decimal("0")
        if isinstance(value, Decimal):
            return value
        try:
            result = Decimal(str(value))
        except Exception:
            return Decimal("0")
        return result if result.is_finite() else Decimal("0")

    @staticmethod
    def parse_timestamp(value: Any) -> datetime:
        """Parse timestamp to datetime."""
        if isinstance(value, datetime):
            return value
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value, tz=timezone.utc)
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError:
                try:
                    return datetime.fromtimestamp(int(value), tz=timezone.utc)
                except (ValueError, OSError):
                    pass
        return datetime.now(tz=timezone.utc)

    @classmethod
    def from_bps(cls, value: Any) -> Decimal:
        return cls.parse_decimal(value) / BPS_DENOMINATOR

    @classmethod
    def from_base_units(cls, value: Any, decimals: int) -> Decimal:
        return cls.parse_decimal(value) / (Decimal(10) ** decimals)

    @classmethod
    def parse_market(
        cls,
        market_data: Dict[str, Any],
        pool_id: str,
        network_id: str,
        decimals: Optional[int] = None,
    ) -> MarketInfo:
        """Parse raw market data to a MarketInfo model.

        Derived rates are recomputed with the RateModel from the raw base
        rate, slope and totals rather than trusted from the indexer.

        Args:
            market_data: Market data from the indexer
            pool_id: Lending pool identifier
            network_id: Network id
            decimals: Token decimals override (catalog value)

        Returns:
            MarketInfo for the market
        """
        token = market_data.get("token") or {}
        if decimals is None:
            decimals = int(token.get("decimals") or 0)

        raw_deposits = cls.parse_decimal(market_data.get("totalScaledDeposits"))
        raw_borrows = cls.parse_decimal(market_data.get("totalScaledBorrows"))

        base_bps = cls.parse_decimal(market_data.get("borrowRate"))
        slope_bps = cls.parse_decimal(market_data.get("slope"))
        reserve_bps = cls.parse_decimal(market_data.get("reserveFactor"))

        utilization = RateModel.utilization_rate(raw_deposits, raw_borrows)
        borrow_rate = RateModel.borrow_rate(base_bps, slope_bps, utilization)
        supply_rate = RateModel.supply_rate(borrow_rate, utilization, reserve_bps)

        # A zero close factor means the market never set one
        close_factor = cls.from_bps(market_data.get("closeFactor"))

        return MarketInfo(
            total_deposits=raw_deposits / (Decimal(10) ** decimals),
            total_borrows=raw_borrows / (Decimal(10) ** decimals),
            supply_rate=supply_rate,
            borrow_rate_current=borrow_rate,
            utilization_rate=utilization,
            collateral_factor=cls.from_bps(market_data.get("collateralFactor")),
            liquidation_threshold=cls.from_bps(market_data.get("liquidationThreshold")),
            liquidation_bonus=cls.from_bps(market_data.get("liquidationBonus")),
            reserve_factor=reserve_bps / BPS_DENOMINATOR,
            max_total_deposits=cls.from_base_units(market_data.get("maxTotalDeposits"), decimals),
            price=cls.from_base_units(market_data.get("price"), RAW_PRICE_DECIMALS),
            base_borrow_rate=base_bps / BPS_DENOMINATOR if market_data.get("borrowRate") is not None else None,
            slope=slope_bps / BPS_DENOMINATOR if market_data.get("slope") is not None else None,
            close_factor=close_factor if close_factor > 0 else None,
            max_total_borrows=cls.from_base_units(market_data.get("maxTotalBorrows"), decimals),
            network_id=network_id,
            pool_id=str(pool_id),
            market_id=str(market_data.get("marketId", "")),
            symbol=token.get("symbol", ""),
            decimals=decimals,
            is_paused=bool(market_data.get("paused", False)),
            last_updated=cls.parse_timestamp(market_data.get("lastUpdateTime")),
        )
