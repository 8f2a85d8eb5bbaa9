"""Linear interest rate model and APY conversions for lending markets."""

import logging
from decimal import Decimal
from typing import Any

from lendscope.core.constants import (
    APY_DISPLAY_CEILING,
    APY_DISPLAY_FLOOR,
    APY_TIER_HIGH,
    APY_TIER_LOW,
    APY_TIER_MEDIUM,
    BPS_DENOMINATOR,
    COMPOUNDING_PERIODS_PER_YEAR,
    DEFAULT_APY_PRECISION,
    DEFAULT_BASE_BORROW_RATE_BPS,
    DEFAULT_RESERVE_FACTOR_BPS,
    DEFAULT_SLOPE_BPS,
)
from lendscope.core.models import (
    APYBreakdown,
    APYCalculationResult,
    APYColorTier,
    MarketParameters,
    MarketState,
)
from lendscope.engine.numeric import fail_safe, plain_decimal, to_decimal

logger = logging.getLogger(__name__)


class RateModel:
    """
    Base-rate-plus-slope interest model.

    borrow_rate = base + slope * utilization
    supply_rate = borrow_rate * utilization * (1 - reserve_factor)

    Every public method is total: invalid input is logged and produces a
    zeroed result instead of an exception, so a display layer can always
    render something.
    """

    @staticmethod
    @fail_safe(Decimal("0"))
    def utilization_rate(deposits: Any, borrows: Any) -> Decimal:
        """
        Calculate utilization as borrows / deposits.

        The result is not clamped: a value above 1 reflects an over-borrowed
        market and is returned as is.

        Args:
            deposits: Total scaled deposits
            borrows: Total scaled borrows

        Returns:
            Utilization ratio, 0 when there are no deposits
        """
        deposits = to_decimal(deposits)
        borrows = to_decimal(borrows)
        if deposits == 0:
            return Decimal("0")
        return borrows / deposits

    @staticmethod
    @fail_safe(Decimal("0"))
    def borrow_rate(base_bps: Any, slope_bps: Any, utilization: Any) -> Decimal:
        """
        Calculate the borrow rate for a given utilization.

        Args:
            base_bps: Base borrow rate in basis points
            slope_bps: Rate slope in basis points
            utilization: Current utilization

        Returns:
            Borrow rate as a fraction
        """
        base = to_decimal(base_bps) / BPS_DENOMINATOR
        slope = to_decimal(slope_bps) / BPS_DENOMINATOR
        return base + slope * to_decimal(utilization)

    @staticmethod
    @fail_safe(Decimal("0"))
    def supply_rate(borrow_rate: Any, utilization: Any, reserve_factor_bps: Any) -> Decimal:
        """
        Calculate what depositors earn after the protocol's reserve cut.

        Args:
            borrow_rate: Borrow rate as a fraction
            utilization: Current utilization
            reserve_factor_bps: Reserve factor in basis points

        Returns:
            Supply rate as a fraction
        """
        reserve_factor = to_decimal(reserve_factor_bps) / BPS_DENOMINATOR
        return to_decimal(borrow_rate) * to_decimal(utilization) * (Decimal("1") - reserve_factor)

    @staticmethod
    @fail_safe(Decimal("0"))
    def convert_rate_to_apy(periodic_rate: Any) -> Decimal:
        """
        Convert a rate to APY with daily compounding.

        APY = ((1 + rate/365)^365 - 1) * 100

        This is compounded yield, not simple APR; at high rates the two
        differ noticeably (10% -> ~10.52%).

        Args:
            periodic_rate: Rate as a fraction

        Returns:
            APY as a percentage
        """
        rate = to_decimal(periodic_rate)
        periods = COMPOUNDING_PERIODS_PER_YEAR
        daily_rate = rate / Decimal(periods)
        apy = ((Decimal("1") + daily_rate) ** periods - Decimal("1")) * Decimal("100")
        return plain_decimal(apy)

    @classmethod
    @fail_safe(APYCalculationResult.zero)
    def calculate_deposit_apy(
        cls,
        params: MarketParameters,
        state: MarketState,
    ) -> APYCalculationResult:
        """Calculate supply-side rates and APY for a market."""
        deposits = to_decimal(state.total_scaled_deposits)
        borrows = to_decimal(state.total_scaled_borrows)

        utilization = cls.utilization_rate(deposits, borrows)
        borrow_rate = cls.borrow_rate(params.base_borrow_rate_bps, params.slope_bps, utilization)
        supply_rate = cls.supply_rate(borrow_rate, utilization, params.reserve_factor_bps)
        apy = cls.convert_rate_to_apy(supply_rate)

        return APYCalculationResult(
            utilization_rate=utilization,
            borrow_rate=borrow_rate,
            supply_rate=supply_rate,
            apy=apy,
            apy_formatted=cls.format_apy(apy),
        )

    @classmethod
    @fail_safe(APYCalculationResult.zero)
    def calculate_borrow_apy(
        cls,
        params: MarketParameters,
        state: MarketState,
        is_fully_utilized: bool = False,
    ) -> APYCalculationResult:
        """
        Calculate borrow-side rates and APY for a market.

        Args:
            params: Market rate parameters
            state: Market totals
            is_fully_utilized: Treat the market as 100% utilized (pegged
                s-token markets always borrow at full utilization)

        Returns:
            APYCalculationResult with supply_rate reported as 0
        """
        if is_fully_utilized:
            utilization = Decimal("1")
        else:
            utilization = cls.utilization_rate(
                to_decimal(state.total_scaled_deposits),
                to_decimal(state.total_scaled_borrows),
            )

        borrow_rate = cls.borrow_rate(params.base_borrow_rate_bps, params.slope_bps, utilization)
        apy = cls.convert_rate_to_apy(borrow_rate)

        return APYCalculationResult(
            utilization_rate=utilization,
            borrow_rate=borrow_rate,
            supply_rate=Decimal("0"),
            apy=apy,
            apy_formatted=cls.format_apy(apy),
        )

    @classmethod
    def calculate_market_apy(
        cls,
        total_deposits: Any,
        total_borrows: Any,
        base_borrow_rate_bps: int = DEFAULT_BASE_BORROW_RATE_BPS,
        slope_bps: int = DEFAULT_SLOPE_BPS,
        reserve_factor_bps: int = DEFAULT_RESERVE_FACTOR_BPS,
    ) -> APYCalculationResult:
        """Deposit APY from bare totals, using default rate parameters."""
        try:
            params = MarketParameters(
                base_borrow_rate_bps=base_borrow_rate_bps,
                slope_bps=slope_bps,
                reserve_factor_bps=reserve_factor_bps,
            )
        except (TypeError, ValueError) as e:
            logger.warning(f"Invalid market parameters: {e}")
            return APYCalculationResult.zero()

        state = MarketState(
            total_scaled_deposits=total_deposits,
            total_scaled_borrows=total_borrows,
        )
        return cls.calculate_deposit_apy(params, state)

    @staticmethod
    @fail_safe("0.00%")
    def format_apy(apy: Any, precision: int = DEFAULT_APY_PRECISION) -> str:
        """
        Format an APY percentage for display.

        Zero renders as a plain zero, tiny values as "<0.01%" and runaway
        values as ">1000%".
        """
        apy = to_decimal(apy)
        if apy == 0:
            return f"{Decimal('0'):.{precision}f}%"
        if apy < APY_DISPLAY_FLOOR:
            return f"<{APY_DISPLAY_FLOOR}%"
        if apy > APY_DISPLAY_CEILING:
            return f">{APY_DISPLAY_CEILING}%"
        return f"{apy:.{precision}f}%"

    @staticmethod
    @fail_safe(APYColorTier.MINIMAL)
    def color_tier_for_apy(apy: Any) -> APYColorTier:
        """Classify an APY percentage for presentation styling."""
        apy = to_decimal(apy)
        if apy >= APY_TIER_HIGH:
            return APYColorTier.HIGH
        if apy >= APY_TIER_MEDIUM:
            return APYColorTier.MEDIUM
        if apy >= APY_TIER_LOW:
            return APYColorTier.LOW
        return APYColorTier.MINIMAL

    @classmethod
    def apy_breakdown(
        cls,
        params: MarketParameters,
        state: MarketState,
    ) -> APYBreakdown:
        """Formatted utilization, rates and reserve factor for a tooltip."""
        result = cls.calculate_deposit_apy(params, state)
        reserve_factor = Decimal(params.reserve_factor_bps) / Decimal("100")

        return APYBreakdown(
            utilization_rate=f"{result.utilization_rate * 100:.1f}%",
            borrow_rate=f"{result.borrow_rate * 100:.2f}%",
            supply_rate=f"{result.supply_rate * 100:.4f}%",
            reserve_factor=f"{reserve_factor:.1f}%",
            apy=result.apy_formatted,
        )
