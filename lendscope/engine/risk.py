"""Liquidation risk classification and sizing."""

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Optional

from lendscope.core.constants import (
    DANGER_THRESHOLD,
    DEFAULT_CLOSE_FACTOR,
    GAUGE_KNEE_HF,
    GAUGE_KNEE_PERCENT,
    GAUGE_MAX_HF,
    GAUGE_MAX_PERCENT,
    GAUGE_MIN_HF,
    GAUGE_MIN_PERCENT,
    LIQUIDATABLE_THRESHOLD,
    MODERATE_THRESHOLD,
)
from lendscope.core.errors import ComputationError
from lendscope.core.models import (
    AssetPosition,
    LiquidationAccount,
    LiquidationSizing,
    RiskTier,
    SizingStatus,
)
from lendscope.engine.numeric import fail_safe, to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RiskThresholds:
    """Upper health factor bound (inclusive) of each at-risk tier."""

    liquidatable: Decimal = LIQUIDATABLE_THRESHOLD
    danger: Decimal = DANGER_THRESHOLD
    moderate: Decimal = MODERATE_THRESHOLD


DEFAULT_RISK_THRESHOLDS = RiskThresholds()


@dataclass(frozen=True)
class SizingConfig:
    """How liquidation sizing treats markets without a close factor."""

    default_close_factor: Decimal = DEFAULT_CLOSE_FACTOR
    require_close_factor: bool = False


DEFAULT_SIZING_CONFIG = SizingConfig()


def _invalid_sizing() -> LiquidationSizing:
    return LiquidationSizing(
        close_factor=Decimal("0"),
        collateral_value_usd=Decimal("0"),
        max_liquidatable_usd=Decimal("0"),
        max_liquidatable_amount=Decimal("0"),
        asset_price=Decimal("0"),
        status=SizingStatus.INVALID_INPUT,
    )


class RiskClassifier:
    """
    Classifier for account liquidation risk.

    Handles risk tiers, liquidation sizing and the health gauge position.
    All methods are total: bad input is logged and yields a sentinel.
    """

    @staticmethod
    @fail_safe(RiskTier.LIQUIDATABLE)
    def risk_tier(
        health_factor: Any,
        thresholds: RiskThresholds = DEFAULT_RISK_THRESHOLDS,
    ) -> RiskTier:
        """
        Classify a health factor.

        Boundaries belong to the riskier tier: exactly 1.1 is DANGER.

        Args:
            health_factor: Risk-adjusted collateral / debt
            thresholds: Tier boundaries

        Returns:
            RiskTier for the health factor
        """
        hf = to_decimal(health_factor)
        if hf <= thresholds.liquidatable:
            return RiskTier.LIQUIDATABLE
        if hf <= thresholds.danger:
            return RiskTier.DANGER
        if hf <= thresholds.moderate:
            return RiskTier.MODERATE
        return RiskTier.SAFE

    @staticmethod
    @fail_safe(_invalid_sizing)
    def liquidation_sizing(
        position: AssetPosition,
        close_factor: Optional[Any] = None,
        config: SizingConfig = DEFAULT_SIZING_CONFIG,
    ) -> LiquidationSizing:
        """
        Calculate how much of a collateral position one liquidation may seize.

        max_liquidatable_usd = value_usd * close_factor
        max_liquidatable_amount = max_liquidatable_usd / (value_usd / amount)

        The close factor comes from the argument, then the position's market
        data, then ``config.default_close_factor``. A zero amount gives a
        DIVISION_UNDEFINED sentinel with zero price and amount.

        Args:
            position: Collateral position being liquidated
            close_factor: Close factor as a fraction in (0, 1]
            config: Default close factor policy

        Returns:
            LiquidationSizing, check ``status`` before display
        """
        value_usd = to_decimal(position.value_usd)
        amount = to_decimal(position.amount)

        assumed = False
        if close_factor is None:
            close_factor = position.close_factor
        if close_factor is None:
            if config.require_close_factor:
                logger.info(f"No close factor for {position.symbol}, sizing skipped")
                return LiquidationSizing(
                    close_factor=Decimal("0"),
                    collateral_value_usd=value_usd,
                    max_liquidatable_usd=Decimal("0"),
                    max_liquidatable_amount=Decimal("0"),
                    asset_price=Decimal("0"),
                    status=SizingStatus.CLOSE_FACTOR_MISSING,
                )
            close_factor = config.default_close_factor
            assumed = True

        close_factor = to_decimal(close_factor)
        if not Decimal("0") < close_factor <= Decimal("1"):
            raise ComputationError(f"Close factor out of range: {close_factor}")

        max_usd = value_usd * close_factor

        if amount == 0:
            return LiquidationSizing(
                close_factor=close_factor,
                collateral_value_usd=value_usd,
                max_liquidatable_usd=max_usd,
                max_liquidatable_amount=Decimal("0"),
                asset_price=Decimal("0"),
                status=SizingStatus.DIVISION_UNDEFINED,
                close_factor_assumed=assumed,
            )

        asset_price = value_usd / amount
        if asset_price == 0:
            max_amount = Decimal("0")
        else:
            max_amount = max_usd / asset_price

        return LiquidationSizing(
            close_factor=close_factor,
            collateral_value_usd=value_usd,
            max_liquidatable_usd=max_usd,
            max_liquidatable_amount=max_amount,
            asset_price=asset_price,
            close_factor_assumed=assumed,
        )

    @staticmethod
    @fail_safe(GAUGE_MIN_PERCENT)
    def gauge_percent(health_factor: Any) -> Decimal:
        """
        Map a health factor to a gauge fill percentage.

        Two linear segments over the clamped range [0.1, 3.0]:
        0.1 -> 5%, 0.8 -> 10%, 3.0 -> 92%. The band above the knee is
        much wider so moves near the danger zone stay visible.
        """
        hf = max(GAUGE_MIN_HF, min(GAUGE_MAX_HF, to_decimal(health_factor)))

        if hf <= GAUGE_KNEE_HF:
            t = (hf - GAUGE_MIN_HF) / (GAUGE_KNEE_HF - GAUGE_MIN_HF)
            return GAUGE_MIN_PERCENT + t * (GAUGE_KNEE_PERCENT - GAUGE_MIN_PERCENT)

        t = (hf - GAUGE_KNEE_HF) / (GAUGE_MAX_HF - GAUGE_KNEE_HF)
        return GAUGE_KNEE_PERCENT + t * (GAUGE_MAX_PERCENT - GAUGE_KNEE_PERCENT)

    @staticmethod
    @fail_safe("0.00")
    def format_health_factor(health_factor: Any) -> str:
        """Format a health factor with precision shrinking as it grows."""
        hf = to_decimal(health_factor)
        if hf < Decimal("0.01"):
            return "0.00"
        if hf < 1:
            return f"{hf:.3f}"
        if hf < 10:
            return f"{hf:.2f}"
        return f"{hf:.1f}"

    @classmethod
    def classify_account(
        cls,
        account: LiquidationAccount,
        thresholds: RiskThresholds = DEFAULT_RISK_THRESHOLDS,
    ) -> LiquidationAccount:
        """Return a copy of the account with risk_level set from its health factor."""
        return replace(account, risk_level=cls.risk_tier(account.health_factor, thresholds))
