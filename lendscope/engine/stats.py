"""Aggregate statistics over monitored liquidation accounts."""

from decimal import Decimal
from typing import Iterable, List

from lendscope.core.models import LiquidationAccount, LiquidationStats, RiskTier
from lendscope.engine.risk import DEFAULT_RISK_THRESHOLDS, RiskClassifier, RiskThresholds

_DISTRIBUTION_NAMES = {
    RiskTier.LIQUIDATABLE: "Liquidatable",
    RiskTier.DANGER: "Danger Zone",
    RiskTier.MODERATE: "Moderate Risk",
    RiskTier.SAFE: "Safe Harbor",
}


def total_value_locked(accounts: Iterable[LiquidationAccount]) -> Decimal:
    """Sum of supplied value across accounts."""
    return sum((Decimal(account.total_supplied) for account in accounts), Decimal("0"))


def total_borrowed(accounts: Iterable[LiquidationAccount]) -> Decimal:
    """Sum of borrowed value across accounts."""
    return sum((Decimal(account.total_borrowed) for account in accounts), Decimal("0"))


def sort_accounts_by_risk(accounts: Iterable[LiquidationAccount]) -> List[LiquidationAccount]:
    """Order accounts most at risk first, then by ascending health factor."""
    return sorted(accounts, key=lambda a: (a.risk_level.rank, a.health_factor))


def liquidation_stats(
    accounts: Iterable[LiquidationAccount],
    thresholds: RiskThresholds = DEFAULT_RISK_THRESHOLDS,
) -> LiquidationStats:
    """
    Count accounts per risk tier and summarize value at risk.

    Tiers are recomputed from each health factor with ``thresholds`` so
    stale ``risk_level`` fields do not skew the counts.

    Args:
        accounts: Accounts to summarize
        thresholds: Tier boundaries

    Returns:
        LiquidationStats with a per-tier distribution in percent
    """
    accounts = list(accounts)
    counts = {tier: 0 for tier in RiskTier}
    for account in accounts:
        counts[RiskClassifier.risk_tier(account.health_factor, thresholds)] += 1

    total = len(accounts)
    average_hf = Decimal("0")
    if total > 0:
        average_hf = sum((Decimal(a.health_factor) for a in accounts), Decimal("0")) / total

    distribution = []
    for tier in RiskTier:
        percentage = Decimal(counts[tier]) / total * 100 if total > 0 else Decimal("0")
        distribution.append((_DISTRIBUTION_NAMES[tier], counts[tier], percentage))

    return LiquidationStats(
        total_accounts=total,
        liquidatable_accounts=counts[RiskTier.LIQUIDATABLE],
        danger_zone_accounts=counts[RiskTier.DANGER],
        moderate_risk_accounts=counts[RiskTier.MODERATE],
        safe_accounts=counts[RiskTier.SAFE],
        total_value_at_risk=total_borrowed(accounts),
        average_health_factor=average_hf,
        risk_distribution=distribution,
    )
