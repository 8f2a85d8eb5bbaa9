"""Unit tests for liquidation account statistics."""

from decimal import Decimal

from lendscope.core.models import RiskTier
from lendscope.engine.stats import (
    liquidation_stats,
    sort_accounts_by_risk,
    total_borrowed,
    total_value_locked,
)


class TestTotals:
    """Tests for value totals."""

    def test_totals(self, make_account):
        accounts = [
            make_account("0x1", "1.5", supplied="1000", borrowed="400"),
            make_account("0x2", "2.0", supplied="2500", borrowed="600"),
        ]
        assert total_value_locked(accounts) == Decimal("3500")
        assert total_borrowed(accounts) == Decimal("1000")

    def test_empty(self):
        assert total_value_locked([]) == Decimal("0")
        assert total_borrowed([]) == Decimal("0")


class TestSortAccountsByRisk:
    """Tests for risk ordering."""

    def test_most_at_risk_first(self, make_account):
        accounts = [
            make_account("safe", "2.5", risk_level=RiskTier.SAFE),
            make_account("liq-b", "0.9", risk_level=RiskTier.LIQUIDATABLE),
            make_account("danger", "1.05", risk_level=RiskTier.DANGER),
            make_account("liq-a", "0.7", risk_level=RiskTier.LIQUIDATABLE),
        ]

        ordered = [a.wallet_address for a in sort_accounts_by_risk(accounts)]

        assert ordered == ["liq-a", "liq-b", "danger", "safe"]


class TestLiquidationStats:
    """Tests for aggregate statistics."""

    def test_counts_per_tier(self, make_account):
        accounts = [
            make_account("0x1", "0.9", borrowed="300"),
            make_account("0x2", "1.05", borrowed="200"),
            make_account("0x3", "1.15", borrowed="100"),
            make_account("0x4", "2.0", borrowed="400"),
        ]

        stats = liquidation_stats(accounts)

        assert stats.total_accounts == 4
        assert stats.liquidatable_accounts == 1
        assert stats.danger_zone_accounts == 1
        assert stats.moderate_risk_accounts == 1
        assert stats.safe_accounts == 1
        assert stats.total_value_at_risk == Decimal("1000")
        assert stats.average_health_factor == Decimal("1.275")

    def test_tiers_recomputed_from_health_factor(self, make_account):
        """Test stale risk levels do not affect counts."""
        accounts = [make_account("0x1", "0.5", risk_level=RiskTier.SAFE)]

        stats = liquidation_stats(accounts)

        assert stats.liquidatable_accounts == 1
        assert stats.safe_accounts == 0

    def test_distribution(self, make_account):
        accounts = [
            make_account("0x1", "0.9"),
            make_account("0x2", "3.0"),
            make_account("0x3", "4.0"),
            make_account("0x4", "5.0"),
        ]

        stats = liquidation_stats(accounts)
        distribution = {name: (count, pct) for name, count, pct in stats.risk_distribution}

        assert distribution["Liquidatable"] == (1, Decimal("25"))
        assert distribution["Safe Harbor"] == (3, Decimal("75"))
        assert distribution["Danger Zone"][0] == 0

    def test_empty(self):
        stats = liquidation_stats([])

        assert stats.total_accounts == 0
        assert stats.average_health_factor == Decimal("0")
        assert all(pct == Decimal("0") for _, _, pct in stats.risk_distribution)
