"""Unit tests for market info coercion."""

import pytest
from decimal import Decimal

from lendscope.core.models import MarketInfo


def make_info(**overrides) -> MarketInfo:
    fields = dict(
        total_deposits="1000000",
        total_borrows=800000,
        supply_rate=0.09,
        borrow_rate_current="0.13",
        utilization_rate="0.8",
        collateral_factor=0.75,
        liquidation_threshold="0.8",
        liquidation_bonus="0.05",
        reserve_factor=0.1,
        max_total_deposits="5000000",
        price=1.0,
    )
    fields.update(overrides)
    return MarketInfo(**fields)


class TestMarketInfo:
    """Tests for MarketInfo field parsing."""

    def test_strings_and_floats_become_decimals(self):
        info = make_info()

        assert info.total_deposits == Decimal("1000000")
        assert info.total_borrows == Decimal("800000")
        assert info.supply_rate == Decimal("0.09")
        assert info.reserve_factor == Decimal("0.1")
        assert info.price == Decimal("1.0")
        assert all(
            isinstance(getattr(info, name), Decimal)
            for name in ["collateral_factor", "liquidation_bonus", "max_total_deposits", "max_total_borrows"]
        )

    def test_usd_arithmetic_with_native_values(self):
        info = make_info()
        assert info.total_deposits * info.price == Decimal("1000000")

    def test_unusable_values_become_zero(self):
        info = make_info(total_deposits="n/a", price=float("nan"), total_borrows=None)

        assert info.total_deposits == Decimal("0")
        assert info.price == Decimal("0")
        assert info.total_borrows == Decimal("0")

    def test_rate_parameters_optional(self):
        info = make_info()

        assert info.base_borrow_rate is None
        assert info.slope is None
        assert not info.has_rate_parameters
        with pytest.raises(ValueError):
            info.to_parameters()

    def test_rate_parameters_from_strings(self):
        info = make_info(base_borrow_rate="0.05", slope=0.1, close_factor="0.5")

        params = info.to_parameters()

        assert info.has_rate_parameters
        assert info.close_factor == Decimal("0.5")
        assert params.base_borrow_rate_bps == 500
        assert params.slope_bps == 1000
        assert params.reserve_factor_bps == 1000

    def test_zero_rate_parameters_are_present(self):
        info = make_info(base_borrow_rate=0, slope=0)
        assert info.has_rate_parameters
