"""LendScope - lending market rate and liquidation risk dashboard core."""

__version__ = "0.1.0"
