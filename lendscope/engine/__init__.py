"""Rate and risk engines."""

from .rate_model import RateModel
from .risk import (
    DEFAULT_RISK_THRESHOLDS,
    DEFAULT_SIZING_CONFIG,
    RiskClassifier,
    RiskThresholds,
    SizingConfig,
)
from .stats import liquidation_stats, sort_accounts_by_risk, total_borrowed, total_value_locked

__all__ = [
    "RateModel",
    "RiskClassifier",
    "RiskThresholds",
    "SizingConfig",
    "DEFAULT_RISK_THRESHOLDS",
    "DEFAULT_SIZING_CONFIG",
    "liquidation_stats",
    "sort_accounts_by_risk",
    "total_borrowed",
    "total_value_locked",
]
