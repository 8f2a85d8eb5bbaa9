"""Lending pool protocol configuration."""

from lendscope.protocols.lending.config import (
    LENDING_API_RATE_LIMIT,
    LENDING_API_RATE_WINDOW,
)
from lendscope.protocols.lending.queries import LendingQueries

__all__ = [
    "LENDING_API_RATE_LIMIT",
    "LENDING_API_RATE_WINDOW",
    "LendingQueries",
]
