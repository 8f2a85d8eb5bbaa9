"""Protocol-specific configuration."""

from lendscope.protocols.lending import (
    LENDING_API_RATE_LIMIT,
    LENDING_API_RATE_WINDOW,
    LendingQueries,
)

__all__ = [
    "LENDING_API_RATE_LIMIT",
    "LENDING_API_RATE_WINDOW",
    "LendingQueries",
]
