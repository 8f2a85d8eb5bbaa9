"""Pydantic settings for LendScope configuration."""

from functools import lru_cache
from typing import Annotated, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from lendscope.core.constants import (
    DEFAULT_CACHE_MAX_SIZE,
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_THROTTLE_SECONDS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Networks
    default_network: str = Field(default="voi-mainnet", description="Network selected at startup")
    enabled_networks: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["voi-mainnet", "algorand-mainnet"],
        description="Networks the dashboard core loads markets for",
    )

    # Market data indexer
    market_api_url: str = Field(
        default="https://indexer.dorkfi.com/graphql",
        description="GraphQL endpoint serving lending market state",
    )
    market_api_rate_limit: int = Field(default=100, ge=1, description="Requests allowed per rate window")
    market_api_rate_window: int = Field(default=60, ge=1, description="Rate window in seconds")

    # In-memory cache
    cache_ttl_seconds: int = Field(default=DEFAULT_CACHE_TTL_SECONDS, ge=1, le=3600, description="Cache TTL in seconds")
    cache_max_size: int = Field(default=DEFAULT_CACHE_MAX_SIZE, ge=1, description="Maximum number of cached entries")

    # Fetch throttling / refresh
    fetch_throttle_seconds: int = Field(default=DEFAULT_THROTTLE_SECONDS, ge=0, le=3600, description="Per-market refetch throttle")
    ui_refresh_interval: int = Field(default=60, ge=10, le=3600, description="Periodic refresh interval in seconds")

    # Liquidation sizing
    require_close_factor: bool = Field(
        default=False,
        description="Refuse to size liquidations when the market omits its close factor",
    )

    log_level: str = Field(default="WARNING", description="Root logging level")

    @field_validator("enabled_networks", mode="before")
    @classmethod
    def parse_enabled_networks(cls, v):
        """Parse comma-separated network ids."""
        if isinstance(v, str):
            if not v.strip():
                return []
            return [net.strip() for net in v.split(",") if net.strip()]
        return v or []

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Upper-case the logging level name."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def networks(self) -> List[str]:
        """Enabled networks with the default network first."""
        ordered = [self.default_network]
        ordered.extend(n for n in self.enabled_networks if n != self.default_network)
        return ordered


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
