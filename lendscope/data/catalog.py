"""Per-network token catalog used to seed market keys."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from lendscope.core.models import MarketKey

logger = logging.getLogger(__name__)

# Pool used when a network has no lending pool configured
FALLBACK_POOL_ID = "1"


@dataclass(frozen=True)
class TokenConfig:
    """A tradable asset on a network."""

    symbol: str
    name: str
    decimals: int
    asset_id: Optional[str] = None  # None for the native token
    underlying_contract_id: Optional[str] = None

    @property
    def asset_identifier(self) -> str:
        """Identifier passed to the market data fetcher."""
        return self.underlying_contract_id or self.asset_id or self.symbol


@dataclass(frozen=True)
class NetworkConfig:
    """Tokens and lending pools known for one network."""

    network_id: str
    name: str
    tokens: List[TokenConfig] = field(default_factory=list)
    lending_pools: List[str] = field(default_factory=list)

    @property
    def primary_pool_id(self) -> str:
        return self.lending_pools[0] if self.lending_pools else FALLBACK_POOL_ID


def _voi_tokens() -> List[TokenConfig]:
    return [
        TokenConfig(symbol="VOI", name="VOI", decimals=6),
        TokenConfig(symbol="USDC", name="Aramid USDC", decimals=6),
        TokenConfig(symbol="UNIT", name="UNIT", decimals=6),
        TokenConfig(symbol="BTC", name="Wrapped BTC", decimals=8),
        TokenConfig(symbol="cbBTC", name="Coinbase BTC", decimals=8),
        TokenConfig(symbol="ETH", name="Wrapped ETH", decimals=8),
        TokenConfig(symbol="ALGO", name="Algorand", decimals=6),
        TokenConfig(symbol="POW", name="POW", decimals=6),
    ]


def _algorand_tokens() -> List[TokenConfig]:
    return [
        TokenConfig(symbol="ALGO", name="Algorand", decimals=6),
        TokenConfig(symbol="USDC", name="USD Coin", decimals=6),
        TokenConfig(symbol="VOI", name="VOI", decimals=6),
    ]


DEFAULT_NETWORKS: Dict[str, NetworkConfig] = {
    "voi-mainnet": NetworkConfig("voi-mainnet", "VOI Mainnet", _voi_tokens(), lending_pools=["41760711"]),
    "voi-testnet": NetworkConfig("voi-testnet", "VOI Testnet", _voi_tokens()),
    "algorand-mainnet": NetworkConfig("algorand-mainnet", "Algorand Mainnet", _algorand_tokens()),
    "algorand-testnet": NetworkConfig("algorand-testnet", "Algorand Testnet", _algorand_tokens()),
}


class TokenCatalog:
    """Lookup of tokens and lending pools per network."""

    def __init__(self, networks: Optional[Iterable[NetworkConfig]] = None):
        if networks is None:
            networks = DEFAULT_NETWORKS.values()
        self._networks: Dict[str, NetworkConfig] = {n.network_id: n for n in networks}

    @property
    def network_ids(self) -> List[str]:
        return list(self._networks.keys())

    def network(self, network_id: str) -> NetworkConfig:
        """
        Get the configuration for a network.

        Raises:
            ValueError: If the network is unknown
        """
        if network_id not in self._networks:
            raise ValueError(
                f"Unknown network: {network_id}. "
                f"Available: {self.network_ids}"
            )
        return self._networks[network_id]

    def tokens(self, network_id: str) -> List[TokenConfig]:
        return list(self.network(network_id).tokens)

    def token(self, network_id: str, symbol: str) -> Optional[TokenConfig]:
        """Find a token by symbol, case-insensitively."""
        symbol = symbol.lower()
        for token in self.network(network_id).tokens:
            if token.symbol.lower() == symbol:
                return token
        return None

    def token_for_key(self, key: MarketKey) -> Optional[TokenConfig]:
        if key.network_id not in self._networks:
            return None
        return self.token(key.network_id, key.asset)

    def market_keys(self, network_id: str) -> List[MarketKey]:
        """Market keys for every token on a network."""
        return [MarketKey.for_symbol(network_id, t.symbol) for t in self.network(network_id).tokens]

    def pool_id(self, network_id: str) -> str:
        return self.network(network_id).primary_pool_id
