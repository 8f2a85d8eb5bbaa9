"""On-demand market data loading with per-key throttling.

Keeps one FetchState per market key and loads markets through an injected
MarketInfoFetcher. All state changes happen between awaits, so the
single-threaded event loop makes each check-then-set race-free; the fetcher
call is the only suspension point of a load.
"""

import asyncio
import logging
import time
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Set

from config.settings import Settings, get_settings
from lendscope.core.models import FetchState, MarketInfo, MarketKey, OnDemandMarketData
from lendscope.data.cache.memory_cache import CacheKeys, TTLCache
from lendscope.data.catalog import TokenCatalog, TokenConfig
from lendscope.data.clients.base import MarketInfoFetcher
from lendscope.engine.numeric import plain_decimal
from lendscope.engine.rate_model import RateModel

logger = logging.getLogger(__name__)

NO_DATA_ERROR = "Failed to load market data"


class FetchOrchestrator:
    """Coordinates loading of every market of one network.

    Guarantees at most one fetch in flight per key, skips keys fetched
    within the throttle window unless bypassed, and contains failures to
    the key that failed.
    """

    def __init__(
        self,
        fetcher: MarketInfoFetcher,
        network_id: str,
        catalog: Optional[TokenCatalog] = None,
        cache: Optional[TTLCache] = None,
        settings: Optional[Settings] = None,
        throttle_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the orchestrator.

        Args:
            fetcher: Market data source
            network_id: Network whose markets are loaded
            catalog: Token catalog seeding the key universe
            cache: Shared market info cache
            settings: Application settings
            throttle_seconds: Minimum seconds between fetches of a key
            clock: Time source in seconds, shared with the cache in tests
        """
        self.settings = settings or get_settings()
        self.network_id = network_id
        self._fetcher = fetcher
        self._catalog = catalog or TokenCatalog()
        self._clock = clock
        self.cache = cache or TTLCache(settings=self.settings, clock=clock)
        self.throttle_seconds = (
            self.settings.fetch_throttle_seconds if throttle_seconds is None else throttle_seconds
        )
        self.pool_id = self._catalog.pool_id(network_id)

        self._tokens: Dict[MarketKey, TokenConfig] = {}
        self._states: Dict[MarketKey, FetchState] = {}
        self._in_flight: Set[MarketKey] = set()

        for token in self._catalog.tokens(network_id):
            key = MarketKey.for_symbol(network_id, token.symbol)
            self._tokens[key] = token
            self._states[key] = FetchState(
                key=key,
                data=OnDemandMarketData(asset=token.symbol),
            )

    # ========== STATE ACCESS ==========

    @property
    def keys(self) -> List[MarketKey]:
        return list(self._states.keys())

    @property
    def is_loading(self) -> bool:
        """True while any market fetch is in flight."""
        return bool(self._in_flight)

    def market_key(self, symbol: str) -> MarketKey:
        """Key for a token symbol on this orchestrator's network."""
        return MarketKey.for_symbol(self.network_id, symbol)

    def state(self, key: MarketKey) -> Optional[FetchState]:
        return self._states.get(key)

    def states(self) -> List[FetchState]:
        """All market states in catalog order."""
        return list(self._states.values())

    def is_in_flight(self, key: MarketKey) -> bool:
        return key in self._in_flight

    # ========== LOADING ==========

    async def load_market_data(self, key: MarketKey, bypass_throttle: bool = False) -> None:
        """Load one market unless it is in flight or throttled.

        Args:
            key: Market to load
            bypass_throttle: Ignore the throttle window and the shared cache
        """
        state = self._states.get(key)
        if state is None:
            logger.warning(f"Unknown market key {key}, ignoring load")
            return

        if key in self._in_flight:
            logger.debug(f"Market {key} already loading")
            return

        if not bypass_throttle and state.last_fetched is not None:
            elapsed = self._clock() - state.last_fetched
            if elapsed < self.throttle_seconds:
                logger.debug(f"Market {key} throttled. Last fetched {elapsed:.0f}s ago")
                return

        token = self._tokens[key]
        cache_key = CacheKeys.market_info(self.network_id, self.pool_id, token.asset_identifier)

        self._in_flight.add(key)
        state.is_loading = True
        try:
            market_info = None
            if not bypass_throttle:
                cached = self.cache.get(cache_key)
                if isinstance(cached, MarketInfo):
                    logger.debug(f"Memory cache hit for market {key}")
                    market_info = cached

            if market_info is None:
                logger.info(f"Fetching market {key} from {self._fetcher.source_name}")
                market_info = await self._fetcher.fetch(
                    self.pool_id,
                    token.asset_identifier,
                    self.network_id,
                )
                if market_info is not None:
                    self.cache.set(cache_key, market_info, self.network_id)

            if market_info is None:
                self._mark_failed(state, NO_DATA_ERROR)
            else:
                state.data = self._build_market_data(token, market_info)
                state.is_loaded = True
                state.error = None
                state.last_fetched = self._clock()
        except Exception as e:
            logger.error(f"Error loading market data for {key}: {e}")
            self._mark_failed(state, str(e) or type(e).__name__)
        finally:
            self._in_flight.discard(key)
            state.is_loading = False

    async def load_market_data_with_bypass(self, key: MarketKey) -> None:
        """Reload a market now, for explicit user refreshes."""
        await self.load_market_data(key, bypass_throttle=True)

    async def load_visible_markets(self, keys: Iterable[MarketKey]) -> None:
        """Load markets that just became visible and were never loaded."""
        pending = []
        for key in dict.fromkeys(keys):
            state = self._states.get(key)
            if state is None or state.is_loaded or key in self._in_flight:
                continue
            pending.append(key)

        if pending:
            await asyncio.gather(*(self.load_market_data(key) for key in pending))

    async def load_all_markets(self) -> None:
        """Load every market not currently in flight, subject to the throttle."""
        pending = [key for key in self._states if key not in self._in_flight]
        if pending:
            await asyncio.gather(*(self.load_market_data(key) for key in pending))

    # ========== HELPERS ==========

    def _mark_failed(self, state: FetchState, message: str) -> None:
        # Failures count as loaded and are throttled like successes
        state.is_loaded = True
        state.error = message
        state.last_fetched = self._clock()

    @staticmethod
    def _build_market_data(token: TokenConfig, info: MarketInfo) -> OnDemandMarketData:
        """Derive a display row from raw market info.

        APY is recomputed from the rate model when base rate and slope are
        known, otherwise compounded from the rates the fetcher reported.
        """
        if info.has_rate_parameters:
            params = info.to_parameters()
            market_state = info.to_state()
            deposit = RateModel.calculate_deposit_apy(params, market_state)
            borrow = RateModel.calculate_borrow_apy(params, market_state)
            supply_apy, borrow_apy = deposit.apy, borrow.apy
            utilization = deposit.utilization_rate
        else:
            supply_apy = RateModel.convert_rate_to_apy(info.supply_rate)
            borrow_apy = RateModel.convert_rate_to_apy(info.borrow_rate_current)
            utilization = info.utilization_rate

        # Without an oracle price, amounts are shown 1:1 in USD
        price = info.price if info.price > 0 else Decimal("1")
        hundred = Decimal("100")

        return OnDemandMarketData(
            asset=token.symbol,
            total_supply=info.total_deposits,
            total_supply_usd=info.total_deposits * price,
            supply_apy=supply_apy,
            total_borrow=info.total_borrows,
            total_borrow_usd=info.total_borrows * price,
            borrow_apy=borrow_apy,
            utilization=plain_decimal(utilization * hundred),
            collateral_factor=info.collateral_factor * hundred,
            supply_cap=info.max_total_deposits,
            supply_cap_usd=info.max_total_deposits * price,
            max_ltv=info.collateral_factor * hundred,
            liquidation_threshold=info.liquidation_threshold * hundred,
            liquidation_penalty=info.liquidation_bonus * hundred,
            reserve_factor=info.reserve_factor * hundred,
            market_info=info,
        )

    async def close(self) -> None:
        """Close the fetcher."""
        await self._fetcher.close()
