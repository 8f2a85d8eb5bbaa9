"""Constants for lending market rate and risk calculations."""

from decimal import Decimal

# Basis points: 1 bps = 0.01%
BPS_DENOMINATOR = Decimal("10000")

# APY compounding: input rates are compounded daily over one year
COMPOUNDING_PERIODS_PER_YEAR = 365

# APY display
DEFAULT_APY_PRECISION = 2
APY_DISPLAY_FLOOR = Decimal("0.01")  # percent
APY_DISPLAY_CEILING = Decimal("1000")  # percent

# APY colour tiers (percent)
APY_TIER_HIGH = Decimal("10")
APY_TIER_MEDIUM = Decimal("5")
APY_TIER_LOW = Decimal("2")

# Convenience market defaults
DEFAULT_BASE_BORROW_RATE_BPS = 500  # 5%
DEFAULT_SLOPE_BPS = 1000  # 10%
DEFAULT_RESERVE_FACTOR_BPS = 1000  # 10%

# Health factor risk tiers (upper bound, inclusive)
LIQUIDATABLE_THRESHOLD = Decimal("1.0")
DANGER_THRESHOLD = Decimal("1.1")
MODERATE_THRESHOLD = Decimal("1.2")

# Half of a position may be closed per liquidation unless the market says otherwise
DEFAULT_CLOSE_FACTOR = Decimal("0.5")

# Health gauge: hf clamped to [0.1, 3.0]; 0.1 -> 5%, 0.8 -> 10%, 3.0 -> 92%
GAUGE_MIN_HF = Decimal("0.1")
GAUGE_KNEE_HF = Decimal("0.8")
GAUGE_MAX_HF = Decimal("3.0")
GAUGE_MIN_PERCENT = Decimal("5")
GAUGE_KNEE_PERCENT = Decimal("10")
GAUGE_MAX_PERCENT = Decimal("92")

# Fetch orchestration and cache defaults
DEFAULT_THROTTLE_SECONDS = 60
DEFAULT_CACHE_TTL_SECONDS = 30
DEFAULT_CACHE_MAX_SIZE = 200
