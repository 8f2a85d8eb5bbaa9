"""Lending pool protocol constants."""

# Indexer rate limits (overridable in settings)
LENDING_API_RATE_LIMIT = 100  # requests per window
LENDING_API_RATE_WINDOW = 60  # seconds

# Oracle prices are stored with 18 decimals
RAW_PRICE_DECIMALS = 18
