"""Configuration: reads all settings from environment variables.

API keys are not captured here; providers resolve them per request through
:mod:`coinproxy.providers` so that rotated secrets apply without a restart.
"""

import os

from coinproxy.env_utils import env_float, env_int

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
REQUEST_TIMEOUT_SECONDS: float = env_float("REQUEST_TIMEOUT_SECONDS", 10.0)

# Top coins cache
TOP_COINS_FRESHNESS_SECONDS: float = env_float("TOP_COINS_FRESHNESS_SECONDS", 300.0)
TOP_COINS_LIMIT: int = env_int("TOP_COINS_LIMIT", 100)

# Price history lookups search +/- this many milliseconds around the timestamp
PRICE_HISTORY_WINDOW_MS: int = env_int("PRICE_HISTORY_WINDOW_MS", 150000)

# Covalent
COVALENT_BASE_URL: str = os.getenv("COVALENT_BASE_URL", "https://api.covalenthq.com")
COVALENT_API_KEY_ENV = "COVALENT_API_KEY"

# BscScan
BSCSCAN_BASE_URL: str = os.getenv("BSCSCAN_BASE_URL", "https://api.bscscan.com")
BSCSCAN_API_KEY_ENV = "BSC_API_KEY"
BSCSCAN_START_BLOCK: int = env_int("BSCSCAN_START_BLOCK", 1000000)
BSCSCAN_END_BLOCK: int = env_int("BSCSCAN_END_BLOCK", 999999999)

# LiveCoinWatch
LIVECOINWATCH_BASE_URL: str = os.getenv("LIVECOINWATCH_BASE_URL", "https://api.livecoinwatch.com")
LIVECOINWATCH_API_KEY_ENVS: tuple[str, ...] = ("LIVECOINWATCH_API_KEY", "LCW_API_KEY")
LIVECOINWATCH_CURRENCY: str = os.getenv("LIVECOINWATCH_CURRENCY", "USD")
