# finsight/services/constants.py
"""
Centralized constants for the FinSight services.

Single source of truth for precision levels, simulator parameters,
rate limits and list bounds used across the application.

Usage:
    from finsight.services.constants import (
        CURRENCY_PRECISION,
        SHARE_PRECISION,
        ZERO,
    )
"""

from decimal import Decimal


# =============================================================================
# DECIMAL PRECISION CONSTANTS
# =============================================================================
# Rounding is applied at presentation only; replay and aggregation run
# at full precision.

# Currency amounts: 2 decimal places (e.g., $1234.56)
# Used for: market price, market value, cost basis, P&L, totals
CURRENCY_PRECISION: Decimal = Decimal("0.01")

# Share quantities and average cost: 8 decimal places
SHARE_PRECISION: Decimal = Decimal("0.00000001")

# Percentage values shown on the stock catalog (day change %)
DISPLAY_PERCENTAGE_PRECISION: Decimal = Decimal("0.01")

# Type-safe zero for Decimal comparisons
ZERO: Decimal = Decimal("0")


# =============================================================================
# PRICE SIMULATOR
# =============================================================================

# Total width of the uniform random move per update run
# 0.04 => each update moves a price by at most +/-2%
DEFAULT_PRICE_VOLATILITY: float = 0.04

# Simulated daily volume is drawn from [VOLUME_MIN, VOLUME_MIN + VOLUME_SPAN)
VOLUME_MIN: int = 1_000_000
VOLUME_SPAN: int = 99_000_000

# Seconds between scheduled price updater runs
DEFAULT_PRICE_UPDATE_INTERVAL_SECONDS: float = 30.0


# =============================================================================
# STOCK CATALOG
# =============================================================================

# Default number of rows for trending / gainers / losers lists
DEFAULT_MOVERS_LIMIT: int = 10

# Upper bound for movers lists
MAX_MOVERS_LIMIT: int = 100


# =============================================================================
# RATE LIMITING CONSTANTS
# =============================================================================
# Format follows slowapi/limits syntax: "100/minute", "10/hour", etc.

# Default rate limit for read endpoints (GET requests)
RATE_LIMIT_DEFAULT: str = "100/minute"

# Rate limit for write endpoints (POST, PATCH, DELETE)
RATE_LIMIT_WRITE: str = "30/minute"

# Rate limit for endpoints that trigger a price update run on demand
RATE_LIMIT_SYNC: str = "10/minute"

# Rate limit for health check endpoints
# Higher limit for monitoring tools that poll frequently
RATE_LIMIT_HEALTH: str = "300/minute"


# =============================================================================
# RESOURCE LIMIT CONSTANTS
# =============================================================================

# Maximum number of items returned in a single list response
MAX_LIST_LIMIT: int = 1000
