# finsight/services/__init__.py
"""
Service layer for business logic.

This package contains the service layer which encapsulates business logic
separate from the API (router) layer. Services:
- Have NO knowledge of HTTP (no HTTPException, no status codes)
- Raise domain-specific exceptions
- Receive database sessions as parameters (not via Depends)
- Are easily testable via dependency injection

Usage:
    from finsight.services import ValuationService
    from finsight.services import PriceUpdateService, SimulatedPriceProvider
    from finsight.services import AlertService
    from finsight.services import OversellError, PortfolioNotFoundError

Architecture:
    services/
    ├── __init__.py                  # This file - main exports
    ├── exceptions.py                # Domain exceptions
    ├── constants.py                 # Business constants and limits
    ├── alerts.py                    # Price alert CRUD and evaluation
    ├── market_data/                 # Prices
    │   ├── base.py                  # Abstract provider interface
    │   ├── simulator.py             # Random-walk price simulator
    │   ├── snapshot.py              # Latest price per symbol
    │   ├── seed_data.py             # Initial stock catalog
    │   └── price_update_service.py  # Update run and catalog seeding
    └── valuation/                   # Valuation engine
        ├── service.py               # Main valuation orchestrator
        ├── types.py                 # Valuation data types
        └── calculators.py           # Replay, assembly, aggregation
"""

# Alerts
from finsight.services.alerts import AlertService, AlertSweepResult
# Exceptions
from finsight.services.exceptions import (
    # Base exceptions
    ServiceError,
    # Validation exceptions
    ValidationError,
    InvalidTradeError,
    OversellError,
    # Not found exceptions
    NotFoundError,
    UserNotFoundError,
    PortfolioNotFoundError,
    StockNotFoundError,
    AlertNotFoundError,
    # Market data exceptions
    MarketDataError,
    ProviderUnavailableError,
)
# Market Data
from finsight.services.market_data import (
    PriceProvider,
    PriceQuote,
    SimulatedPriceProvider,
    PriceSnapshotService,
    PriceUpdateService,
    PriceUpdateResult,
)
# Valuation Service
from finsight.services.valuation import ValuationService

__all__ = [
    # ==========================================================================
    # Services
    # ==========================================================================
    "ValuationService",
    "PriceSnapshotService",
    "PriceUpdateService",
    "PriceUpdateResult",
    "AlertService",
    "AlertSweepResult",
    # Price providers
    "PriceProvider",
    "PriceQuote",
    "SimulatedPriceProvider",

    # ==========================================================================
    # Exceptions
    # ==========================================================================
    "ServiceError",
    "ValidationError",
    "InvalidTradeError",
    "OversellError",
    "NotFoundError",
    "UserNotFoundError",
    "PortfolioNotFoundError",
    "StockNotFoundError",
    "AlertNotFoundError",
    "MarketDataError",
    "ProviderUnavailableError",
]
