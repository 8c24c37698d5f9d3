# finsight/services/market_data/__init__.py
"""
Market data services package.

This package contains:
- Abstract interface for price providers (base.py)
- Random-walk simulator implementation (simulator.py)
- Price snapshot store (snapshot.py)
- Update orchestration and catalog seeding (price_update_service.py)

Usage:
    from finsight.services.market_data import (
        PriceSnapshotService,
        PriceUpdateService,
        SimulatedPriceProvider,
    )

Architecture:
    PriceProvider (ABC)
    └── SimulatedPriceProvider (concrete)

    PriceUpdateService
    └── Applies quotes to stocks
    └── Upserts snapshot rows via PriceSnapshotService
"""

from finsight.services.market_data.base import PriceProvider, PriceQuote
from finsight.services.market_data.price_update_service import (
    PriceUpdateService,
    PriceUpdateResult,
)
from finsight.services.market_data.seed_data import SEED_STOCKS
from finsight.services.market_data.simulator import SimulatedPriceProvider
from finsight.services.market_data.snapshot import PriceSnapshotService

__all__ = [
    # Abstract interface
    "PriceProvider",
    "PriceQuote",
    # Concrete implementations
    "SimulatedPriceProvider",
    # Snapshot
    "PriceSnapshotService",
    # Update service
    "PriceUpdateService",
    "PriceUpdateResult",
    "SEED_STOCKS",
]
