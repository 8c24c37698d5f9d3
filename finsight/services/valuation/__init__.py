# finsight/services/valuation/__init__.py
"""
Valuation Service Package.

Derives holdings and portfolio totals from the transaction ledger and the
latest price snapshot. Nothing here is persisted; every call recomputes.

Usage:
    from finsight.services.valuation import ValuationService

    service = ValuationService()
    summary = service.compute_summary(db, portfolio_id=1)

Architecture:
    valuation/
    ├── __init__.py              # This file - package exports
    ├── types.py                 # Internal data classes
    ├── calculators.py           # Replay, assembly, aggregation
    └── service.py               # ValuationService (orchestrator)

Data Flow:
    Transactions → TradeRecord (validated)
    TradeRecords per symbol → CostBasisReplayCalculator → ReplayResult
    ReplayResult + snapshot price → HoldingAssembler → Holding
    Holdings → SummaryAggregator → PortfolioSummary
"""

# Calculators (for testing / direct usage)
from finsight.services.valuation.calculators import (
    CostBasisReplayCalculator,
    HoldingAssembler,
    SummaryAggregator,
)
# Main service
from finsight.services.valuation.service import ValuationService
# Internal types (for advanced usage / testing)
from finsight.services.valuation.types import (
    TradeRecord,
    ReplayResult,
    Holding,
    PortfolioSummary,
)

__all__ = [
    # Main service
    "ValuationService",

    # Data types
    "TradeRecord",
    "ReplayResult",
    "Holding",
    "PortfolioSummary",

    # Calculators (for testing)
    "CostBasisReplayCalculator",
    "HoldingAssembler",
    "SummaryAggregator",
]
