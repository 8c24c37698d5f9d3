# finsight/routers/__init__.py
"""
API routers for FinSight.

Each router handles a specific domain:
- users: Account records
- portfolios: Portfolio CRUD
- transactions: Append-only BUY/SELL ledger
- valuation: Holdings and P&L computed from the ledger
- stocks: Simulated instrument catalog and movers
- prices: Latest price snapshot and manual refresh
- alerts: Price alerts and evaluation sweeps
"""

from finsight.routers.alerts import router as alerts_router
from finsight.routers.portfolios import router as portfolios_router
from finsight.routers.prices import router as prices_router
from finsight.routers.stocks import router as stocks_router
from finsight.routers.transactions import router as transactions_router
from finsight.routers.users import router as users_router
from finsight.routers.valuation import router as valuation_router

__all__ = [
    "users_router",
    "portfolios_router",
    "transactions_router",
    "valuation_router",
    "stocks_router",
    "prices_router",
    "alerts_router",
]
