# finsight/schemas/__init__.py
"""
Pydantic schemas for API request/response validation.

Organized by domain:
- alerts: Price alert CRUD and evaluation
- errors: Error response formats
- pagination: Pagination metadata for list endpoints
- portfolios: Portfolio CRUD operations
- prices: Price snapshot and refresh runs
- stocks: Simulated stock catalog
- transactions: Append-only ledger entries
- users: Portfolio owners
- validators: Reusable validation functions (symbol, currency)
- valuation: Holdings and portfolio summary

Usage:
    from finsight.schemas import PortfolioCreate, PortfolioResponse
    from finsight.schemas import TransactionCreate, TransactionResponse
    from finsight.schemas import PortfolioSummaryResponse
"""

from finsight.schemas.alerts import (
    AlertCreate,
    AlertResponse,
    AlertListResponse,
    AlertEvaluationResponse,
)
from finsight.schemas.errors import ErrorDetail, ValidationErrorDetail
from finsight.schemas.pagination import PaginationMeta
from finsight.schemas.portfolios import (
    PortfolioCreate,
    PortfolioUpdate,
    PortfolioResponse,
    PortfolioListResponse,
)
from finsight.schemas.prices import (
    MarketPriceResponse,
    MarketPriceListResponse,
    PriceRefreshResponse,
)
from finsight.schemas.stocks import StockResponse, StockListResponse, SectorListResponse
from finsight.schemas.transactions import (
    TransactionCreate,
    TransactionResponse,
    TransactionListResponse,
)
from finsight.schemas.users import UserCreate, UserResponse
from finsight.schemas.valuation import (
    HoldingResponse,
    HoldingsResponse,
    PortfolioSummaryResponse,
)

__all__ = [
    # Alerts
    "AlertCreate",
    "AlertResponse",
    "AlertListResponse",
    "AlertEvaluationResponse",
    # Errors
    "ErrorDetail",
    "ValidationErrorDetail",
    # Pagination
    "PaginationMeta",
    # Portfolios
    "PortfolioCreate",
    "PortfolioUpdate",
    "PortfolioResponse",
    "PortfolioListResponse",
    # Prices
    "MarketPriceResponse",
    "MarketPriceListResponse",
    "PriceRefreshResponse",
    # Stocks
    "StockResponse",
    "StockListResponse",
    "SectorListResponse",
    # Transactions
    "TransactionCreate",
    "TransactionResponse",
    "TransactionListResponse",
    # Users
    "UserCreate",
    "UserResponse",
    # Valuation
    "HoldingResponse",
    "HoldingsResponse",
    "PortfolioSummaryResponse",
]
