# finsight/services/exceptions.py
"""
Service layer exceptions.

These exceptions represent domain-specific errors and contain NO HTTP knowledge.
The application layer maps them to HTTP responses via global exception handlers.

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    │   ├── InvalidTradeError
    │   └── OversellError
    ├── NotFoundError
    │   ├── UserNotFoundError
    │   ├── PortfolioNotFoundError
    │   ├── StockNotFoundError
    │   └── AlertNotFoundError
    └── MarketDataError
        └── ProviderUnavailableError
"""

from decimal import Decimal


def format_quantity(value: Decimal) -> str:
    """Fixed-point text for a share quantity: 0E-8 becomes "0", 10.50000000 becomes "10.5"."""
    return f"{value.normalize():f}"


class ServiceError(Exception):
    """
    Base exception for all service layer errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ServiceError):
    """
    Raised when input validation fails.

    This is for programmatic validation errors inside the services, NOT for
    request body validation which is handled by Pydantic.

    Attributes:
        field: The field that failed validation (optional)
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class InvalidTradeError(ValidationError):
    """
    Raised when a ledger record cannot be replayed.

    Covers non-positive quantity or price and unknown transaction types.
    """
    pass


class OversellError(ValidationError):
    """
    Raised when a SELL exceeds the quantity held at that point of the replay.

    Attributes:
        symbol: The symbol being sold
        requested: Quantity in the SELL record
        held: Quantity held before the SELL
    """

    def __init__(self, symbol: str, requested: Decimal, held: Decimal) -> None:
        self.symbol = symbol
        self.requested = requested
        self.held = held
        super().__init__(
            f"Cannot sell {format_quantity(requested)} shares of {symbol}. "
            f"Only {format_quantity(held)} shares available.",
            field="quantity",
        )


# =============================================================================
# NOT FOUND ERRORS
# =============================================================================


class NotFoundError(ServiceError):
    """
    Base exception for resource not found errors.

    Attributes:
        resource_type: Type of resource (e.g., "Portfolio", "Stock")
        resource_id: Identifier of the resource
    """

    def __init__(
            self,
            message: str,
            resource_type: str | None = None,
            resource_id: int | str | None = None,
    ) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(message)


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(
            f"User {user_id} not found",
            resource_type="User",
            resource_id=user_id,
        )


class PortfolioNotFoundError(NotFoundError):
    """
    Raised when a portfolio cannot be found.

    Attributes:
        portfolio_id: ID of the portfolio that was not found
    """

    def __init__(self, portfolio_id: int) -> None:
        self.portfolio_id = portfolio_id
        super().__init__(
            f"Portfolio {portfolio_id} not found",
            resource_type="Portfolio",
            resource_id=portfolio_id,
        )


class StockNotFoundError(NotFoundError):
    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(
            f"Stock '{symbol}' not found",
            resource_type="Stock",
            resource_id=symbol,
        )


class AlertNotFoundError(NotFoundError):
    def __init__(self, alert_id: int) -> None:
        self.alert_id = alert_id
        super().__init__(
            f"Alert {alert_id} not found",
            resource_type="Alert",
            resource_id=alert_id,
        )


# =============================================================================
# MARKET DATA PROVIDER ERRORS
# =============================================================================


class MarketDataError(ServiceError):
    """
    Base exception for price provider failures.

    Attributes:
        provider: Name of the provider that failed
    """

    def __init__(self, message: str, provider: str | None = None) -> None:
        self.provider = provider
        super().__init__(message)


class ProviderUnavailableError(MarketDataError):
    """
    Raised when a price provider is temporarily unavailable.

    This is a retryable error.
    """

    def __init__(self, provider: str, reason: str) -> None:
        message = f"Provider '{provider}' is unavailable: {reason}"
        super().__init__(message, provider=provider)
        self.reason = reason


__all__ = [
    # Base
    "ServiceError",
    # Validation
    "ValidationError",
    "InvalidTradeError",
    "OversellError",
    # Not Found
    "NotFoundError",
    "UserNotFoundError",
    "PortfolioNotFoundError",
    "StockNotFoundError",
    "AlertNotFoundError",
    # Market Data
    "MarketDataError",
    "ProviderUnavailableError",
]
