# finsight/services/market_data/base.py
"""
Abstract interface for price providers.

A price provider turns the current state of a catalog stock into its next
quote. The application ships a simulator; the interface leaves room for a
real feed without touching the update service.

Design Principles:
- Dependency Inversion: PriceUpdateService depends on PriceProvider, not the simulator
- DRY: Common retry logic implemented once in the base class
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, TypeVar, Callable, Any

from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
)

from finsight.services.exceptions import ProviderUnavailableError

if TYPE_CHECKING:
    from finsight.models import Stock

logger = logging.getLogger(__name__)

T = TypeVar('T')


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class PriceQuote:
    """
    One quote for a symbol, as produced by a provider.

    Attributes:
        symbol: Uppercase ticker
        price: New current price
        day_high: Highest price seen today, including this quote
        day_low: Lowest price seen today, including this quote
        volume: Traded volume
        timestamp: When the quote was produced (UTC)
    """

    symbol: str
    price: Decimal
    day_high: Decimal
    day_low: Decimal
    volume: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.price <= 0:
            raise ValueError(f"price must be positive, got {self.price}")
        if self.day_high < self.day_low:
            raise ValueError(f"day_high ({self.day_high}) cannot be less than day_low ({self.day_low})")


# =============================================================================
# ABSTRACT BASE CLASS
# =============================================================================

class PriceProvider(ABC):
    """
    Abstract base class for price providers.

    Retry Behavior:
        `_execute_with_retry` retries ProviderUnavailableError with
        exponential backoff. Subclasses tune it via class attributes:

        - MAX_RETRY_ATTEMPTS: Total attempts (default: 3)
        - RETRY_MIN_WAIT: Minimum wait in seconds (default: 1)
        - RETRY_MAX_WAIT: Maximum wait in seconds (default: 10)
        - RETRY_MULTIPLIER: Exponential multiplier (default: 1)
    """

    MAX_RETRY_ATTEMPTS: int = 3
    RETRY_MIN_WAIT: int = 1
    RETRY_MAX_WAIT: int = 10
    RETRY_MULTIPLIER: int = 1

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this provider, used in logs and errors."""
        pass

    @abstractmethod
    def next_quote(self, stock: "Stock") -> PriceQuote:
        """
        Produce the next quote for a catalog stock.

        Args:
            stock: Catalog row carrying the current price and day range

        Returns:
            PriceQuote for stock.symbol

        Raises:
            ProviderUnavailableError: Transient failure (retryable)
        """
        pass

    def get_quote(self, stock: "Stock") -> PriceQuote:
        """next_quote wrapped with retry on transient failures."""
        return self._execute_with_retry(self.next_quote, stock)

    # =========================================================================
    # RETRY HELPER METHOD
    # =========================================================================

    def _execute_with_retry(
            self,
            func: Callable[..., T],
            *args: Any,
            **kwargs: Any,
    ) -> T:
        """
        Execute a function with retry logic for transient failures.

        Only ProviderUnavailableError is retried. Anything else propagates
        on the first failure.

        Raises:
            The last exception if all retries fail
        """

        @retry(
            stop=stop_after_attempt(self.MAX_RETRY_ATTEMPTS),
            wait=wait_exponential(
                multiplier=self.RETRY_MULTIPLIER,
                min=self.RETRY_MIN_WAIT,
                max=self.RETRY_MAX_WAIT,
            ),
            retry=retry_if_exception_type(ProviderUnavailableError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        def _inner() -> T:
            return func(*args, **kwargs)

        return _inner()

    def is_available(self) -> bool:
        """Default health check; subclasses may override."""
        return True
