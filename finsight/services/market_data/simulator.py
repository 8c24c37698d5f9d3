# finsight/services/market_data/simulator.py
"""
Random-walk price simulator.

Each quote moves the current price by a uniform random fraction in
[-volatility/2, +volatility/2), widens the day range to include the new
price and draws a fresh volume.

Usage:
    provider = SimulatedPriceProvider(volatility=0.04, rng=random.Random(42))
    quote = provider.next_quote(stock)
"""

import logging
import math
import random
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP

from finsight.models import Stock
from finsight.services.constants import (
    CURRENCY_PRECISION,
    DEFAULT_PRICE_VOLATILITY,
    VOLUME_MIN,
    VOLUME_SPAN,
)
from finsight.services.market_data.base import PriceProvider, PriceQuote

logger = logging.getLogger(__name__)


class SimulatedPriceProvider(PriceProvider):
    """
    Price provider that perturbs the last known price.

    Args:
        volatility: Total width of the move (0.04 = up to +/-2%)
        rng: Random source; pass a seeded random.Random for reproducible runs
    """

    def __init__(
            self,
            volatility: float = DEFAULT_PRICE_VOLATILITY,
            rng: random.Random | None = None,
    ) -> None:
        if not 0 < volatility < 1:
            raise ValueError(f"volatility must be in (0, 1), got {volatility}")
        self._volatility = volatility
        self._rng = rng or random.Random()
        logger.info(f"SimulatedPriceProvider initialized (volatility={volatility})")

    @property
    def name(self) -> str:
        return "simulator"

    @property
    def volatility(self) -> float:
        return self._volatility

    def next_quote(self, stock: Stock) -> PriceQuote:
        change = (self._rng.random() - 0.5) * self._volatility
        new_price = self._round(Decimal(str(float(stock.current_price) * (1 + change))))

        # A price cannot round down to zero from a positive start
        if new_price <= 0:
            new_price = CURRENCY_PRECISION

        day_high = max(stock.day_high if stock.day_high is not None else new_price, new_price)
        day_low = min(stock.day_low if stock.day_low is not None else new_price, new_price)
        volume = math.floor(self._rng.random() * VOLUME_SPAN) + VOLUME_MIN

        return PriceQuote(
            symbol=stock.symbol,
            price=new_price,
            day_high=self._round(Decimal(day_high)),
            day_low=self._round(Decimal(day_low)),
            volume=volume,
            timestamp=datetime.now(timezone.utc),
        )

    @staticmethod
    def _round(value: Decimal) -> Decimal:
        return value.quantize(CURRENCY_PRECISION, rounding=ROUND_HALF_UP)
