"""Random market data used by the mock handlers."""
import random
import secrets
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Protocol

from .models import StockQuote, to_money


@dataclass(frozen=True)
class QuoteBand:
    """Ranges a synthesised quote is drawn from."""
    base_price: int
    price_spread: int
    change_width: float
    base_volume: int
    volume_spread: int


QUOTE_BANDS: dict[str, QuoteBand] = {
    "GOOGL": QuoteBand(140, 30, 10.0, 800_000, 500_000),
    "AAPL": QuoteBand(170, 20, 8.0, 1_500_000, 1_000_000),
    "MSFT": QuoteBand(370, 25, 6.0, 1_200_000, 800_000),
    "TSLA": QuoteBand(240, 40, 12.0, 2_000_000, 1_500_000),
    "AMZN": QuoteBand(130, 20, 7.0, 900_000, 600_000),
}

# Used for symbols outside the fixed set
DEFAULT_BAND = QuoteBand(150, 50, 8.0, 1_000_000, 500_000)

DEFAULT_TRADE_PRICE_BASE = 150
DEFAULT_TRADE_PRICE_SPREAD = 50
MAX_DEFAULT_QUANTITY = 10


class MarketDataGenerator(Protocol):
    """Source of every random value the service hands out."""

    def quote(self, symbol: str, band: QuoteBand) -> StockQuote: ...

    def quantity(self) -> int: ...

    def price(self) -> Decimal: ...

    def order_id(self) -> str: ...


class RandomMarketData:
    """Default generator backed by :mod:`random` and :mod:`secrets`."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def quote(self, symbol: str, band: QuoteBand) -> StockQuote:
        half = band.change_width / 2
        return StockQuote(
            symbol=symbol,
            price=to_money(band.base_price + self.rng.randrange(band.price_spread)),
            change=to_money(round(self.rng.uniform(-half, half), 2)),
            volume=band.base_volume + self.rng.randrange(band.volume_spread),
        )

    def quantity(self) -> int:
        return self.rng.randint(1, MAX_DEFAULT_QUANTITY)

    def price(self) -> Decimal:
        return to_money(DEFAULT_TRADE_PRICE_BASE + self.rng.randint(1, DEFAULT_TRADE_PRICE_SPREAD))

    def order_id(self) -> str:
        return secrets.token_hex(16)


def band_for(symbol: str) -> QuoteBand:
    return QUOTE_BANDS.get(symbol, DEFAULT_BAND)
