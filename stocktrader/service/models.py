"""Data shapes exchanged between the mock service and the trading client."""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any

CENT = Decimal("0.01")


def to_money(value: Any) -> Decimal:
    """Quantize a number (or numeric string) to two fractional digits."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


class TradeAction(Enum):
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class StockQuote:
    """A synthesised quote for a single symbol."""
    symbol: str
    price: Decimal
    change: Decimal
    volume: int

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "price": f"{self.price:.2f}",
            "change": f"{self.change:.2f}",
            "volume": self.volume,
        }


@dataclass(frozen=True)
class TradeResult:
    """
    Outcome of a mock buy or sell.

    Attributes:
        id: Random 32-character hex token
        symbol: Uppercased ticker
        quantity: Number of shares
        price: Per-share price, two fractional digits
        action: buy or sell
        timestamp: ISO-8601 UTC instant of handler execution
        success: Always True for well-formed requests
        message: Human-readable summary
    """
    id: str
    symbol: str
    quantity: int
    price: Decimal
    action: TradeAction
    timestamp: str
    success: bool = True
    message: str = ""

    @property
    def total_cost(self) -> Decimal:
        return to_money(self.price * self.quantity)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "symbol": self.symbol,
            "price": f"{self.price:.2f}",
            "action": self.action.value,
            "quantity": self.quantity,
            "timestamp": self.timestamp,
            "total_cost": f"{self.total_cost:.2f}",
            "success": self.success,
            "message": self.message,
        }
