"""Client-side portfolio and trade history.

Both are local bookkeeping kept in :class:`LocalStorage`. They are never
reconciled with the service, which keeps no ledger at all, so they are a
convenience view and not a source of truth.
"""
import json
from dataclasses import dataclass, asdict
from typing import Iterator, List, Optional

from ..utils import get_logger
from .storage import LocalStorage

PORTFOLIO_KEY = "stockPortfolio"
HISTORY_KEY = "stockTransactions"


@dataclass
class Holding:
    """A locally tracked position."""
    symbol: str
    quantity: int


class Portfolio:
    """
    In-memory list of holdings mirrored to local storage.

    Every mutation is written through immediately; the list is reloaded
    from storage on construction.
    """

    def __init__(self, storage: LocalStorage):
        self.logger = get_logger("portfolio")
        self.storage = storage
        self.holdings: List[Holding] = []
        self.load()

    def __iter__(self) -> Iterator[Holding]:
        return iter(self.holdings)

    def __len__(self) -> int:
        return len(self.holdings)

    def get(self, symbol: str) -> Optional[Holding]:
        symbol = symbol.upper()
        for holding in self.holdings:
            if holding.symbol == symbol:
                return holding
        return None

    def quantity_of(self, symbol: str) -> int:
        holding = self.get(symbol)
        return holding.quantity if holding else 0

    def apply_buy(self, symbol: str, quantity: int) -> Holding:
        """Add shares, creating the holding if needed."""
        symbol = symbol.upper()
        holding = self.get(symbol)
        if holding:
            holding.quantity += quantity
        else:
            holding = Holding(symbol=symbol, quantity=quantity)
            self.holdings.append(holding)
        self.save()
        return holding

    def apply_sell(self, symbol: str, quantity: int) -> Optional[Holding]:
        """Remove shares; the holding disappears at zero or below."""
        holding = self.get(symbol)
        if holding is None:
            self.logger.warning(f"No local holding in {symbol.upper()}, nothing to decrement")
            return None

        holding.quantity -= quantity
        if holding.quantity <= 0:
            self.holdings.remove(holding)
            holding = None
        self.save()
        return holding

    def apply_trade(self, result: dict) -> None:
        """Update holdings from a trade result returned by the service."""
        symbol = result["symbol"]
        quantity = int(result["quantity"])
        if result.get("action") == "sell":
            self.apply_sell(symbol, quantity)
        else:
            self.apply_buy(symbol, quantity)

    def clear(self) -> None:
        self.holdings = []
        self.save()

    def to_list(self) -> List[dict]:
        return [asdict(h) for h in self.holdings]

    def save(self):
        self.storage.set_item(PORTFOLIO_KEY, json.dumps(self.to_list()))

    def load(self):
        """Reload holdings; unreadable data leaves the portfolio empty."""
        self.holdings = []
        raw = self.storage.get_item(PORTFOLIO_KEY)
        if raw is None:
            return

        try:
            entries = json.loads(raw)
        except ValueError as e:
            self.logger.error(f"Error loading portfolio: {e}")
            return

        if not isinstance(entries, list):
            self.logger.error("Error loading portfolio: expected a list of holdings")
            return

        for entry in entries:
            try:
                holding = Holding(symbol=str(entry["symbol"]).upper(), quantity=int(entry["quantity"]))
            except (TypeError, KeyError, ValueError):
                self.logger.warning(f"Skipping malformed holding: {entry!r}")
                continue
            if holding.quantity > 0:
                self.holdings.append(holding)

        self.logger.debug(f"Loaded portfolio: {len(self.holdings)} holdings")


def _last(entries: List[dict], limit: int) -> List[dict]:
    """The newest ``limit`` entries; a limit of zero or less keeps none."""
    return entries[-limit:] if limit > 0 else []


class TradeHistory:
    """Most recent trade results, newest last."""

    def __init__(self, storage: LocalStorage, limit: int = 50):
        self.logger = get_logger("trade_history")
        self.storage = storage
        self.limit = limit
        self._entries: List[dict] = []
        self.load()

    def record(self, result: dict) -> None:
        self._entries = _last(self._entries + [dict(result)], self.limit)
        self.save()

    def recent(self, limit: Optional[int] = None) -> List[dict]:
        if limit is None:
            return list(self._entries)
        return _last(self._entries, limit)

    def clear(self) -> None:
        self._entries = []
        self.save()

    def save(self):
        self.storage.set_item(HISTORY_KEY, json.dumps(self._entries))

    def load(self):
        raw = self.storage.get_item(HISTORY_KEY)
        if raw is None:
            return
        try:
            entries = json.loads(raw)
        except ValueError as e:
            self.logger.error(f"Error loading trade history: {e}")
            return
        if isinstance(entries, list):
            self._entries = _last([e for e in entries if isinstance(e, dict)], self.limit)
