"""HTTP client for the mock trading service."""
from dataclasses import dataclass
from typing import Any, Optional

import requests

from ..utils import config, get_logger
from .portfolio import Portfolio, TradeHistory
from .storage import LocalStorage

NETWORK_ERROR = "Network error occurred"

FALLBACK_ERRORS = {
    "check": "Failed to check stock",
    "buy": "Failed to place buy order",
    "sell": "Failed to place sell order",
}


def _is_trade_result(data: Any) -> bool:
    if not isinstance(data, dict) or not all(key in data for key in ("symbol", "quantity", "action")):
        return False
    return isinstance(data["symbol"], str) and isinstance(data["quantity"], int) and not isinstance(data["quantity"], bool)


@dataclass(frozen=True)
class ClientResult:
    """What a single client action produced: data on success, an error message otherwise."""
    operation: str
    ok: bool
    data: Any = None
    error: Optional[str] = None


class TradingClient:
    """
    Calls the check/buy/sell endpoints and keeps the local portfolio in step.

    The endpoint map decides where requests go, so the same client serves
    any deployment (local Flask server, Vercel, API Gateway).
    """

    def __init__(
        self,
        endpoints: Optional[dict[str, str]] = None,
        portfolio: Optional[Portfolio] = None,
        history: Optional[TradeHistory] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.logger = get_logger("trading_client")
        self.endpoints = endpoints or config.endpoints
        missing = set(FALLBACK_ERRORS) - set(self.endpoints)
        if missing:
            raise ValueError(f"Endpoint map is missing: {', '.join(sorted(missing))}")

        if portfolio is None or history is None:
            storage = LocalStorage(config.storage_path)
            portfolio = portfolio if portfolio is not None else Portfolio(storage)
            history = history if history is not None else TradeHistory(storage, config.history_limit)
        self.portfolio = portfolio
        self.history = history
        self.session = session or requests.Session()
        self.timeout = timeout or config.request_timeout

    def check_stock(self, symbol: Optional[str] = None) -> ClientResult:
        """Fetch quotes; without a symbol the service returns its full list."""
        payload = {"stockSymbol": symbol.strip().upper()} if symbol and symbol.strip() else {}
        return self._post("check", payload)

    def buy(self, symbol: str, quantity: Any, price: Optional[float] = None) -> ClientResult:
        return self._trade("buy", symbol, quantity, price)

    def sell(self, symbol: str, quantity: Any, price: Optional[float] = None) -> ClientResult:
        return self._trade("sell", symbol, quantity, price)

    def _trade(self, action: str, symbol: str, quantity: Any, price: Optional[float]) -> ClientResult:
        symbol = (symbol or "").strip().upper()
        if not symbol:
            return ClientResult(action, ok=False, error="Please enter a stock symbol")

        try:
            quantity = int(quantity)
        except (TypeError, ValueError):
            quantity = 0
        if quantity <= 0:
            return ClientResult(action, ok=False, error="Please enter a valid quantity")

        payload = {"symbol": symbol, "quantity": quantity, "action": action}
        if price is not None:
            payload["stock_price"] = price

        result = self._post(action, payload)
        if result.ok and not _is_trade_result(result.data):
            self.logger.error(f"{action}: unexpected response body {result.data!r}")
            return ClientResult(action, ok=False, data=result.data, error=FALLBACK_ERRORS[action])
        if result.ok:
            self.portfolio.apply_trade(result.data)
            self.history.record(result.data)
        return result

    def _post(self, operation: str, payload: dict) -> ClientResult:
        url = self.endpoints[operation]
        self.logger.info(f"POST {url} {payload}")

        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"{operation} request failed: {e}")
            return ClientResult(operation, ok=False, error=NETWORK_ERROR)

        try:
            data = response.json()
        except ValueError:
            self.logger.error(f"{operation}: response from {url} is not JSON (status {response.status_code})")
            return ClientResult(operation, ok=False, error=FALLBACK_ERRORS[operation])

        if not response.ok:
            message = data.get("message") if isinstance(data, dict) else None
            self.logger.warning(f"{operation} rejected ({response.status_code}): {message}")
            return ClientResult(operation, ok=False, data=data, error=message or FALLBACK_ERRORS[operation])

        return ClientResult(operation, ok=True, data=data)
