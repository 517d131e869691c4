"""Pytest fixtures for the mock trading tests"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import Mock

import pytest

from stocktrader.client import LocalStorage, Portfolio, TradeHistory
from stocktrader.service import MockTradingService, StockQuote, to_money

FIXED_TIME = datetime(2024, 5, 1, 12, 30, 45, 123456, tzinfo=timezone.utc)
FIXED_ID = "0123456789abcdef0123456789abcdef"


class FixedMarketData:
    """Deterministic generator: band base values, fixed trade defaults"""

    def __init__(self, price="175.50", quantity=3, change="1.25"):
        self._price = to_money(price)
        self._quantity = quantity
        self._change = to_money(change)

    def quote(self, symbol, band):
        return StockQuote(
            symbol=symbol,
            price=to_money(band.base_price),
            change=self._change,
            volume=band.base_volume,
        )

    def quantity(self) -> int:
        return self._quantity

    def price(self) -> Decimal:
        return self._price

    def order_id(self) -> str:
        return FIXED_ID


@pytest.fixture
def fixed_generator():
    return FixedMarketData()


@pytest.fixture
def service(fixed_generator) -> MockTradingService:
    """Service with deterministic data and a frozen clock"""
    return MockTradingService(generator=fixed_generator, clock=lambda: FIXED_TIME)


@pytest.fixture
def random_service() -> MockTradingService:
    """Service with the real random generator and clock"""
    return MockTradingService()


@pytest.fixture
def storage() -> LocalStorage:
    """In-memory local storage"""
    return LocalStorage()


@pytest.fixture
def portfolio(storage) -> Portfolio:
    return Portfolio(storage)


@pytest.fixture
def history(storage) -> TradeHistory:
    return TradeHistory(storage, limit=5)


@pytest.fixture
def endpoints() -> dict:
    return {
        "check": "http://test/api/check",
        "buy": "http://test/api/buy",
        "sell": "http://test/api/sell",
    }


def make_response(status_code=200, data=None):
    """requests.Response stand-in"""
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = data
    return response


class ServiceSession:
    """requests.Session stand-in that answers from a MockTradingService in-process"""

    def __init__(self, service, endpoints):
        self.service = service
        self.routes = {url: op for op, url in endpoints.items()}
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append((url, json))
        result = self.service.dispatch(self.routes[url], "POST", json)
        return make_response(result.status_code, result.body)


@pytest.fixture
def service_session(service, endpoints) -> ServiceSession:
    return ServiceSession(service, endpoints)
