"""Tests for TradingClient"""

from unittest.mock import Mock

import pytest
import requests

from stocktrader.client import NETWORK_ERROR, TradingClient

from conftest import make_response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def client(endpoints, portfolio, history, session):
    return TradingClient(endpoints=endpoints, portfolio=portfolio, history=history, session=session, timeout=5)


TRADE = {
    "id": "f" * 32,
    "symbol": "AAPL",
    "price": "200.00",
    "action": "buy",
    "quantity": 5,
    "timestamp": "2024-05-01T12:00:00.000Z",
    "total_cost": "1000.00",
    "success": True,
    "message": "Successfully bought 5 shares of AAPL at $200.00 each",
}


class TestRequests:
    def test_buy_posts_to_buy_endpoint(self, client, session):
        session.post.return_value = make_response(200, TRADE)

        result = client.buy("aapl", "5", price=200)

        session.post.assert_called_once_with(
            "http://test/api/buy",
            json={"symbol": "AAPL", "quantity": 5, "action": "buy", "stock_price": 200},
            timeout=5,
        )
        assert result.ok
        assert result.data == TRADE

    def test_price_is_optional(self, client, session):
        session.post.return_value = make_response(200, {**TRADE, "action": "sell"})

        client.sell("AAPL", 1)

        assert "stock_price" not in session.post.call_args.kwargs["json"]

    def test_check_sends_symbol_when_given(self, client, session):
        session.post.return_value = make_response(200, [])

        client.check_stock(" msft ")

        session.post.assert_called_once_with(
            "http://test/api/check", json={"stockSymbol": "MSFT"}, timeout=5
        )

    def test_check_without_symbol(self, client, session):
        session.post.return_value = make_response(200, [])

        result = client.check_stock()

        assert session.post.call_args.kwargs["json"] == {}
        assert result.ok and result.operation == "check"

    def test_missing_endpoint_is_rejected(self, portfolio, history):
        with pytest.raises(ValueError):
            TradingClient(endpoints={"check": "x"}, portfolio=portfolio, history=history)


class TestValidation:
    @pytest.mark.parametrize("symbol", ["", "   ", None])
    def test_symbol_required(self, client, session, symbol):
        result = client.buy(symbol, 1)

        assert not result.ok
        assert result.error == "Please enter a stock symbol"
        session.post.assert_not_called()

    @pytest.mark.parametrize("quantity", [0, -1, "", "abc", None])
    def test_quantity_required(self, client, session, quantity):
        result = client.sell("AAPL", quantity)

        assert not result.ok
        assert result.error == "Please enter a valid quantity"
        session.post.assert_not_called()


class TestFailures:
    def test_network_error(self, client, session, portfolio):
        session.post.side_effect = requests.exceptions.ConnectionError("refused")

        result = client.buy("AAPL", 1)

        assert not result.ok
        assert result.error == NETWORK_ERROR
        assert len(portfolio) == 0

    def test_timeout_is_a_network_error(self, client, session):
        session.post.side_effect = requests.exceptions.Timeout()

        assert client.check_stock().error == NETWORK_ERROR

    def test_error_message_comes_from_response(self, client, session, portfolio, history):
        session.post.return_value = make_response(
            500, {"error": "Internal server error", "message": "Invalid JSON body", "success": False}
        )

        result = client.buy("AAPL", 1)

        assert result.error == "Invalid JSON body"
        assert len(portfolio) == 0
        assert history.recent() == []

    def test_fallback_message(self, client, session):
        session.post.return_value = make_response(502, {"error": "Bad gateway"})

        assert client.sell("AAPL", 1).error == "Failed to place sell order"

    @pytest.mark.parametrize("body", [
        {"message": "CORS preflight successful"},
        [{"symbol": "AAPL", "price": "180.00"}],
        {"symbol": "AAPL", "quantity": "lots", "action": "buy"},
        None,
    ])
    def test_unexpected_success_body(self, client, session, portfolio, history, body):
        session.post.return_value = make_response(200, body)

        result = client.buy("AAPL", 1)

        assert not result.ok
        assert result.error == "Failed to place buy order"
        assert len(portfolio) == 0
        assert history.recent() == []

    def test_non_json_response(self, client, session):
        response = make_response(502)
        response.json.side_effect = ValueError("no json")
        session.post.return_value = response

        assert client.check_stock().error == "Failed to check stock"


class TestLocalBookkeeping:
    def test_successful_trades_update_portfolio_and_history(self, client, session, portfolio, history):
        session.post.return_value = make_response(200, TRADE)

        client.buy("AAPL", 5)

        assert portfolio.quantity_of("AAPL") == 5
        assert history.recent() == [TRADE]

    def test_portfolio_law_against_service(self, endpoints, portfolio, history, service_session):
        client = TradingClient(endpoints=endpoints, portfolio=portfolio, history=history, session=service_session)

        client.buy("AAPL", 2)
        client.buy("AAPL", 3)
        assert portfolio.quantity_of("AAPL") == 5

        client.sell("AAPL", 5)
        assert portfolio.get("AAPL") is None
        assert [e["action"] for e in history.recent()] == ["buy", "buy", "sell"]

    def test_check_does_not_touch_portfolio(self, endpoints, portfolio, history, service_session):
        client = TradingClient(endpoints=endpoints, portfolio=portfolio, history=history, session=service_session)

        result = client.check_stock()

        assert result.ok
        assert len(result.data) == 5
        assert len(portfolio) == 0
