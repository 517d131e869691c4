"""Tests for the command line client"""

import json

import pytest

import main as cli


@pytest.fixture(autouse=True)
def isolated_storage(tmp_path, monkeypatch):
    path = tmp_path / "storage.json"
    monkeypatch.setenv("STOCKTRADER_STORAGE_PATH", str(path))
    return path


def test_endpoints_for_rewrites_base_url():
    endpoints = cli.endpoints_for("https://example.com/prod/")

    assert endpoints == {
        "check": "https://example.com/prod/api/check",
        "buy": "https://example.com/prod/api/buy",
        "sell": "https://example.com/prod/api/sell",
    }


def test_portfolio_is_default_action(capsys, isolated_storage):
    isolated_storage.write_text(json.dumps({"stockPortfolio": json.dumps([{"symbol": "AAPL", "quantity": 4}])}))

    assert cli.main([]) == 0

    out = capsys.readouterr().out
    assert "AAPL" in out and "4 shares" in out


def test_buy_validation_error_exits_nonzero(capsys):
    assert cli.main(["--buy", "AAPL", "0"]) == 1

    assert "Please enter a valid quantity" in capsys.readouterr().out


def test_buy_against_unreachable_service(capsys):
    code = cli.main(["--api-url", "http://127.0.0.1:9", "--buy", "AAPL", "1"])

    assert code == 1
    assert "Network error occurred" in capsys.readouterr().out


def test_reset_clears_local_state(capsys, isolated_storage):
    isolated_storage.write_text(json.dumps({
        "stockPortfolio": json.dumps([{"symbol": "AAPL", "quantity": 4}]),
        "stockTransactions": json.dumps([{"id": "x", "symbol": "AAPL"}]),
    }))

    assert cli.main(["--reset"]) == 0

    assert "No holdings" in capsys.readouterr().out
    stored = json.loads(isolated_storage.read_text())
    assert json.loads(stored["stockPortfolio"]) == []
    assert json.loads(stored["stockTransactions"]) == []
