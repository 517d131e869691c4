from .storage import LocalStorage
from .portfolio import Portfolio, Holding, TradeHistory, PORTFOLIO_KEY, HISTORY_KEY
from .client import TradingClient, ClientResult, NETWORK_ERROR
from .render import (
    render_quotes,
    render_trade,
    render_error,
    render_result,
    render_portfolio,
    render_history,
)

__all__ = [
    # State
    "LocalStorage",
    "Portfolio",
    "Holding",
    "TradeHistory",
    "PORTFOLIO_KEY",
    "HISTORY_KEY",
    # HTTP
    "TradingClient",
    "ClientResult",
    "NETWORK_ERROR",
    # Rendering
    "render_quotes",
    "render_trade",
    "render_error",
    "render_result",
    "render_portfolio",
    "render_history",
]
