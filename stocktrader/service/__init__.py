from .models import StockQuote, TradeResult, TradeAction, to_money
from .generator import MarketDataGenerator, RandomMarketData, QuoteBand, QUOTE_BANDS
from .handlers import (
    MockTradingService,
    ServiceResponse,
    MalformedRequestError,
    CORS_HEADERS,
    make_lambda_handler,
)

__all__ = [
    # Data shapes
    "StockQuote",
    "TradeResult",
    "TradeAction",
    "to_money",
    # Randomness
    "MarketDataGenerator",
    "RandomMarketData",
    "QuoteBand",
    "QUOTE_BANDS",
    # Handlers
    "MockTradingService",
    "ServiceResponse",
    "MalformedRequestError",
    "CORS_HEADERS",
    "make_lambda_handler",
]
