"""Mock trading handlers: check, buy and sell."""
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional, Union

from ..utils import config, get_logger, log_trade
from .generator import MarketDataGenerator, RandomMarketData, QUOTE_BANDS, band_for
from .models import StockQuote, TradeAction, TradeResult, to_money

logger = get_logger(__name__)

CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token",
    "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
}

OPERATIONS = ("check", "buy", "sell")

PAST_TENSE = {TradeAction.BUY: "bought", TradeAction.SELL: "sold"}

MAX_QUANTITY = 1_000_000_000
MAX_PRICE = Decimal("1000000000")


class MalformedRequestError(ValueError):
    """Request body could not be interpreted."""


@dataclass
class ServiceResponse:
    """Transport-neutral HTTP response."""
    status_code: int
    body: Union[dict, list]
    headers: dict = field(default_factory=lambda: dict(CORS_HEADERS))

    def json(self) -> str:
        return json.dumps(self.body)

    def to_lambda(self) -> dict:
        """Shape expected by an API Gateway proxy integration."""
        return {
            "statusCode": self.status_code,
            "headers": self.headers,
            "body": self.json(),
        }


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with microsecond precision, e.g. 2024-05-01T12:00:00.123456Z"""
    return moment.astimezone(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def parse_body(raw: Any) -> dict:
    """Decode a request body into a dict. Empty bodies decode to {}."""
    if raw is None:
        return {}
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        if not raw.strip():
            return {}
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise MalformedRequestError(f"Invalid JSON body: {e}") from e
    if not isinstance(raw, dict):
        raise MalformedRequestError("Request body must be a JSON object")
    return raw


def _is_absent(value: Any) -> bool:
    return value is None or value == ""


def _parse_symbol(value: Any, default: str) -> str:
    if _is_absent(value):
        return default
    if not isinstance(value, str):
        raise MalformedRequestError(f"symbol must be a string, got {value!r}")
    return value.strip().upper() or default


def _parse_quantity(value: Any) -> int:
    if isinstance(value, bool):
        raise MalformedRequestError(f"quantity must be a positive integer, got {value!r}")
    try:
        quantity = int(Decimal(str(value)))
    except (InvalidOperation, ValueError, OverflowError) as e:
        raise MalformedRequestError(f"quantity must be a positive integer, got {value!r}") from e
    if quantity <= 0:
        raise MalformedRequestError(f"quantity must be a positive integer, got {value!r}")
    if quantity > MAX_QUANTITY:
        raise MalformedRequestError(f"quantity must not exceed {MAX_QUANTITY:,}, got {value!r}")
    return quantity


def _parse_price(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise MalformedRequestError(f"price must be a positive number, got {value!r}")
    try:
        price = to_money(value)
    except (InvalidOperation, ValueError) as e:
        raise MalformedRequestError(f"price must be a positive number, got {value!r}") from e
    if not price.is_finite() or price <= 0:
        raise MalformedRequestError(f"price must be a positive number, got {value!r}")
    if price > MAX_PRICE:
        raise MalformedRequestError(f"price must not exceed {MAX_PRICE:,}, got {value!r}")
    return price


class MockTradingService:
    """
    Stateless mock of the trading backend.

    Every value that is not taken from the request comes from ``generator``
    and every timestamp from ``clock``, so both can be replaced in tests.
    """

    def __init__(
        self,
        generator: Optional[MarketDataGenerator] = None,
        clock: Callable[[], datetime] = utc_now,
        default_symbol: Optional[str] = None,
    ):
        self.generator = generator or RandomMarketData()
        self.clock = clock
        self.default_symbol = default_symbol or config.default_symbol

    def check_stock(self, body: dict) -> list[StockQuote]:
        """Quotes for the requested symbol, or for the whole fixed set."""
        requested = body.get("stockSymbol")
        if _is_absent(requested):
            symbols = list(QUOTE_BANDS)
        else:
            symbols = [_parse_symbol(requested, self.default_symbol)]
        return [self.generator.quote(symbol, band_for(symbol)) for symbol in symbols]

    def buy(self, body: dict) -> TradeResult:
        return self._trade(TradeAction.BUY, body)

    def sell(self, body: dict) -> TradeResult:
        return self._trade(TradeAction.SELL, body)

    def _trade(self, action: TradeAction, body: dict) -> TradeResult:
        symbol = _parse_symbol(body.get("symbol"), self.default_symbol)

        raw_quantity = body.get("quantity")
        quantity = self.generator.quantity() if _is_absent(raw_quantity) else _parse_quantity(raw_quantity)

        raw_price = body.get("stock_price")
        if _is_absent(raw_price):
            raw_price = body.get("price")
        price = self.generator.price() if _is_absent(raw_price) else _parse_price(raw_price)

        result = TradeResult(
            id=self.generator.order_id(),
            symbol=symbol,
            quantity=quantity,
            price=price,
            action=action,
            timestamp=format_timestamp(self.clock()),
            success=True,
            message=(
                f"Successfully {PAST_TENSE[action]} {quantity} shares of {symbol} "
                f"at ${price:.2f} each"
            ),
        )

        log_trade(
            f"MOCK {action.value.upper()}: {quantity} {symbol} @ ${price:.2f} "
            f"= ${result.total_cost:.2f} [{result.id}]"
        )
        return result

    def dispatch(self, operation: str, method: str, raw_body: Any = None) -> ServiceResponse:
        """
        Handle one HTTP request for ``operation``.

        Args:
            operation: One of check, buy, sell
            method: HTTP method of the request
            raw_body: JSON text, bytes, an already decoded dict, or None

        Returns:
            ServiceResponse with CORS headers. Preflight requests are
            acknowledged before the body is looked at; any failure becomes a
            500 with success=False.
        """
        if method.upper() == "OPTIONS":
            return ServiceResponse(200, {"message": "CORS preflight successful"})

        if operation not in OPERATIONS:
            raise ValueError(f"Unknown operation: {operation}")

        logger.debug(f"{operation} request: {raw_body!r}")

        try:
            body = parse_body(raw_body)
            if operation == "check":
                payload = [quote.to_dict() for quote in self.check_stock(body)]
            else:
                result = self.buy(body) if operation == "buy" else self.sell(body)
                payload = result.to_dict()
                logger.info(result.message)
        except Exception as e:
            logger.error(f"{operation} failed: {e}")
            return ServiceResponse(500, {
                "error": "Internal server error",
                "message": str(e) or e.__class__.__name__,
                "success": False,
            })

        return ServiceResponse(200, payload)


def make_lambda_handler(operation: str, service: Optional[MockTradingService] = None):
    """Build an API Gateway proxy handler for ``operation``."""
    service = service or MockTradingService()

    def handler(event: dict, context=None) -> dict:
        logger.debug(f"Event: {event}")
        method = event.get("httpMethod") or "POST"
        return service.dispatch(operation, method, event.get("body")).to_lambda()

    return handler
