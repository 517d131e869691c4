"""Text panels for the trading client.

Every function here is pure: the same input always yields the same text.
"""
from typing import Iterable

from .client import ClientResult
from .portfolio import Holding

RULE = "-" * 44


def _signed(value) -> str:
    try:
        return f"{float(value):+.2f}%"
    except (TypeError, ValueError):
        return "n/a"


def render_quotes(quotes: Iterable[dict]) -> str:
    lines = ["Stock Quotes", RULE, f"{'Symbol':<8}{'Price':>12}{'Change':>10}{'Volume':>14}"]
    for q in quotes:
        volume = q.get("volume")
        volume_text = f"{volume:,}" if isinstance(volume, int) else "n/a"
        lines.append(
            f"{q.get('symbol', '?'):<8}{'$' + str(q.get('price', 'n/a')):>12}"
            f"{_signed(q.get('change')):>10}{volume_text:>14}"
        )
    return "\n".join(lines)


def render_trade(result: dict) -> str:
    """Success panel echoing the fields of a trade result."""
    action = str(result.get("action", "trade")).upper()
    return "\n".join([
        f"{action} ORDER COMPLETE",
        RULE,
        f"  Order ID:   {result.get('id', '')}",
        f"  Symbol:     {result.get('symbol', '')}",
        f"  Quantity:   {result.get('quantity', '')}",
        f"  Price:      ${result.get('price', '')}",
        f"  Total:      ${result.get('total_cost', '')}",
        f"  Time:       {result.get('timestamp', '')}",
        f"  {result.get('message', '')}",
    ])


def render_error(message: str) -> str:
    return "\n".join(["ERROR", RULE, f"  {message}"])


def render_result(result: ClientResult) -> str:
    """Pick the panel for whatever a client action produced."""
    if not result.ok:
        return render_error(result.error or "Unknown error")
    if result.operation == "check":
        quotes = result.data if isinstance(result.data, list) else [result.data]
        return render_quotes(quotes)
    return render_trade(result.data)


def render_portfolio(holdings: Iterable[Holding]) -> str:
    holdings = list(holdings)
    if not holdings:
        return "Portfolio\n" + RULE + "\n  No holdings"
    lines = ["Portfolio", RULE]
    lines.extend(f"  {h.symbol:<8}{h.quantity:>8} shares" for h in holdings)
    return "\n".join(lines)


def render_history(entries: Iterable[dict]) -> str:
    entries = list(entries)
    if not entries:
        return "Recent Transactions\n" + RULE + "\n  No transactions yet"
    lines = ["Recent Transactions", RULE]
    for e in entries:
        lines.append(
            f"  {e.get('timestamp', '')}  {str(e.get('action', '')).upper():<5}"
            f"{e.get('quantity', '')!s:>5} {e.get('symbol', ''):<6} @ ${e.get('price', '')}"
        )
    return "\n".join(lines)
