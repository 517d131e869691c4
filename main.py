#!/usr/bin/env python3
"""
Mock Stock Trading - command line client

Talks to the check/buy/sell mock functions and keeps a local portfolio
of what was bought and sold. The portfolio lives only in local storage and
is never reconciled with the service.

Usage:
    python main.py --check                  # Quotes for the default symbol set
    python main.py --check AAPL             # Quote for one symbol
    python main.py --buy AAPL 5 --price 200 # Mock buy
    python main.py --sell AAPL 5            # Mock sell
    python main.py --portfolio              # Local holdings
    python main.py --reset                  # Clear local holdings and history
    python main.py --serve                  # Run the local dev server
"""
import argparse

from stocktrader.utils import config, get_logger
from stocktrader.client import (
    TradingClient,
    render_history,
    render_portfolio,
    render_result,
)

logger = get_logger("main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Mock Stock Trading client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --check
  python main.py --buy TSLA 3
  python main.py --sell TSLA 3 --price 250
  python main.py --history
  python main.py --reset
        """,
    )

    parser.add_argument("--check", nargs="?", const="", metavar="SYMBOL",
                        help="Check quotes (optionally for one symbol)")
    parser.add_argument("--buy", nargs=2, metavar=("SYMBOL", "QUANTITY"),
                        help="Place a mock buy order")
    parser.add_argument("--sell", nargs=2, metavar=("SYMBOL", "QUANTITY"),
                        help="Place a mock sell order")
    parser.add_argument("--price", type=float,
                        help="Price per share for --buy/--sell (random if omitted)")
    parser.add_argument("--portfolio", action="store_true",
                        help="Show local holdings")
    parser.add_argument("--history", action="store_true",
                        help="Show recent local transactions")
    parser.add_argument("--reset", action="store_true",
                        help="Clear local holdings and transaction history")
    parser.add_argument("--serve", action="store_true",
                        help="Run the local development server")
    parser.add_argument("--api-url",
                        help="Override the service base URL")
    return parser


def endpoints_for(base_url: str) -> dict[str, str]:
    base = base_url.rstrip("/")
    return {name: base + url[len(config.api_base_url):] for name, url in config.endpoints.items()}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.serve:
        from web.app import main as serve
        serve()
        return 0

    endpoints = endpoints_for(args.api_url) if args.api_url else config.endpoints
    client = TradingClient(endpoints=endpoints)

    if args.check is not None:
        result = client.check_stock(args.check or None)
    elif args.buy:
        result = client.buy(args.buy[0], args.buy[1], args.price)
    elif args.sell:
        result = client.sell(args.sell[0], args.sell[1], args.price)
    elif args.history:
        print(render_history(client.history.recent()))
        return 0
    elif args.reset:
        client.portfolio.clear()
        client.history.clear()
        logger.info("Local portfolio and transaction history cleared")
        print(render_portfolio(client.portfolio))
        return 0
    else:
        print(render_portfolio(client.portfolio))
        return 0

    print(render_result(result))
    if result.ok and result.operation != "check":
        print()
        print(render_portfolio(client.portfolio))
    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
