"""Mock stock trading demo: serverless check/buy/sell handlers and a trading client."""

__version__ = "0.1.0"
