"""Sell endpoint for Vercel serverless."""
import sys
from pathlib import Path

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from stocktrader.service.vercel import ServiceRequestHandler


class handler(ServiceRequestHandler):
    operation = "sell"
