"""BaseHTTPRequestHandler glue for serverless deployments (Vercel style)."""
from http.server import BaseHTTPRequestHandler
from typing import Optional

from ..utils import get_logger
from .handlers import MockTradingService, ServiceResponse

logger = get_logger(__name__)

_service: Optional[MockTradingService] = None


def get_service() -> MockTradingService:
    global _service
    if _service is None:
        _service = MockTradingService()
    return _service


class ServiceRequestHandler(BaseHTTPRequestHandler):
    """Routes every request to one mock operation, set by subclasses."""

    operation: str = ""

    def do_OPTIONS(self):
        self._send(get_service().dispatch(self.operation, "OPTIONS"))

    def do_POST(self):
        length = int(self.headers.get("Content-Length") or 0)
        raw = self.rfile.read(length) if length else b""
        self._send(get_service().dispatch(self.operation, "POST", raw))

    def _send(self, response: ServiceResponse):
        payload = response.json().encode()
        self.send_response(response.status_code)
        for name, value in response.headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args):
        logger.debug(f"{self.address_string()} - {format % args}")
