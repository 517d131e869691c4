"""
Mock Trading Service - local development server

Serves the check/buy/sell handlers under /api/* and broadcasts each
completed trade to connected Socket.IO clients.
"""
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from flask import Flask, Response, jsonify, request
from flask_socketio import SocketIO

from stocktrader.utils import config, get_logger
from stocktrader.service import MockTradingService

logger = get_logger("web")

app = Flask(__name__)
app.config['SECRET_KEY'] = 'stocktrader-dev-secret'
socketio = SocketIO(app, cors_allowed_origins="*")

service = MockTradingService()


def _respond(operation: str):
    response = service.dispatch(operation, request.method, request.get_data(as_text=True))
    if operation != "check" and response.status_code == 200 and request.method != "OPTIONS":
        socketio.emit("trade", response.body)
    return Response(response.json(), status=response.status_code, headers=response.headers)


@app.route('/api/check', methods=['POST', 'OPTIONS'])
def check_stock():
    """Quotes for the fixed symbol set, or for one symbol."""
    return _respond("check")


@app.route('/api/buy', methods=['POST', 'OPTIONS'])
def buy_stock():
    """Mock buy."""
    return _respond("buy")


@app.route('/api/sell', methods=['POST', 'OPTIONS'])
def sell_stock():
    """Mock sell."""
    return _respond("sell")


@app.route('/api/health')
def health():
    return jsonify({'status': 'ok'})


def main():
    """Run the development server."""
    print("=" * 50)
    print("  Mock Trading Service")
    print(f"  http://localhost:{config.server_port}/api")
    print("=" * 50)

    socketio.run(app, host=config.server_host, port=config.server_port, debug=True)


if __name__ == '__main__':
    main()
