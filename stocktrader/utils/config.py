"""Configuration management for the mock trading demo."""
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_PATH = PROJECT_ROOT / "config.yaml"

DEFAULT_ENDPOINTS = {
    "check": "/api/check",
    "buy": "/api/buy",
    "sell": "/api/sell",
}


class Config:
    """Configuration singleton for the application."""

    _instance = None
    _config: dict = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if CONFIG_PATH.exists():
            with open(CONFIG_PATH, "r") as f:
                self._config = yaml.safe_load(f) or {}
        else:
            self._config = {}

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation."""
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
            if value is None:
                return default
        return value

    @property
    def api_base_url(self) -> str:
        url = os.getenv("STOCKTRADER_API_URL") or self.get("api.base_url", "http://localhost:5000")
        return url.rstrip("/")

    @property
    def endpoints(self) -> dict[str, str]:
        """Full URL per operation, keyed by check/buy/sell."""
        paths = {**DEFAULT_ENDPOINTS, **(self.get("api.endpoints", {}) or {})}
        return {name: self.api_base_url + path for name, path in paths.items()}

    @property
    def request_timeout(self) -> float:
        return float(self.get("api.timeout", 10))

    @property
    def storage_path(self) -> Path:
        path = os.getenv("STOCKTRADER_STORAGE_PATH") or self.get(
            "client.storage_path", "data/local_storage.json"
        )
        return PROJECT_ROOT / path

    @property
    def history_limit(self) -> int:
        return int(self.get("client.history_limit", 50))

    @property
    def default_symbol(self) -> str:
        return self.get("service.default_symbol", "UNKNOWN")

    @property
    def server_host(self) -> str:
        return self.get("server.host", "0.0.0.0")

    @property
    def server_port(self) -> int:
        return int(self.get("server.port", 5000))


config = Config()
