"""JSON-file key-value store standing in for the browser's localStorage."""
import json
from pathlib import Path
from typing import Optional

from ..utils import get_logger


class LocalStorage:
    """
    String key-value store persisted as a single JSON object.

    Mirrors the ``localStorage`` API: values are strings, callers encode
    and decode their own JSON. With ``path=None`` nothing touches disk.
    """

    def __init__(self, path: Optional[Path] = None):
        self.logger = get_logger("local_storage")
        self.path = Path(path) if path is not None else None
        self._items: dict[str, str] = {}
        self._load()

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)
        self._save()

    def remove_item(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            self._save()

    def keys(self) -> list[str]:
        return list(self._items)

    def _save(self):
        """Write all items to the backing file."""
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(self._items, f, indent=2)

    def _load(self):
        """Load items from the backing file, starting empty if it is unusable."""
        if self.path is None or not self.path.exists():
            return

        try:
            with open(self.path, "r") as f:
                items = json.load(f)
        except (OSError, ValueError) as e:
            self.logger.error(f"Error reading {self.path}: {e}")
            return

        if not isinstance(items, dict):
            self.logger.error(f"Ignoring {self.path}: expected a JSON object")
            return

        self._items = {str(k): v for k, v in items.items() if isinstance(v, str)}
