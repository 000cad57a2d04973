"""Small key-value stores used to persist measurement records."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional, Protocol

from .errors import PersistenceError

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Named slots holding JSON-compatible values."""

    def get_item(self, key: str) -> Optional[Any]: ...

    def set_item(self, key: str, value: Any) -> None: ...

    def remove_item(self, key: str) -> None: ...


class JSONFileStore:
    """Persist named slots to a single JSON file.

    The whole file is read and rewritten on every access. This is enough for
    a handful of saved measurements and keeps the backend free of a database.
    """

    def __init__(self, storage_path: Path) -> None:
        self._path = Path(storage_path)
        self._lock = Lock()
        self._path.parent.mkdir(parents=True, exist_ok=True)
        if not self._path.exists():
            self._write({})

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Dict[str, Any]:
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Unable to read {self._path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise PersistenceError(f"{self._path} does not contain a JSON object")
        return payload

    def _write(self, payload: Dict[str, Any]) -> None:
        with self._path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, sort_keys=True)

    def get_item(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._read().get(key)

    def set_item(self, key: str, value: Any) -> None:
        with self._lock:
            try:
                payload = self._read()
            except PersistenceError:
                logger.warning("Overwriting unreadable store at %s", self._path)
                payload = {}
            payload[key] = value
            self._write(payload)

    def remove_item(self, key: str) -> None:
        with self._lock:
            payload = self._read()
            if key in payload:
                del payload[key]
                self._write(payload)


class MemoryStore:
    """In-process store with the same interface, used by tests and demos."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = dict(initial or {})

    def get_item(self, key: str) -> Optional[Any]:
        return self._data.get(key)

    def set_item(self, key: str, value: Any) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)
