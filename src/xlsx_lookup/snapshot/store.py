"""Key-value store boundary used by the snapshot cache."""

from __future__ import annotations

import threading
from typing import Any, Protocol


class KeyValueStore(Protocol):
    """Minimal capability the cache needs from a host store.

    ``add`` inserts or replaces; ``__getitem__`` is only called for keys the
    cache has just checked or written.
    """

    def try_get(self, key: str) -> tuple[Any, bool]: ...

    def contains(self, key: str) -> bool: ...

    def add(self, key: str, value: Any) -> None: ...

    def __getitem__(self, key: str) -> Any: ...


class InMemoryStore:
    """Thread-safe dict-backed store."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._lock = threading.RLock()

    def try_get(self, key: str) -> tuple[Any, bool]:
        with self._lock:
            if key in self._data:
                return self._data[key], True
            return None, False

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def add(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __getitem__(self, key: str) -> Any:
        with self._lock:
            return self._data[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
