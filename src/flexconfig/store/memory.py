"""In-process configuration store."""

from __future__ import annotations

import threading

from flexconfig.store.base import KeyValue, Store

__all__ = ["MemoryStore"]


class MemoryStore(Store):
    """Store backend that keeps properties in a process-local dict.

    Thread safety:
        Internally synchronized. All public methods are safe to call
        concurrently.
    """

    def __init__(self, prefix: str = "", initial: dict[str, str] | None = None) -> None:
        super().__init__(prefix)
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> str | None:
        path = self.store_path(key, "get")
        with self._lock:
            return self._data.get(path)

    def get_all(self) -> list[KeyValue]:
        root = self.prefix + "/"
        with self._lock:
            items = [(path, value) for path, value in self._data.items() if path.startswith(root)]
        result = [KeyValue(key=self.relative_key(path), value=value) for path, value in items]
        return sorted(result, key=lambda kv: kv.key)

    def set(self, key: str, value: str) -> None:
        path = self.store_path(key, "set")
        with self._lock:
            self._data[path] = value

    def delete(self, key: str) -> None:
        path = self.store_path(key, "delete")
        subtree = path + "/"
        with self._lock:
            for stored in [p for p in self._data if p == path or p.startswith(subtree)]:
                del self._data[stored]
