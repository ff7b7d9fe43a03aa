"""Configuration store contract shared by all backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from flexconfig.errors import StoreKeyRequiredError
from flexconfig.keys import dots_to_slash, normalize_namespace, slash_to_dots

__all__ = ["KeyValue", "Store"]


@dataclass(frozen=True)
class KeyValue:
    """A property key (dotted form) and its value."""

    key: str
    value: str


class Store(ABC):
    """A dynamically writable key-value backend consulted before static configuration.

    Keys are addressed in dotted form. Backends store them as slash-delimited
    paths under a namespace prefix: with namespace ``example``, the key
    ``log.filepath`` lives at ``/example/log/filepath``.
    """

    def __init__(self, prefix: str = "") -> None:
        self._prefix = normalize_namespace(prefix)

    @property
    def prefix(self) -> str:
        """The normalized namespace prefix ('' for the store root)."""
        return self._prefix

    def store_path(self, key: str, operation: str = "access") -> str:
        """Translate a dotted key into this store's namespaced path.

        Raises:
            StoreKeyRequiredError: If key is empty.
        """
        if not key:
            raise StoreKeyRequiredError(operation=operation)
        return self._prefix + dots_to_slash(key)

    def relative_key(self, path: str) -> str:
        """Translate a namespaced path back into a dotted key."""
        if self._prefix and path.startswith(self._prefix):
            path = path[len(self._prefix):]
        return slash_to_dots(path.lstrip("/"))

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored for key, or None when absent.

        Raises:
            StoreKeyRequiredError: If key is empty.
            StoreTransportError: If the backend cannot be reached.
        """

    @abstractmethod
    def get_all(self) -> list[KeyValue]:
        """Return every property under this store's namespace, sorted by key."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Create or replace the property key.

        Raises:
            StoreKeyRequiredError: If key is empty.
            StoreTransportError: If the backend cannot be reached.
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the property key and every property beneath it.

        Deleting ``log`` removes ``log`` and ``log.level`` but not ``logger``.
        Removing an absent key is not an error.

        Raises:
            StoreKeyRequiredError: If key is empty.
            StoreTransportError: If the backend cannot be reached.
        """

    def close(self) -> None:
        """Release backend resources. The default implementation does nothing."""
        return None
