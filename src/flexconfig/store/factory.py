"""Construction of store backends by type."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum

from flexconfig.errors import UnsupportedStoreTypeError
from flexconfig.store.base import Store
from flexconfig.store.etcd import EtcdStore
from flexconfig.store.memory import MemoryStore

__all__ = ["StoreType", "new_store"]


class StoreType(Enum):
    """Known configuration store backends."""

    UNKNOWN = "unknown"
    MEMORY = "memory"
    ETCD = "etcd"

    def __str__(self) -> str:
        return self.value


_BackendFactory = Callable[[Sequence[str] | None, str], Store]

_BACKENDS: dict[StoreType, _BackendFactory] = {
    StoreType.MEMORY: lambda endpoints, prefix: MemoryStore(prefix=prefix),
    StoreType.ETCD: lambda endpoints, prefix: EtcdStore(
        endpoints=list(endpoints) if endpoints else None, prefix=prefix
    ),
}


def new_store(
    store_type: StoreType | str,
    endpoints: Sequence[str] | None = None,
    prefix: str = "",
) -> Store:
    """Create a store backend.

    Args:
        store_type: A StoreType member or its name ("memory", "etcd").
        endpoints: Backend addresses, for networked stores.
        prefix: Namespace under which all keys are stored.

    Raises:
        UnsupportedStoreTypeError: If store_type names no known backend.
    """
    if isinstance(store_type, str):
        try:
            store_type = StoreType(store_type.strip().lower())
        except ValueError:
            raise UnsupportedStoreTypeError(store_type) from None

    factory = _BACKENDS.get(store_type)
    if factory is None:
        raise UnsupportedStoreTypeError(store_type)
    return factory(endpoints, prefix)
