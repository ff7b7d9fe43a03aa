"""Dynamically writable configuration stores consulted ahead of static properties."""

from __future__ import annotations

from flexconfig.store.base import KeyValue, Store
from flexconfig.store.etcd import DEFAULT_ETCD_ENDPOINT, ETCD_REQUEST_TIMEOUT, EtcdStore
from flexconfig.store.factory import StoreType, new_store
from flexconfig.store.memory import MemoryStore

__all__ = [
    "DEFAULT_ETCD_ENDPOINT",
    "ETCD_REQUEST_TIMEOUT",
    "EtcdStore",
    "KeyValue",
    "MemoryStore",
    "Store",
    "StoreType",
    "new_store",
]
