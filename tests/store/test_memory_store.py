"""Tests for the in-process store backend and the shared Store contract."""

from __future__ import annotations

import pytest

from flexconfig.errors import StoreKeyRequiredError
from flexconfig.store import KeyValue, MemoryStore


class TestStorePaths:
    def test_namespaced_path(self) -> None:
        store = MemoryStore(prefix="example")
        assert store.prefix == "/example"
        assert store.store_path("log.filepath") == "/example/log/filepath"

    def test_root_namespace(self) -> None:
        store = MemoryStore(prefix="/")
        assert store.prefix == ""
        assert store.store_path("log.filepath") == "/log/filepath"

    def test_relative_key(self) -> None:
        store = MemoryStore(prefix="/example/")
        assert store.relative_key("/example/log/filepath") == "log.filepath"

    def test_empty_key_rejected(self) -> None:
        with pytest.raises(StoreKeyRequiredError) as exc_info:
            MemoryStore().store_path("", "get")
        assert exc_info.value.details["operation"] == "get"


class TestMemoryStore:
    def test_set_and_get(self) -> None:
        store = MemoryStore(prefix="example")
        store.set("log.level", "debug")
        assert store.get("log.level") == "debug"

    def test_get_missing(self) -> None:
        assert MemoryStore().get("absent") is None

    def test_set_replaces(self) -> None:
        store = MemoryStore()
        store.set("a", "1")
        store.set("a", "2")
        assert store.get("a") == "2"

    @pytest.mark.parametrize("operation", ["get", "set", "delete"])
    def test_empty_key_rejected(self, operation: str) -> None:
        store = MemoryStore()
        with pytest.raises(StoreKeyRequiredError):
            if operation == "set":
                store.set("", "v")
            else:
                getattr(store, operation)("")

    def test_initial_values(self) -> None:
        store = MemoryStore(initial={"a.b": "1"})
        assert store.get("a.b") == "1"

    def test_get_all_sorted_dotted_keys(self) -> None:
        store = MemoryStore(prefix="example")
        store.set("z", "26")
        store.set("a.b", "1")
        store.set("a.c", "2")
        assert store.get_all() == [
            KeyValue("a.b", "1"),
            KeyValue("a.c", "2"),
            KeyValue("z", "26"),
        ]

    def test_get_all_empty(self) -> None:
        assert MemoryStore().get_all() == []

    def test_delete_removes_key_and_subtree(self) -> None:
        store = MemoryStore(initial={"log": "on", "log.level": "d", "log.file": "f", "logger": "kept"})
        store.delete("log")
        assert store.get_all() == [KeyValue("logger", "kept")]

    def test_delete_subtree_without_own_value(self) -> None:
        store = MemoryStore(initial={"log.level": "d", "log.file": "f"})
        store.delete("log")
        assert store.get_all() == []

    def test_delete_leaf_key(self) -> None:
        store = MemoryStore()
        store.set("a", "1")
        store.set("a.b", "2")
        store.delete("a.b")
        assert store.get("a") == "1"
        assert store.get("a.b") is None

    def test_delete_absent_key(self) -> None:
        store = MemoryStore()
        store.delete("absent")
        assert store.get_all() == []

    def test_close_is_harmless(self) -> None:
        store = MemoryStore()
        store.set("a", "1")
        store.close()
        assert store.get("a") == "1"
