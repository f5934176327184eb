# tests/test_store.py
import asyncio

import pytest

from productapi.config import Settings
from productapi.database import (
    DocumentNotFound,
    InMemoryDocumentStore,
    StoreError,
    build_store,
)


def run(coro):
    return asyncio.run(coro)


def test_add_generates_distinct_ids():
    store = InMemoryDocumentStore()
    ids = {run(store.add("products", {"n": i})) for i in range(50)}
    assert len(ids) == 50
    assert all(len(i) == 20 and i.isalnum() for i in ids)


def test_get_returns_copy():
    store = InMemoryDocumentStore()
    pid = run(store.add("products", {"tags": ["a"]}))
    doc = run(store.get("products", pid))
    doc.data["tags"].append("b")
    assert run(store.get("products", pid)).data == {"tags": ["a"]}


def test_add_copies_input():
    store = InMemoryDocumentStore()
    data = {"name": "x"}
    pid = run(store.add("products", data))
    data["name"] = "y"
    assert run(store.get("products", pid)).data == {"name": "x"}


def test_collections_are_separate():
    store = InMemoryDocumentStore()
    run(store.add("products", {"name": "x"}))
    assert run(store.get_all("other")) == []


def test_update_merges_shallowly():
    store = InMemoryDocumentStore()
    pid = run(store.add("products", {"name": "x", "price": 1}))
    run(store.update("products", pid, {"price": 2, "retailer": "Acme"}))
    assert run(store.get("products", pid)).data == {"name": "x", "price": 2, "retailer": "Acme"}


def test_update_missing_document_raises():
    store = InMemoryDocumentStore()
    with pytest.raises(DocumentNotFound):
        run(store.update("products", "nope", {"price": 2}))


def test_update_rejects_empty_and_non_object():
    store = InMemoryDocumentStore()
    pid = run(store.add("products", {"name": "x"}))
    with pytest.raises(StoreError, match="empty document"):
        run(store.update("products", pid, {}))
    with pytest.raises(StoreError, match="JSON object"):
        run(store.update("products", pid, ["name"]))


def test_delete_missing_is_silent():
    store = InMemoryDocumentStore()
    run(store.delete("products", "nope"))


def test_clear():
    store = InMemoryDocumentStore()
    run(store.add("products", {"name": "x"}))
    store.clear()
    assert run(store.get_all("products")) == []


def test_build_store_memory():
    assert isinstance(build_store(Settings(store_backend="memory")), InMemoryDocumentStore)


def test_build_store_unknown_backend():
    with pytest.raises(ValueError):
        build_store(Settings(store_backend="redis"))
