from datetime import datetime, timezone

import pytest

from storefront_admin.interfaces.IDocumentStore import DocumentStoreError


def test_add_and_fetch_by_id(store):
    doc_id = store.add("products", {"name": "Khimar", "price": 120000})
    doc = store.fetch_by_id("products", doc_id)
    assert doc == {"id": doc_id, "name": "Khimar", "price": 120000}


def test_fetch_by_id_missing(store):
    assert store.fetch_by_id("products", "nope") is None


def test_ids_are_scoped_per_collection(store):
    store.add("products", {"name": "A"}, doc_id="same")
    store.add("orders", {"status": "pending"}, doc_id="same")
    assert store.fetch_by_id("products", "same")["name"] == "A"
    assert store.fetch_by_id("orders", "same")["status"] == "pending"


def test_duplicate_id_raises_store_error(store):
    store.add("products", {"name": "A"}, doc_id="dup")
    with pytest.raises(DocumentStoreError):
        store.add("products", {"name": "B"}, doc_id="dup")


def test_created_at_round_trips_as_utc(store):
    store.add("orders", {"createdAt": "2024-06-15T08:00:00+07:00"}, doc_id="o1")
    doc = store.fetch_by_id("orders", "o1")
    assert doc["createdAt"] == datetime(2024, 6, 15, 1, 0, tzinfo=timezone.utc)


def test_unparseable_created_at_stays_in_payload(store):
    store.add("orders", {"createdAt": "kemarin"}, doc_id="o1")
    assert store.fetch_by_id("orders", "o1")["createdAt"] == "kemarin"


def test_fetch_where(store):
    store.add("users", {"name": "A", "role": "customer"})
    store.add("users", {"name": "B", "role": "admin"})
    store.add("users", {"name": "C", "role": "customer"})
    names = sorted(doc["name"] for doc in store.fetch_where("users", "role", "customer"))
    assert names == ["A", "C"]


def test_fetch_latest_orders_newest_first_with_limit(store):
    for day in (3, 1, 5, 2, 4):
        store.add("orders", {"createdAt": datetime(2024, 6, day, tzinfo=timezone.utc)}, doc_id=f"o{day}")
    store.add("orders", {"status": "pending"}, doc_id="undated")

    latest = store.fetch_latest("orders", limit=3)
    assert [doc["id"] for doc in latest] == ["o5", "o4", "o3"]
    assert len(store.fetch_latest("orders")) == 5


def test_update_merges_fields(store):
    store.add("orders", {"status": "pending", "total": 10}, doc_id="o1")
    assert store.update("orders", "o1", {"status": "completed"})
    assert store.fetch_by_id("orders", "o1") == {"id": "o1", "status": "completed", "total": 10}


def test_update_missing(store):
    assert store.update("orders", "nope", {"status": "completed"}) is False


def test_delete(store):
    store.add("products", {"name": "A"}, doc_id="p1")
    assert store.delete("products", "p1") is True
    assert store.delete("products", "p1") is False
    assert store.fetch_all("products") == []


def test_unreachable_database_raises_store_error(broken_store):
    with pytest.raises(DocumentStoreError):
        broken_store.fetch_all("orders")
