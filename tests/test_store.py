import pytest

from storefront.db.store import (
    INQUIRIES,
    ORDERS,
    MemoryDocumentStore,
    SqlDocumentStore,
    build_store,
)


@pytest.fixture(params=["memory", "sqlite"])
def any_store(request, make_settings, tmp_path):
    if request.param == "memory":
        return MemoryDocumentStore()
    store = SqlDocumentStore(make_settings(database_url=f"sqlite:///{tmp_path / 'test.db'}"))
    store.create_schema()
    return store


def test_add_and_get(any_store):
    doc_id = any_store.add(ORDERS, {"accountName": "a", "createdAt": "2026-01-01T00:00:00.000+00:00"})

    assert any_store.get(ORDERS, doc_id) == {
        "id": doc_id,
        "accountName": "a",
        "createdAt": "2026-01-01T00:00:00.000+00:00",
    }
    assert any_store.get(INQUIRIES, doc_id) is None
    assert any_store.get(ORDERS, "missing") is None


def test_list_is_newest_first_and_scoped_to_collection(any_store):
    a = any_store.add(ORDERS, {"createdAt": "2026-01-01T00:00:00.000+00:00"})
    c = any_store.add(ORDERS, {"createdAt": "2026-01-03T00:00:00.000+00:00"})
    b = any_store.add(ORDERS, {"createdAt": "2026-01-02T00:00:00.000+00:00"})
    any_store.add(INQUIRIES, {"createdAt": "2026-01-04T00:00:00.000+00:00"})

    assert [d["id"] for d in any_store.list(ORDERS)] == [c, b, a]
    assert any_store.list("suggestions") == []


def test_update_merges_fields(any_store):
    doc_id = any_store.add(ORDERS, {"status": "pending", "email": "e@x", "createdAt": "2026-01-01T00:00:00.000+00:00"})

    assert any_store.update(ORDERS, doc_id, {"status": "completed", "updatedAt": "2026-01-05T00:00:00.000+00:00"})

    doc = any_store.get(ORDERS, doc_id)
    assert doc["status"] == "completed"
    assert doc["email"] == "e@x"
    assert doc["updatedAt"] == "2026-01-05T00:00:00.000+00:00"
    assert not any_store.update(ORDERS, "missing", {"status": "completed"})
    assert not any_store.update(INQUIRIES, doc_id, {"status": "closed"})


def test_delete(any_store):
    doc_id = any_store.add(INQUIRIES, {"createdAt": "2026-01-01T00:00:00.000+00:00"})

    assert not any_store.delete(ORDERS, doc_id)
    assert any_store.delete(INQUIRIES, doc_id)
    assert not any_store.delete(INQUIRIES, doc_id)
    assert any_store.list(INQUIRIES) == []


def test_memory_store_returns_copies():
    store = MemoryDocumentStore()
    doc_id = store.add(ORDERS, {"status": "pending", "createdAt": "2026-01-01T00:00:00.000+00:00"})

    store.get(ORDERS, doc_id)["status"] = "hacked"
    store.list(ORDERS)[0]["status"] = "hacked"

    assert store.get(ORDERS, doc_id)["status"] == "pending"


def test_build_store(make_settings, tmp_path):
    assert build_store(make_settings(database_url="")) is None
    assert isinstance(build_store(make_settings(database_url="memory://")), MemoryDocumentStore)

    sql = build_store(make_settings(database_url=f"sqlite:///{tmp_path / 'built.db'}"))
    assert isinstance(sql, SqlDocumentStore)
    assert sql.list(ORDERS) == []
