import pytest

from conftest import FailingNotifier, login
from storefront.db.store import INQUIRIES, SUGGESTIONS
from storefront.services.feedback import MISSING_FIELDS_MESSAGE


def test_suggestion_is_stored_and_notified(client, store, notifier):
    r = client.post(
        "/api/suggestion",
        json={"name": "Mona", "contact": "@mona", "message": "أضيفوا Disney+"},
    )

    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    stored = store.get(SUGGESTIONS, body["suggestionId"])
    assert stored["message"] == "أضيفوا Disney+"
    assert stored["contact"] == "@mona"
    assert stored["createdAt"]
    assert "status" not in stored
    assert "أضيفوا Disney+" in notifier.messages[0]


@pytest.mark.parametrize("payload", [
    {"name": "Mona", "contact": "@mona"},
    {"name": "Mona", "contact": "@mona", "message": "   "},
    {"contact": "@mona", "message": "hi"},
])
def test_suggestion_missing_required_field_is_400(client, store, notifier, payload):
    r = client.post("/api/suggestion", json=payload)

    assert r.status_code == 400
    assert r.json() == {"success": False, "message": MISSING_FIELDS_MESSAGE}
    assert store.list(SUGGESTIONS) == []
    assert notifier.messages == []


def test_optional_contact_fields_get_placeholder(make_client, store):
    client = make_client(require_contact_fields=False)

    r = client.post("/api/suggestion", json={"message": "more plans please"})

    assert r.status_code == 200
    stored = store.get(SUGGESTIONS, r.json()["suggestionId"])
    assert stored["name"] == "غير محدد"
    assert stored["contact"] == "غير محدد"


def test_inquiry_is_stored_pending(client, store):
    r = client.post(
        "/api/inquiry",
        json={"name": "Omar", "email": "omar@example.com", "subject": "Shahid", "message": "هل يعمل على التلفاز؟"},
    )

    assert r.status_code == 200
    stored = store.get(INQUIRIES, r.json()["inquiryId"])
    assert stored["status"] == "pending"
    assert stored["subject"] == "Shahid"


def test_inquiry_notification_failure_is_swallowed(make_client, store):
    client = make_client(notifier=FailingNotifier())

    r = client.post("/api/inquiry", json={"name": "Omar", "email": "omar@example.com", "message": "?"})

    assert r.status_code == 200
    assert len(store.list(INQUIRIES)) == 1


def test_admin_lists_suggestions_newest_first(client, store):
    first = store.add(SUGGESTIONS, {"message": "a", "createdAt": "2026-01-01T00:00:00.000+00:00"})
    second = store.add(SUGGESTIONS, {"message": "b", "createdAt": "2026-01-02T00:00:00.000+00:00"})
    login(client)

    r = client.get("/api/suggestions")

    assert [s["id"] for s in r.json()] == [second, first]


def test_admin_deletes_suggestion(client, store):
    suggestion_id = store.add(SUGGESTIONS, {"message": "a", "createdAt": "2026-01-01T00:00:00.000+00:00"})
    headers = login(client)

    r = client.delete(f"/api/suggestions/{suggestion_id}", headers=headers)
    again = client.delete(f"/api/suggestions/{suggestion_id}", headers=headers)

    assert r.status_code == 200
    assert store.get(SUGGESTIONS, suggestion_id) is None
    assert again.status_code == 404


def test_delete_requires_csrf(admin_client, store):
    suggestion_id = store.add(SUGGESTIONS, {"message": "a", "createdAt": "2026-01-01T00:00:00.000+00:00"})

    r = admin_client.delete(f"/api/suggestions/{suggestion_id}")

    assert r.status_code == 403
    assert store.get(SUGGESTIONS, suggestion_id) is not None


def test_admin_updates_and_deletes_inquiry(client, store):
    inquiry_id = store.add(INQUIRIES, {"message": "?", "status": "pending", "createdAt": "2026-01-01T00:00:00.000+00:00"})
    headers = login(client)

    bad = client.put(f"/api/inquiries/{inquiry_id}", json={"status": "completed"}, headers=headers)
    ok = client.put(f"/api/inquiries/{inquiry_id}", json={"status": "answered"}, headers=headers)

    assert bad.status_code == 400
    assert ok.status_code == 200
    assert store.get(INQUIRIES, inquiry_id)["status"] == "answered"

    assert client.delete(f"/api/inquiries/{inquiry_id}", headers=headers).status_code == 200
    assert store.list(INQUIRIES) == []


def test_disabled_capabilities_are_not_routed(make_client):
    client = make_client(suggestions_enabled=False, inquiries_enabled=False)

    assert client.post("/api/suggestion", json={"message": "x"}).status_code == 404
    assert client.post("/api/inquiry", json={"message": "x"}).status_code == 404
    assert client.get("/health").json()["status"] == "ok"
