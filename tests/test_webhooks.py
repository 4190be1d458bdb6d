from __future__ import annotations

SECRET = {"X-Webhook-Secret": "webhook-test-secret"}


def _users(fake_db):
    return [(u["external_id"], u["username"]) for u in fake_db.rows("users")]


def test_webhook_requires_secret(api_client, fake_db) -> None:
    event = {"type": "user.created", "data": {"id": "ext-1", "username": "neo"}}
    assert api_client.post("/api/v1/webhooks/identity", json=event).status_code == 401
    wrong = api_client.post("/api/v1/webhooks/identity", json=event, headers={"X-Webhook-Secret": "nope"})
    assert wrong.status_code == 401
    assert fake_db.rows("users") == []


def test_created_then_updated_upserts_one_row(api_client, fake_db) -> None:
    created = api_client.post(
        "/api/v1/webhooks/identity",
        json={"type": "user.created", "data": {"id": "ext-1", "username": "neo"}},
        headers=SECRET,
    )
    assert created.json() == {"type": "user.created", "handled": True}

    api_client.post(
        "/api/v1/webhooks/identity",
        json={"type": "user.updated", "data": {"id": "ext-1", "user_metadata": {"username": "trinity"}}},
        headers=SECRET,
    )
    assert _users(fake_db) == [("ext-1", "trinity")]
    assert fake_db.rows("users")[0]["updated_at"]


def test_missing_username_becomes_empty(api_client, fake_db) -> None:
    api_client.post(
        "/api/v1/webhooks/identity",
        json={"type": "user.created", "data": {"id": "ext-2"}},
        headers=SECRET,
    )
    assert _users(fake_db) == [("ext-2", "")]


def test_deleted_removes_user_and_tolerates_unknown(api_client, fake_db, alice) -> None:
    r = api_client.post(
        "/api/v1/webhooks/identity",
        json={"type": "user.deleted", "data": {"id": alice.external_id}},
        headers=SECRET,
    )
    assert r.json()["handled"] is True
    assert fake_db.rows("users") == []

    again = api_client.post(
        "/api/v1/webhooks/identity",
        json={"type": "user.deleted", "data": {"id": alice.external_id}},
        headers=SECRET,
    )
    assert again.status_code == 200


def test_other_events_are_ignored(api_client, fake_db) -> None:
    r = api_client.post(
        "/api/v1/webhooks/identity",
        json={"type": "session.created", "data": {"id": "ext-3"}},
        headers=SECRET,
    )
    assert r.json() == {"type": "session.created", "handled": False}
    assert fake_db.rows("users") == []
