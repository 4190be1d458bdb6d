from __future__ import annotations

import os

import pytest

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["IDENTITY_WEBHOOK_SECRET"] = "webhook-test-secret"
os.environ["ENVIRONMENT"] = "test"
os.environ.pop("S3_BUCKET_NAME", None)

from tests.fakes import FakeSupabase  # noqa: E402


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def api_client(fake_db):
    from fastapi.testclient import TestClient

    from fragfeed.database.supabase_client import get_service_supabase, get_session_client_factory, get_supabase
    from fragfeed.main import app
    from fragfeed.modules.auth.service import clear_auth_cache

    clear_auth_cache()
    app.dependency_overrides[get_supabase] = lambda: fake_db
    app.dependency_overrides[get_service_supabase] = lambda: fake_db
    app.dependency_overrides[get_session_client_factory] = lambda: fake_db.new_session_client
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
    clear_auth_cache()


@pytest.fixture
def alice(fake_db):
    return fake_db.add_user("alice")


@pytest.fixture
def bob(fake_db):
    return fake_db.add_user("bob")


@pytest.fixture
def carol(fake_db):
    return fake_db.add_user("carol")


@pytest.fixture
def make_subreddit(api_client):
    def _make(owner, name: str = "gaming", description: str = "All things games") -> str:
        resp = api_client.post(
            "/api/v1/subreddits",
            json={"name": name, "description": description},
            headers=owner.headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["id"]

    return _make


@pytest.fixture
def make_post(api_client):
    def _make(author, subreddit_id: str, subject: str = "First post", body: str = "hello") -> str:
        resp = api_client.post(
            "/api/v1/posts",
            json={"subject": subject, "body": body, "subreddit_id": subreddit_id},
            headers=author.headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["id"]

    return _make
