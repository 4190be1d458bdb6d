from __future__ import annotations

import pytest


@pytest.fixture
def post_id(alice, make_subreddit, make_post):
    return make_post(alice, make_subreddit(alice))


def test_comment_lifecycle(api_client, alice, bob, post_id) -> None:
    r = api_client.post("/api/v1/comments", json={"content": "gg", "post_id": post_id}, headers=bob.headers)
    assert r.status_code == 201
    comment = r.json()
    assert comment["author"] == {"username": "bob"}
    assert api_client.get("/api/v1/comments/count", params={"post_id": post_id}).json() == {"count": 1}

    denied = api_client.delete(f"/api/v1/comments/{comment['id']}", headers=alice.headers)
    assert denied.status_code == 403
    assert denied.json()["detail"] == "You can't delete this comment"

    assert api_client.delete(f"/api/v1/comments/{comment['id']}", headers=bob.headers).status_code == 204
    assert api_client.get("/api/v1/comments/count", params={"post_id": post_id}).json() == {"count": 0}

    gone = api_client.delete(f"/api/v1/comments/{comment['id']}", headers=bob.headers)
    assert gone.status_code == 404
    assert gone.json()["detail"] == "Comment not found"


def test_comment_on_unknown_post(api_client, bob) -> None:
    r = api_client.post("/api/v1/comments", json={"content": "gg", "post_id": "missing"}, headers=bob.headers)
    assert r.status_code == 404


def test_comments_are_oldest_first_and_paginated(api_client, alice, bob, post_id) -> None:
    for i, user in enumerate([alice, bob, alice]):
        api_client.post("/api/v1/comments", json={"content": f"c{i}", "post_id": post_id}, headers=user.headers)

    page = api_client.get("/api/v1/comments", params={"post_id": post_id, "limit": 2}).json()
    assert [c["content"] for c in page["items"]] == ["c0", "c1"]
    assert [c["author"]["username"] for c in page["items"]] == ["alice", "bob"]
    assert page["is_done"] is False

    rest = api_client.get("/api/v1/comments", params={"post_id": post_id, "limit": 2, "offset": page["next_offset"]}).json()
    assert [c["content"] for c in rest["items"]] == ["c2"]
    assert rest["is_done"] is True


def test_failed_counter_update_rolls_back_comment(api_client, fake_db, bob, post_id) -> None:
    fake_db.fail_insert("counters")
    r = api_client.post("/api/v1/comments", json={"content": "gg", "post_id": post_id}, headers=bob.headers)
    assert r.status_code == 500
    assert fake_db.rows("comments") == []
    assert api_client.get("/api/v1/comments/count", params={"post_id": post_id}).json() == {"count": 0}
