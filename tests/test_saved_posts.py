from __future__ import annotations

from fragfeed.modules.saved_posts.service import SavedPostService


def test_save_and_unsave(api_client, alice, bob, make_subreddit, make_post) -> None:
    post_id = make_post(alice, make_subreddit(alice))

    assert api_client.post(f"/api/v1/saved-posts/{post_id}", headers=bob.headers).status_code == 204
    again = api_client.post(f"/api/v1/saved-posts/{post_id}", headers=bob.headers)
    assert again.status_code == 400
    assert again.json()["detail"] == "Post already saved"
    assert api_client.get(f"/api/v1/saved-posts/{post_id}/is-saved", headers=bob.headers).json() is True

    assert api_client.delete(f"/api/v1/saved-posts/{post_id}", headers=bob.headers).status_code == 204
    gone = api_client.delete(f"/api/v1/saved-posts/{post_id}", headers=bob.headers)
    assert gone.status_code == 400
    assert gone.json()["detail"] == "Post not saved"
    assert api_client.get(f"/api/v1/saved-posts/{post_id}/is-saved", headers=bob.headers).json() is False


def test_save_unknown_post(api_client, bob) -> None:
    assert api_client.post("/api/v1/saved-posts/missing", headers=bob.headers).status_code == 404


def test_saved_list_newest_save_first_and_drops_deleted(api_client, alice, bob, make_subreddit, make_post) -> None:
    subreddit_id = make_subreddit(alice)
    first = make_post(alice, subreddit_id, subject="one")
    second = make_post(alice, subreddit_id, subject="two")
    third = make_post(alice, subreddit_id, subject="three")
    for post_id in (second, first, third):
        api_client.post(f"/api/v1/saved-posts/{post_id}", headers=bob.headers)

    api_client.delete(f"/api/v1/posts/{third}", headers=alice.headers)

    saved = api_client.get("/api/v1/saved-posts", headers=bob.headers).json()
    assert [p["id"] for p in saved] == [first, second]
    assert saved[0]["author"] == {"username": "alice"}
    assert saved[0]["saved_at"]


def test_anonymous_saved_posts(api_client) -> None:
    assert api_client.get("/api/v1/saved-posts").json() == []
    assert api_client.get("/api/v1/saved-posts/anything/is-saved").json() is False


def test_concurrent_save_reports_existing_save(api_client, fake_db, monkeypatch, alice, bob, make_subreddit, make_post) -> None:
    post_id = make_post(alice, make_subreddit(alice))
    assert api_client.post(f"/api/v1/saved-posts/{post_id}", headers=bob.headers).status_code == 204

    # Another request inserted the row between the lookup and the insert
    monkeypatch.setattr(SavedPostService, "_get_saved", lambda self, user_id, post_id: None)
    again = api_client.post(f"/api/v1/saved-posts/{post_id}", headers=bob.headers)
    assert again.status_code == 400
    assert again.json()["detail"] == "Post already saved"
    assert len(fake_db.rows("saved_posts")) == 1
