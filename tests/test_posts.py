from __future__ import annotations


def test_member_can_post_and_non_member_cannot(api_client, alice, bob, make_subreddit, make_post) -> None:
    subreddit_id = make_subreddit(alice)
    post_id = make_post(alice, subreddit_id)

    r = api_client.get(f"/api/v1/posts/{post_id}")
    assert r.status_code == 200
    body = r.json()
    assert body["author"] == {"username": "alice"}
    assert body["subreddit"] == {"id": subreddit_id, "name": "gaming"}
    assert body["image_url"] is None

    denied = api_client.post(
        "/api/v1/posts",
        json={"subject": "hi", "body": "", "subreddit_id": subreddit_id},
        headers=bob.headers,
    )
    assert denied.status_code == 403
    assert denied.json()["detail"] == "You must join this subreddit before posting"

    api_client.post(f"/api/v1/subreddits/{subreddit_id}/join", headers=bob.headers)
    make_post(bob, subreddit_id, subject="hi")


def test_post_to_unknown_subreddit(api_client, alice) -> None:
    r = api_client.post(
        "/api/v1/posts",
        json={"subject": "hi", "body": "", "subreddit_id": "missing"},
        headers=alice.headers,
    )
    assert r.status_code == 404


def test_empty_subject_is_rejected(api_client, alice, make_subreddit) -> None:
    subreddit_id = make_subreddit(alice)
    r = api_client.post(
        "/api/v1/posts",
        json={"subject": "", "body": "x", "subreddit_id": subreddit_id},
        headers=alice.headers,
    )
    assert r.status_code == 422


def test_post_with_image_gets_signed_url(api_client, alice, make_subreddit) -> None:
    subreddit_id = make_subreddit(alice)
    r = api_client.post(
        "/api/v1/posts",
        json={"subject": "clip", "body": "", "subreddit_id": subreddit_id, "storage_id": "alice/clip"},
        headers=alice.headers,
    )
    post = api_client.get(f"/api/v1/posts/{r.json()['id']}").json()
    assert post["image"] == "alice/clip"
    assert post["image_url"].startswith("https://storage.test/media/alice/clip")


def test_subreddit_feed_is_paginated_newest_first(api_client, alice, make_subreddit, make_post) -> None:
    subreddit_id = make_subreddit(alice)
    ids = [make_post(alice, subreddit_id, subject=f"post {i}") for i in range(5)]

    page = api_client.get("/api/v1/posts/subreddit/gaming", params={"limit": 2}).json()
    assert [p["id"] for p in page["items"]] == [ids[4], ids[3]]
    assert page["is_done"] is False
    assert page["next_offset"] == 2

    last = api_client.get("/api/v1/posts/subreddit/gaming", params={"limit": 2, "offset": 4}).json()
    assert [p["id"] for p in last["items"]] == [ids[0]]
    assert last["is_done"] is True
    assert last["next_offset"] is None

    assert api_client.get("/api/v1/posts/subreddit/nowhere").status_code == 404


def test_user_posts_and_post_counter(api_client, alice, make_subreddit, make_post) -> None:
    subreddit_id = make_subreddit(alice)
    make_post(alice, subreddit_id)
    make_post(alice, subreddit_id, subject="second")

    page = api_client.get("/api/v1/posts/user/alice").json()
    assert [p["subject"] for p in page["items"]] == ["second", "First post"]
    assert api_client.get("/api/v1/users/alice/public").json()["posts"] == 2
    assert api_client.get("/api/v1/posts/user/nobody").status_code == 404


def test_only_author_can_delete(api_client, alice, bob, make_subreddit, make_post) -> None:
    subreddit_id = make_subreddit(alice)
    post_id = make_post(alice, subreddit_id)

    denied = api_client.delete(f"/api/v1/posts/{post_id}", headers=bob.headers)
    assert denied.status_code == 403
    assert denied.json()["detail"] == "You can't delete this post"
    assert api_client.get(f"/api/v1/posts/{post_id}").status_code == 200

    assert api_client.delete(f"/api/v1/posts/{post_id}", headers=alice.headers).status_code == 204
    assert api_client.get(f"/api/v1/posts/{post_id}").status_code == 404
    assert api_client.get("/api/v1/users/alice/public").json()["posts"] == 0
    assert api_client.delete(f"/api/v1/posts/{post_id}", headers=alice.headers).status_code == 404


def test_new_post_fans_out_notifications(api_client, fake_db, alice, bob, carol, make_subreddit, make_post) -> None:
    subreddit_id = make_subreddit(alice)
    api_client.post(f"/api/v1/subreddits/{subreddit_id}/join", headers=bob.headers)
    api_client.post(f"/api/v1/follows/{alice.id}", headers=carol.headers)

    post_id = make_post(alice, subreddit_id, subject="Patch notes")

    bob_inbox = api_client.get("/api/v1/notifications", headers=bob.headers).json()
    assert [n["type"] for n in bob_inbox] == ["new_post"]
    assert bob_inbox[0]["post_id"] == post_id
    assert bob_inbox[0]["from_user_id"] == alice.id

    carol_types = [n["type"] for n in api_client.get("/api/v1/notifications", headers=carol.headers).json()]
    assert carol_types == ["follower_post"]

    alice_types = [n["type"] for n in api_client.get("/api/v1/notifications", headers=alice.headers).json()]
    assert alice_types == ["new_follower"]


def test_search_within_subreddit(api_client, alice, make_subreddit, make_post) -> None:
    subreddit_id = make_subreddit(alice)
    other_id = make_subreddit(alice, name="shooters")
    post_id = make_post(alice, subreddit_id, subject="Best aim settings")
    make_post(alice, other_id, subject="Aim trainers")

    hits = api_client.get("/api/v1/posts/search", params={"q": "aim", "subreddit": "gaming"}).json()
    assert hits == [{"id": post_id, "title": "Best aim settings", "type": "post", "name": "gaming"}]
    assert api_client.get("/api/v1/posts/search", params={"q": "aim", "subreddit": "nowhere"}).json() == []
    assert api_client.get("/api/v1/posts/search", params={"subreddit": "gaming"}).json() == []


def test_failed_counter_update_rolls_back_post(api_client, fake_db, alice, make_subreddit) -> None:
    subreddit_id = make_subreddit(alice)

    fake_db.fail_insert("counters")
    r = api_client.post(
        "/api/v1/posts",
        json={"subject": "Lost post", "body": "", "subreddit_id": subreddit_id},
        headers=alice.headers,
    )
    assert r.status_code == 500
    assert fake_db.rows("posts") == []
    assert api_client.get("/api/v1/users/alice/public").json()["posts"] == 0


def test_search_asterisk_matches_one_character(api_client, alice, make_subreddit, make_post) -> None:
    subreddit_id = make_subreddit(alice)
    post_id = make_post(alice, subreddit_id, subject="a*b combo")
    make_post(alice, subreddit_id, subject="a long b")

    hits = api_client.get("/api/v1/posts/search", params={"q": "a*b", "subreddit": "gaming"}).json()
    assert [h["id"] for h in hits] == [post_id]
