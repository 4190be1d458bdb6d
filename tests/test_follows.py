from __future__ import annotations

from fragfeed.modules.follows.service import FollowService


def test_following_twice_keeps_one_row(api_client, fake_db, alice, bob) -> None:
    assert api_client.post(f"/api/v1/follows/{bob.id}", headers=alice.headers).status_code == 204

    again = api_client.post(f"/api/v1/follows/{bob.id}", headers=alice.headers)
    assert again.status_code == 400
    assert again.json()["detail"] == "You are already following this user"
    assert len(fake_db.rows("follows")) == 1


def test_follow_rules(api_client, alice) -> None:
    own = api_client.post(f"/api/v1/follows/{alice.id}", headers=alice.headers)
    assert own.status_code == 400
    assert own.json()["detail"] == "You cannot follow yourself"

    missing = api_client.post("/api/v1/follows/missing", headers=alice.headers)
    assert missing.status_code == 404


def test_follow_notifies_target(api_client, alice, bob) -> None:
    api_client.post(f"/api/v1/follows/{bob.id}", headers=alice.headers)

    inbox = api_client.get("/api/v1/notifications", headers=bob.headers).json()
    assert len(inbox) == 1
    assert inbox[0]["type"] == "new_follower"
    assert inbox[0]["title"] == "New Follower"
    assert inbox[0]["message"] == "alice started following you"
    assert inbox[0]["from_user_id"] == alice.id


def test_unfollow(api_client, alice, bob) -> None:
    api_client.post(f"/api/v1/follows/{bob.id}", headers=alice.headers)
    assert api_client.get(f"/api/v1/follows/{bob.id}/is-following", headers=alice.headers).json() is True

    assert api_client.delete(f"/api/v1/follows/{bob.id}", headers=alice.headers).status_code == 204
    assert api_client.get(f"/api/v1/follows/{bob.id}/is-following", headers=alice.headers).json() is False

    again = api_client.delete(f"/api/v1/follows/{bob.id}", headers=alice.headers)
    assert again.status_code == 400
    assert again.json()["detail"] == "You are not following this user"


def test_counts_and_lists(api_client, fake_db, alice, bob, carol) -> None:
    api_client.post(f"/api/v1/follows/{alice.id}", headers=bob.headers)
    api_client.post(f"/api/v1/follows/{alice.id}", headers=carol.headers)
    api_client.post(f"/api/v1/follows/{carol.id}", headers=alice.headers)

    assert api_client.get(f"/api/v1/follows/{alice.id}/followers/count").json() == {"count": 2}
    assert api_client.get(f"/api/v1/follows/{alice.id}/following/count").json() == {"count": 1}

    followers = api_client.get(f"/api/v1/follows/{alice.id}/followers").json()
    assert [f["user"]["username"] for f in followers] == ["carol", "bob"]

    following = api_client.get(f"/api/v1/follows/{alice.id}/following").json()
    assert [f["user"]["id"] for f in following] == [carol.id]

    # A follower whose user row is gone is dropped from the list
    fake_db.tables["users"] = [u for u in fake_db.rows("users") if u["id"] != carol.id]
    followers = api_client.get(f"/api/v1/follows/{alice.id}/followers").json()
    assert [f["user"]["username"] for f in followers] == ["bob"]


def test_anonymous_is_not_following(api_client, bob) -> None:
    assert api_client.get(f"/api/v1/follows/{bob.id}/is-following").json() is False


def test_failed_notification_rolls_back_follow(api_client, fake_db, alice, bob) -> None:
    fake_db.fail_insert("notifications")
    r = api_client.post(f"/api/v1/follows/{bob.id}", headers=alice.headers)
    assert r.status_code == 500
    assert fake_db.rows("follows") == []
    assert api_client.get(f"/api/v1/follows/{bob.id}/is-following", headers=alice.headers).json() is False

    fake_db.failing_inserts.clear()
    assert api_client.post(f"/api/v1/follows/{bob.id}", headers=alice.headers).status_code == 204
    assert len(fake_db.rows("notifications")) == 1


def test_concurrent_follow_reports_existing_follow(api_client, fake_db, monkeypatch, alice, bob) -> None:
    assert api_client.post(f"/api/v1/follows/{bob.id}", headers=alice.headers).status_code == 204

    # Another request inserted the row between the lookup and the insert
    monkeypatch.setattr(FollowService, "_get_follow", lambda self, follower_id, following_id: None)
    again = api_client.post(f"/api/v1/follows/{bob.id}", headers=alice.headers)
    assert again.status_code == 400
    assert again.json()["detail"] == "You are already following this user"
    assert len(fake_db.rows("follows")) == 1
    assert len(fake_db.rows("notifications")) == 1
