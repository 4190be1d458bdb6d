from __future__ import annotations


def test_current_user(api_client, alice) -> None:
    me = api_client.get("/api/v1/users/me", headers=alice.headers)
    assert me.status_code == 200
    assert me.json()["username"] == "alice"
    assert api_client.get("/api/v1/users/me").json() is None


def test_unsynced_identity_cannot_mutate(api_client, fake_db) -> None:
    token = fake_db.auth.issue_token("ext-not-synced")
    r = api_client.put(
        "/api/v1/users/me/profile",
        json={"bio": "hi"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert r.status_code == 401
    assert r.json()["detail"] == "Can't get current user"


def test_update_profile_patches_only_given_fields(api_client, fake_db) -> None:
    dave = fake_db.add_user("dave", location="Berlin")
    r = api_client.put(
        "/api/v1/users/me/profile",
        json={"bio": "support main", "profile_picture": "dave/avatar"},
        headers=dave.headers,
    )
    assert r.status_code == 200
    body = r.json()
    assert body["bio"] == "support main"
    assert body["location"] == "Berlin"

    public = api_client.get("/api/v1/users/dave/public").json()
    assert public["id"] == dave.id
    assert public["posts"] == 0
    assert public["profile_picture_url"].startswith("https://storage.test/media/dave/avatar")
    assert public["banner_image_url"] is None


def test_unknown_public_user(api_client) -> None:
    r = api_client.get("/api/v1/users/nobody/public")
    assert r.status_code == 200
    assert r.json()["posts"] == 0
    assert r.json()["id"] is None


def test_gaming_profiles(api_client, alice) -> None:
    r = api_client.put(
        "/api/v1/users/me/gaming/riot",
        json={"riot_id": "r-1", "game_name": "alice", "tag_line": "EUW"},
        headers=alice.headers,
    )
    assert r.status_code == 200
    riot = r.json()["riot_profile"]
    assert riot["tag_line"] == "EUW"
    assert riot["connected_at"]

    r = api_client.put(
        "/api/v1/users/me/gaming/steam",
        json={"steam_id": "765", "username": "alice", "profile_url": "https://steamcommunity.com/id/alice"},
        headers=alice.headers,
    )
    assert r.json()["steam_profile"]["avatar_url"] is None

    public = api_client.get("/api/v1/users/alice/public").json()
    assert public["riot_profile"]["riot_id"] == "r-1"

    cleared = api_client.delete("/api/v1/users/me/gaming/riot", headers=alice.headers)
    assert cleared.status_code == 200
    assert cleared.json()["riot_profile"] is None
    assert cleared.json()["steam_profile"] is not None

    assert api_client.delete("/api/v1/users/me/gaming/xbox", headers=alice.headers).status_code == 422


def test_search_users(api_client, fake_db, alice, bob) -> None:
    fake_db.add_user("alicia")
    hits = api_client.get("/api/v1/users/search", params={"q": "ALI"}).json()
    assert sorted(h["username"] for h in hits) == ["alice", "alicia"]
    assert all(h["type"] == "user" and h["title"] == h["username"] for h in hits)
    assert api_client.get("/api/v1/users/search", params={"q": ""}).json() == []


def test_search_users_caps_results(api_client, fake_db) -> None:
    for i in range(12):
        fake_db.add_user(f"player{i}")
    assert len(api_client.get("/api/v1/users/search", params={"q": "player"}).json()) == 10
