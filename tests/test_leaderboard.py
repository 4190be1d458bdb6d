from __future__ import annotations


def test_top_posts_ranked_by_score(api_client, alice, bob, carol, make_subreddit, make_post) -> None:
    subreddit_id = make_subreddit(alice)
    quiet = make_post(alice, subreddit_id, subject="quiet")
    loved = make_post(alice, subreddit_id, subject="loved")
    hated = make_post(alice, subreddit_id, subject="hated")
    newest = make_post(alice, subreddit_id, subject="newest")

    for user in (bob, carol):
        api_client.post(f"/api/v1/votes/{loved}/upvote", headers=user.headers)
    api_client.post(f"/api/v1/votes/{hated}/downvote", headers=bob.headers)

    top = api_client.get("/api/v1/leaderboard/top-posts").json()
    assert [p["id"] for p in top] == [loved, newest, quiet, hated]
    assert [p["score"] for p in top] == [2, 0, 0, -1]
    assert top[0]["subreddit"]["name"] == "gaming"

    limited = api_client.get("/api/v1/leaderboard/top-posts", params={"limit": 1}).json()
    assert [p["id"] for p in limited] == [loved]


def test_top_posts_empty(api_client) -> None:
    assert api_client.get("/api/v1/leaderboard/top-posts").json() == []
