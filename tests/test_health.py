from __future__ import annotations


def test_health_and_ready(api_client) -> None:
    assert api_client.get("/health").json() == {"status": "healthy"}
    assert api_client.get("/ready").json() == {"status": "ready"}


def test_security_headers(api_client) -> None:
    r = api_client.get("/")
    assert r.status_code == 200
    assert r.headers["X-Content-Type-Options"] == "nosniff"
    assert r.headers["X-Frame-Options"] == "DENY"
