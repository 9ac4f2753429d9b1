from fastapi.testclient import TestClient

from gitwrapped.main import create_app


def test_wrapped_endpoint_rate_limited_after_threshold(monkeypatch) -> None:
    """Rate limiter blocks repeated requests to /api/wrapped."""

    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "1")
    monkeypatch.setenv("RATE_LIMIT_WINDOW_SECONDS", "60")
    app = create_app()
    client = TestClient(app)

    headers = {"X-Forwarded-For": "203.0.113.10"}

    first = client.get("/api/wrapped", headers=headers)
    second = client.get("/api/wrapped", headers=headers)

    assert first.status_code == 400
    assert second.status_code == 429
    assert second.headers["Retry-After"]


def test_rate_limit_is_tracked_per_client(monkeypatch) -> None:
    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "1")
    app = create_app()
    client = TestClient(app)

    first = client.get("/api/wrapped", headers={"X-Forwarded-For": "203.0.113.10"})
    other = client.get("/api/wrapped", headers={"X-Forwarded-For": "198.51.100.7"})

    assert first.status_code == 400
    assert other.status_code == 400


def test_other_routes_not_rate_limited(monkeypatch) -> None:
    """Rate limiter does not affect routes other than /api/wrapped."""

    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "1")
    monkeypatch.setenv("RATE_LIMIT_WINDOW_SECONDS", "60")
    app = create_app()
    client = TestClient(app)

    assert client.get("/").status_code == 200
    assert client.get("/").status_code == 200
    assert client.post("/api/stats").status_code == 200
    assert client.post("/api/stats").status_code == 200
