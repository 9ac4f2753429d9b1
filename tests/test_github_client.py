from datetime import date

import httpx
import pytest

from gitwrapped.clients.github_client import GitHubGraphQLError
from gitwrapped.clients.github_client import fetch_user_activity
from gitwrapped.clients.github_client import year_range


GRAPHQL_URL = "https://api.github.test/graphql"


def install_fake_post(monkeypatch, status_code: int, body: object) -> list[dict]:
    calls: list[dict] = []

    def fake_post(url: str, **kwargs) -> httpx.Response:
        calls.append({"url": url, **kwargs})
        return httpx.Response(
            status_code,
            json=body,
            request=httpx.Request("POST", url),
        )

    monkeypatch.setattr("gitwrapped.clients.github_client.httpx.post", fake_post)
    return calls


def test_year_range_covers_whole_utc_year() -> None:
    assert year_range(2026) == ("2026-01-01T00:00:00Z", "2026-12-31T23:59:59Z")


def test_fetch_user_activity_parses_payload(monkeypatch, graphql_user_payload) -> None:
    calls = install_fake_post(monkeypatch, 200, graphql_user_payload())

    activity = fetch_user_activity(
        username="octocat", token="secret", graphql_url=GRAPHQL_URL, year=2026
    )

    assert activity is not None
    assert activity.login == "octocat"
    assert activity.location == "Berlin, Germany"
    assert activity.totals.commits == 400
    assert activity.totals.total == 500
    assert [day.count for day in activity.weeks[0]] == [3, 0, 5, 2]
    assert activity.weeks[0][0].date == date(2026, 1, 1)
    assert [repo.name for repo in activity.repositories] == ["hello", "world", "legacy"]
    assert activity.repositories[2].updated_at == date(2025, 12, 31)
    assert activity.repositories[0].languages[0].color_hint == "#00ADD8"

    assert calls[0]["url"] == GRAPHQL_URL
    assert calls[0]["headers"]["Authorization"] == "Bearer secret"
    assert calls[0]["json"]["variables"] == {
        "username": "octocat",
        "from": "2026-01-01T00:00:00Z",
        "to": "2026-12-31T23:59:59Z",
    }


def test_fetch_user_activity_skips_malformed_items(
    monkeypatch, graphql_user_payload
) -> None:
    payload = graphql_user_payload(
        days=[("2026-01-01", 1), ("not-a-date", 4)],
        repositories=[
            {"name": "broken"},
            {
                "name": "ok",
                "stargazerCount": None,
                "updatedAt": "2026-04-01T00:00:00Z",
                "languages": {"edges": [{"size": "big", "node": {"name": "C"}}]},
            },
        ],
    )
    install_fake_post(monkeypatch, 200, payload)

    activity = fetch_user_activity(
        username="octocat", token="secret", graphql_url=GRAPHQL_URL, year=2026
    )

    assert len(activity.weeks[0]) == 1
    assert [repo.name for repo in activity.repositories] == ["ok"]
    assert activity.repositories[0].stargazer_count == 0
    assert activity.repositories[0].languages == []


def test_fetch_user_activity_returns_none_for_missing_user(monkeypatch) -> None:
    install_fake_post(monkeypatch, 200, {"data": {"user": None}})

    assert (
        fetch_user_activity(
            username="ghost", token="secret", graphql_url=GRAPHQL_URL, year=2026
        )
        is None
    )


def test_fetch_user_activity_raises_graphql_errors(monkeypatch) -> None:
    install_fake_post(
        monkeypatch,
        200,
        {
            "data": {"user": None},
            "errors": [
                {
                    "type": "NOT_FOUND",
                    "message": "Could not resolve to a User with the login of 'ghost'.",
                }
            ],
        },
    )

    with pytest.raises(GitHubGraphQLError) as exc_info:
        fetch_user_activity(
            username="ghost", token="secret", graphql_url=GRAPHQL_URL, year=2026
        )

    assert exc_info.value.error_type == "NOT_FOUND"
    assert "ghost" in exc_info.value.message


def test_fetch_user_activity_raises_for_http_errors(monkeypatch) -> None:
    install_fake_post(monkeypatch, 401, {"message": "Bad credentials"})

    with pytest.raises(httpx.HTTPStatusError):
        fetch_user_activity(
            username="octocat", token="bad", graphql_url=GRAPHQL_URL, year=2026
        )


def test_fetch_user_activity_requires_token() -> None:
    with pytest.raises(ValueError):
        fetch_user_activity(
            username="octocat", token="", graphql_url=GRAPHQL_URL, year=2026
        )
