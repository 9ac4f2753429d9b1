from datetime import date

import pytest

from gitwrapped.clients.github_client import parse_user_activity
from gitwrapped.models import GitHubUserActivity


def build_user_payload(
    login: str = "octocat",
    location: str | None = "Berlin, Germany",
    days: list[tuple[str, int]] | None = None,
    repositories: list[dict[str, object]] | None = None,
) -> dict[str, object]:
    """Build a GraphQL response body shaped like GitHub's wrapped query."""

    if days is None:
        days = [
            ("2026-01-01", 3),
            ("2026-01-02", 0),
            ("2026-01-03", 5),
            ("2026-01-04", 2),
        ]
    if repositories is None:
        repositories = [
            {
                "name": "hello",
                "stargazerCount": 7,
                "updatedAt": "2026-03-01T10:00:00Z",
                "languages": {
                    "edges": [
                        {"size": 300, "node": {"name": "Go", "color": "#00ADD8"}},
                    ]
                },
            },
            {
                "name": "world",
                "stargazerCount": 3,
                "updatedAt": "2026-02-01T10:00:00Z",
                "languages": {
                    "edges": [
                        {"size": 200, "node": {"name": "Go", "color": "#00ADD8"}},
                    ]
                },
            },
            {
                "name": "legacy",
                "stargazerCount": 100,
                "updatedAt": "2025-12-31T10:00:00Z",
                "languages": {
                    "edges": [
                        {"size": 500, "node": {"name": "Rust", "color": "#dea584"}},
                    ]
                },
            },
        ]

    return {
        "data": {
            "user": {
                "login": login,
                "name": "The Octocat",
                "avatarUrl": "https://avatars.example.com/octocat",
                "location": location,
                "contributionsCollection": {
                    "totalCommitContributions": 400,
                    "totalIssueContributions": 50,
                    "totalPullRequestContributions": 40,
                    "totalPullRequestReviewContributions": 10,
                    "contributionCalendar": {
                        "weeks": [
                            {
                                "contributionDays": [
                                    {"date": raw_date, "contributionCount": count}
                                    for raw_date, count in days
                                ]
                            }
                        ]
                    },
                },
                "repositories": {"nodes": repositories},
            }
        }
    }


@pytest.fixture
def reference_date() -> date:
    return date(2026, 1, 4)


@pytest.fixture
def graphql_user_payload():
    """Factory for GraphQL user payloads; keyword arguments override parts."""

    return build_user_payload


@pytest.fixture
def make_activity():
    """Factory for parsed `GitHubUserActivity` documents."""

    def factory(**kwargs) -> GitHubUserActivity:
        return parse_user_activity(build_user_payload(**kwargs)["data"]["user"])

    return factory
