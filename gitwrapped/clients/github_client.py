import logging
from collections.abc import Mapping
from datetime import date
from datetime import datetime
from datetime import UTC
from typing import Any

import httpx

from gitwrapped.models import ActivityDay
from gitwrapped.models import ContributionTotals
from gitwrapped.models import GitHubUserActivity
from gitwrapped.models import LanguageSample
from gitwrapped.models import Repository


logger = logging.getLogger(__name__)

USER_AGENT = "gitwrapped"

WRAPPED_QUERY = """
query($username: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $username) {
    login
    name
    avatarUrl
    location
    contributionsCollection(from: $from, to: $to) {
      totalCommitContributions
      totalIssueContributions
      totalPullRequestContributions
      totalPullRequestReviewContributions
      contributionCalendar {
        weeks {
          contributionDays {
            date
            contributionCount
          }
        }
      }
    }
    repositories(
      first: 100
      orderBy: { field: UPDATED_AT, direction: DESC }
      ownerAffiliations: OWNER
    ) {
      nodes {
        name
        stargazerCount
        updatedAt
        languages(first: 10, orderBy: { field: SIZE, direction: DESC }) {
          edges {
            size
            node {
              name
              color
            }
          }
        }
      }
    }
  }
}
"""


class GitHubGraphQLError(Exception):
    """Raised when GitHub answers a GraphQL request with errors."""

    def __init__(self, message: str, error_type: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type


def parse_github_datetime(raw_value: str) -> datetime:
    return datetime.fromisoformat(raw_value.replace("Z", "+00:00"))


def year_range(year: int) -> tuple[str, str]:
    """Return the UTC DateTime bounds covering one calendar year."""

    return f"{year}-01-01T00:00:00Z", f"{year}-12-31T23:59:59Z"


def _int_field(payload: Mapping[str, Any], key: str) -> int:
    value = payload.get(key)
    if isinstance(value, int) and value >= 0:
        return value
    return 0


def parse_totals(collection: Mapping[str, Any]) -> ContributionTotals:
    return ContributionTotals(
        commits=_int_field(collection, "totalCommitContributions"),
        issues=_int_field(collection, "totalIssueContributions"),
        pull_requests=_int_field(collection, "totalPullRequestContributions"),
        reviews=_int_field(collection, "totalPullRequestReviewContributions"),
    )


def parse_weeks(collection: Mapping[str, Any]) -> list[list[ActivityDay]]:
    """Read the week/day calendar, skipping malformed items."""

    calendar = collection.get("contributionCalendar")
    if not isinstance(calendar, Mapping):
        raise ValueError("GitHub contributionCalendar is missing")

    raw_weeks = calendar.get("weeks")
    if not isinstance(raw_weeks, list):
        raise ValueError("GitHub contribution weeks are missing")

    weeks: list[list[ActivityDay]] = []
    for week in raw_weeks:
        if not isinstance(week, Mapping):
            continue
        contribution_days = week.get("contributionDays")
        if not isinstance(contribution_days, list):
            continue

        days: list[ActivityDay] = []
        for item in contribution_days:
            if not isinstance(item, Mapping):
                continue
            raw_date = item.get("date")
            raw_count = item.get("contributionCount")
            if not isinstance(raw_date, str) or not isinstance(raw_count, int):
                continue
            try:
                parsed_day = date.fromisoformat(raw_date)
            except ValueError:
                continue
            days.append(ActivityDay(date=parsed_day, count=max(0, raw_count)))
        weeks.append(days)

    return weeks


def parse_repository(node: Mapping[str, Any]) -> Repository | None:
    raw_name = node.get("name")
    raw_updated_at = node.get("updatedAt")
    if not isinstance(raw_name, str) or not isinstance(raw_updated_at, str):
        return None

    try:
        updated_at = parse_github_datetime(raw_updated_at).astimezone(UTC).date()
    except ValueError:
        return None

    samples: list[LanguageSample] = []
    languages = node.get("languages")
    edges = languages.get("edges") if isinstance(languages, Mapping) else None
    for edge in edges if isinstance(edges, list) else []:
        if not isinstance(edge, Mapping):
            continue
        language = edge.get("node")
        size = edge.get("size")
        if not isinstance(language, Mapping) or not isinstance(size, int):
            continue
        language_name = language.get("name")
        if not isinstance(language_name, str):
            continue
        color = language.get("color")
        samples.append(
            LanguageSample(
                name=language_name,
                color_hint=color if isinstance(color, str) else None,
                byte_size=max(0, size),
                repo_last_updated=updated_at,
            )
        )

    return Repository(
        name=raw_name,
        stargazer_count=_int_field(node, "stargazerCount"),
        updated_at=updated_at,
        languages=samples,
    )


def parse_user_activity(user: Mapping[str, Any]) -> GitHubUserActivity:
    raw_login = user.get("login")
    if not isinstance(raw_login, str) or not raw_login:
        raise ValueError("GitHub user response is missing required fields")

    collection = user.get("contributionsCollection")
    if not isinstance(collection, Mapping):
        raise ValueError("GitHub contributionsCollection is missing")

    repositories: list[Repository] = []
    raw_repositories = user.get("repositories")
    nodes = (
        raw_repositories.get("nodes")
        if isinstance(raw_repositories, Mapping)
        else None
    )
    for node in nodes if isinstance(nodes, list) else []:
        if not isinstance(node, Mapping):
            continue
        repository = parse_repository(node)
        if repository is not None:
            repositories.append(repository)

    def optional_str(key: str) -> str | None:
        value = user.get(key)
        return value if isinstance(value, str) and value else None

    return GitHubUserActivity(
        login=raw_login,
        name=optional_str("name"),
        avatar_url=optional_str("avatarUrl"),
        location=optional_str("location"),
        totals=parse_totals(collection),
        weeks=parse_weeks(collection),
        repositories=repositories,
    )


def fetch_user_activity(
    username: str,
    token: str,
    graphql_url: str,
    year: int,
    timeout: float = 20.0,
) -> GitHubUserActivity | None:
    """Fetch one user's activity for a calendar year from GitHub GraphQL API.

    Returns None when GitHub reports no such user.

    Raises:
        httpx.HTTPStatusError: If GitHub answers with a non-2xx status.
        GitHubGraphQLError: If the GraphQL payload carries errors.
        ValueError: If the payload does not have the expected shape.
    """

    if not token:
        raise ValueError("GITHUB_TOKEN is required for GraphQL requests")

    from_value, to_value = year_range(year)
    variables = {"username": username, "from": from_value, "to": to_value}
    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
    }

    logger.debug("Requesting GitHub activity for %s in %s", username, year)
    response = httpx.post(
        graphql_url,
        json={"query": WRAPPED_QUERY, "variables": variables},
        headers=headers,
        timeout=timeout,
    )
    response.raise_for_status()

    payload = response.json()
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub GraphQL response is invalid")

    errors = payload.get("errors")
    if errors:
        first = errors[0] if isinstance(errors, list) and errors else {}
        if not isinstance(first, Mapping):
            first = {}
        message = first.get("message")
        error_type = first.get("type")
        raise GitHubGraphQLError(
            message if isinstance(message, str) else "GitHub GraphQL returned errors",
            error_type=error_type if isinstance(error_type, str) else None,
        )

    data = payload.get("data")
    if not isinstance(data, Mapping):
        raise ValueError("GitHub GraphQL data is missing")

    user = data.get("user")
    if user is None:
        return None
    if not isinstance(user, Mapping):
        raise ValueError("GitHub user response is invalid")

    return parse_user_activity(user)
