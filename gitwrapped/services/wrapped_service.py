import logging
from collections.abc import Iterable
from datetime import date

import httpx

from gitwrapped.api.schemas.wrapped import CalendarDay
from gitwrapped.api.schemas.wrapped import LanguageItem
from gitwrapped.api.schemas.wrapped import RankingItem
from gitwrapped.api.schemas.wrapped import RegionRankingItem
from gitwrapped.api.schemas.wrapped import WrappedRankings
from gitwrapped.api.schemas.wrapped import WrappedResponse
from gitwrapped.api.schemas.wrapped import WrappedSummary
from gitwrapped.api.schemas.wrapped import WrappedUser
from gitwrapped.clients.github_client import GitHubGraphQLError
from gitwrapped.clients.github_client import fetch_user_activity
from gitwrapped.models import ActivityDay
from gitwrapped.models import GitHubUserActivity
from gitwrapped.services.languages import aggregate_languages
from gitwrapped.services.languages import repositories_updated_in
from gitwrapped.services.location import extract_country
from gitwrapped.services.ranking import estimate_ranking
from gitwrapped.services.streaks import compute_streaks


logger = logging.getLogger(__name__)


class MissingInputError(Exception):
    """Raised when no username is supplied."""


class UnauthenticatedError(Exception):
    """Raised when no usable GitHub credential is available."""


class UserNotFoundError(Exception):
    """Raised when GitHub has no user with the requested login."""


class UpstreamError(Exception):
    """Raised when the GitHub request fails for any other reason."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def flatten_weeks(weeks: Iterable[Iterable[ActivityDay]]) -> list[ActivityDay]:
    """Flatten the week/day calendar into one list, keeping upstream order."""

    return [day for week in weeks for day in week]


def fetch_activity(
    username: str,
    token: str,
    graphql_url: str,
    year: int,
    timeout: float,
) -> GitHubUserActivity:
    """Fetch activity and translate client failures into service errors."""

    try:
        activity = fetch_user_activity(
            username=username,
            token=token,
            graphql_url=graphql_url,
            year=year,
            timeout=timeout,
        )
    except httpx.HTTPStatusError as exc:
        logger.warning(
            "GitHub answered %s for %s", exc.response.status_code, username
        )
        if exc.response.status_code in {401, 403}:
            raise UnauthenticatedError("GitHub token is invalid") from exc
        reason = exc.response.reason_phrase or str(exc.response.status_code)
        raise UpstreamError(f"GitHub API error: {reason}") from exc
    except GitHubGraphQLError as exc:
        if exc.error_type == "NOT_FOUND":
            raise UserNotFoundError(username) from exc
        logger.warning("GitHub GraphQL error for %s: %s", username, exc.message)
        raise UpstreamError(exc.message) from exc
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("GitHub request for %s failed: %s", username, exc)
        raise UpstreamError(str(exc) or "GitHub API request failed") from exc

    if activity is None:
        raise UserNotFoundError(username)
    return activity


def summarize_activity(
    activity: GitHubUserActivity,
    reference_date: date,
    strict_gaps: bool = False,
) -> WrappedResponse:
    """Derive streaks, languages and rankings from a fetched document."""

    year = reference_date.year
    calendar = flatten_weeks(activity.weeks)
    streaks = compute_streaks(calendar, reference_date, strict_gaps=strict_gaps)
    languages = aggregate_languages(activity.repositories, year)

    # Rankings use all four contribution types, not commits alone.
    total_contributions = activity.totals.total
    country = extract_country(activity.location)
    rankings = estimate_ranking(total_contributions, region=country)

    updated_repositories = repositories_updated_in(activity.repositories, year)
    total_stars = sum(repo.stargazer_count for repo in updated_repositories)

    region = None
    if rankings.region is not None:
        region = RegionRankingItem(**rankings.region.model_dump())

    return WrappedResponse(
        user=WrappedUser(
            login=activity.login,
            name=activity.name or activity.login,
            avatar_url=activity.avatar_url,
            location=activity.location,
            country=country,
        ),
        summary=WrappedSummary(
            total_contributions=total_contributions,
            total_commits=activity.totals.commits,
            total_issues=activity.totals.issues,
            total_pull_requests=activity.totals.pull_requests,
            total_reviews=activity.totals.reviews,
            longest_streak=streaks.longest,
            current_streak=streaks.current,
            total_stars=total_stars,
            repos_updated=len(updated_repositories),
        ),
        rankings=WrappedRankings(
            world=RankingItem(**rankings.world.model_dump()),
            region=region,
        ),
        calendar=[CalendarDay(date=day.date, count=day.count) for day in calendar],
        languages=[
            LanguageItem(
                name=entry.name,
                color_hint=entry.color_hint,
                percentage=entry.percentage,
            )
            for entry in languages
        ],
    )


def get_wrapped_data(
    username: str | None,
    token: str | None,
    graphql_url: str,
    reference_date: date,
    strict_gaps: bool = False,
    timeout: float = 20.0,
) -> WrappedResponse:
    """Build the year-in-review payload for `username`.

    Raises:
        MissingInputError: If the username is empty.
        UnauthenticatedError: If there is no token or GitHub rejects it.
        UserNotFoundError: If the user does not exist on GitHub.
        UpstreamError: If the GitHub request fails otherwise.
    """

    normalized_username = (username or "").strip()
    if not normalized_username:
        raise MissingInputError("Username is required")
    if not token:
        raise UnauthenticatedError("GitHub token not configured")

    logger.info(
        "Building wrapped summary for %s (%s)", normalized_username, reference_date
    )
    activity = fetch_activity(
        username=normalized_username,
        token=token,
        graphql_url=graphql_url,
        year=reference_date.year,
        timeout=timeout,
    )
    return summarize_activity(activity, reference_date, strict_gaps=strict_gaps)
