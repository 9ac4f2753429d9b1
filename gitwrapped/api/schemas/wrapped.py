from datetime import date

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialising field names as camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WrappedUser(CamelModel):
    login: str
    name: str
    avatar_url: str | None = None
    location: str | None = None
    country: str | None = None


class WrappedSummary(CamelModel):
    """Yearly totals shown on the summary card."""

    total_contributions: int
    total_commits: int
    total_issues: int
    total_pull_requests: int
    total_reviews: int
    longest_streak: int
    current_streak: int
    total_stars: int
    repos_updated: int


class RankingItem(CamelModel):
    rank: int
    percentile: float
    top_percent: float


class RegionRankingItem(RankingItem):
    name: str


class WrappedRankings(CamelModel):
    world: RankingItem
    region: RegionRankingItem | None = None


class CalendarDay(CamelModel):
    date: date
    count: int


class LanguageItem(CamelModel):
    name: str
    color_hint: str | None = None
    percentage: float


class WrappedResponse(CamelModel):
    """Combined year-in-review payload for one GitHub user."""

    user: WrappedUser
    summary: WrappedSummary
    rankings: WrappedRankings
    calendar: list[CalendarDay]
    languages: list[LanguageItem]


class SearchCountResponse(CamelModel):
    count: int
    success: bool | None = None
