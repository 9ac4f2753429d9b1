from datetime import date
from typing import Annotated
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class ActivityDay(BaseModel):
    """Contributions made on one calendar day."""

    model_config = ConfigDict(frozen=True)

    date: date
    count: int = Field(ge=0)


class LanguageSample(BaseModel):
    """Byte size of one language inside one repository."""

    model_config = ConfigDict(frozen=True)

    name: str
    color_hint: str | None = None
    byte_size: int = Field(ge=0)
    repo_last_updated: date


class Repository(BaseModel):
    name: str
    stargazer_count: int = Field(default=0, ge=0)
    updated_at: date
    languages: list[LanguageSample] = Field(default_factory=list)


class ContributionTotals(BaseModel):
    commits: int = Field(default=0, ge=0)
    issues: int = Field(default=0, ge=0)
    pull_requests: int = Field(default=0, ge=0)
    reviews: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.commits + self.issues + self.pull_requests + self.reviews


class GitHubUserActivity(BaseModel):
    """One user's year-scoped activity document as returned by GitHub."""

    login: str
    name: str | None = None
    avatar_url: str | None = None
    location: str | None = None
    totals: ContributionTotals = Field(default_factory=ContributionTotals)
    weeks: list[list[ActivityDay]] = Field(default_factory=list)
    repositories: list[Repository] = Field(default_factory=list)


class StreakResult(BaseModel):
    longest: int = Field(ge=0)
    current: int = Field(ge=0)


class LanguageProfileEntry(BaseModel):
    name: str
    color_hint: str | None = None
    percentage: float = Field(ge=0, le=100)


class FixedPercentile(BaseModel):
    """Every total inside the bucket maps to the same percentile."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["fixed"] = "fixed"
    value: float


class LinearPercentile(BaseModel):
    """Percentile interpolated from `start` at the lower bound to `end`.

    `span` is the distance over which the interpolation runs; it defaults to
    the bucket width and must be given for an unbounded bucket. Totals past
    the span saturate at `end`.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["linear"] = "linear"
    start: float
    end: float
    span: int | None = Field(default=None, gt=0)


PercentileRule = Annotated[
    FixedPercentile | LinearPercentile, Field(discriminator="kind")
]


class RankBucket(BaseModel):
    """Half-open range `[lower_bound, upper_bound)` of activity totals."""

    model_config = ConfigDict(frozen=True)

    label: str
    lower_bound: int = Field(ge=0)
    upper_bound: int | None = None
    rule: PercentileRule

    def contains(self, total: int) -> bool:
        if total < self.lower_bound:
            return False
        return self.upper_bound is None or total < self.upper_bound


class RankResult(BaseModel):
    rank: int = Field(ge=1)
    percentile: float = Field(ge=0, le=100)
    top_percent: float = Field(gt=0, le=100)


class RegionRankResult(RankResult):
    name: str


class Rankings(BaseModel):
    world: RankResult
    region: RegionRankResult | None = None
