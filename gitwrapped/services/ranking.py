"""Rough percentile ranking for a year of contribution activity.

The bucket table below is a hand-tuned heuristic, not a fit to real
population data. It is kept as data so each bucket can be checked on its own
and the table replaced without touching the estimator.
"""

from collections.abc import Sequence

from gitwrapped.models import FixedPercentile
from gitwrapped.models import LinearPercentile
from gitwrapped.models import RankBucket
from gitwrapped.models import RankResult
from gitwrapped.models import RegionRankResult
from gitwrapped.models import Rankings


WORLD_ACTIVE_POPULATION = 50_000_000
REGION_ACTIVE_POPULATION = 1_000_000

REGION_BONUS_RATE = 0.02
REGION_BONUS_CAP = 2.0
MIN_TOP_PERCENT = 0.1

RANK_TABLE: tuple[RankBucket, ...] = (
    RankBucket(
        label="inactive", lower_bound=0, upper_bound=1,
        rule=FixedPercentile(value=0.0),
    ),
    RankBucket(
        label="occasional", lower_bound=1, upper_bound=50,
        rule=LinearPercentile(start=5.0, end=40.0),
    ),
    RankBucket(
        label="regular", lower_bound=50, upper_bound=200,
        rule=LinearPercentile(start=40.0, end=65.0),
    ),
    RankBucket(
        label="active", lower_bound=200, upper_bound=500,
        rule=LinearPercentile(start=65.0, end=80.0),
    ),
    RankBucket(
        label="dedicated", lower_bound=500, upper_bound=1000,
        rule=LinearPercentile(start=80.0, end=90.0),
    ),
    RankBucket(
        label="prolific", lower_bound=1000, upper_bound=2000,
        rule=LinearPercentile(start=90.0, end=95.0),
    ),
    RankBucket(
        label="exceptional", lower_bound=2000, upper_bound=5000,
        rule=LinearPercentile(start=95.0, end=98.0),
    ),
    RankBucket(
        label="elite", lower_bound=5000, upper_bound=None,
        rule=LinearPercentile(start=98.0, end=99.9, span=15000),
    ),
)


def validate_table(table: Sequence[RankBucket]) -> None:
    """Check that buckets are contiguous from zero and end unbounded.

    Raises:
        ValueError: If the table leaves some non-negative total uncovered.
    """

    if not table:
        raise ValueError("rank table is empty")
    if table[0].lower_bound != 0:
        raise ValueError("rank table must start at 0")

    for bucket, following in zip(table, table[1:]):
        if bucket.upper_bound is None:
            raise ValueError(f"bucket {bucket.label!r} is unbounded but not last")
        if bucket.upper_bound <= bucket.lower_bound:
            raise ValueError(f"bucket {bucket.label!r} is empty")
        if following.lower_bound != bucket.upper_bound:
            raise ValueError(
                f"bucket {following.label!r} does not start where "
                f"{bucket.label!r} ends"
            )

    last = table[-1]
    if last.upper_bound is not None:
        raise ValueError("last rank bucket must be unbounded")
    if isinstance(last.rule, LinearPercentile) and last.rule.span is None:
        raise ValueError("unbounded linear bucket needs an explicit span")


validate_table(RANK_TABLE)


def find_bucket(total: int, table: Sequence[RankBucket] = RANK_TABLE) -> RankBucket:
    for bucket in table:
        if bucket.contains(total):
            return bucket
    # Negative totals fall below the first bucket.
    return table[0]


def bucket_percentile(bucket: RankBucket, total: int) -> float:
    """Apply a bucket's rule to a total that lies inside it."""

    rule = bucket.rule
    if isinstance(rule, FixedPercentile):
        return rule.value

    span = rule.span
    if span is None:
        span = bucket.upper_bound - bucket.lower_bound
    progress = min(1.0, max(0.0, (total - bucket.lower_bound) / span))
    return rule.start + (rule.end - rule.start) * progress


def clamp_percentile(value: float) -> float:
    return min(100.0, max(0.0, value))


def world_percentile(total: int, table: Sequence[RankBucket] = RANK_TABLE) -> float:
    """Return the unrounded world percentile for an activity total."""

    return clamp_percentile(bucket_percentile(find_bucket(total, table), total))


def region_percentile(world: float) -> float:
    bonus = min(REGION_BONUS_CAP, world * REGION_BONUS_RATE)
    return clamp_percentile(world + bonus)


def rank_in_population(percentile: float, population: int) -> RankResult:
    """Turn a percentile into a rank and a "top X%" figure for a population."""

    percentile = round(percentile, 1)
    # Whole tenths of a percent above the subject, so the ceiling is exact.
    tenths_above = round((100 - percentile) * 10)
    rank = max(1, -(-population * tenths_above // 1000))
    top_percent = max(MIN_TOP_PERCENT, tenths_above / 10)
    return RankResult(rank=rank, percentile=percentile, top_percent=top_percent)


def estimate_ranking(
    activity_total: int,
    region: str | None = None,
    table: Sequence[RankBucket] = RANK_TABLE,
    world_population: int = WORLD_ACTIVE_POPULATION,
    region_population: int = REGION_ACTIVE_POPULATION,
) -> Rankings:
    """Estimate world and regional standing for a yearly activity total.

    The regional result is only produced when a region name is given.
    """

    world = world_percentile(activity_total, table)
    world_result = rank_in_population(world, world_population)

    region_result = None
    if region:
        regional = rank_in_population(region_percentile(world), region_population)
        region_result = RegionRankResult(name=region, **regional.model_dump())

    return Rankings(world=world_result, region=region_result)
