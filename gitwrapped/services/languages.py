import math
from collections.abc import Iterable

from gitwrapped.models import LanguageProfileEntry
from gitwrapped.models import Repository


MAX_LANGUAGES = 10


def repositories_updated_in(
    repositories: Iterable[Repository], year: int
) -> list[Repository]:
    """Keep only repositories whose last update falls in `year`."""

    return [repo for repo in repositories if repo.updated_at.year == year]


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def aggregate_languages(
    repositories: Iterable[Repository],
    current_year: int,
    limit: int = MAX_LANGUAGES,
) -> list[LanguageProfileEntry]:
    """Merge per-repository language sizes into a ranked percentage profile.

    Sizes are summed per language name over samples whose repository was
    last updated in `current_year`; the colour of the last sample seen wins.
    The top `limit` languages are kept and their percentages are relative to
    the kept subset only, so they are not guaranteed to add up to exactly 100.

    An empty list means there is nothing to show: no sample falls in the
    year, or every kept language has a size of zero bytes, in which case no
    percentage can be computed.
    """

    sizes: dict[str, int] = {}
    colors: dict[str, str | None] = {}

    for repo in repositories:
        for sample in repo.languages:
            if sample.repo_last_updated.year != current_year:
                continue
            sizes[sample.name] = sizes.get(sample.name, 0) + sample.byte_size
            colors[sample.name] = sample.color_hint

    ranked = sorted(sizes.items(), key=lambda item: -item[1])[:limit]
    total_size = sum(size for _, size in ranked)
    if total_size <= 0:
        return []

    return [
        LanguageProfileEntry(
            name=name,
            color_hint=colors[name],
            percentage=round_half_up(size / total_size * 100),
        )
        for name, size in ranked
    ]
