from collections.abc import Iterable
from datetime import date

from gitwrapped.models import ActivityDay
from gitwrapped.models import StreakResult


def sort_days(days: Iterable[ActivityDay]) -> list[ActivityDay]:
    """Return a new list of days in ascending date order."""

    return sorted(days, key=lambda day: day.date)


def longest_streak(days: list[ActivityDay], strict_gaps: bool = False) -> int:
    """Return the longest run of consecutive active records.

    Records are walked in the order given, which must be ascending. By default
    only the counts are inspected, so two active records with missing dates
    between them still extend the run. With `strict_gaps` a run also restarts
    whenever two neighbouring records are not exactly one day apart.
    """

    longest = 0
    running = 0
    previous_date: date | None = None

    for day in days:
        if day.count > 0:
            if (
                strict_gaps
                and previous_date is not None
                and (day.date - previous_date).days != 1
            ):
                running = 0
            running += 1
            longest = max(longest, running)
        else:
            running = 0
        previous_date = day.date

    return longest


def current_streak(days: list[ActivityDay], reference_date: date) -> int:
    """Return the active run ending at `reference_date`, scanning backward.

    Days after the reference date are skipped. A zero-count day on the
    reference date or the day before it means there is no current streak.
    Older zero-count days are passed over until the first active day is
    found; after that a zero-count day or a gap of more than one day between
    records ends the run.
    """

    running = 0
    current = 0

    for index in range(len(days) - 1, -1, -1):
        day = days[index]
        days_diff = (reference_date - day.date).days
        if days_diff < 0:
            continue

        if day.count > 0:
            running += 1
            current = running
            if index > 0:
                previous_diff = (reference_date - days[index - 1].date).days
                if previous_diff - days_diff > 1:
                    break
            continue

        if days_diff <= 1 or running > 0:
            break

    return current


def compute_streaks(
    days: Iterable[ActivityDay],
    reference_date: date,
    strict_gaps: bool = False,
) -> StreakResult:
    """Compute the longest and the current contribution streak."""

    ordered = sort_days(days)
    return StreakResult(
        longest=longest_streak(ordered, strict_gaps=strict_gaps),
        current=current_streak(ordered, reference_date),
    )
