"""
Aggregate activity statistics used by the landmark stats gate.
"""

from typing import Iterable, List, Sequence

import structlog
from pydantic import BaseModel, ConfigDict, Field

logger = structlog.get_logger()

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


class GlobalStats(BaseModel):
    """Whole-calendar activity statistics."""

    model_config = ConfigDict(frozen=True)

    total: int = Field(0, ge=0, description="Sum of all daily counts")
    longest_streak: int = Field(0, ge=0, description="Longest run of active days")
    current_streak: int = Field(0, ge=0, description="Run of active days ending on the last day")
    most_active_day: str = Field("Monday", description="Weekday with the highest summed count")


def compute_stats(weeks: Iterable[Sequence[int]]) -> GlobalStats:
    """
    Compute statistics from weekly buckets of daily counts.

    Args:
        weeks: Iterable of weeks, each a sequence of up to 7 daily counts
            indexed Sunday first

    Returns:
        GlobalStats; an input without days yields zeros and "Monday"
    """
    counts: List[int] = []
    weekday_totals = [0] * len(DAY_NAMES)

    for week in weeks:
        for day_index, count in enumerate(week):
            counts.append(count)
            weekday_totals[day_index % len(DAY_NAMES)] += count

    if not counts:
        return GlobalStats()

    longest = run = 0
    for count in counts:
        run = run + 1 if count > 0 else 0
        longest = max(longest, run)

    current = 0
    for count in reversed(counts):
        if count <= 0:
            break
        current += 1

    # max() keeps the first index on ties, so Sunday wins an all-equal week
    busiest = max(range(len(DAY_NAMES)), key=lambda i: weekday_totals[i])

    stats = GlobalStats(
        total=sum(counts),
        longest_streak=longest,
        current_streak=current,
        most_active_day=DAY_NAMES[busiest],
    )
    logger.debug("Stats computed", total=stats.total, longest_streak=longest, current_streak=current)
    return stats
