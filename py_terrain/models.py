"""Input models for contribution calendars."""

import datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from .core.stats import GlobalStats


class ContributionDay(BaseModel):
    """One day of activity."""

    date: Optional[datetime.date] = Field(None, description="Calendar date of the day")
    count: int = Field(..., ge=0, description="Raw activity count")


class ContributionWeek(BaseModel):
    """One weekly bucket, Sunday first."""

    days: List[ContributionDay] = Field(default_factory=list, max_length=7)


class ContributionCalendar(BaseModel):
    """A year (or any number of weeks) of daily activity."""

    weeks: List[ContributionWeek] = Field(default_factory=list)
    stats: Optional[GlobalStats] = Field(None, description="Precomputed aggregate statistics")

    @classmethod
    def from_counts(cls, counts: List[List[int]]) -> "ContributionCalendar":
        """Build a calendar from nested weekly count lists."""
        return cls(weeks=[{"days": [{"count": c} for c in week]} for week in counts])

    @property
    def num_weeks(self) -> int:
        return len(self.weeks)

    @property
    def num_days(self) -> int:
        """Length of the longest week."""
        return max((len(w.days) for w in self.weeks), default=0)

    @property
    def max_count(self) -> int:
        return max((d.count for w in self.weeks for d in w.days), default=0)

    def counts(self) -> List[List[int]]:
        return [[d.count for d in w.days] for w in self.weeks]

    def to_activity_cells(self) -> List[Tuple[int, int, int]]:
        """Flatten into ``(week, day, count)`` triples in week-major order."""
        return [
            (week_index, day_index, day.count)
            for week_index, week in enumerate(self.weeks)
            for day_index, day in enumerate(week.days)
        ]

    def summary(self) -> Dict[str, Any]:
        return {
            "weeks": self.num_weeks,
            "days": sum(len(w.days) for w in self.weeks),
            "max_count": self.max_count,
        }
