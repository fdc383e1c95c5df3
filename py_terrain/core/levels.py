"""
Activity level mapping.

Converts a raw per-day count into a discrete intensity level on a fixed
ordinal scale. Two scales are provided:

- ``LEVEL_SCALE_10``: levels 0-9, hand-tuned breakpoints
- ``LEVEL_SCALE_100``: levels 0-99, quadratic breakpoints

Breakpoints are ascending ratio thresholds for levels 2..max. Any positive
count is at least level 1 and a ratio at or above the top breakpoint
saturates at the maximum level.
"""

from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import structlog

logger = structlog.get_logger()


@dataclass(frozen=True)
class LevelScale:
    """A closed, zero-based level scale with its ratio breakpoints."""

    name: str
    max_level: int
    breakpoints: Tuple[float, ...]

    def __post_init__(self):
        if len(self.breakpoints) != self.max_level - 1:
            raise ValueError(
                f"Scale '{self.name}' needs {self.max_level - 1} breakpoints, "
                f"got {len(self.breakpoints)}"
            )
        if list(self.breakpoints) != sorted(self.breakpoints):
            raise ValueError(f"Scale '{self.name}' breakpoints must ascend")

    def level(self, count: int, max_count: int) -> int:
        """
        Map a raw count to a level on this scale.

        Args:
            count: Raw activity count for one day
            max_count: Reference maximum; 0 is treated as 1

        Returns:
            Level in [0, max_level]
        """
        if count <= 0:
            return 0
        ratio = count / max(max_count, 1)
        return min(bisect_right(self.breakpoints, ratio) + 1, self.max_level)

    def band(self, level: int, bands: int = 10) -> int:
        """Collapse a level into one of ``bands`` coarse bands."""
        return min(level * bands // (self.max_level + 1), bands - 1)

    def rescale(self, level: int, target: "LevelScale") -> int:
        """Project a level onto another scale, preserving 0 and the maximum."""
        if target.max_level == self.max_level:
            return level
        return round(level * target.max_level / self.max_level)

    def normalize(self, level: int) -> float:
        return level / self.max_level


LEVEL_SCALE_10 = LevelScale(
    name="10",
    max_level=9,
    breakpoints=(0.02, 0.05, 0.10, 0.18, 0.28, 0.40, 0.55, 0.75),
)

# Level k (k >= 2) starts at ((k - 1) / 98) ** 2; only the maximum count hits 99
LEVEL_SCALE_100 = LevelScale(
    name="100",
    max_level=99,
    breakpoints=tuple((i / 98) ** 2 for i in range(1, 99)),
)

SCALES = {10: LEVEL_SCALE_10, 100: LEVEL_SCALE_100}


def get_scale(levels: int) -> LevelScale:
    """Look up a scale by its number of levels (10 or 100)."""
    if levels not in SCALES:
        raise ValueError(f"Unknown level scale '{levels}'. Available: {sorted(SCALES)}")
    return SCALES[levels]


@dataclass(frozen=True)
class LevelAssignment:
    """Level derived for one (week, day) cell."""

    week: int
    day: int
    level: int


def assign_levels(
    cells: Iterable[Tuple[int, int, int]],
    scale: LevelScale = LEVEL_SCALE_100,
    max_count: Optional[int] = None,
) -> List[LevelAssignment]:
    """
    Assign levels to ``(week, day, count)`` triples.

    Args:
        cells: Raw activity cells
        scale: Level scale to map onto
        max_count: Reference maximum; defaults to the largest count present

    Returns:
        One LevelAssignment per input cell, in input order
    """
    cells = list(cells)
    if max_count is None:
        max_count = max((count for _, _, count in cells), default=0)

    assignments = [
        LevelAssignment(week, day, scale.level(count, max_count))
        for week, day, count in cells
    ]
    logger.debug("Levels assigned", cells=len(assignments), max_count=max_count, scale=scale.name)
    return assignments
