"""
Isometric projection of the level grid.

Projects (week, day, level) cells onto a fixed diamond projection, looks up
block heights per level, and returns cells in back-to-front draw order so a
painter's-algorithm renderer overlaps them correctly.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
import structlog

from .levels import LEVEL_SCALE_10, LEVEL_SCALE_100, LevelAssignment, LevelScale

logger = structlog.get_logger()

# Block heights in pixels for the 10-level scale: water is flat, land rises
HEIGHTS_10: Tuple[float, ...] = (0, 0, 3, 5, 7, 9, 11, 14, 17, 20)


@dataclass(frozen=True)
class TileGeometry:
    """Half extents of one isometric tile."""

    half_width: float = 7.0
    half_height: float = 3.0


@dataclass(frozen=True)
class HeightTable:
    """Block height per level; non-decreasing, level 0 is flat."""

    heights: Tuple[float, ...]

    def __post_init__(self):
        if any(b < a for a, b in zip(self.heights, self.heights[1:])):
            raise ValueError("Height table must be non-decreasing")

    def __len__(self) -> int:
        return len(self.heights)

    def height(self, level: int) -> float:
        """Height for a level, clamped to the table range."""
        return self.heights[max(0, min(level, len(self.heights) - 1))]

    @classmethod
    def for_scale(cls, scale: LevelScale) -> "HeightTable":
        """
        Build the table for a level scale.

        The 10-level table is used as-is; finer scales interpolate it
        linearly and round to one decimal place.
        """
        if scale.max_level == LEVEL_SCALE_10.max_level:
            return cls(tuple(float(h) for h in HEIGHTS_10))
        anchors = np.arange(len(HEIGHTS_10), dtype=np.float64)
        positions = np.arange(scale.max_level + 1, dtype=np.float64) * (
            (len(HEIGHTS_10) - 1) / scale.max_level
        )
        heights = np.round(np.interp(positions, anchors, np.asarray(HEIGHTS_10, dtype=np.float64)), 1)
        return cls(tuple(float(h) for h in heights))


HEIGHT_TABLE_10 = HeightTable.for_scale(LEVEL_SCALE_10)
HEIGHT_TABLE_100 = HeightTable.for_scale(LEVEL_SCALE_100)


@dataclass(frozen=True)
class IsoCell:
    """One projected grid cell."""

    week: int
    day: int
    level: int
    height: float
    screen_x: float
    screen_y: float


def draw_order_key(cell) -> Tuple[int, int]:
    """Back-to-front ordering: diagonal sum first, then week."""
    return (cell.week + cell.day, cell.week)


def project(
    assignments: Iterable[LevelAssignment],
    height_table: HeightTable,
    origin_x: float,
    origin_y: float,
    tile: TileGeometry = TileGeometry(),
) -> List[IsoCell]:
    """
    Project level assignments into screen space.

    Args:
        assignments: One LevelAssignment per grid cell
        height_table: Level to block height lookup
        origin_x: Screen X of cell (0, 0)
        origin_y: Screen Y of cell (0, 0)
        tile: Tile half extents

    Returns:
        IsoCells sorted in draw order
    """
    cells = [
        IsoCell(
            week=a.week,
            day=a.day,
            level=a.level,
            height=height_table.height(a.level),
            screen_x=origin_x + (a.week - a.day) * tile.half_width,
            screen_y=origin_y + (a.week + a.day) * tile.half_height,
        )
        for a in assignments
    ]
    cells.sort(key=draw_order_key)
    logger.debug("Projected isometric cells", cells=len(cells))
    return cells


def is_draw_ordered(cells: Sequence[IsoCell]) -> bool:
    """True when ``cells`` respect back-to-front draw order."""
    return all(draw_order_key(a) <= draw_order_key(b) for a, b in zip(cells, cells[1:]))


class IsometricLayoutEngine:
    """Projection with fixed geometry and heights, reusable across renders."""

    def __init__(
        self,
        scale: LevelScale = LEVEL_SCALE_100,
        tile: TileGeometry = TileGeometry(),
        height_table: Optional[HeightTable] = None,
    ):
        self.scale = scale
        self.tile = tile
        self.height_table = height_table if height_table is not None else HeightTable.for_scale(scale)

    def project(
        self,
        assignments: Iterable[LevelAssignment],
        origin_x: float = 0.0,
        origin_y: float = 0.0,
    ) -> List[IsoCell]:
        return project(assignments, self.height_table, origin_x, origin_y, self.tile)

    def top_face(self, cell: IsoCell) -> Tuple[Tuple[float, float], ...]:
        """Corner points of a cell's top diamond: top, right, bottom, left."""
        cx, cy = cell.screen_x, cell.screen_y
        hw, hh = self.tile.half_width, self.tile.half_height
        return ((cx, cy - hh), (cx + hw, cy), (cx, cy + hh), (cx - hw, cy))
