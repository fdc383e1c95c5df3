"""
Ambient effect planning: which cells shimmer, sparkle or spill a waterfall,
and where the drifting clouds sit. Only the selection is decided here; the
renderer owns markup and timing strings.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import structlog

from .alea_prng import RandomSource
from .biomes import BiomeMap
from .grid import CellKey
from .isometric import IsoCell
from .levels import LEVEL_SCALE_100, LevelScale
from ..utils.random import Seed, create_prng
from ..utils.sequences import select_evenly

logger = structlog.get_logger()

# Per-effect caps on animated elements
MAX_WATER_SHIMMER = 15
MAX_TOWN_SPARKLE = 10
MAX_RIVER_SHIMMER = 8
MAX_WATERFALLS = 2
NUM_CLOUDS = 4

WATER_LEVELS = (10, 22)  # Inclusive 100-level range of shallow water
TOWN_LEVEL = 90


@dataclass(frozen=True)
class Waterfall:
    """Water spilling off an edge river cell."""

    cell: CellKey
    direction: int  # -1 off the first week, +1 off the last week, 0 off a day edge
    top_x: float
    top_y: float
    fall_length: float


@dataclass(frozen=True)
class CloudPuff:
    cx: float
    cy: float
    rx: float
    ry: float


@dataclass(frozen=True)
class Cloud:
    """A drifting cloud built from overlapping, flattened ellipses."""

    puffs: Tuple[CloudPuff, ...]
    drift_x: float
    duration: float


@dataclass
class AmbientEffects:
    """Cells and shapes selected for ambient animation."""

    water_shimmer: List[IsoCell] = field(default_factory=list)
    town_sparkle: List[IsoCell] = field(default_factory=list)
    river_shimmer: List[IsoCell] = field(default_factory=list)
    waterfalls: List[Waterfall] = field(default_factory=list)
    clouds: List[Cloud] = field(default_factory=list)


def plan_clouds(rng: RandomSource, count: int = NUM_CLOUDS) -> List[Cloud]:
    """Lay out ``count`` clouds across the sky band."""
    clouds = []
    for _ in range(count):
        base_cx = 60 + rng.next() * 650
        base_cy = 25 + rng.next() * 85
        base_w = 25 + rng.next() * 35
        num_puffs = 3 + int(rng.next() * 3)
        duration = 30 + rng.next() * 25
        drift_x = 80 + rng.next() * 60

        puffs = []
        for _ in range(num_puffs):
            ox = (rng.next() - 0.5) * base_w * 0.8
            oy = (rng.next() - 0.5) * 6
            rx = base_w * 0.3 + rng.next() * base_w * 0.3
            # Flattened for the isometric view
            puffs.append(CloudPuff(base_cx + ox, base_cy + oy, rx, rx * 0.45))
        clouds.append(Cloud(tuple(puffs), drift_x, duration))
    return clouds


def plan_waterfalls(
    iso_cells: Sequence[IsoCell],
    biome_map: BiomeMap,
    half_tile_height: float = 3.0,
) -> List[Waterfall]:
    """Pick up to two river cells on the grid edge, in draw order."""
    last_week = biome_map.weeks - 1
    last_day = biome_map.days - 1
    waterfalls = []
    for cell in iso_cells:
        if len(waterfalls) >= MAX_WATERFALLS:
            break
        key = CellKey(cell.week, cell.day)
        context = biome_map.get(key)
        if context is None or not context.is_river:
            continue
        if cell.week not in (0, last_week) and cell.day not in (0, last_day):
            continue
        direction = -1 if cell.week == 0 else 1 if cell.week == last_week else 0
        waterfalls.append(
            Waterfall(
                cell=key,
                direction=direction,
                top_x=cell.screen_x,
                top_y=cell.screen_y + half_tile_height + cell.height,
                fall_length=18 + cell.height,
            )
        )
    return waterfalls


def plan_ambient_effects(
    iso_cells: Sequence[IsoCell],
    biome_map: Optional[BiomeMap],
    seed: Seed,
    scale: LevelScale = LEVEL_SCALE_100,
    half_tile_height: float = 3.0,
) -> AmbientEffects:
    """
    Select the cells and shapes for every ambient effect.

    Args:
        iso_cells: Cells in draw order
        biome_map: Biome context; river effects are skipped without it
        seed: Master seed, salted with ``"clouds"``
        scale: Level scale of the incoming cells
        half_tile_height: Tile half height used to find block bottoms

    Returns:
        AmbientEffects
    """
    def level100(cell: IsoCell) -> int:
        return scale.rescale(cell.level, LEVEL_SCALE_100)

    low, high = WATER_LEVELS
    effects = AmbientEffects(
        water_shimmer=select_evenly(
            [c for c in iso_cells if low <= level100(c) <= high], MAX_WATER_SHIMMER
        ),
        town_sparkle=select_evenly(
            [c for c in iso_cells if level100(c) >= TOWN_LEVEL], MAX_TOWN_SPARKLE
        ),
        clouds=plan_clouds(create_prng(seed, "clouds")),
    )

    if biome_map is not None and len(biome_map):
        river_cells = [
            c for c in iso_cells
            if biome_map.is_water((c.week, c.day)) and level100(c) > high
        ]
        effects.river_shimmer = select_evenly(river_cells, MAX_RIVER_SHIMMER)
        effects.waterfalls = plan_waterfalls(iso_cells, biome_map, half_tile_height)

    logger.debug(
        "Ambient effects planned",
        water_shimmer=len(effects.water_shimmer),
        town_sparkle=len(effects.town_sparkle),
        river_shimmer=len(effects.river_shimmer),
        waterfalls=len(effects.waterfalls),
    )
    return effects
