"""
End-to-end landscape generation.

Runs the stages in order, each reading only what earlier stages produced:

    levels -> biome map -> isometric cells -> epic landmarks -> decorations
    -> ambient effects

Every randomised stage salts the master seed with its own name, so the same
calendar and seed always yield the same landscape.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional

import structlog

from .core.assets import DensityAssetPlacer, PlacedAsset
from .core.biomes import BiomeGenerator, BiomeMap, BiomeOptions
from .core.effects import AmbientEffects, plan_ambient_effects
from .core.epics import EpicLandmarkSelector, PlacedEpicBuilding
from .core.grid import CellKey
from .core.isometric import IsoCell, IsometricLayoutEngine, TileGeometry
from .core.levels import LevelAssignment, assign_levels, get_scale
from .core.stats import GlobalStats, compute_stats
from .config import settings
from .models import ContributionCalendar
from .utils.random import Seed

logger = structlog.get_logger()


@dataclass
class LandscapeOptions:
    """Layout and scale options for one render."""

    level_scale: int = field(default_factory=lambda: settings.level_scale)
    days: int = field(default_factory=lambda: settings.grid_days)  # Minimum grid rows; longer weeks widen the grid
    tile_half_width: float = field(default_factory=lambda: settings.tile_half_width)
    tile_half_height: float = field(default_factory=lambda: settings.tile_half_height)
    origin_x: float = field(default_factory=lambda: settings.origin_x)
    origin_y: float = field(default_factory=lambda: settings.origin_y)
    decorate_water: bool = False  # Allow decorations on river and pond cells
    biome: BiomeOptions = field(default_factory=BiomeOptions)


@dataclass
class Landscape:
    """Everything the renderer consumes for one landscape."""

    seed: Seed
    stats: GlobalStats
    levels: List[LevelAssignment]
    iso_cells: List[IsoCell]
    biome_map: BiomeMap
    assets: List[PlacedAsset]
    epics: List[PlacedEpicBuilding]
    epic_cells: FrozenSet[CellKey]
    effects: AmbientEffects


class LandscapeGenerator:
    """Builds a landscape from a contribution calendar."""

    def __init__(self, options: Optional[LandscapeOptions] = None):
        """
        Initialize landscape generator.

        Args:
            options: Layout options; defaults come from ``settings``
        """
        self.options = options or LandscapeOptions()
        self.scale = get_scale(self.options.level_scale)
        self.tile = TileGeometry(self.options.tile_half_width, self.options.tile_half_height)
        self.layout = IsometricLayoutEngine(self.scale, self.tile)
        self.biomes = BiomeGenerator(self.options.biome)
        self.placer = DensityAssetPlacer(self.scale)
        self.selector = EpicLandmarkSelector(self.scale)

    def generate(
        self,
        calendar: ContributionCalendar,
        seed: Seed,
        stats: Optional[GlobalStats] = None,
    ) -> Landscape:
        """
        Generate a landscape.

        Args:
            calendar: Validated contribution calendar
            seed: Master seed
            stats: Aggregate statistics; taken from the calendar or computed
                from it when omitted

        Returns:
            Landscape
        """
        logger.info("Generating landscape", seed=seed, **calendar.summary())

        if stats is None:
            stats = calendar.stats or compute_stats(calendar.counts())

        levels = assign_levels(calendar.to_activity_cells(), self.scale, calendar.max_count)
        # Every calendar day needs a biome cell
        days = max(self.options.days, calendar.num_days)
        biome_map = self.biomes.generate(calendar.num_weeks, days, seed)
        iso_cells = self.layout.project(levels, self.options.origin_x, self.options.origin_y)

        selection = self.selector.select(iso_cells, seed, stats, biome_map)

        skip = set(selection.occupied_cells)
        if not self.options.decorate_water:
            skip.update(key for key in biome_map.keys() if biome_map.is_water(key))
        assets = self.placer.place(iso_cells, biome_map, seed, skip=frozenset(skip))

        effects = plan_ambient_effects(
            iso_cells, biome_map, seed, self.scale, self.tile.half_height
        )

        landscape = Landscape(
            seed=seed,
            stats=stats,
            levels=levels,
            iso_cells=iso_cells,
            biome_map=biome_map,
            assets=assets,
            epics=list(selection.placed),
            epic_cells=selection.occupied_cells,
            effects=effects,
        )
        logger.info(
            "Landscape generated",
            cells=len(iso_cells),
            assets=len(assets),
            epics=len(landscape.epics),
        )
        return landscape


def generate_landscape(
    calendar: ContributionCalendar,
    seed: Seed,
    stats: Optional[GlobalStats] = None,
    options: Optional[LandscapeOptions] = None,
) -> Landscape:
    """Convenience wrapper around ``LandscapeGenerator.generate``."""
    return LandscapeGenerator(options).generate(calendar, seed, stats)
