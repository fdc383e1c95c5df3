"""
Density-driven decoration placement.

Every cell rolls against a level-dependent chance, boosted by how active its
neighbourhood is. Rich cells in busy neighbourhoods can receive a second
asset. Draws come from one seeded stream consumed in cell order, so a fixed
seed always decorates the same cells the same way.
"""

from dataclasses import dataclass
from typing import AbstractSet, List, Optional, Sequence

import structlog

from .alea_prng import RandomSource, pick
from .biomes import BiomeMap
from .grid import CellIndex, CellKey, compute_richness
from .isometric import IsoCell
from .levels import LEVEL_SCALE_100, LevelScale
from ..config.asset_pools import AssetType, pool_for_band
from ..utils.random import Seed, create_prng

logger = structlog.get_logger()


@dataclass
class AssetOptions:
    """Decoration placement options."""

    richness_bonus: float = 0.20  # Added chance at richness 1.0
    bonus_min_richness: float = 0.5  # Richness a cell must exceed for a second asset
    bonus_min_band: int = 5  # 10-level band a cell needs for a second asset
    bonus_chance: float = 0.3  # Chance of the second asset once eligible
    offset_x: float = 3.0  # Horizontal jitter span of the first asset
    offset_y: float = 1.5  # Vertical jitter span of the first asset
    bonus_offset_x: float = 4.0  # Horizontal jitter span of the second asset
    bonus_offset_y: float = 2.0  # Vertical jitter span of the second asset


@dataclass(frozen=True)
class PlacedAsset:
    """A decoration anchored to the top face of a cell."""

    cell: CellKey
    asset_type: AssetType
    center_x: float
    center_y: float
    offset_x: float
    offset_y: float

    @property
    def x(self) -> float:
        return self.center_x + self.offset_x

    @property
    def y(self) -> float:
        return self.center_y + self.offset_y


class DensityAssetPlacer:
    """Places zero, one or two decorative assets per cell."""

    def __init__(
        self,
        scale: LevelScale = LEVEL_SCALE_100,
        options: Optional[AssetOptions] = None,
    ):
        """
        Initialize asset placer.

        Args:
            scale: Level scale of the incoming cells
            options: Placement options
        """
        self.scale = scale
        self.options = options or AssetOptions()

    def place(
        self,
        iso_cells: Sequence[IsoCell],
        biome_map: Optional[BiomeMap],
        seed: Seed,
        skip: AbstractSet[CellKey] = frozenset(),
        rng: Optional[RandomSource] = None,
    ) -> List[PlacedAsset]:
        """
        Select decorations for every cell.

        Args:
            iso_cells: Cells in draw order
            biome_map: Biome context; carried for callers, not consulted
            seed: Master seed, salted with ``"assets"``
            skip: Cells that must stay bare; like level-0 cells they draw no values
            rng: Explicit random source, overriding the seeded one

        Returns:
            Placed assets in the order of ``iso_cells``
        """
        if not iso_cells:
            return []

        if rng is None:
            rng = create_prng(seed, "assets")
        index = CellIndex(iso_cells)
        opts = self.options
        assets: List[PlacedAsset] = []

        for cell in iso_cells:
            key = CellKey(cell.week, cell.day)
            # Inactive cells stay bare
            if cell.level == 0 or key in skip:
                continue

            band = self.scale.band(cell.level)
            pool = pool_for_band(band)
            richness = compute_richness(cell, index, self.scale.max_level)

            if rng.next() >= pool.chance + richness * opts.richness_bonus:
                continue

            asset_type = pick(rng, pool.types)
            offset_x = (rng.next() - 0.5) * opts.offset_x
            offset_y = (rng.next() - 0.5) * opts.offset_y
            assets.append(
                PlacedAsset(key, asset_type, cell.screen_x, cell.screen_y, offset_x, offset_y)
            )

            if (
                richness > opts.bonus_min_richness
                and band >= opts.bonus_min_band
                and rng.next() < opts.bonus_chance
            ):
                bonus_type = pick(rng, pool.types)
                offset_x = (rng.next() - 0.5) * opts.bonus_offset_x
                offset_y = (rng.next() - 0.5) * opts.bonus_offset_y
                assets.append(
                    PlacedAsset(key, bonus_type, cell.screen_x, cell.screen_y, offset_x, offset_y)
                )

        logger.info("Assets placed", assets=len(assets), cells=len(iso_cells), skipped=len(skip))
        return assets


def place_assets(
    iso_cells: Sequence[IsoCell],
    biome_map: Optional[BiomeMap],
    seed: Seed,
    scale: LevelScale = LEVEL_SCALE_100,
    skip: AbstractSet[CellKey] = frozenset(),
) -> List[PlacedAsset]:
    """Convenience wrapper around ``DensityAssetPlacer.place``."""
    return DensityAssetPlacer(scale).place(iso_cells, biome_map, seed, skip=skip)
