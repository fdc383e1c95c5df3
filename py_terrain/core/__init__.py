"""
Core landscape generation functionality.
"""

from .alea_prng import AleaPRNG, RandomSource
from .grid import CellKey, CellIndex, compute_richness
from .levels import LevelScale, LevelAssignment, LEVEL_SCALE_10, LEVEL_SCALE_100, assign_levels, get_scale
from .biomes import BiomeGenerator, BiomeOptions, BiomeContext, BiomeMap, generate_biome_map
from .isometric import IsoCell, IsometricLayoutEngine, HeightTable, TileGeometry, project
from .assets import DensityAssetPlacer, PlacedAsset, place_assets
from .epics import (EpicLandmarkSelector, EpicSelection, EpicTier, PlacedEpicBuilding,
                    TIER_CONFIG, select_epic_buildings)
from .stats import GlobalStats, compute_stats
from .effects import AmbientEffects, plan_ambient_effects

__all__ = ['AleaPRNG', 'RandomSource', 'CellKey', 'CellIndex', 'compute_richness',
           'LevelScale', 'LevelAssignment', 'LEVEL_SCALE_10', 'LEVEL_SCALE_100',
           'assign_levels', 'get_scale',
           'BiomeGenerator', 'BiomeOptions', 'BiomeContext', 'BiomeMap', 'generate_biome_map',
           'IsoCell', 'IsometricLayoutEngine', 'HeightTable', 'TileGeometry', 'project',
           'DensityAssetPlacer', 'PlacedAsset', 'place_assets',
           'EpicLandmarkSelector', 'EpicSelection', 'EpicTier', 'PlacedEpicBuilding',
           'TIER_CONFIG', 'select_epic_buildings',
           'GlobalStats', 'compute_stats', 'AmbientEffects', 'plan_ambient_effects']
