"""
Epic landmark selection.

This module implements:
- The three-gate admission test (cell level, neighbourhood richness,
  global statistics) for the rare, epic and legendary tiers
- A seeded Fisher-Yates scan of the grid with anti-clustering
- A fixed budget of at most three landmarks per landscape
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, FrozenSet, Iterable, List, Optional, Sequence, Tuple

import structlog

from .alea_prng import RandomSource, pick, shuffled
from .biomes import BiomeMap
from .grid import CellIndex, CellKey, compute_richness, manhattan
from .isometric import IsoCell
from .levels import LEVEL_SCALE_100, LevelScale
from .stats import GlobalStats
from ..utils.random import Seed, create_prng

logger = structlog.get_logger()

MAX_EPIC_BUDGET = 3
MIN_MANHATTAN_DISTANCE = 3


class EpicTier(str, Enum):
    """Landmark rarity classes."""

    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


# Highest rarity first
TIER_ORDER: Tuple[EpicTier, ...] = (EpicTier.LEGENDARY, EpicTier.EPIC, EpicTier.RARE)


@dataclass(frozen=True)
class TierConfig:
    """Admission thresholds for one tier. Levels are on the 100-level scale."""

    tier: EpicTier
    min_level: int
    min_richness: float
    base_chance: float
    glow_color: str
    stats_gate: Callable[[GlobalStats], bool]


TIER_CONFIG = MappingProxyType({
    EpicTier.RARE: TierConfig(
        tier=EpicTier.RARE,
        min_level=88,
        min_richness=0.45,
        base_chance=0.018,
        glow_color="#FFD700",
        stats_gate=lambda s: s.total >= 200 or s.longest_streak >= 7,
    ),
    EpicTier.EPIC: TierConfig(
        tier=EpicTier.EPIC,
        min_level=93,
        min_richness=0.55,
        base_chance=0.008,
        glow_color="#9B59B6",
        stats_gate=lambda s: s.total >= 500 and s.longest_streak >= 14,
    ),
    EpicTier.LEGENDARY: TierConfig(
        tier=EpicTier.LEGENDARY,
        min_level=97,
        min_richness=0.65,
        base_chance=0.003,
        glow_color="#00CED1",
        stats_gate=lambda s: s.total >= 1000 and s.longest_streak >= 30,
    ),
})


class EpicBuildingType(str, Enum):
    """Landmark variants."""

    # Rare
    MOUNT_FUJI = "mountFuji"
    COLOSSEUM = "colosseum"
    GIANT_SEQUOIA = "giantSequoia"
    CORAL_REEF = "coralReef"
    PAGODA = "pagoda"
    TORII = "torii"
    GEYSER = "geyser"
    HOT_SPRING = "hotSpring"
    EIFFEL_TOWER = "eiffelTower"
    GRAND_CANYON = "grandCanyon"
    WINDMILL_GRAND = "windmillGrand"
    OASIS = "oasis"
    VOLCANO = "volcano"
    GIANT_MUSHROOM = "giantMushroom"
    # Epic
    AURORA = "aurora"
    TAJ_MAHAL = "tajMahal"
    GIANT_WATERFALL = "giantWaterfall"
    ST_BASILS = "stBasils"
    BAMBOO_GROVE = "bambooGrove"
    OPERA_HOUSE = "operaHouse"
    GLACIER_PEAK = "glacierPeak"
    BIOLUMINESCENT_POOL = "bioluminescentPool"
    METEOR_CRATER = "meteorCrater"
    BONSAI_GIANT = "bonsaiGiant"
    # Legendary
    FLOATING_ISLAND = "floatingIsland"
    CRYSTAL_SPIRE = "crystalSpire"
    DRAGON_NEST = "dragonNest"
    WORLD_TREE = "worldTree"
    SAKURA_ETERNAL = "sakuraEternal"
    ANCIENT_PORTAL = "ancientPortal"


B = EpicBuildingType

EPIC_BUILDINGS = MappingProxyType({
    EpicTier.RARE: (
        B.MOUNT_FUJI, B.COLOSSEUM, B.GIANT_SEQUOIA, B.CORAL_REEF, B.PAGODA, B.TORII,
        B.GEYSER, B.HOT_SPRING, B.EIFFEL_TOWER, B.GRAND_CANYON, B.WINDMILL_GRAND,
        B.OASIS, B.VOLCANO, B.GIANT_MUSHROOM,
    ),
    EpicTier.EPIC: (
        B.AURORA, B.TAJ_MAHAL, B.GIANT_WATERFALL, B.ST_BASILS, B.BAMBOO_GROVE,
        B.OPERA_HOUSE, B.GLACIER_PEAK, B.BIOLUMINESCENT_POOL, B.METEOR_CRATER,
        B.BONSAI_GIANT,
    ),
    EpicTier.LEGENDARY: (
        B.FLOATING_ISLAND, B.CRYSTAL_SPIRE, B.DRAGON_NEST, B.WORLD_TREE,
        B.SAKURA_ETERNAL, B.ANCIENT_PORTAL,
    ),
})


@dataclass(frozen=True)
class PlacedEpicBuilding:
    """A landmark placed on one cell."""

    building_type: EpicBuildingType
    tier: EpicTier
    week: int
    day: int
    center_x: float
    center_y: float

    @property
    def key(self) -> CellKey:
        return CellKey(self.week, self.day)


@dataclass(frozen=True)
class EpicSelection:
    """Result of a selection pass."""

    placed: Tuple[PlacedEpicBuilding, ...] = ()
    occupied_cells: FrozenSet[CellKey] = frozenset()


def eligible_tiers(stats: GlobalStats) -> Tuple[EpicTier, ...]:
    """Tiers whose global stats gate passes, highest rarity first."""
    return tuple(tier for tier in TIER_ORDER if TIER_CONFIG[tier].stats_gate(stats))


def streak_multiplier(stats: GlobalStats) -> float:
    """Uniform probability boost for an ongoing streak."""
    if stats.current_streak >= 30:
        return 1.44
    if stats.current_streak >= 7:
        return 1.15
    return 1.0


def richness_bonus(richness: float, min_richness: float) -> float:
    """Extra odds for richness beyond a tier's minimum, capped at +50%."""
    return 1 + min((richness - min_richness) * 2, 0.5)


def is_far_enough(
    placed: Iterable[PlacedEpicBuilding],
    week: int,
    day: int,
    min_distance: int = MIN_MANHATTAN_DISTANCE,
) -> bool:
    """True when (week, day) keeps ``min_distance`` from every placed landmark."""
    return all(manhattan((p.week, p.day), (week, day)) >= min_distance for p in placed)


def first_eligible_tier(
    level: int,
    richness: float,
    passed: Sequence[EpicTier],
) -> Optional[EpicTier]:
    """
    Highest tier that clears all three gates for a cell.

    Args:
        level: Cell level on the 100-level scale
        richness: Neighbourhood richness of the cell
        passed: Tiers that cleared the global stats gate

    Returns:
        The tier to attempt, or None when no tier qualifies
    """
    for tier in TIER_ORDER:
        config = TIER_CONFIG[tier]
        if tier in passed and level >= config.min_level and richness >= config.min_richness:
            return tier
    return None


class EpicLandmarkSelector:
    """Chooses at most ``budget`` rare landmarks for a landscape."""

    def __init__(
        self,
        scale: LevelScale = LEVEL_SCALE_100,
        budget: int = MAX_EPIC_BUDGET,
        min_distance: int = MIN_MANHATTAN_DISTANCE,
    ):
        """
        Initialize landmark selector.

        Args:
            scale: Level scale of the incoming cells
            budget: Maximum number of landmarks
            min_distance: Minimum Manhattan distance between landmarks
        """
        self.scale = scale
        self.budget = budget
        self.min_distance = min_distance

    def select(
        self,
        iso_cells: Sequence[IsoCell],
        seed: Seed,
        stats: GlobalStats,
        biome_map: Optional[BiomeMap] = None,
        rng: Optional[RandomSource] = None,
    ) -> EpicSelection:
        """
        Run the gated selection pass.

        Cells are visited in a seeded shuffled order. Each cell gets exactly
        one roll, for the highest tier it qualifies for; a failed roll never
        falls through to a lower tier.

        Args:
            iso_cells: Projected cells
            seed: Master seed, salted with ``"epic"``
            stats: Global activity statistics for the stats gate
            biome_map: Biome context; river and pond cells are skipped
            rng: Explicit random source, overriding the seeded one

        Returns:
            EpicSelection with the placed landmarks and their cells
        """
        passed = eligible_tiers(stats)
        if not passed or not iso_cells:
            logger.info("No landmark tiers eligible", tiers=len(passed), cells=len(iso_cells))
            return EpicSelection()

        if rng is None:
            rng = create_prng(seed, "epic")
        multiplier = streak_multiplier(stats)
        index = CellIndex(iso_cells)
        placed: List[PlacedEpicBuilding] = []

        for cell in shuffled(rng, iso_cells):
            if len(placed) >= self.budget:
                break

            key = CellKey(cell.week, cell.day)
            if biome_map is not None and biome_map.is_water(key):
                continue
            if not is_far_enough(placed, cell.week, cell.day, self.min_distance):
                continue

            richness = compute_richness(cell, index, self.scale.max_level)
            level = self.scale.rescale(cell.level, LEVEL_SCALE_100)
            tier = first_eligible_tier(level, richness, passed)
            if tier is None:
                continue

            config = TIER_CONFIG[tier]
            chance = config.base_chance * richness_bonus(richness, config.min_richness) * multiplier
            if rng.next() >= chance:
                continue

            placed.append(
                PlacedEpicBuilding(
                    building_type=pick(rng, EPIC_BUILDINGS[tier]),
                    tier=tier,
                    week=cell.week,
                    day=cell.day,
                    center_x=cell.screen_x,
                    center_y=cell.screen_y,
                )
            )

        selection = EpicSelection(
            placed=tuple(placed),
            occupied_cells=frozenset(p.key for p in placed),
        )
        logger.info(
            "Epic landmarks selected",
            placed=len(placed),
            tiers=[tier.value for tier in passed],
            streak_multiplier=multiplier,
        )
        return selection


def select_epic_buildings(
    iso_cells: Sequence[IsoCell],
    seed: Seed,
    stats: GlobalStats,
    biome_map: Optional[BiomeMap] = None,
    scale: LevelScale = LEVEL_SCALE_100,
) -> EpicSelection:
    """Convenience wrapper around ``EpicLandmarkSelector.select``."""
    return EpicLandmarkSelector(scale).select(iso_cells, seed, stats, biome_map)
