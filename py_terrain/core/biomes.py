"""
Biome map generation for the activity grid.

This module implements:
- River tracing across the grid, steered by seeded coherent noise
- Pond placement at river bends
- Clustered forest density from a separate noise channel
- Near-water awareness for every cell touching a river or pond
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np
import structlog
from opensimplex import OpenSimplex

from .alea_prng import RandomSource, pick
from .grid import CellKey, ORTHOGONAL_OFFSETS
from ..utils.random import Seed, create_prng, stage_seed
from ..utils.sequences import select_evenly

logger = structlog.get_logger()


@dataclass
class BiomeOptions:
    """Biome generation options."""

    river_count: int = 2  # Number of river paths traced per grid
    river_min_span: float = 0.45  # Minimum fraction of weeks a river crosses
    river_max_span: float = 0.70  # Maximum fraction of weeks a river crosses
    river_noise_scale: float = 0.18  # Noise frequency along the river course
    river_turn_threshold: float = 0.25  # Noise magnitude needed to change day
    ponds_per_river: int = 3  # Bend cells turned into ponds per river
    pond_spread_chance: float = 0.5  # Chance a pond floods one extra cell
    forest_noise_scale: float = 0.22  # Base noise frequency for forests
    forest_octaves: int = 2  # Fractal octaves for forest noise
    forest_threshold: float = 0.15  # Noise level where forest begins
    forest_gain: float = 1.6  # Density gained per unit of noise above threshold


@dataclass(frozen=True)
class BiomeContext:
    """Biome facts for one grid cell."""

    is_river: bool
    is_pond: bool
    forest_density: float
    near_water: bool

    @property
    def is_water(self) -> bool:
        return self.is_river or self.is_pond


@dataclass(frozen=True)
class RiverPath:
    """One traced river: its cells in flow order and its bend cells."""

    index: int
    cells: Tuple[CellKey, ...]
    bends: Tuple[CellKey, ...]


class BiomeMap:
    """
    Immutable per-cell biome context backed by (weeks, days) arrays.

    Behaves like a read-only mapping from ``CellKey`` to ``BiomeContext``.
    """

    def __init__(
        self,
        is_river: np.ndarray,
        is_pond: np.ndarray,
        forest_density: np.ndarray,
        near_water: np.ndarray,
        rivers: Tuple[RiverPath, ...] = (),
    ):
        self.is_river = is_river
        self.is_pond = is_pond
        self.forest_density = forest_density
        self.near_water = near_water
        self.rivers = rivers
        for array in (is_river, is_pond, forest_density, near_water):
            array.setflags(write=False)

    @classmethod
    def empty(cls) -> "BiomeMap":
        return cls(
            np.zeros((0, 0), dtype=bool),
            np.zeros((0, 0), dtype=bool),
            np.zeros((0, 0), dtype=np.float64),
            np.zeros((0, 0), dtype=bool),
        )

    @property
    def shape(self) -> Tuple[int, int]:
        return self.is_river.shape

    @property
    def weeks(self) -> int:
        return self.shape[0]

    @property
    def days(self) -> int:
        return self.shape[1]

    def __len__(self) -> int:
        return self.weeks * self.days

    def __contains__(self, key) -> bool:
        week, day = key
        return 0 <= week < self.weeks and 0 <= day < self.days

    def __getitem__(self, key) -> BiomeContext:
        if key not in self:
            raise KeyError(key)
        week, day = key
        return BiomeContext(
            is_river=bool(self.is_river[week, day]),
            is_pond=bool(self.is_pond[week, day]),
            forest_density=float(self.forest_density[week, day]),
            near_water=bool(self.near_water[week, day]),
        )

    def get(self, key, default: Optional[BiomeContext] = None) -> Optional[BiomeContext]:
        if key not in self:
            return default
        return self[key]

    def keys(self) -> Iterator[CellKey]:
        for week in range(self.weeks):
            for day in range(self.days):
                yield CellKey(week, day)

    __iter__ = keys

    def items(self) -> Iterator[Tuple[CellKey, BiomeContext]]:
        for key in self.keys():
            yield key, self[key]

    def values(self) -> Iterator[BiomeContext]:
        for key in self.keys():
            yield self[key]

    def is_water(self, key) -> bool:
        """True for river or pond cells; False outside the grid."""
        if key not in self:
            return False
        week, day = key
        return bool(self.is_river[week, day] or self.is_pond[week, day])

    def river_cells(self) -> List[CellKey]:
        return [CellKey(int(w), int(d)) for w, d in np.argwhere(self.is_river)]

    def pond_cells(self) -> List[CellKey]:
        return [CellKey(int(w), int(d)) for w, d in np.argwhere(self.is_pond)]


class BiomeGenerator:
    """Generates rivers, ponds and forest density over the activity grid."""

    def __init__(self, options: Optional[BiomeOptions] = None):
        """
        Initialize biome generator.

        Args:
            options: Biome generation options
        """
        self.options = options or BiomeOptions()

    def generate(self, weeks: int, days: int, seed: Seed) -> BiomeMap:
        """
        Generate the biome map for a ``weeks`` x ``days`` grid.

        Args:
            weeks: Number of grid columns
            days: Number of grid rows
            seed: Master seed; stages derive salted seeds from it

        Returns:
            BiomeMap covering every cell (empty for a degenerate grid)
        """
        if weeks <= 0 or days <= 0:
            logger.warning("Empty grid, skipping biome generation", weeks=weeks, days=days)
            return BiomeMap.empty()

        logger.info("Generating biome map", weeks=weeks, days=days, seed=seed)

        rng = create_prng(seed, "biome")
        river_noise = OpenSimplex(seed=stage_seed(seed, "rivers"))
        forest_noise = OpenSimplex(seed=stage_seed(seed, "forest"))

        is_river = np.zeros((weeks, days), dtype=bool)
        is_pond = np.zeros((weeks, days), dtype=bool)

        rivers = []
        for index in range(self.options.river_count):
            river = self._trace_river(index, weeks, days, rng, river_noise)
            for week, day in river.cells:
                is_river[week, day] = True
            rivers.append(river)

        for river in rivers:
            self._place_ponds(river, is_river, is_pond, rng)

        water = is_river | is_pond
        forest_density = self._forest_density(weeks, days, forest_noise)
        forest_density[water] = 0.0
        near_water = self._near_water(water)

        biome_map = BiomeMap(is_river, is_pond, forest_density, near_water, tuple(rivers))
        logger.info(
            "Biome map generated",
            rivers=len(rivers),
            river_cells=int(is_river.sum()),
            pond_cells=int(is_pond.sum()),
            forest_cells=int((forest_density > 0.3).sum()),
        )
        return biome_map

    def _trace_river(
        self,
        index: int,
        weeks: int,
        days: int,
        rng: RandomSource,
        noise: OpenSimplex,
    ) -> RiverPath:
        """
        Trace one river from left to right across a span of weeks.

        The river advances one week per step; noise sampled along the course
        decides whether it also shifts one day up or down. A shift adds the
        new cell in the same week so the path stays 4-connected.
        """
        opts = self.options
        span_fraction = opts.river_min_span + rng.next() * (opts.river_max_span - opts.river_min_span)
        span = min(weeks, max(1, round(weeks * span_fraction)))
        start_week = int(rng.next() * (weeks - span + 1))
        day = int(rng.next() * days)

        cells = [CellKey(start_week, day)]
        bends = []
        previous_vertical = False

        for step in range(span):
            week = start_week + step
            if step > 0:
                cells.append(CellKey(week, day))
                previous_vertical = False

            drift = noise.noise2(step * opts.river_noise_scale, index * 3.7 + 0.5)
            if drift > opts.river_turn_threshold:
                new_day = min(day + 1, days - 1)
            elif drift < -opts.river_turn_threshold:
                new_day = max(day - 1, 0)
            else:
                new_day = day

            if new_day != day:
                if not previous_vertical:
                    bends.append(CellKey(week, day))
                cells.append(CellKey(week, new_day))
                day = new_day
                previous_vertical = True

        return RiverPath(index=index, cells=tuple(cells), bends=tuple(bends))

    def _place_ponds(
        self,
        river: RiverPath,
        is_river: np.ndarray,
        is_pond: np.ndarray,
        rng: RandomSource,
    ) -> None:
        """Turn a few bends of a river into ponds, occasionally spreading one cell."""
        weeks, days = is_river.shape
        candidates = [key for key in river.bends if not is_pond[key.week, key.day]]
        chosen = select_evenly(candidates, self.options.ponds_per_river)

        if not chosen:
            # Straight river: fall back to its middle-most free cell
            free = [key for key in river.cells if not is_pond[key.week, key.day]]
            if not free:
                return
            chosen = [free[len(free) // 2]]

        for week, day in chosen:
            is_pond[week, day] = True
            if rng.next() >= self.options.pond_spread_chance:
                continue
            spill = [
                CellKey(week + dw, day + dd)
                for dw, dd in ORTHOGONAL_OFFSETS
                if 0 <= week + dw < weeks
                and 0 <= day + dd < days
                and not is_river[week + dw, day + dd]
                and not is_pond[week + dw, day + dd]
            ]
            if spill:
                target = pick(rng, spill)
                is_pond[target.week, target.day] = True

    def _forest_density(self, weeks: int, days: int, noise: OpenSimplex) -> np.ndarray:
        """Fractal noise mapped to a clustered density in [0, 1]."""
        opts = self.options
        raw = np.zeros((weeks, days), dtype=np.float64)
        amplitude_total = 0.0
        frequency = opts.forest_noise_scale
        amplitude = 1.0

        for _ in range(opts.forest_octaves):
            for week in range(weeks):
                for day in range(days):
                    raw[week, day] += amplitude * noise.noise2(week * frequency, day * frequency)
            amplitude_total += amplitude
            frequency *= 2.0
            amplitude *= 0.5

        if amplitude_total > 0:
            raw /= amplitude_total
        return np.clip((raw - opts.forest_threshold) * opts.forest_gain, 0.0, 1.0)

    @staticmethod
    def _near_water(water: np.ndarray) -> np.ndarray:
        """Flag every cell with a 4-connected river or pond neighbour."""
        near = np.zeros_like(water)
        near[1:, :] |= water[:-1, :]
        near[:-1, :] |= water[1:, :]
        near[:, 1:] |= water[:, :-1]
        near[:, :-1] |= water[:, 1:]
        return near


def generate_biome_map(
    weeks: int,
    days: int,
    seed: Seed,
    options: Optional[BiomeOptions] = None,
) -> BiomeMap:
    """Convenience wrapper around ``BiomeGenerator.generate``."""
    return BiomeGenerator(options).generate(weeks, days, seed)
