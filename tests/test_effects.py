"""Tests for ambient effect planning."""

import numpy as np
import pytest

from py_terrain.core.alea_prng import AleaPRNG
from py_terrain.core.biomes import BiomeMap, generate_biome_map
from py_terrain.core.effects import (
    MAX_RIVER_SHIMMER, MAX_TOWN_SPARKLE, MAX_WATER_SHIMMER, MAX_WATERFALLS, NUM_CLOUDS,
    plan_ambient_effects, plan_clouds, plan_waterfalls,
)
from py_terrain.core.grid import CellKey
from py_terrain.core.isometric import HEIGHT_TABLE_10
from py_terrain.core.levels import LEVEL_SCALE_10


def river_column_map():
    """3 x 3 map with a river along day 1."""
    is_river = np.zeros((3, 3), dtype=bool)
    is_river[:, 1] = True
    return BiomeMap(
        is_river,
        np.zeros((3, 3), dtype=bool),
        np.zeros((3, 3), dtype=np.float64),
        np.zeros((3, 3), dtype=bool),
    )


class TestClouds:
    """Test cloud layout."""

    def test_cloud_count_and_puffs(self):
        clouds = plan_clouds(AleaPRNG("sky"))
        assert len(clouds) == NUM_CLOUDS
        for cloud in clouds:
            assert 3 <= len(cloud.puffs) <= 5
            assert 80 <= cloud.drift_x <= 140
            assert 30 <= cloud.duration <= 55
            for puff in cloud.puffs:
                assert puff.ry == pytest.approx(puff.rx * 0.45)

    def test_clouds_deterministic(self):
        assert plan_clouds(AleaPRNG(3), 2) == plan_clouds(AleaPRNG(3), 2)


class TestWaterfalls:
    """Test edge river detection."""

    def test_edge_river_cells(self, make_cells):
        cells = make_cells(3, 3)
        waterfalls = plan_waterfalls(cells, river_column_map())
        assert [w.cell for w in waterfalls] == [CellKey(0, 1), CellKey(2, 1)]
        assert [w.direction for w in waterfalls] == [-1, 1]
        first = waterfalls[0]
        assert (first.top_x, first.top_y, first.fall_length) == (-7.0, 6.0, 18.0)

    def test_waterfall_cap(self, make_cells):
        is_river = np.ones((3, 3), dtype=bool)
        biome_map = BiomeMap(
            is_river,
            np.zeros((3, 3), dtype=bool),
            np.zeros((3, 3), dtype=np.float64),
            np.ones((3, 3), dtype=bool),
        )
        assert len(plan_waterfalls(make_cells(3, 3), biome_map)) == MAX_WATERFALLS


class TestAmbientEffects:
    """Test effect selection caps and filters."""

    @pytest.fixture
    def cells(self, make_cells):
        prng = AleaPRNG("effects")
        overrides = {(w, d): int(prng.next() * 100) for w in range(52) for d in range(7)}
        return make_cells(52, 7, overrides=overrides)

    def test_caps(self, cells):
        biome_map = generate_biome_map(52, 7, 77)
        effects = plan_ambient_effects(cells, biome_map, 77)
        assert len(effects.water_shimmer) == MAX_WATER_SHIMMER
        assert len(effects.town_sparkle) == MAX_TOWN_SPARKLE
        assert len(effects.river_shimmer) <= MAX_RIVER_SHIMMER
        assert len(effects.waterfalls) <= MAX_WATERFALLS
        assert len(effects.clouds) == NUM_CLOUDS

    def test_level_filters(self, cells):
        effects = plan_ambient_effects(cells, None, 77)
        assert all(10 <= c.level <= 22 for c in effects.water_shimmer)
        assert all(c.level >= 90 for c in effects.town_sparkle)

    def test_without_biome_map(self, cells):
        effects = plan_ambient_effects(cells, None, 77)
        assert effects.river_shimmer == []
        assert effects.waterfalls == []

    def test_river_shimmer_on_water(self, cells):
        biome_map = generate_biome_map(52, 7, 77)
        effects = plan_ambient_effects(cells, biome_map, 77)
        for cell in effects.river_shimmer:
            assert biome_map.is_water((cell.week, cell.day))
            assert cell.level > 22
        for waterfall in effects.waterfalls:
            assert biome_map.is_river[waterfall.cell.week, waterfall.cell.day]

    def test_deterministic(self, cells):
        biome_map = generate_biome_map(52, 7, 5)
        assert plan_ambient_effects(cells, biome_map, 5) == plan_ambient_effects(cells, biome_map, 5)

    def test_ten_level_scale(self, make_cells):
        cells = make_cells(5, 7, level=9, height_table=HEIGHT_TABLE_10)
        effects = plan_ambient_effects(cells, None, 1, scale=LEVEL_SCALE_10)
        assert len(effects.town_sparkle) == MAX_TOWN_SPARKLE
        assert effects.water_shimmer == []
