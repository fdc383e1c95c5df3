"""End-to-end tests for landscape generation."""

import pytest

from py_terrain import ContributionCalendar, LandscapeGenerator, LandscapeOptions, generate_landscape
from py_terrain.core.alea_prng import AleaPRNG
from py_terrain.core.biomes import BiomeOptions
from py_terrain.core.epics import MAX_EPIC_BUDGET, MIN_MANHATTAN_DISTANCE
from py_terrain.core.grid import CellKey, manhattan
from py_terrain.core.isometric import is_draw_ordered
from py_terrain.core.stats import GlobalStats
from py_terrain.utils.random import identity_seed


def busy_counts(seed="busy", weeks=52):
    prng = AleaPRNG(seed)
    return [
        [int(prng.next() * 30) if prng.next() < 0.8 else 0 for _ in range(7)]
        for _ in range(weeks)
    ]


def options(**kwargs):
    kwargs.setdefault("origin_x", 0.0)
    kwargs.setdefault("origin_y", 0.0)
    return LandscapeOptions(**kwargs)


class TestLandscapeGeneration:
    """Test the full pipeline."""

    @pytest.fixture
    def calendar(self):
        return ContributionCalendar.from_counts(busy_counts())

    @pytest.fixture
    def landscape(self, calendar):
        return generate_landscape(calendar, identity_seed("octocat", "dark"), options=options())

    def test_all_zero_year(self):
        calendar = ContributionCalendar.from_counts([[0] * 7 for _ in range(52)])
        landscape = generate_landscape(calendar, 12345, options=options())
        assert all(a.level == 0 for a in landscape.levels)
        assert landscape.assets == []
        assert landscape.epics == []
        assert landscape.stats.total == 0

    def test_deterministic(self, calendar):
        first = generate_landscape(calendar, 777, options=options())
        second = generate_landscape(calendar, 777, options=options())
        assert first.levels == second.levels
        assert first.iso_cells == second.iso_cells
        assert first.assets == second.assets
        assert first.epics == second.epics
        assert first.effects == second.effects
        assert (first.biome_map.is_river == second.biome_map.is_river).all()

    def test_seed_changes_landscape(self, calendar):
        first = generate_landscape(calendar, 1, options=options())
        second = generate_landscape(calendar, 2, options=options())
        assert first.assets != second.assets

    def test_one_cell_per_day(self, landscape):
        keys = [(c.week, c.day) for c in landscape.iso_cells]
        assert len(keys) == len(set(keys)) == 52 * 7
        assert len(landscape.biome_map) == 52 * 7

    def test_draw_order(self, landscape):
        assert is_draw_ordered(landscape.iso_cells)

    def test_levels_in_range(self, landscape):
        assert all(0 <= a.level <= 99 for a in landscape.levels)

    def test_no_assets_on_water_or_landmarks(self, landscape):
        for asset in landscape.assets:
            assert not landscape.biome_map.is_water(asset.cell)
            assert asset.cell not in landscape.epic_cells

    def test_landmark_rules(self, landscape):
        assert len(landscape.epics) <= MAX_EPIC_BUDGET
        for i, a in enumerate(landscape.epics):
            assert not landscape.biome_map.is_water(a.key)
            for b in landscape.epics[i + 1:]:
                assert manhattan(a.key, b.key) >= MIN_MANHATTAN_DISTANCE
        assert landscape.epic_cells == frozenset(e.key for e in landscape.epics)

    def test_stats_computed_from_calendar(self, calendar, landscape):
        assert landscape.stats.total == sum(sum(week) for week in calendar.counts())

    def test_explicit_stats_win(self, calendar):
        stats = GlobalStats(total=1, longest_streak=1)
        landscape = generate_landscape(calendar, 3, stats=stats, options=options())
        assert landscape.stats is stats
        assert landscape.epics == []

    def test_calendar_stats_used(self):
        stats = GlobalStats(total=42, longest_streak=2)
        calendar = ContributionCalendar(
            weeks=ContributionCalendar.from_counts(busy_counts(weeks=4)).weeks, stats=stats
        )
        assert generate_landscape(calendar, 3, options=options()).stats == stats

    def test_origin_offsets_cells(self, calendar):
        landscape = generate_landscape(calendar, 9, options=options(origin_x=400.0, origin_y=60.0))
        first = landscape.iso_cells[0]
        assert (first.week, first.day) == (0, 0)
        assert (first.screen_x, first.screen_y) == (400.0, 60.0)

    def test_ten_level_scale(self, calendar):
        landscape = generate_landscape(calendar, 5, options=options(level_scale=10))
        assert max(a.level for a in landscape.levels) == 9
        assert all(c.height <= 20.0 for c in landscape.iso_cells)

    def test_unknown_scale_rejected(self):
        with pytest.raises(ValueError):
            LandscapeGenerator(options(level_scale=50))

    def test_partial_last_week(self):
        counts = busy_counts(weeks=10)
        counts[-1] = counts[-1][:3]
        landscape = generate_landscape(ContributionCalendar.from_counts(counts), 8, options=options())
        assert len(landscape.iso_cells) == 9 * 7 + 3
        assert len(landscape.biome_map) == 10 * 7

    def test_biome_map_covers_every_cell(self, landscape):
        assert all((c.week, c.day) in landscape.biome_map for c in landscape.iso_cells)

    def test_short_grid_setting_widens_to_calendar(self, calendar):
        landscape = generate_landscape(calendar, 1, options=options(days=5))
        assert landscape.biome_map.shape == (52, 7)
        assert all((c.week, c.day) in landscape.biome_map for c in landscape.iso_cells)
        assert len(landscape.biome_map) == len(landscape.iso_cells)

    def test_empty_calendar(self):
        landscape = generate_landscape(ContributionCalendar(), 1, options=options())
        assert landscape.iso_cells == []
        assert landscape.assets == []
        assert landscape.epics == []
        assert len(landscape.biome_map) == 0

    def test_water_decoration_toggle(self, calendar):
        dry = generate_landscape(calendar, 11, options=options())
        wet = generate_landscape(calendar, 11, options=options(decorate_water=True))
        water = {key for key in dry.biome_map.keys() if dry.biome_map.is_water(key)}
        assert water
        assert not any(a.cell in water for a in dry.assets)
        assert wet.epics == dry.epics
        assert wet.effects == dry.effects

    def test_without_rivers(self, calendar):
        landscape = generate_landscape(
            calendar, 4, options=options(biome=BiomeOptions(river_count=0))
        )
        assert landscape.biome_map.river_cells() == []
        assert landscape.effects.waterfalls == []

    def test_landmark_cell_key(self, landscape):
        for epic in landscape.epics:
            assert epic.key == CellKey(epic.week, epic.day)
