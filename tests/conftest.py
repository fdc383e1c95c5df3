"""Shared fixtures for landscape tests."""

import pytest

from py_terrain.core.isometric import HEIGHT_TABLE_100, project
from py_terrain.core.levels import LevelAssignment


class ScriptedRandom:
    """Random source replaying a fixed list of values."""

    def __init__(self, values):
        self.values = list(values)
        self.position = 0

    def next(self) -> float:
        if self.position >= len(self.values):
            raise AssertionError("Scripted random values exhausted")
        value = self.values[self.position]
        self.position += 1
        return value


class ConstantRandom:
    """Random source that always returns the same value."""

    def __init__(self, value: float = 0.0):
        self.value = value
        self.calls = 0

    def next(self) -> float:
        self.calls += 1
        return self.value


@pytest.fixture
def scripted_rng():
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def constant_rng():
    """Factory for constant random sources."""
    return ConstantRandom


@pytest.fixture
def make_cells():
    """Factory projecting a uniform or per-cell level grid into IsoCells."""

    def _make(weeks, days, level=0, overrides=None, height_table=HEIGHT_TABLE_100):
        overrides = overrides or {}
        assignments = [
            LevelAssignment(w, d, overrides.get((w, d), level))
            for w in range(weeks)
            for d in range(days)
        ]
        return project(assignments, height_table, 0.0, 0.0)

    return _make
