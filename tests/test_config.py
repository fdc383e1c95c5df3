"""Tests for settings and logging configuration."""

import pytest
import structlog
from pydantic import ValidationError

from py_terrain.config import Settings
from py_terrain.log_config import configure_logging


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.level_scale == 100
        assert settings.grid_days == 7
        assert (settings.tile_half_width, settings.tile_half_height) == (7.0, 3.0)
        assert settings.log_format == "json"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("PY_TERRAIN_LEVEL_SCALE", "10")
        monkeypatch.setenv("PY_TERRAIN_ORIGIN_X", "120.5")
        settings = Settings(_env_file=None)
        assert settings.level_scale == 10
        assert settings.origin_x == 120.5

    def test_too_many_days_rejected(self, monkeypatch):
        monkeypatch.setenv("PY_TERRAIN_GRID_DAYS", "8")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_non_positive_tile_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, tile_half_width=0)


class TestLogging:
    """Test structlog setup."""

    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        yield
        structlog.reset_defaults()

    @pytest.mark.parametrize("fmt", ["json", "console"])
    def test_configure_logging(self, fmt):
        configure_logging(level="debug", fmt=fmt)
        assert structlog.is_configured()
        structlog.get_logger("py_terrain.test").info("Logging configured", fmt=fmt)
