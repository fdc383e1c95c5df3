from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PY_TERRAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (json or console)")

    # Grid Configuration
    grid_days: int = Field(default=7, ge=0, le=7, description="Minimum rows of the biome grid")
    level_scale: int = Field(default=100, description="Level scale (10 or 100 levels)")

    # Isometric Layout Configuration
    tile_half_width: float = Field(default=7.0, gt=0, description="Half width of an isometric tile")
    tile_half_height: float = Field(default=3.0, gt=0, description="Half height of an isometric tile")
    origin_x: float = Field(default=400.0, description="Screen X of cell (0, 0)")
    origin_y: float = Field(default=60.0, description="Screen Y of cell (0, 0)")


# Instantiate singleton settings object
settings = Settings()
