from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="EROSION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Logging format (console or json)")

    # Output Configuration
    output_dir: str = Field(default="./image", description="Directory for generated images")

    # Terrain Generation Configuration
    map_width: int = Field(default=512, gt=2, description="Terrain width in cells")
    map_height: int = Field(default=512, gt=2, description="Terrain height in cells")
    num_bumps: int = Field(default=500, ge=0, description="Number of terrain bumps")
    bump_scale: float = Field(default=10.0, description="Bump amplitude scale factor")

    # Erosion Configuration
    num_drops: int = Field(default=100000, ge=0, description="Droplets per erosion run")
    snapshot_every: int = Field(default=1000, ge=0, description="Snapshot interval in drops (0 disables)")
    seed: Optional[int] = Field(default=None, description="Random seed (unset draws one from the OS)")


# Instantiate singleton settings object
settings = Settings()
