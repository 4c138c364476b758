"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    mizlab_env: str = "development"
    mizlab_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Request guard: longest trajectory accepted over HTTP
    max_trajectory_points: int = 100_000
    # Cells rasterized per request, summed over segments
    max_filled_cells: int = 1_000_000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
