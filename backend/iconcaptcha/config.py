"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    iconcaptcha_env: str = "development"
    iconcaptcha_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Solver
    crop_height: int = 50
    workers: int = 0
    strict_dimensions: bool = False
    min_icons: int = 3

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
