"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    polydisplay_env: str = "development"
    polydisplay_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Commands longer than this do not fit a command block; flagged, never truncated
    max_command_length: int = 32767

    # Curve sampling step for SVG input, percent of subpath length
    default_sample_rate: float = 2.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
