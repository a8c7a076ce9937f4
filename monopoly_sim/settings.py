"""
Simulation defaults using pydantic-settings.

Environment variables (prefix: MONOPOLY_):
    MONOPOLY_GAMES       - Number of games per batch (default: 10)
    MONOPOLY_WORKERS     - Parallel workers (default: 1 = sequential)
    MONOPOLY_MAX_TURNS   - Turn cutoff per game (default: 1000)
    MONOPOLY_SEED        - Base seed for reproducible batches (default: unset)
    MONOPOLY_STRATEGIES  - Comma-separated strategy ids, one per player
    MONOPOLY_LOG_LEVEL   - Logging level (default: WARNING)
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SimulationSettings(BaseSettings):
    """Defaults for the batch runner and the command line."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="MONOPOLY_",
    )

    games: int = Field(default=10, ge=1, description="Number of games per batch.")
    workers: int = Field(default=1, ge=1, description="Parallel workers; 1 runs sequentially.")
    max_turns: int = Field(default=1000, ge=1, description="Turn cutoff per game.")
    seed: Optional[int] = Field(default=None, description="Base seed; game N uses seed + N.")
    strategies: str = Field(
        default="always,balanced,monopoly,conservative",
        description="Comma-separated strategy ids, one per player.",
    )
    log_level: str = Field(default="WARNING", description="Logging level name.")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("strategies")
    @classmethod
    def require_two_players(cls, v: str) -> str:
        if len([s for s in v.split(",") if s.strip()]) < 2:
            raise ValueError("At least two strategies are needed for a game")
        return v


@lru_cache
def get_simulation_settings() -> SimulationSettings:
    """Return cached simulation settings instance."""
    return SimulationSettings()
