"""Runtime configuration.

Every game constant can be overridden through the environment (prefix
``CATMOUSE_``) or a local ``.env`` file, e.g. ``CATMOUSE_PORT=3001`` or
``CATMOUSE_ROUND_MS=60000``. Complex values such as ``CATMOUSE_WALLS`` are
given as JSON.
"""
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional, Tuple

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_ROOM_ID, WALL_SEGMENTS


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CATMOUSE_", env_file=".env", extra="ignore")

    # -- server --
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    # Directory holding a client build to serve at "/" (optional)
    static_dir: Optional[str] = None

    # -- rooms --
    default_room_id: str = DEFAULT_ROOM_ID
    max_seats: int = Field(default=6, ge=1)
    min_players: int = Field(default=2, ge=2)
    max_players: int = Field(default=4, ge=2)

    # -- rules --
    catch_distance: float = Field(default=0.06, gt=0)
    catch_hold_ms: int = Field(default=1200, ge=0)
    round_ms: int = Field(default=5 * 60 * 1000, gt=0)
    tick_ms: int = Field(default=150, gt=0)
    player_radius: float = Field(default=0.028, ge=0)
    walls: List[Tuple[float, float, float, float]] = Field(default_factory=lambda: list(WALL_SEGMENTS))

    @model_validator(mode="after")
    def _check_player_counts(self) -> "Settings":
        if self.min_players > self.max_players:
            raise ValueError("min_players must not exceed max_players")
        if self.max_players > self.max_seats:
            raise ValueError("max_players must not exceed max_seats")
        return self


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
