"""Pydantic data schemas used across the game server.

Runtime models (``Player``) and every payload that goes over the wire live
here so other modules import them from a single location. Wire payloads
use camelCase field names; Python code uses snake_case.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .constants import UNSEATED_NAME

# -----------------------------
# Enumerations
# -----------------------------

class Role(str, Enum):
    OBSERVER = "observer"
    CAT = "cat"
    MOUSE = "mouse"


class Phase(str, Enum):
    LOBBY = "lobby"
    RUNNING = "running"


class EndReason(str, Enum):
    TIME = "time"
    CAUGHT = "caught"


class WireModel(BaseModel):
    """Base for everything serialised to clients (camelCase aliases)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


# -----------------------------
# Runtime
# -----------------------------

class Player(WireModel):
    """A connected client. Mutated in place by handlers and the catch loop."""

    player_id: str
    name: str = UNSEATED_NAME
    role: Role = Role.OBSERVER
    room_id: Optional[str] = None
    seat_index: Optional[int] = None
    x: float = 0.5
    y: float = 0.5
    caught: bool = False
    last_update: int = 0  # epoch ms

    @property
    def is_seated(self) -> bool:
        return self.seat_index is not None


# -----------------------------
# Outbound payloads
# -----------------------------

class SeatView(WireModel):
    index: int
    empty: bool
    player_id: Optional[str] = None
    name: Optional[str] = None
    role: Optional[Role] = None


class RoomStateView(WireModel):
    id: str
    host_id: Optional[str]
    target_count: int
    phase: Phase
    started_at: Optional[int] = None
    ends_at: Optional[int] = None
    seats: List[SeatView]


class PlayerSnapshot(WireModel):
    """Live per-tick fields of a seated player."""

    id: str
    name: str
    role: Role
    seat_index: Optional[int]
    x: float
    y: float
    caught: bool
    last: int


class Hello(WireModel):
    id: str
    min_players: int
    max_players: int
    max_seats: int
    walls: List[Tuple[float, float, float, float]]


class GameConfigView(WireModel):
    min_players: int
    max_players: int
    max_seats: int
    catch_distance: float
    catch_hold_ms: int
    round_ms: int
    tick_ms: int
    player_radius: float
    walls: List[Tuple[float, float, float, float]]


class RoomError(WireModel):
    message: str


class GameStarted(WireModel):
    room_id: str
    target_count: int
    cat_id: str
    ends_at: int


class GameEnded(WireModel):
    room_id: str
    reason: EndReason


class Caught(WireModel):
    room_id: str
    mouse_id: str
    by_cat_id: str


class HealthResponse(BaseModel):
    status: str
    rooms: int
    players: int


__all__ = [
    "Role",
    "Phase",
    "EndReason",
    "WireModel",
    "Player",
    "SeatView",
    "RoomStateView",
    "PlayerSnapshot",
    "Hello",
    "GameConfigView",
    "RoomError",
    "GameStarted",
    "GameEnded",
    "Caught",
    "HealthResponse",
]
