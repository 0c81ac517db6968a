"""Shared in-memory runtime state.

``GameWorld`` owns every store the handlers and the catch loop work on:
the player registry, the rooms, and the proximity timers. One instance
lives for the whole process (``app.state.world``) and is passed explicitly
to every component.

All mutation happens on the event loop thread in plain synchronous code,
so no locking is needed. Outbound messages go through a ``Notifier``
whose ``send`` only enqueues and never blocks.
"""
from __future__ import annotations

import logging
import random
import time
from typing import Callable, Dict, NamedTuple, Optional, Protocol

from .config import Settings, get_settings
from .geometry import WallSegment, load_walls
from .registry import PlayerRegistry
from .room import Room
from .schemas import WireModel

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def send(self, player_id: str, message: dict) -> None:
        ...


class NullNotifier:
    """Drops everything. Used until a transport is attached."""

    def send(self, player_id: str, message: dict) -> None:
        logger.debug("No transport, dropping %s for %s", message.get("type"), player_id)


class ProximityKey(NamedTuple):
    room_id: str
    cat_id: str
    mouse_id: str


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


class GameWorld:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        notifier: Optional[Notifier] = None,
        clock: Callable[[], int] = wall_clock_ms,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or get_settings()
        self.notifier: Notifier = notifier or NullNotifier()
        self.clock = clock
        self.rng = rng or random.Random()
        self.walls: tuple[WallSegment, ...] = load_walls(self.settings.walls)

        self.players = PlayerRegistry()
        self.rooms: Dict[str, Room] = {}
        # (room, cat, mouse) -> epoch ms when continuous proximity began
        self.proximity_timers: Dict[ProximityKey, int] = {}

    def now(self) -> int:
        return self.clock()

    # -------------------- Proximity timers -------------------- #

    def drop_room_timers(self, room_id: str) -> None:
        for key in [k for k in self.proximity_timers if k.room_id == room_id]:
            del self.proximity_timers[key]

    def drop_player_timers(self, player_id: str) -> None:
        for key in [k for k in self.proximity_timers if player_id in (k.cat_id, k.mouse_id)]:
            del self.proximity_timers[key]

    # -------------------- Notifications -------------------- #

    def room_members(self, room_id: str) -> list[str]:
        return [p.player_id for p in self.players if p.room_id == room_id]

    def emit_to_player(self, player_id: str, event: str, payload) -> None:
        self.notifier.send(player_id, {"type": event, "data": _as_wire(payload)})

    def emit_to_room(self, room_id: str, event: str, payload) -> None:
        message = {"type": event, "data": _as_wire(payload)}
        for pid in self.room_members(room_id):
            self.notifier.send(pid, message)


def _as_wire(payload):
    if isinstance(payload, WireModel):
        return payload.to_wire()
    if isinstance(payload, dict):
        return {k: _as_wire(v) for k, v in payload.items()}
    return payload


__all__ = ["GameWorld", "Notifier", "NullNotifier", "ProximityKey", "wall_clock_ms"]
