"""Fixed-rate catch detection.

The catch loop is the only authority for ending a round: it enforces the
round deadline and decides catches. A catch needs the cat to stay within
``catch_distance`` of an uncaught mouse for ``catch_hold_ms``; leaving
range even for one tick restarts the countdown.
"""
from __future__ import annotations

import asyncio
import logging
import math
from typing import Dict, List, Optional

from .game_logic import end_game
from .room import Room
from .schemas import Caught, EndReason, Player, PlayerSnapshot, Role
from .state import GameWorld, ProximityKey

logger = logging.getLogger(__name__)


def _seated_players(world: GameWorld, room: Room) -> List[Player]:
    return [p for p in (world.players.get(sid) for sid in room.seated_ids()) if p is not None]


def _check_catches(world: GameWorld, room: Room, seated: List[Player], now: int) -> bool:
    """Advance proximity timers for *room*. Returns *True* if the round ended."""
    settings = world.settings
    cats = [p for p in seated if p.role is Role.CAT]
    mice = [p for p in seated if p.role is Role.MOUSE and not p.caught]

    # First pair to cross the hold threshold wins; order is seat order.
    for cat in cats:
        for mouse in mice:
            key = ProximityKey(room.room_id, cat.player_id, mouse.player_id)
            distance = math.hypot(cat.x - mouse.x, cat.y - mouse.y)
            if distance >= settings.catch_distance:
                world.proximity_timers.pop(key, None)
                continue

            started = world.proximity_timers.setdefault(key, now)
            if now - started < settings.catch_hold_ms:
                continue

            mouse.caught = True
            world.proximity_timers.pop(key, None)
            logger.info(f"Room {room.room_id}: {cat.player_id} caught {mouse.player_id}")
            world.emit_to_room(
                room.room_id,
                "caught",
                Caught(room_id=room.room_id, mouse_id=mouse.player_id, by_cat_id=cat.player_id),
            )
            end_game(world, room, EndReason.CAUGHT)
            return True
    return False


def tick_catch_rules(world: GameWorld, now: Optional[int] = None) -> None:
    """Run one tick over every running room."""
    if now is None:
        now = world.now()

    for room in list(world.rooms.values()):
        if not room.is_running:
            continue

        if room.ends_at is not None and now >= room.ends_at:
            end_game(world, room, EndReason.TIME)
            continue

        seated = _seated_players(world, room)
        if _check_catches(world, room, seated, now):
            continue

        snapshot: Dict[str, dict] = {
            p.player_id: PlayerSnapshot(
                id=p.player_id,
                name=p.name,
                role=p.role,
                seat_index=p.seat_index,
                x=p.x,
                y=p.y,
                caught=p.caught,
                last=p.last_update,
            ).to_wire()
            for p in seated
        }
        world.emit_to_room(room.room_id, "players", snapshot)


class CatchLoop:
    """Repeating task that calls ``tick_catch_rules`` every ``tick_ms``."""

    def __init__(self, world: GameWorld):
        self.world = world
        self.period = world.settings.tick_ms / 1000
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="catch-loop")
        logger.info(f"Catch loop started ({self.world.settings.tick_ms} ms)")

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Catch loop stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.period)
            try:
                tick_catch_rules(self.world)
            except Exception:
                logger.exception("Catch loop tick failed")


__all__ = ["tick_catch_rules", "CatchLoop"]
