"""Core cat & mice game flow.

This module implements the round lifecycle (lobby -> running -> lobby),
movement handling and the dispatcher for inbound websocket messages. It
stays framework-agnostic: every function works on a ``GameWorld`` and
never awaits, so each handler runs to completion before anything else
touches the shared state.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Optional

from .exceptions import AlreadyStarted, GameError, InvalidPlayerCount, NotHost
from .geometry import random_free_position, resolve_move
from .room import Room
from .room_manager import RoomManager
from .schemas import EndReason, GameEnded, GameStarted, Hello, Phase, Player, Role, RoomError
from .state import GameWorld

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Round lifecycle
# ---------------------------------------------------------------------------

def _spawn_position(world: GameWorld):
    return random_free_position(world.walls, world.settings.player_radius, world.rng)


def start_game(world: GameWorld, room: Room, requester_id: str) -> str:
    """Start a round in *room* and return the id of the chosen cat.

    Raises ``NotHost``, ``AlreadyStarted`` or ``InvalidPlayerCount``
    without touching any state.
    """
    settings = world.settings
    if room.host_id != requester_id:
        raise NotHost()
    if room.phase is not Phase.LOBBY:
        raise AlreadyStarted()

    seated = [p for p in (world.players.get(sid) for sid in room.seated_ids()) if p is not None]
    if not settings.min_players <= len(seated) <= settings.max_players:
        raise InvalidPlayerCount(settings.min_players, settings.max_players)

    now = world.now()
    cat = world.rng.choice(seated)
    for player in seated:
        player.caught = False
        player.x, player.y = _spawn_position(world)
        player.last_update = now
        player.role = Role.CAT if player is cat else Role.MOUSE

    room.target_count = len(seated)
    room.phase = Phase.RUNNING
    room.started_at = now
    room.ends_at = now + settings.round_ms
    world.drop_room_timers(room.room_id)

    logger.info(f"Round started in room {room.room_id}: {len(seated)} players, cat {cat.player_id}")
    RoomManager(world).emit_room(room)
    world.emit_to_room(
        room.room_id,
        "game-started",
        GameStarted(room_id=room.room_id, target_count=room.target_count, cat_id=cat.player_id, ends_at=room.ends_at),
    )
    return cat.player_id


def end_game(world: GameWorld, room: Room, reason: EndReason) -> bool:
    """Return *room* to the lobby. Returns *False* if it was not running."""
    if room.phase is not Phase.RUNNING:
        return False

    room.phase = Phase.LOBBY
    room.started_at = None
    room.ends_at = None
    for sid in room.seated_ids():
        player = world.players.get(sid)
        if player is None:
            continue
        player.role = Role.OBSERVER
        player.caught = False
    world.drop_room_timers(room.room_id)

    logger.info(f"Round ended in room {room.room_id} ({reason.value})")
    RoomManager(world).emit_room(room)
    world.emit_to_room(room.room_id, "game-ended", GameEnded(room_id=room.room_id, reason=reason))
    return True


# ---------------------------------------------------------------------------
# Movement
# ---------------------------------------------------------------------------

def _finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints too large for a float
        return False


def can_move(room: Optional[Room], player: Player) -> bool:
    """Caught mice are frozen until the round ends."""
    if room is not None and room.is_running and player.role is Role.MOUSE and player.caught:
        return False
    return True


def handle_position(world: GameWorld, player: Player, x: Any, y: Any) -> bool:
    if player.room_id is None:
        return False
    if not (_finite_number(x) and _finite_number(y)):
        return False

    room = world.rooms.get(player.room_id)
    if not can_move(room, player):
        return False

    from_x = player.x if math.isfinite(player.x) else 0.5
    from_y = player.y if math.isfinite(player.y) else 0.5
    player.x, player.y = resolve_move(
        from_x, from_y, float(x), float(y), world.walls, world.settings.player_radius
    )
    player.last_update = world.now()
    return True


# ---------------------------------------------------------------------------
# Connection lifecycle
# ---------------------------------------------------------------------------

def connect_player(world: GameWorld, player_id: str) -> Player:
    """Register a new connection and seat it as an observer in the default room."""
    settings = world.settings
    x, y = _spawn_position(world)
    player = world.players.create(player_id, x=x, y=y, now=world.now())
    RoomManager(world).place_in_default(player)
    world.emit_to_player(
        player_id,
        "hello",
        Hello(
            id=player_id,
            min_players=settings.min_players,
            max_players=settings.max_players,
            max_seats=settings.max_seats,
            walls=[tuple(w) for w in world.walls],
        ),
    )
    logger.info(f"Player {player_id} connected ({len(world.players)} online)")
    return player


def disconnect_player(world: GameWorld, player_id: str) -> None:
    """Forget *player_id* everywhere. Idempotent."""
    player = world.players.get(player_id)
    if player is not None:
        RoomManager(world).clear_player_from_room(player)
        world.players.remove(player_id)
        logger.info(f"Player {player_id} disconnected ({len(world.players)} online)")
    world.drop_player_timers(player_id)


# ---------------------------------------------------------------------------
# Primary dispatcher used by websocket endpoint
# ---------------------------------------------------------------------------

def _dispatch(world: GameWorld, player: Player, msg_type: Any, data: dict) -> None:
    manager = RoomManager(world)
    if msg_type == "take-seat":
        manager.take_seat(player, data.get("seatIndex"))
    elif msg_type == "set-host":
        manager.set_host(player, bool(data.get("asHost")))
    elif msg_type == "leave-seat":
        manager.leave_seat(player)
    elif msg_type == "start-game":
        room = manager.room_of(player)
        if room is not None:
            start_game(world, room, player.player_id)
    elif msg_type == "pos":
        handle_position(world, player, data.get("x"), data.get("y"))
    else:
        logger.debug(f"Ignoring unknown message type {msg_type!r} from {player.player_id}")


def handle_ws_message(world: GameWorld, player_id: str, data: Any) -> None:
    if not isinstance(data, dict):
        return
    player = world.players.get(player_id)
    if player is None:
        return
    try:
        _dispatch(world, player, data.get("type"), data)
    except GameError as e:
        logger.debug(f"Rejected {data.get('type')} from {player_id}: {e.message}")
        world.emit_to_player(player_id, "room-error", RoomError(message=e.message))


__all__ = [
    "start_game",
    "end_game",
    "can_move",
    "handle_position",
    "connect_player",
    "disconnect_player",
    "handle_ws_message",
]
