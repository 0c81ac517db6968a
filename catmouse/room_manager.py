"""
Room Manager: seat, host and membership lifecycle of rooms.

Seat and host changes are only accepted while a room is in the lobby
phase. Rejections are silent unless they are worth telling the player
(``SeatReserved``), in which case a ``GameError`` is raised and the
dispatcher turns it into a ``room-error`` notice.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from .constants import HOST_NAME, HOST_SEAT, UNSEATED_NAME, seat_name
from .exceptions import RoomAlreadyExists, RoomNotFound, SeatReserved
from .room import Room
from .schemas import Phase, Player, Role, RoomStateView
from .state import GameWorld

logger = logging.getLogger(__name__)


def _coerce_seat_index(value: Any) -> Optional[int]:
    """Integral seat index from client input, or ``None`` if malformed."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    return None


class RoomManager:
    """Room lifecycle manager bound to one ``GameWorld``."""

    def __init__(self, world: GameWorld):
        self.world = world
        self.settings = world.settings

    # -------------------- Lookup -------------------- #

    def get_or_create_default(self) -> Room:
        room_id = self.settings.default_room_id
        room = self.world.rooms.get(room_id)
        if room is None:
            room = self._new_room(room_id)
            self.world.rooms[room_id] = room
            logger.info(f"Created default room {room_id}")
        return room

    def get_room(self, room_id: Optional[str]) -> Optional[Room]:
        if room_id is None:
            return None
        return self.world.rooms.get(room_id)

    def require_room(self, room_id: str) -> Room:
        room = self.get_room(room_id)
        if room is None:
            raise RoomNotFound(room_id)
        return room

    def create_room(self, room_id: str) -> Room:
        if room_id in self.world.rooms:
            raise RoomAlreadyExists(room_id)
        room = self._new_room(room_id)
        self.world.rooms[room_id] = room
        logger.info(f"Created room {room_id}")
        return room

    def room_of(self, player: Player) -> Optional[Room]:
        return self.get_room(player.room_id)

    def _new_room(self, room_id: str) -> Room:
        return Room(room_id, max_seats=self.settings.max_seats, min_players=self.settings.min_players)

    # -------------------- Membership -------------------- #

    def place_in_room(self, player: Player, room: Room) -> None:
        """Make *player* an unseated observer of *room*."""
        if player.room_id is not None and player.room_id != room.room_id:
            self.clear_player_from_room(player)
        elif player.room_id == room.room_id:
            room.vacate(player.seat_index, player.player_id)
            if room.host_id == player.player_id:
                room.host_id = None
        player.room_id = room.room_id
        player.seat_index = None
        player.name = UNSEATED_NAME
        player.role = Role.OBSERVER
        self.emit_room(room)

    def place_in_default(self, player: Player) -> Room:
        room = self.get_or_create_default()
        self.place_in_room(player, room)
        return room

    def clear_player_from_room(self, player: Player) -> None:
        """Disconnect cleanup. Safe to call repeatedly or for unseated players."""
        if player.room_id is None:
            return

        room = self.get_room(player.room_id)
        player.room_id = None
        seat_index, player.seat_index = player.seat_index, None
        player.role = Role.OBSERVER
        if room is None:
            return

        room.vacate(seat_index, player.player_id)
        if room.host_id == player.player_id:
            room.host_id = None

        if room.is_empty():
            self.world.drop_room_timers(room.room_id)
            if room.room_id != self.settings.default_room_id:
                self.world.rooms.pop(room.room_id, None)
                logger.info(f"Deleted empty room {room.room_id}")
                return
            room.reset()

        self.emit_room(room)

    # -------------------- Seats -------------------- #

    def take_seat(self, player: Player, seat_index: Any) -> bool:
        room = self.room_of(player)
        if room is None or room.phase is not Phase.LOBBY:
            return False

        idx = _coerce_seat_index(seat_index)
        if idx is None or not 0 <= idx < room.max_seats:
            return False

        if idx == HOST_SEAT and room.host_id != player.player_id:
            raise SeatReserved()
        occupant = room.seats[idx]
        if occupant is not None and occupant != player.player_id:
            return False

        room.vacate(player.seat_index, player.player_id)
        if idx != HOST_SEAT and room.host_id == player.player_id:
            # Host status is tied to seat 0.
            room.host_id = None
        room.seats[idx] = player.player_id
        player.seat_index = idx
        player.name = seat_name(idx)
        self.emit_room(room)
        return True

    def leave_seat(self, player: Player) -> bool:
        room = self.room_of(player)
        if room is None or room.phase is not Phase.LOBBY:
            return False
        if player.seat_index is None or room.seats[player.seat_index] != player.player_id:
            return False

        if room.host_id == player.player_id:
            room.host_id = None
        room.seats[player.seat_index] = None
        player.seat_index = None
        player.name = UNSEATED_NAME
        player.role = Role.OBSERVER
        self.emit_room(room)
        return True

    def set_host(self, player: Player, wants_host: bool) -> bool:
        room = self.room_of(player)
        if room is None or room.phase is not Phase.LOBBY:
            return False

        if not wants_host:
            if room.host_id != player.player_id:
                return False
            room.host_id = None
            if player.seat_index is not None:
                player.name = seat_name(player.seat_index)
            self.emit_room(room)
            return True

        previous_seat = player.seat_index
        occupant_id = room.seats[HOST_SEAT]
        if occupant_id is not None and occupant_id != player.player_id:
            self._displace(room, occupant_id, previous_seat)
        elif previous_seat is not None and previous_seat != HOST_SEAT:
            room.vacate(previous_seat, player.player_id)

        room.seats[HOST_SEAT] = player.player_id
        player.seat_index = HOST_SEAT
        player.name = HOST_NAME
        room.host_id = player.player_id
        self.emit_room(room)
        return True

    def _displace(self, room: Room, occupant_id: str, previous_seat: Optional[int]) -> None:
        """Move the seat-0 occupant out of the way of a new host."""
        occupant = self.world.players.get(occupant_id)
        if previous_seat is not None and previous_seat != HOST_SEAT:
            target: Optional[int] = previous_seat
        else:
            target = room.free_seat(exclude=HOST_SEAT)

        room.seats[HOST_SEAT] = None
        if room.host_id == occupant_id:
            room.host_id = None
        if occupant is None:
            return
        if target is not None:
            room.seats[target] = occupant_id
            occupant.seat_index = target
            occupant.name = seat_name(target)
        else:
            occupant.seat_index = None
            occupant.name = UNSEATED_NAME
            occupant.role = Role.OBSERVER

    # -------------------- Views -------------------- #

    def public_state(self, room: Room) -> RoomStateView:
        return room.public_view(self.world.players)

    def emit_room(self, room: Room) -> None:
        if self.world.rooms.get(room.room_id) is not room:
            return
        self.world.emit_to_room(room.room_id, "room-state", self.public_state(room))


__all__ = ["RoomManager"]
