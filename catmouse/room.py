from __future__ import annotations

from typing import List, Optional

from .registry import PlayerRegistry
from .schemas import Phase, RoomStateView, SeatView

# NOTE: ``Room`` only holds ids. Player objects live in the registry and are
# looked up on demand, so a player that vanished is simply skipped.


class Room:
    """Seats, host and phase of one game instance."""

    def __init__(self, room_id: str, max_seats: int, min_players: int):
        self.room_id = room_id
        self.max_seats = max_seats
        self.min_players = min_players
        self.host_id: Optional[str] = None
        self.phase = Phase.LOBBY
        self.seats: List[Optional[str]] = [None] * max_seats
        # Seated count when the current/last round started
        self.target_count: int = min_players
        # Round timing in epoch ms, only set while running
        self.started_at: Optional[int] = None
        self.ends_at: Optional[int] = None

    # ---------------------------------------------------------------------
    # Helper utilities
    # ---------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self.phase is Phase.RUNNING

    def seated_ids(self) -> List[str]:
        """Occupied seats in seat order."""
        return [sid for sid in self.seats if sid is not None]

    def is_empty(self) -> bool:
        return not self.seated_ids()

    def free_seat(self, exclude: int) -> Optional[int]:
        """Lowest empty seat index other than *exclude*."""
        for idx, sid in enumerate(self.seats):
            if idx != exclude and sid is None:
                return idx
        return None

    def vacate(self, seat_index: Optional[int], player_id: str) -> None:
        """Empty *seat_index* if (and only if) *player_id* sits there."""
        if seat_index is not None and 0 <= seat_index < self.max_seats and self.seats[seat_index] == player_id:
            self.seats[seat_index] = None

    def reset(self) -> None:
        """Back to a pristine lobby."""
        self.host_id = None
        self.phase = Phase.LOBBY
        self.seats = [None] * self.max_seats
        self.target_count = self.min_players
        self.started_at = None
        self.ends_at = None

    # -------------------- Public view -------------------- #

    def public_view(self, players: PlayerRegistry) -> RoomStateView:
        seats: List[SeatView] = []
        for index, sid in enumerate(self.seats):
            player = players.get(sid)
            if player is None:
                seats.append(SeatView(index=index, empty=True))
                continue
            seats.append(
                SeatView(index=index, empty=False, player_id=player.player_id, name=player.name, role=player.role)
            )
        return RoomStateView(
            id=self.room_id,
            host_id=self.host_id,
            target_count=self.target_count,
            phase=self.phase,
            started_at=self.started_at,
            ends_at=self.ends_at,
            seats=seats,
        )


__all__ = ["Room"]
