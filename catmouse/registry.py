from __future__ import annotations

from typing import Dict, Iterator, Optional

from .exceptions import DuplicatePlayer
from .schemas import Player


class PlayerRegistry:
    """Connected players keyed by their connection id.

    Creating a player does not place it in a room; callers follow up with
    ``RoomManager.place_in_default``.
    """

    def __init__(self) -> None:
        self._players: Dict[str, Player] = {}

    def create(self, player_id: str, x: float, y: float, now: int) -> Player:
        if player_id in self._players:
            raise DuplicatePlayer(player_id)
        player = Player(player_id=player_id, x=x, y=y, last_update=now)
        self._players[player_id] = player
        return player

    def get(self, player_id: Optional[str]) -> Optional[Player]:
        if player_id is None:
            return None
        return self._players.get(player_id)

    def remove(self, player_id: str) -> Optional[Player]:
        return self._players.pop(player_id, None)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._players

    def __iter__(self) -> Iterator[Player]:
        return iter(list(self._players.values()))

    def __len__(self) -> int:
        return len(self._players)


__all__ = ["PlayerRegistry"]
