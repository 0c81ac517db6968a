"""Exceptions raised by the game core.

``GameError`` subclasses are user-facing rejections: the message is sent
back once to the requester as a ``room-error`` notice and nothing else
happens. The rest signal programming-level misuse of the stores.
"""


class CatMouseException(Exception):
    """Base class for every game exception."""
    pass


# ============ User-facing rejections ============

class GameError(CatMouseException):
    """A rejected action whose message is shown to the requester."""

    message = "Action rejected."

    def __init__(self, message=None):
        self.message = message or self.message
        super().__init__(self.message)


class NotHost(GameError):
    message = "Only host can start the game."


class AlreadyStarted(GameError):
    message = "Game already started."


class InvalidPlayerCount(GameError):
    message = "Need 2-4 seated players (1 cat + 1-3 mice)."

    def __init__(self, min_players=2, max_players=4):
        super().__init__(
            f"Need {min_players}-{max_players} seated players "
            f"(1 cat + {min_players - 1}-{max_players - 1} mice)."
        )


class SeatReserved(GameError):
    message = "Seat 1 is reserved for host."


# ============ Store lookups ============

class DuplicatePlayer(CatMouseException):
    def __init__(self, player_id):
        self.player_id = player_id
        super().__init__(f"Player {player_id} already registered")


class RoomNotFound(CatMouseException):
    def __init__(self, room_id):
        self.room_id = room_id
        super().__init__(f"Room {room_id} not found")


class RoomAlreadyExists(CatMouseException):
    def __init__(self, room_id):
        self.room_id = room_id
        super().__init__(f"Room {room_id} already exists")
