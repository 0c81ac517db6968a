import random
from typing import List, Tuple

import pytest

from catmouse.config import Settings
from catmouse.game_logic import connect_player
from catmouse.room_manager import RoomManager
from catmouse.state import GameWorld


class FakeClock:
    def __init__(self, start: int = 1_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


class RecordingNotifier:
    def __init__(self):
        self.sent: List[Tuple[str, dict]] = []

    def send(self, player_id: str, message: dict) -> None:
        self.sent.append((player_id, message))

    def types(self, player_id=None) -> List[str]:
        return [m["type"] for pid, m in self.sent if player_id is None or pid == player_id]

    def of_type(self, event: str, player_id=None) -> List[dict]:
        return [m["data"] for pid, m in self.sent if m["type"] == event and (player_id is None or pid == player_id)]

    def clear(self) -> None:
        self.sent.clear()


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def world(settings, clock, notifier):
    return GameWorld(settings, notifier=notifier, clock=clock, rng=random.Random(7))


@pytest.fixture
def manager(world):
    return RoomManager(world)


@pytest.fixture
def connect(world):
    """Connect a player with a predictable id."""
    def _connect(player_id: str):
        return connect_player(world, player_id)
    return _connect


@pytest.fixture
def seated_room(world, manager, connect):
    """Default room with a host at seat 0 and a second player at seat 1."""
    host = connect("host")
    guest = connect("guest")
    manager.set_host(host, True)
    manager.take_seat(guest, 1)
    return manager.get_or_create_default(), host, guest
