import pytest

from catmouse.exceptions import DuplicatePlayer
from catmouse.registry import PlayerRegistry
from catmouse.schemas import Role


def test_create_uses_observer_defaults():
    players = PlayerRegistry()
    p = players.create("a", x=0.3, y=0.4, now=5)
    assert p.role is Role.OBSERVER
    assert p.room_id is None
    assert p.seat_index is None
    assert (p.x, p.y, p.last_update) == (0.3, 0.4, 5)
    assert players.get("a") is p
    assert "a" in players and len(players) == 1


def test_create_rejects_duplicates():
    players = PlayerRegistry()
    players.create("a", 0.1, 0.1, 0)
    with pytest.raises(DuplicatePlayer):
        players.create("a", 0.2, 0.2, 0)


def test_remove_is_idempotent():
    players = PlayerRegistry()
    p = players.create("a", 0.1, 0.1, 0)
    assert players.remove("a") is p
    assert players.remove("a") is None
    assert players.get("a") is None
    assert players.get(None) is None


def test_iteration_tolerates_mutation():
    players = PlayerRegistry()
    for pid in "abc":
        players.create(pid, 0.1, 0.1, 0)
    for p in players:
        players.remove(p.player_id)
    assert len(players) == 0
