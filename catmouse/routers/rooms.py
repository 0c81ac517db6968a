from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Request

from ..exceptions import RoomNotFound
from ..room_manager import RoomManager
from ..schemas import GameConfigView, HealthResponse
from ..state import GameWorld

router = APIRouter(prefix="", tags=["rooms"])


def _world(request: Request) -> GameWorld:
    return request.app.state.world


@router.get("/health", response_model=HealthResponse)
async def health(request: Request):
    world = _world(request)
    return HealthResponse(status="ok", rooms=len(world.rooms), players=len(world.players))


@router.get("/config")
async def game_config(request: Request):
    """Public game constants so clients draw the same map the server enforces."""
    world = _world(request)
    settings = world.settings
    return GameConfigView(
        min_players=settings.min_players,
        max_players=settings.max_players,
        max_seats=settings.max_seats,
        catch_distance=settings.catch_distance,
        catch_hold_ms=settings.catch_hold_ms,
        round_ms=settings.round_ms,
        tick_ms=settings.tick_ms,
        player_radius=settings.player_radius,
        walls=[tuple(w) for w in world.walls],
    ).to_wire()


@router.get("/rooms")
async def list_rooms(request: Request) -> List[dict]:
    manager = RoomManager(_world(request))
    return [manager.public_state(room).to_wire() for room in list(manager.world.rooms.values())]


@router.get("/rooms/{room_id}")
async def get_room(room_id: str, request: Request):
    manager = RoomManager(_world(request))
    try:
        room = manager.require_room(room_id)
    except RoomNotFound:
        raise HTTPException(status_code=404, detail="Room not found")
    return manager.public_state(room).to_wire()
