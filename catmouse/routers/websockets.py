from __future__ import annotations

import json
import logging
import secrets

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..game_logic import connect_player, disconnect_player, handle_ws_message
from ..state import GameWorld
from ..transport import ConnectionHub

router = APIRouter(prefix="", tags=["ws"])
logger = logging.getLogger(__name__)


def new_player_id() -> str:
    return "P_" + secrets.token_hex(6)


@router.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await ws.accept()
    world: GameWorld = ws.app.state.world
    hub: ConnectionHub = ws.app.state.hub

    player_id = new_player_id()
    # Register the socket first so the hello/room-state notices reach it.
    hub.register(player_id, ws)
    connect_player(world, player_id)

    try:
        while True:
            raw = await ws.receive_text()
            try:
                data = json.loads(raw)
            except ValueError:
                logger.debug(f"Ignoring malformed message from {player_id}")
                continue
            handle_ws_message(world, player_id, data)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception(f"WebSocket error for {player_id}")
    finally:
        disconnect_player(world, player_id)
        await hub.unregister(player_id)
