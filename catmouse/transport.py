from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

from fastapi import WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)


class _Connection:
    def __init__(self, player_id: str, ws: WebSocket):
        self.player_id = player_id
        self.ws = ws
        self.queue: asyncio.Queue = asyncio.Queue()
        self.writer: Optional[asyncio.Task] = None


class ConnectionHub:
    """Websocket fan-out implementing the ``Notifier`` protocol.

    ``send`` only enqueues; a writer task per connection drains the queue,
    so game handlers never wait on the network and each client receives
    messages in the order they were emitted.
    """

    def __init__(self) -> None:
        self._connections: Dict[str, _Connection] = {}

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._connections

    def __len__(self) -> int:
        return len(self._connections)

    def register(self, player_id: str, ws: WebSocket) -> None:
        conn = _Connection(player_id, ws)
        conn.writer = asyncio.create_task(self._write_loop(conn), name=f"writer-{player_id}")
        self._connections[player_id] = conn

    async def unregister(self, player_id: str) -> None:
        conn = self._connections.pop(player_id, None)
        if conn is None or conn.writer is None:
            return
        conn.writer.cancel()
        try:
            await conn.writer
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.debug(f"Writer for {player_id} failed: {e!r}")

    def send(self, player_id: str, message: dict) -> None:
        conn = self._connections.get(player_id)
        if conn is not None:
            conn.queue.put_nowait(message)

    async def _write_loop(self, conn: _Connection) -> None:
        while True:
            message = await conn.queue.get()
            try:
                await conn.ws.send_json(message)
            except (WebSocketDisconnect, RuntimeError):
                # Client went away; the receive loop will clean up.
                logger.debug(f"Dropping writer for {conn.player_id}")
                return


__all__ = ["ConnectionHub"]
