from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .catch_loop import CatchLoop
from .config import Settings, get_settings
from .routers import rooms as rooms_router
from .routers import websockets as ws_router
from .state import GameWorld
from .transport import ConnectionHub


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


# -----------------------------
# FastAPI app factory
# -----------------------------

def create_app(settings: Optional[Settings] = None, world: Optional[GameWorld] = None) -> FastAPI:
    settings = settings or (world.settings if world else get_settings())
    configure_logging(settings.log_level)

    hub = ConnectionHub()
    world = world or GameWorld(settings)
    world.notifier = hub

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # The catch loop is the single timing authority for every room.
        catch_loop = CatchLoop(world)
        catch_loop.start()
        app.state.catch_loop = catch_loop
        yield
        await catch_loop.stop()

    app = FastAPI(title="Cat & Mice Server", lifespan=lifespan)
    app.state.settings = settings
    app.state.world = world
    app.state.hub = hub

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(rooms_router.router)
    app.include_router(ws_router.router)

    # Mount the client last so API routes take precedence.
    if settings.static_dir:
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="client")

    return app


app = create_app()

__all__ = ["app", "create_app", "configure_logging"]
