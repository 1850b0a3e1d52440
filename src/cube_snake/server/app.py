"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from cube_snake.server.game_manager import _MAX_GAMES, GameManager
from cube_snake.server.routes import router
from cube_snake.server.websocket import ws_router


def create_app(max_games: int = _MAX_GAMES) -> FastAPI:
    """Build the FastAPI application.

    *max_games* caps how many games the app hosts at once; creating one
    more answers 422 until a game is deleted.
    """
    manager = GameManager(max_games=max_games)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.game_manager = manager
        yield
        await manager.cleanup()

    app = FastAPI(
        title="Cube Snake API", version="0.1.0", lifespan=lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
