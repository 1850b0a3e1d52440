"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from cube_snake.server.game_manager import GameManager
from cube_snake.server.models import DIRECTION_MAP

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> GameManager:
    return ws.app.state.game_manager


@ws_router.websocket("/games/{game_id}/play")
async def play(websocket: WebSocket, game_id: str) -> None:
    """Send directions, receive the game state after every tick."""
    manager = _get_manager(websocket)
    game = manager.get_game(game_id)
    if game is None:
        await websocket.close(code=4004, reason="Game not found.")
        return

    await websocket.accept()
    logger.info("Client connected to game %s.", game_id)

    # Send initial state snapshot so the client gets immediate feedback.
    async with game.lock:
        state = game.engine.get_state()
    await websocket.send_text(json.dumps(state, separators=(",", ":")))
    game.subscribers.append(websocket)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            direction_str = msg.get("direction")
            if not isinstance(direction_str, str):
                continue

            direction = DIRECTION_MAP.get(direction_str.lower())
            if direction is None:
                continue

            async with game.lock:
                game.engine.set_direction(direction)
    except WebSocketDisconnect:
        logger.info("Client disconnected from game %s.", game_id)
    finally:
        if websocket in game.subscribers:
            game.subscribers.remove(websocket)
