"""REST API route handlers for game lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from cube_snake.server.game_manager import GameManager
from cube_snake.server.models import (
    DIRECTION_MAP,
    CreateGameRequest,
    DirectionRequest,
    GameSummary,
)

router = APIRouter(prefix="/games", tags=["games"])


def _get_manager(request: Request) -> GameManager:
    return request.app.state.game_manager


@router.post("", status_code=201)
async def create_game(body: CreateGameRequest, request: Request) -> GameSummary:
    """Create a game and start its tick loop."""
    manager = _get_manager(request)
    try:
        game = manager.create_game(
            grid_size=body.grid_size,
            tick_interval_ms=body.tick_interval_ms,
            food_reward=body.food_reward,
            seed=body.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    manager.start(game)
    return game.summary()


@router.get("")
async def list_games(request: Request) -> list[GameSummary]:
    """List hosted games."""
    return _get_manager(request).list_games()


@router.get("/{game_id}")
async def get_game(game_id: str, request: Request) -> dict:
    """Get game metadata and the current state snapshot."""
    game = _get_manager(request).get_game(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found.")
    result = game.summary().model_dump(mode="json")
    result["state"] = game.engine.get_state()
    return result


@router.post("/{game_id}/direction", status_code=200)
async def set_direction(
    game_id: str, body: DirectionRequest, request: Request,
) -> dict:
    """Record a directional intent for the next tick."""
    direction = DIRECTION_MAP.get(body.direction.lower())
    if direction is None:
        raise HTTPException(
            status_code=422, detail=f"Unknown direction '{body.direction}'.",
        )
    try:
        await _get_manager(request).set_direction(game_id, direction)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"game_id": game_id, "direction": direction.name.lower()}


@router.post("/{game_id}/restart", status_code=200)
async def restart_game(game_id: str, request: Request) -> dict:
    """Reset the game to its starting layout."""
    try:
        state = await _get_manager(request).restart(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"game_id": game_id, "state": state}


@router.delete("/{game_id}", status_code=204)
async def delete_game(game_id: str, request: Request) -> None:
    """Stop and forget a game."""
    try:
        await _get_manager(request).remove_game(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
