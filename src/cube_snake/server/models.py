"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field

from cube_snake.topology import Direction

DIRECTION_MAP: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


class GameStatus(str, enum.Enum):
    """Lifecycle states for a game instance."""

    ACTIVE = "active"
    FINISHED = "finished"


class CreateGameRequest(BaseModel):
    """Request body for POST /games."""

    grid_size: int = Field(default=10, ge=4, le=64)
    tick_interval_ms: int = Field(default=200, ge=50, le=2000)
    food_reward: int = Field(default=10, ge=0)
    seed: int | None = None


class DirectionRequest(BaseModel):
    """Request body for POST /games/{game_id}/direction."""

    direction: str


class GameSummary(BaseModel):
    """Compact game info for list endpoints."""

    game_id: str
    status: GameStatus
    grid_size: int
    tick_interval_ms: int
    score: int


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
