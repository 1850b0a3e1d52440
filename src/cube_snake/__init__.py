"""Cube Snake — snake on the surface of a cube."""

from cube_snake.config import GameConfig
from cube_snake.engine import CubeSnakeEngine
from cube_snake.food import FoodSpawner
from cube_snake.movement import advance, resolve_direction
from cube_snake.position import GridPosition
from cube_snake.snake import Snake
from cube_snake.surface import CubeSurface
from cube_snake.topology import Direction, Face, transition

__all__ = [
    "CubeSnakeEngine",
    "CubeSurface",
    "Direction",
    "Face",
    "FoodSpawner",
    "GameConfig",
    "GridPosition",
    "Snake",
    "advance",
    "resolve_direction",
    "transition",
]
