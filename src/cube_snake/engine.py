"""Step-based game engine composing surface, snake, and food logic."""

from __future__ import annotations

import logging

import numpy as np

from cube_snake.clock import TickClock
from cube_snake.config import GameConfig
from cube_snake.food import FoodSpawner
from cube_snake.snake import Snake
from cube_snake.surface import CubeSurface
from cube_snake.topology import Direction

logger = logging.getLogger(__name__)


class CubeSnakeEngine:
    """Single-snake game on the surface of a cube.

    The engine owns the surface, snake, food spawner and score. Each call to
    :meth:`step` advances the game by one tick and returns the updated state
    dictionary; :meth:`update` drives ticks from wall-clock deltas.
    """

    def __init__(self, config: GameConfig | None = None) -> None:
        cfg = config or GameConfig()
        self.config = cfg
        self.surface = CubeSurface(cfg.grid_size)
        self.rng = np.random.default_rng(cfg.seed)
        self.clock = TickClock(cfg.tick_interval)
        self.food = FoodSpawner(
            self.surface, max_attempts=cfg.max_food_attempts, rng=self.rng,
        )
        # The head can only meet segment k after a closed walk of k moves.
        self.collision_min_length = self.surface.shortest_cycle + 1
        self._start()

    def _start(self) -> None:
        self.snake = Snake.spawn(self.surface, self.config.initial_length)
        self.pending_direction = self.snake.direction
        self.score = 0
        self.tick = 0
        self.game_over = False
        self.clock.reset()
        self.food.place(self.snake.body)

    @property
    def direction(self) -> Direction:
        """Direction applied on the most recent tick."""
        return self.snake.direction

    def set_direction(self, direction: Direction) -> None:
        """Record the latest directional intent for the next tick.

        Later calls before the tick replace earlier ones. Reversals are
        filtered when the tick resolves the direction.
        """
        self.pending_direction = direction

    def step(self) -> dict:
        """Advance the game by one tick.

        Returns the full game state as a serializable dict.
        """
        if self.game_over:
            return self.get_state()

        self.snake.advance(self.surface, self.pending_direction)
        # An edge crossing may have rotated the frame; drop the stale intent.
        self.pending_direction = self.snake.direction
        self.tick += 1

        if self.food.position is not None and self.snake.head == self.food.position:
            self._eat()

        if self.snake.self_collision(self.collision_min_length):
            self._kill_snake()

        return self.get_state()

    def update(self, dt: float) -> int:
        """Feed *dt* seconds to the tick clock and run every due tick.

        Returns the number of ticks run.
        """
        due = self.clock.advance(dt)
        ran = 0
        for _ in range(due):
            if self.game_over:
                break
            self.step()
            ran += 1
        return ran

    def reset(self) -> dict:
        """Restart the game from the initial layout."""
        self._start()
        logger.info("Game reset.")
        return self.get_state()

    def status_text(self) -> str:
        if self.game_over:
            return f"Game Over! Final Score: {self.score}"
        return f"Score: {self.score}"

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.tick,
            "score": self.score,
            "game_over": self.game_over,
            "status": self.status_text(),
            "grid_size": self.surface.size,
            "snake": self.snake.to_dict(),
            "food": self.food.to_dict(),
        }

    def _eat(self) -> None:
        self.score += self.config.food_reward
        self.snake.schedule_growth()
        self.food.clear()
        self.food.place(self.snake.body)
        logger.debug("Food eaten at tick %d; score %d.", self.tick, self.score)

    def _kill_snake(self) -> None:
        """Mark the snake as dead and end the game."""
        self.snake.alive = False
        self.game_over = True
        logger.info("Snake died at tick %d with score %d.", self.tick, self.score)
