"""Tests for the CubeSnakeEngine module."""

import json
from collections import deque

import pytest

from cube_snake.config import GameConfig
from cube_snake.engine import CubeSnakeEngine
from cube_snake.position import GridPosition
from cube_snake.topology import Direction, Face

FAR_AWAY = GridPosition(Face.BOTTOM, 0, 0)


def _top(x, y):
    return GridPosition(Face.TOP, x, y)


def _engine(**kwargs) -> CubeSnakeEngine:
    kwargs.setdefault("seed", 0)
    engine = CubeSnakeEngine(GameConfig(**kwargs))
    # Keep random food out of the way unless a test places it.
    engine.food.position = FAR_AWAY
    return engine


class TestEngineInit:
    def test_default_init(self):
        engine = CubeSnakeEngine(GameConfig(seed=0))
        assert engine.score == 0
        assert engine.tick == 0
        assert not engine.game_over
        assert engine.snake.alive
        assert engine.direction == Direction.UP

    def test_snake_starts_on_top_centre(self):
        engine = CubeSnakeEngine(GameConfig(seed=0))
        assert list(engine.snake.body) == [_top(5, 5), _top(5, 4), _top(5, 3)]

    def test_food_placed_off_body(self):
        engine = CubeSnakeEngine(GameConfig(seed=0))
        assert engine.food.position is not None
        assert not engine.snake.occupies(engine.food.position)

    def test_collision_threshold_from_corner_cycle(self):
        assert _engine().collision_min_length == 4


class TestEngineMovement:
    def test_basic_step(self):
        engine = _engine()
        state = engine.step()
        assert engine.snake.head == _top(5, 6)
        assert state["tick"] == 1

    def test_direction_change(self):
        engine = _engine()
        engine.set_direction(Direction.LEFT)
        engine.step()
        assert engine.snake.head == _top(4, 5)
        assert engine.direction == Direction.LEFT

    def test_latest_input_wins(self):
        engine = _engine()
        engine.set_direction(Direction.LEFT)
        engine.set_direction(Direction.RIGHT)
        engine.step()
        assert engine.snake.head == _top(6, 5)

    def test_reversal_ignored(self):
        engine = _engine()
        engine.set_direction(Direction.DOWN)
        engine.step()
        assert engine.snake.head == _top(5, 6)
        assert engine.direction == Direction.UP

    def test_reversal_after_valid_input_ignored(self):
        engine = _engine()
        engine.set_direction(Direction.LEFT)
        engine.set_direction(Direction.DOWN)
        engine.step()
        assert engine.direction == Direction.UP

    def test_crossing_onto_back_face(self):
        engine = _engine()
        for _ in range(4):
            engine.step()
        assert engine.snake.head == _top(5, 9)
        engine.step()
        assert engine.snake.head == GridPosition(Face.BACK, 5, 0)
        assert engine.direction == Direction.UP

    def test_stale_input_dropped_after_crossing(self):
        engine = _engine()
        engine.snake.body = deque([_top(1, 5), _top(2, 5), _top(3, 5)])
        engine.snake.direction = Direction.LEFT
        engine.set_direction(Direction.LEFT)
        engine.step()
        engine.step()
        assert engine.snake.head == GridPosition(Face.LEFT, 4, 9)
        assert engine.direction == Direction.DOWN
        assert engine.pending_direction == Direction.DOWN
        engine.step()
        assert engine.snake.head == GridPosition(Face.LEFT, 4, 8)

    def test_game_over_stops_ticks(self):
        engine = _engine()
        engine.game_over = True
        head = engine.snake.head
        state = engine.step()
        assert state["tick"] == 0
        assert engine.snake.head == head


class TestEngineFood:
    def test_score_increases_on_food(self):
        engine = _engine()
        engine.food.position = _top(5, 6)
        engine.step()
        assert engine.score == 10
        assert len(engine.snake) == 3
        assert engine.snake.growing

    def test_growth_on_following_tick(self):
        engine = _engine()
        engine.food.position = _top(5, 6)
        engine.step()
        tail = engine.snake.tail
        engine.food.position = FAR_AWAY
        engine.step()
        assert len(engine.snake) == 4
        assert engine.snake.tail == tail

    def test_two_foods_score_twenty(self):
        engine = _engine()
        engine.food.position = _top(5, 6)
        engine.step()
        engine.food.position = _top(5, 7)
        engine.step()
        assert engine.score == 20
        engine.food.position = FAR_AWAY
        engine.step()
        assert len(engine.snake) == 5

    def test_new_food_placed_after_eating(self):
        engine = _engine()
        engine.food.position = _top(5, 6)
        engine.step()
        assert engine.food.position is not None
        assert engine.food.position != _top(5, 6)
        assert not engine.snake.occupies(engine.food.position)

    def test_custom_reward(self):
        engine = _engine(food_reward=3)
        engine.food.position = _top(5, 6)
        engine.step()
        assert engine.score == 3


class TestEngineSelfCollision:
    def test_dies_on_self_collision(self):
        engine = _engine()
        engine.snake.body = deque([
            _top(5, 5), _top(6, 5), _top(6, 6), _top(5, 6), _top(4, 6),
        ])
        engine.snake.direction = Direction.LEFT
        engine.set_direction(Direction.UP)
        engine.step()
        assert engine.game_over
        assert not engine.snake.alive

    def test_dies_looping_round_a_corner(self):
        engine = _engine()
        engine.snake.body = deque([
            GridPosition(Face.RIGHT, 9, 9),
            GridPosition(Face.BACK, 9, 0),
            _top(9, 9),
            _top(8, 9),
        ])
        engine.snake.direction = Direction.LEFT
        engine.set_direction(Direction.UP)
        engine.step()
        assert engine.snake.head == _top(9, 9)
        assert engine.game_over

    def test_survives_without_overlap(self):
        engine = _engine()
        for _ in range(40):
            engine.step()
        assert not engine.game_over
        assert engine.snake.head == _top(5, 5)


class TestEngineClock:
    def test_update_fires_on_interval(self):
        engine = _engine(tick_interval=0.25)
        assert engine.update(0.125) == 0
        assert engine.tick == 0
        assert engine.update(0.125) == 1
        assert engine.tick == 1
        assert engine.update(0.5) == 2
        assert engine.tick == 3

    def test_update_stops_at_game_over(self):
        engine = _engine(tick_interval=0.25)
        engine.game_over = True
        assert engine.update(1.0) == 0

    def test_negative_delta_rejected(self):
        engine = _engine()
        with pytest.raises(ValueError, match="non-negative"):
            engine.update(-0.1)


class TestEngineReset:
    def test_reset_restores_start(self):
        engine = _engine()
        engine.food.position = _top(5, 6)
        engine.step()
        engine.set_direction(Direction.LEFT)
        engine.game_over = True
        state = engine.reset()
        assert state["score"] == 0
        assert state["tick"] == 0
        assert not engine.game_over
        assert engine.direction == Direction.UP
        assert engine.pending_direction == Direction.UP
        assert not engine.snake.growing
        assert list(engine.snake.body) == [_top(5, 5), _top(5, 4), _top(5, 3)]
        assert not engine.snake.occupies(engine.food.position)


class TestEngineState:
    def test_status_text(self):
        engine = _engine()
        assert engine.status_text() == "Score: 0"
        engine.score = 30
        engine.game_over = True
        assert engine.status_text() == "Game Over! Final Score: 30"

    def test_state_is_json_serializable(self):
        engine = _engine()
        engine.step()
        serialized = json.dumps(engine.get_state())
        assert isinstance(serialized, str)

    def test_state_structure(self):
        state = _engine().get_state()
        for key in ("tick", "score", "game_over", "status", "grid_size", "snake", "food"):
            assert key in state
        assert state["food"] == FAR_AWAY.to_dict()


class TestEngineDeterminism:
    def test_same_seed_same_outcome(self):
        actions = [
            Direction.UP, Direction.LEFT, Direction.LEFT,
            Direction.DOWN, Direction.RIGHT,
        ]
        assert self._run_game(123, actions) == self._run_game(123, actions)

    def test_different_seeds_differ(self):
        actions = [Direction.UP] * 3
        state_a = self._run_game(1, actions)
        state_b = self._run_game(2, actions)
        assert state_a["food"] != state_b["food"]

    @staticmethod
    def _run_game(seed: int, actions: list[Direction]) -> dict:
        engine = CubeSnakeEngine(GameConfig(seed=seed))
        for action in actions:
            engine.set_direction(action)
            engine.step()
        return engine.get_state()
