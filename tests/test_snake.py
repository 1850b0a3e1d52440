"""Tests for the Snake module."""

from collections import deque

import pytest

from cube_snake.position import GridPosition
from cube_snake.snake import Snake
from cube_snake.surface import CubeSurface
from cube_snake.topology import Direction, Face


def _top(x, y):
    return GridPosition(Face.TOP, x, y)


class TestSnakeInit:
    def test_default_creation(self):
        snake = Snake(_top(5, 5))
        assert snake.head == _top(5, 5)
        assert len(snake) == 3
        assert snake.alive
        assert snake.direction == Direction.UP

    def test_body_extends_opposite_to_direction(self):
        snake = Snake(_top(5, 5), Direction.RIGHT, length=3)
        assert list(snake.body) == [_top(5, 5), _top(4, 5), _top(3, 5)]

    def test_minimum_length(self):
        with pytest.raises(ValueError, match="at least 1"):
            Snake(_top(0, 0), length=0)

    def test_spawn_on_top_face(self):
        snake = Snake.spawn(CubeSurface(10))
        assert list(snake.body) == [_top(5, 5), _top(5, 4), _top(5, 3)]
        assert snake.direction == Direction.UP

    def test_spawn_too_long(self):
        with pytest.raises(ValueError, match="does not fit"):
            Snake.spawn(CubeSurface(4), length=4)


class TestSnakeMovement:
    def test_advance(self):
        surface = CubeSurface(10)
        snake = Snake.spawn(surface)
        snake.advance(surface, Direction.UP)
        assert list(snake.body) == [_top(5, 6), _top(5, 5), _top(5, 4)]

    def test_advance_ignores_reversal(self):
        surface = CubeSurface(10)
        snake = Snake.spawn(surface)
        snake.advance(surface, Direction.DOWN)
        assert snake.head == _top(5, 6)
        assert snake.direction == Direction.UP

    def test_growth_applies_once(self):
        surface = CubeSurface(10)
        snake = Snake.spawn(surface)
        snake.schedule_growth()
        assert snake.growing
        tail = snake.tail
        snake.advance(surface, Direction.UP)
        assert len(snake) == 4
        assert snake.tail == tail
        assert not snake.growing
        snake.advance(surface, Direction.UP)
        assert len(snake) == 4


class TestSnakeQueries:
    def test_occupies(self):
        snake = Snake(_top(5, 5))
        assert snake.occupies(_top(5, 4))
        assert not snake.occupies(GridPosition(Face.BOTTOM, 5, 4))

    def test_segment_lookup(self):
        snake = Snake(_top(5, 5))
        assert snake.segment(0) == _top(5, 5)
        assert snake.segment(2) == _top(5, 3)
        assert snake.segment(3) is None
        assert snake.segment(-1) is None


class TestSelfCollision:
    def test_no_collision(self):
        snake = Snake(_top(5, 5), length=5)
        assert not snake.self_collision()

    def test_collision_detected(self):
        snake = Snake(_top(5, 5))
        snake.body = deque([
            _top(5, 6), _top(5, 5), _top(6, 5), _top(6, 6), _top(5, 6),
        ])
        assert snake.self_collision()

    def test_collision_skipped_below_min_length(self):
        snake = Snake(_top(5, 5))
        snake.body = deque([_top(5, 5), _top(5, 4), _top(5, 5)])
        assert snake.self_collision()
        assert not snake.self_collision(min_length=4)


class TestSnakeSerialization:
    def test_to_dict(self):
        snake = Snake(_top(5, 5))
        d = snake.to_dict()
        assert d["direction"] == "up"
        assert d["length"] == 3
        assert d["alive"] is True
        assert d["body"][0] == {"face": "top", "x": 5, "y": 5}
