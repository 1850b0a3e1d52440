"""Snake body tracking on the cube surface."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from cube_snake.movement import advance
from cube_snake.position import GridPosition
from cube_snake.topology import Direction, Face

if TYPE_CHECKING:
    from cube_snake.surface import CubeSurface


class Snake:
    """A snake represented as an ordered deque of body cells.

    The head is ``body[0]``; the tail is ``body[-1]``. Segments are only
    ever shifted or appended at the tail.
    """

    def __init__(
        self,
        start: GridPosition,
        direction: Direction = Direction.UP,
        length: int = 3,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = direction.value
        self.body: deque[GridPosition] = deque(
            GridPosition(start.face, start.x - dx * i, start.y - dy * i)
            for i in range(length)
        )
        self.direction = direction
        self.alive = True
        self._grow_pending = False

    @classmethod
    def spawn(cls, surface: CubeSurface, length: int = 3) -> Snake:
        """Place a new snake at the centre of the top face, heading up."""
        half = surface.size // 2
        if length > half + 1:
            raise ValueError(
                f"initial length {length} does not fit on a "
                f"{surface.size}×{surface.size} face."
            )
        return cls(GridPosition(Face.TOP, half, half), Direction.UP, length)

    @property
    def head(self) -> GridPosition:
        """Return the head cell."""
        return self.body[0]

    @property
    def tail(self) -> GridPosition:
        return self.body[-1]

    @property
    def growing(self) -> bool:
        return self._grow_pending

    def __len__(self) -> int:
        return len(self.body)

    def schedule_growth(self) -> None:
        """Append one segment on the next move."""
        self._grow_pending = True

    def advance(self, surface: CubeSurface, pending: Direction) -> None:
        """Move one cell, applying any scheduled growth."""
        new_body, self.direction = advance(
            self.body, self.direction, pending, surface,
            grow=self._grow_pending,
        )
        self.body = deque(new_body)
        self._grow_pending = False

    def occupies(self, position: GridPosition) -> bool:
        """Check whether any segment covers *position*."""
        return position in self.body

    def segment(self, index: int) -> GridPosition | None:
        """Return the segment at *index*, or ``None`` if there is none."""
        if 0 <= index < len(self.body):
            return self.body[index]
        return None

    def self_collision(self, min_length: int = 1) -> bool:
        """Check whether the head overlaps any other body segment.

        Bodies shorter than *min_length* cannot have looped back onto
        themselves and are never reported.
        """
        if len(self.body) < min_length:
            return False
        head = self.head
        return any(seg == head for seg in list(self.body)[1:])

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [seg.to_dict() for seg in self.body],
            "direction": self.direction.name.lower(),
            "length": len(self.body),
            "alive": self.alive,
        }
