"""Cell addressing on the cube surface."""

from __future__ import annotations

from dataclasses import dataclass

from cube_snake.topology import Direction, Face


@dataclass(frozen=True)
class GridPosition:
    """A cell addressed as (face, x, y).

    Equality covers all three fields; cells on different faces are never
    adjacent except through the topology table.
    """

    face: Face
    x: int
    y: int

    def in_bounds(self, size: int) -> bool:
        """Check whether the coordinates lie within an N×N face."""
        return 0 <= self.x < size and 0 <= self.y < size

    def shifted(self, direction: Direction) -> GridPosition:
        """Return the same-face cell one step away, possibly out of bounds."""
        dx, dy = direction.value
        return GridPosition(self.face, self.x + dx, self.y + dy)

    def to_dict(self) -> dict:
        return {"face": self.face.value, "x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> GridPosition:
        return cls(Face(data["face"]), int(data["x"]), int(data["y"]))
