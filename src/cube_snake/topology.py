"""Face/edge transition table for movement across the cube surface."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from cube_snake.position import GridPosition


class Face(enum.Enum):
    """The six faces of the cube."""

    TOP = "top"
    BOTTOM = "bottom"
    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"


# Smallest supported face edge length.
MIN_GRID_SIZE = 4


class Direction(enum.Enum):
    """Face-relative movement directions with (dx, dy) values."""

    UP = (0, 1)
    DOWN = (0, -1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Remap(enum.Enum):
    """How one destination coordinate is derived from the edge offset."""

    OFFSET = "offset"
    REVERSED = "reversed"
    FIRST = "first"
    LAST = "last"

    def apply(self, offset: int, size: int) -> int:
        if self is Remap.OFFSET:
            return offset
        if self is Remap.REVERSED:
            return size - 1 - offset
        if self is Remap.FIRST:
            return 0
        return size - 1


class Transition(NamedTuple):
    """One table entry: where an exit through an edge lands."""

    face: Face
    x: Remap
    y: Remap
    direction: Direction


_O, _R, _F, _L = Remap.OFFSET, Remap.REVERSED, Remap.FIRST, Remap.LAST

# Keyed by (face, exit edge). The offset is the coordinate along the exit
# edge: x for UP/DOWN exits, y for LEFT/RIGHT exits. Every landing cell lies
# on the edge opposite the resulting direction.
TRANSITIONS: dict[tuple[Face, Direction], Transition] = {
    (Face.TOP, Direction.UP): Transition(Face.BACK, _O, _F, Direction.UP),
    (Face.TOP, Direction.DOWN): Transition(Face.FRONT, _O, _L, Direction.DOWN),
    (Face.TOP, Direction.LEFT): Transition(Face.LEFT, _R, _L, Direction.DOWN),
    (Face.TOP, Direction.RIGHT): Transition(Face.RIGHT, _O, _L, Direction.DOWN),

    (Face.BOTTOM, Direction.UP): Transition(Face.FRONT, _O, _F, Direction.UP),
    (Face.BOTTOM, Direction.DOWN): Transition(Face.BACK, _O, _L, Direction.DOWN),
    (Face.BOTTOM, Direction.LEFT): Transition(Face.LEFT, _O, _F, Direction.UP),
    (Face.BOTTOM, Direction.RIGHT): Transition(Face.RIGHT, _R, _F, Direction.UP),

    (Face.FRONT, Direction.UP): Transition(Face.TOP, _O, _F, Direction.UP),
    (Face.FRONT, Direction.DOWN): Transition(Face.BOTTOM, _O, _L, Direction.DOWN),
    (Face.FRONT, Direction.LEFT): Transition(Face.LEFT, _L, _O, Direction.LEFT),
    (Face.FRONT, Direction.RIGHT): Transition(Face.RIGHT, _F, _O, Direction.RIGHT),

    (Face.BACK, Direction.UP): Transition(Face.BOTTOM, _O, _F, Direction.UP),
    (Face.BACK, Direction.DOWN): Transition(Face.TOP, _O, _L, Direction.DOWN),
    (Face.BACK, Direction.LEFT): Transition(Face.LEFT, _F, _R, Direction.RIGHT),
    (Face.BACK, Direction.RIGHT): Transition(Face.RIGHT, _L, _R, Direction.LEFT),

    (Face.LEFT, Direction.UP): Transition(Face.TOP, _F, _R, Direction.RIGHT),
    (Face.LEFT, Direction.DOWN): Transition(Face.BOTTOM, _F, _O, Direction.RIGHT),
    (Face.LEFT, Direction.LEFT): Transition(Face.BACK, _F, _R, Direction.RIGHT),
    (Face.LEFT, Direction.RIGHT): Transition(Face.FRONT, _F, _O, Direction.RIGHT),

    (Face.RIGHT, Direction.UP): Transition(Face.TOP, _L, _O, Direction.LEFT),
    (Face.RIGHT, Direction.DOWN): Transition(Face.BOTTOM, _L, _R, Direction.LEFT),
    (Face.RIGHT, Direction.LEFT): Transition(Face.FRONT, _L, _O, Direction.LEFT),
    (Face.RIGHT, Direction.RIGHT): Transition(Face.BACK, _L, _R, Direction.LEFT),
}


def edge_offset(position: GridPosition, edge: Direction) -> int:
    """Return the coordinate of *position* measured along *edge*."""
    return position.x if edge in (Direction.UP, Direction.DOWN) else position.y


def transition(
    face: Face, edge: Direction, offset: int, size: int,
) -> tuple[GridPosition, Direction]:
    """Carry an exit through *edge* of *face* onto the adjacent face.

    Returns the landing cell and the direction of travel on the new face.
    """
    from cube_snake.position import GridPosition

    if not 0 <= offset < size:
        raise ValueError(f"Edge offset {offset} outside [0, {size}).")
    entry = TRANSITIONS[(face, edge)]
    landing = GridPosition(
        entry.face,
        entry.x.apply(offset, size),
        entry.y.apply(offset, size),
    )
    return landing, entry.direction


def transition_table(size: int) -> list[dict]:
    """Serialize the full table with remaps resolved symbolically."""
    if size < MIN_GRID_SIZE:
        raise ValueError(f"Grid size must be at least {MIN_GRID_SIZE}.")
    rows: list[dict] = []
    for (face, edge), entry in TRANSITIONS.items():
        rows.append({
            "face": face.value,
            "edge": edge.name.lower(),
            "to_face": entry.face.value,
            "x": _describe(entry.x, size),
            "y": _describe(entry.y, size),
            "direction": entry.direction.name.lower(),
        })
    return rows


def _describe(remap: Remap, size: int) -> str:
    if remap is Remap.OFFSET:
        return "offset"
    if remap is Remap.REVERSED:
        return f"{size - 1} - offset"
    return str(remap.apply(0, size))
