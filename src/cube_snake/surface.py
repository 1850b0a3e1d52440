"""The six-face cube surface: bounds, single-cell moves and occupancy."""

from __future__ import annotations

import functools
from collections.abc import Iterable, Iterator

import numpy as np

from cube_snake.position import GridPosition
from cube_snake.topology import (
    MIN_GRID_SIZE,
    Direction,
    Face,
    edge_offset,
    transition,
)

# Canonical face order, used only for array layout and deterministic scans.
FACES: tuple[Face, ...] = tuple(Face)

# Right-handed (normal, +x, +y) frames of an axis-aligned cube. The
# topology table is the adjacency these frames induce.
FACE_FRAMES: dict[Face, tuple[np.ndarray, np.ndarray, np.ndarray]] = {
    Face.TOP: (np.array([0, 1, 0]), np.array([1, 0, 0]), np.array([0, 0, -1])),
    Face.BOTTOM: (np.array([0, -1, 0]), np.array([1, 0, 0]), np.array([0, 0, 1])),
    Face.FRONT: (np.array([0, 0, 1]), np.array([1, 0, 0]), np.array([0, 1, 0])),
    Face.BACK: (np.array([0, 0, -1]), np.array([1, 0, 0]), np.array([0, -1, 0])),
    Face.LEFT: (np.array([-1, 0, 0]), np.array([0, 0, 1]), np.array([0, 1, 0])),
    Face.RIGHT: (np.array([1, 0, 0]), np.array([0, 0, -1]), np.array([0, 1, 0])),
}


class CubeSurface:
    """Six N×N grids stitched into one continuous surface.

    Occupancy queries are answered with a NumPy boolean array of shape
    ``(6, size, size)`` indexed as ``[face, y, x]`` in :data:`FACES` order.
    """

    def __init__(self, size: int = 10) -> None:
        if size < MIN_GRID_SIZE:
            raise ValueError(f"Grid size must be at least {MIN_GRID_SIZE}.")
        self.size = size

    @property
    def cell_count(self) -> int:
        return len(FACES) * self.size * self.size

    def in_bounds(self, position: GridPosition) -> bool:
        return position.in_bounds(self.size)

    def step(
        self, position: GridPosition, direction: Direction,
    ) -> tuple[GridPosition, Direction]:
        """Move one cell, crossing onto the adjacent face at an edge.

        Returns the new cell and the direction of travel there, which only
        differs from *direction* after an edge crossing.
        """
        if not self.in_bounds(position):
            raise ValueError(f"{position} is outside a {self.size}×{self.size} face.")
        tentative = position.shifted(direction)
        if self.in_bounds(tentative):
            return tentative, direction
        return transition(
            position.face, direction, edge_offset(position, direction), self.size,
        )

    def neighbors(self, position: GridPosition) -> list[GridPosition]:
        """Return the four cells reachable in one move."""
        return [self.step(position, d)[0] for d in Direction]

    def cells(self) -> Iterator[GridPosition]:
        """Iterate over every cell in canonical order."""
        for face in FACES:
            for y in range(self.size):
                for x in range(self.size):
                    yield GridPosition(face, x, y)

    def occupancy_mask(self, positions: Iterable[GridPosition]) -> np.ndarray:
        """Return a boolean array marking the given cells."""
        mask = np.zeros((len(FACES), self.size, self.size), dtype=bool)
        for pos in positions:
            if self.in_bounds(pos):
                mask[FACES.index(pos.face), pos.y, pos.x] = True
        return mask

    def free_cells(self, occupied: Iterable[GridPosition]) -> list[GridPosition]:
        """Return every cell not in *occupied*, in canonical order."""
        free = np.argwhere(~self.occupancy_mask(occupied))
        return [GridPosition(FACES[f], int(x), int(y)) for f, y, x in free]

    def first_free(self, occupied: Iterable[GridPosition]) -> GridPosition | None:
        """Return the first unoccupied cell in canonical order, if any."""
        free = np.argwhere(~self.occupancy_mask(occupied))
        if len(free) == 0:
            return None
        f, y, x = free[0]
        return GridPosition(FACES[int(f)], int(x), int(y))

    @property
    def shortest_cycle(self) -> int:
        """Length of the shortest closed walk without backtracking."""
        return shortest_cycle(self.size)

    def world_position(
        self,
        position: GridPosition,
        cell_size: float = 1.0,
        lift: float = 0.0,
    ) -> np.ndarray:
        """Return the 3D centre of a cell on a cube centred at the origin.

        *lift* pushes the point outward along the face normal, which
        renderers use to keep markers above the face.
        """
        normal, x_axis, y_axis = FACE_FRAMES[position.face]
        half = self.size / 2.0
        point = (
            normal * (half + lift / cell_size)
            + x_axis * (position.x + 0.5 - half)
            + y_axis * (position.y + 0.5 - half)
        )
        return point.astype(float) * cell_size

    def to_dict(self) -> dict:
        return {"size": self.size, "faces": [f.value for f in FACES]}


@functools.lru_cache(maxsize=None)
def shortest_cycle(size: int, limit: int = 4) -> int:
    """Return the girth of the cell graph, searching cycles up to *limit*.

    Every face holds 4-cycles, so only shorter cycles through the cube's
    corners need to be found. Each BFS expands the start cell and its
    direct neighbours, which exposes every cycle of length <= 4 through it.
    """
    surface = CubeSurface(size)
    best = limit
    for start in surface.cells():
        dist = {start: 0}
        parent: dict[GridPosition, GridPosition | None] = {start: None}
        frontier = [start]
        for _ in range((limit - 1) // 2 + 1):
            next_frontier: list[GridPosition] = []
            for node in frontier:
                for nb in surface.neighbors(node):
                    if nb not in dist:
                        dist[nb] = dist[node] + 1
                        parent[nb] = node
                        next_frontier.append(nb)
                    elif nb != parent[node]:
                        best = min(best, dist[node] + dist[nb] + 1)
            frontier = next_frontier
        if best == 3:
            break
    return best
