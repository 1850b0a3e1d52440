"""Food placement on the cube surface."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import TYPE_CHECKING

import numpy as np

from cube_snake.position import GridPosition
from cube_snake.surface import FACES

if TYPE_CHECKING:
    from cube_snake.surface import CubeSurface

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Places food on a random unoccupied cell.

    Samples a face and a cell uniformly with a seeded NumPy RNG and rejects
    occupied cells. After ``max_attempts`` rejections it falls back to the
    first free cell in canonical order, so placement always terminates.
    """

    def __init__(
        self,
        surface: CubeSurface,
        max_attempts: int = 1000,
        rng: np.random.Generator | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.surface = surface
        self.max_attempts = max_attempts
        self.rng = rng if rng is not None else np.random.default_rng()
        self.position: GridPosition | None = None

    def sample(self) -> GridPosition:
        """Draw one uniformly random cell from the whole surface."""
        size = self.surface.size
        face = FACES[int(self.rng.integers(len(FACES)))]
        x, y = self.rng.integers(size, size=2)
        return GridPosition(face, int(x), int(y))

    def place(self, exclude: Collection[GridPosition]) -> GridPosition | None:
        """Place food on a cell outside *exclude*.

        Returns the new position, or ``None`` if every cell is excluded.
        """
        excluded = set(exclude)
        for _ in range(self.max_attempts):
            candidate = self.sample()
            if candidate not in excluded:
                self.position = candidate
                return candidate

        logger.warning(
            "Food sampling gave up after %d attempts; scanning for a free cell.",
            self.max_attempts,
        )
        self.position = self.surface.first_free(excluded)
        if self.position is None:
            logger.warning("No free cells available for food placement.")
        return self.position

    def clear(self) -> None:
        self.position = None

    def to_dict(self) -> dict | None:
        """Serialize food state to a dictionary."""
        return self.position.to_dict() if self.position is not None else None
