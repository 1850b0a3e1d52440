"""Game configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Tunable parameters for a cube snake game.

    Supports JSON serialization so a run can be reproduced from its seed.
    """

    grid_size: int = 10
    tick_interval: float = 0.2
    food_reward: int = 10
    initial_length: int = 3
    max_food_attempts: int = 1000
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.grid_size < 4:
            raise ValueError("grid_size must be at least 4.")
        if self.tick_interval <= 0:
            raise ValueError("tick_interval must be positive.")
        if self.food_reward < 0:
            raise ValueError("food_reward must be non-negative.")
        if self.initial_length < 1:
            raise ValueError("initial_length must be at least 1.")
        if self.initial_length > self.grid_size // 2 + 1:
            raise ValueError(
                "initial_length does not fit the configured grid; increase "
                "grid_size or reduce initial_length."
            )
        if self.max_food_attempts < 1:
            raise ValueError("max_food_attempts must be at least 1.")

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        try:
            return cls(**raw)
        except TypeError as exc:
            raise ValueError(f"Invalid config file {path}: {exc}") from exc
