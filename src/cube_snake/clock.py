"""Fixed-interval tick accumulator."""

from __future__ import annotations


class TickClock:
    """Turns variable frame deltas into a fixed simulation cadence."""

    def __init__(self, interval: float = 0.2) -> None:
        if interval <= 0:
            raise ValueError("Tick interval must be positive.")
        self.interval = interval
        self.accumulated = 0.0

    def advance(self, dt: float) -> int:
        """Accumulate *dt* and return how many ticks are now due."""
        if dt < 0:
            raise ValueError("Delta time must be non-negative.")
        self.accumulated += dt
        due = int(self.accumulated // self.interval)
        self.accumulated -= due * self.interval
        return due

    def reset(self) -> None:
        self.accumulated = 0.0
