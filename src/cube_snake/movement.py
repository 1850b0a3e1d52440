"""One-tick movement of a body across the cube surface."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from cube_snake.topology import Direction

if TYPE_CHECKING:
    from cube_snake.position import GridPosition
    from cube_snake.surface import CubeSurface


def resolve_direction(current: Direction, pending: Direction) -> Direction:
    """Apply *pending* unless it would reverse straight into the body."""
    if pending is current.opposite:
        return current
    return pending


def advance(
    body: Sequence[GridPosition],
    current: Direction,
    pending: Direction,
    surface: CubeSurface,
    grow: bool = False,
) -> tuple[list[GridPosition], Direction]:
    """Move *body* one cell and return ``(new_body, new_direction)``.

    The head steps in the resolved direction, turning onto the next face at
    an edge; the returned direction is the one in force on the head's new
    face. Trailing segments take their predecessors' positions from the
    pre-move snapshot. With *grow*, a segment is appended where the tail
    was before the move.
    """
    if not body:
        raise ValueError("Body must contain at least one segment.")

    snapshot = list(body)
    direction = resolve_direction(current, pending)
    head, direction = surface.step(snapshot[0], direction)

    new_body = [head, *snapshot[:-1]]
    if grow:
        new_body.append(snapshot[-1])
    return new_body, direction
