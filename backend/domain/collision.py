"""
Collision checks evaluated once per tick, after the snake has moved.
"""

from typing import Iterable, Optional, Sequence

from .constants import DEATH_OBSTACLE, DEATH_SELF, SELF_COLLISION_START_INDEX
from .grid import Cell


def check_self_collision(positions: Sequence[Cell]) -> bool:
    """
    True if the head sits on a body cell at index 4 or later.

    Segments 1-3 are skipped: with unit moves the head can never reach
    them, so a snake of length four or less cannot bite itself.
    """
    if not positions:
        return False
    head = positions[0]
    return any(
        positions[i] == head
        for i in range(SELF_COLLISION_START_INDEX, len(positions))
    )


def check_obstacle_collision(positions: Sequence[Cell], obstacles: Iterable[Cell]) -> bool:
    if not positions:
        return False
    return positions[0] in set(obstacles)


def is_game_over(positions: Sequence[Cell], obstacles: Iterable[Cell]) -> bool:
    return check_self_collision(positions) or check_obstacle_collision(positions, obstacles)


def collision_reason(positions: Sequence[Cell], obstacles: Iterable[Cell]) -> Optional[str]:
    """Return 'self', 'obstacle' or None. Self-collision is reported first."""
    if check_self_collision(positions):
        return DEATH_SELF
    if check_obstacle_collision(positions, obstacles):
        return DEATH_OBSTACLE
    return None
