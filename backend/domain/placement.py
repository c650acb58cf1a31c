"""
Procedural placement of food and obstacles on free cells.
"""

import logging
import random
from typing import Iterable, List, Optional

from .constants import CELL_SIZE, MAX_PLACEMENT_ATTEMPTS
from .grid import Cell, cell_count, random_cell

logger = logging.getLogger(__name__)


class PlacementError(RuntimeError):
    """No free cell could be found: the board is too small for what it holds."""


def place_food(
    snake: Iterable[Cell],
    obstacles: Iterable[Cell],
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
    max_attempts: int = MAX_PLACEMENT_ATTEMPTS,
    cell_size: int = CELL_SIZE
) -> Cell:
    """
    Return a random cell that is on neither the snake nor an obstacle.

    Uses rejection sampling bounded by max_attempts. Raises PlacementError
    when every cell is occupied or the attempts run out.
    """
    rng = rng or random.Random()
    occupied = set(snake) | set(obstacles)

    if len(occupied) >= cell_count(width, height, cell_size):
        raise PlacementError(
            f"No free cell for food on a {width}x{height} board "
            f"({len(occupied)} cells occupied)."
        )

    for _ in range(max_attempts):
        cell = random_cell(width, height, rng, cell_size)
        if cell not in occupied:
            return cell

    raise PlacementError(
        f"Could not place food after {max_attempts} attempts "
        f"({len(occupied)} of {cell_count(width, height, cell_size)} cells occupied)."
    )


def place_obstacles(
    snake: Iterable[Cell],
    count: int,
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
    max_attempts: int = MAX_PLACEMENT_ATTEMPTS,
    cell_size: int = CELL_SIZE
) -> List[Cell]:
    """
    Draw `count` obstacle cells, none of them on the snake.

    Each draw is only checked against the snake: obstacles may land on each
    other, and food is placed afterwards so it is not considered at all.
    """
    if count < 0:
        raise ValueError(f"Obstacle count must be non-negative, got {count}.")

    rng = rng or random.Random()
    snake_cells = set(snake)

    if count and len(snake_cells) >= cell_count(width, height, cell_size):
        raise PlacementError(
            f"No free cell for obstacles on a {width}x{height} board."
        )

    obstacles: List[Cell] = []
    for _ in range(count):
        for _ in range(max_attempts):
            cell = random_cell(width, height, rng, cell_size)
            if cell not in snake_cells:
                break
        else:
            raise PlacementError(
                f"Could not place obstacle {len(obstacles) + 1} of {count} "
                f"after {max_attempts} attempts."
            )
        obstacles.append(cell)

    overlaps = len(obstacles) - len(set(obstacles))
    if overlaps:
        logger.debug("%s obstacle(s) share a cell with another obstacle", overlaps)

    return obstacles
