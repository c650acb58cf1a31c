"""
Board geometry: cell alignment, bounds and edge wrapping.
"""

import random
from typing import Tuple

from .constants import CELL_SIZE

Cell = Tuple[int, int]


def validate_board(width: int, height: int, cell_size: int = CELL_SIZE) -> None:
    """Raise ValueError unless the board is a positive multiple of the cell size."""
    if cell_size <= 0:
        raise ValueError(f"Cell size must be positive, got {cell_size}.")
    if width <= 0 or height <= 0:
        raise ValueError(f"Board dimensions must be positive, got {width}x{height}.")
    if width % cell_size or height % cell_size:
        raise ValueError(
            f"Board {width}x{height} is not a multiple of the cell size {cell_size}."
        )


def cell_count(width: int, height: int, cell_size: int = CELL_SIZE) -> int:
    """Number of cells on the board."""
    return (width // cell_size) * (height // cell_size)


def in_bounds(cell: Cell, width: int, height: int) -> bool:
    x, y = cell
    return 0 <= x < width and 0 <= y < height


def wrap(cell: Cell, width: int, height: int, cell_size: int = CELL_SIZE) -> Cell:
    """
    Move a cell that left the board to the opposite edge.

    Only one overflowing axis is corrected per call. Under four-direction
    movement a head can only leave the board along one axis at a time, so
    this is enough; diagonal movement would need both axes corrected.
    """
    x, y = cell
    if x >= width:
        x = 0
    elif x < 0:
        x = width - cell_size
    elif y >= height:
        y = 0
    elif y < 0:
        y = height - cell_size
    return (x, y)


def random_cell(
    width: int,
    height: int,
    rng: random.Random,
    cell_size: int = CELL_SIZE
) -> Cell:
    """Draw a uniformly random grid-aligned cell."""
    x = rng.randrange(0, width, cell_size)
    y = rng.randrange(0, height, cell_size)
    return (x, y)
