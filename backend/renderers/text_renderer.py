"""
ASCII renderer: turns draw calls into a printable board.
"""

import logging
from typing import List, Optional

from domain.constants import CELL_SIZE
from domain.grid import Cell
from .base import Renderer

logger = logging.getLogger(__name__)

EMPTY = '.'
FOOD = 'F'
HEAD = 'H'
BODY = 'S'
OBSTACLE = '#'


class TextRenderer(Renderer):
    """
    Builds a character grid from the draw calls.

    The first segment drawn after a clear is the head. The finished board
    is kept in `last_frame` and logged at DEBUG level.
    """

    def __init__(self, width: int, height: int, cell_size: int = CELL_SIZE):
        self.columns = width // cell_size
        self.rows = height // cell_size
        self.cell_size = cell_size
        self._grid: List[List[str]] = []
        self._head_drawn = False
        self.frames_drawn = 0
        self.last_frame: Optional[str] = None
        self.draw_clear()

    def _mark(self, cell: Cell, char: str) -> None:
        x, y = cell
        self._grid[y // self.cell_size][x // self.cell_size] = char

    def draw_clear(self) -> None:
        self._grid = [[EMPTY] * self.columns for _ in range(self.rows)]
        self._head_drawn = False

    def draw_snake_segment(self, cell: Cell) -> None:
        if self._head_drawn:
            # never paint body over the head
            x, y = cell
            if self._grid[y // self.cell_size][x // self.cell_size] == HEAD:
                return
            self._mark(cell, BODY)
        else:
            self._mark(cell, HEAD)
            self._head_drawn = True

    def draw_food(self, cell: Cell) -> None:
        self._mark(cell, FOOD)

    def draw_obstacle(self, cell: Cell) -> None:
        self._mark(cell, OBSTACLE)

    def render(self) -> str:
        return "\n".join(''.join(row) for row in self._grid)

    def finish_frame(self) -> None:
        self.frames_drawn += 1
        self.last_frame = self.render()
        logger.debug("Frame %s:\n%s", self.frames_drawn, self.last_frame)
