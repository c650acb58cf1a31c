"""
Snake entity and its movement rules.
"""

from collections import deque
from typing import Iterable, Optional, Tuple

from .constants import (
    CELL_SIZE,
    DIRECTION_DELTAS,
    KEY_CODE_DIRECTIONS,
    OPPOSITE_DIRECTIONS,
)
from .grid import Cell, wrap


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
        alive: whether the snake is still alive
        death_reason: 'self', 'obstacle' or 'board_full'
        death_tick: the tick on which the snake died
    """

    def __init__(self, positions: Iterable[Cell]):
        self.positions = deque(positions)
        if not self.positions:
            raise ValueError("A snake needs at least one cell.")
        self.alive = True
        self.death_reason: Optional[str] = None
        self.death_tick: Optional[int] = None

    @property
    def head(self) -> Cell:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Cell:
        return self.positions[-1]

    def __len__(self) -> int:
        return len(self.positions)

    def __repr__(self):
        return f"<Snake length={len(self)} head={self.head} alive={self.alive}>"


def advance(
    snake: Snake,
    direction: str,
    food: Optional[Cell],
    width: int,
    height: int,
    cell_size: int = CELL_SIZE
) -> Tuple[Snake, bool]:
    """
    Move the snake one cell in `direction`.

    The new head is wrapped onto the board and prepended. If it lands on
    the food the tail is kept (the snake grows by one), otherwise the tail
    is dropped. Returns the new snake and whether food was eaten.
    """
    dx, dy = DIRECTION_DELTAS[direction]
    hx, hy = snake.head
    new_head = wrap((hx + dx, hy + dy), width, height, cell_size)

    ate_food = food is not None and new_head == food

    body = list(snake.positions)
    if not ate_food:
        body.pop()

    return Snake([new_head] + body), ate_food


def change_direction(current: str, requested: str) -> str:
    """Return `requested` unless it would turn the snake straight back."""
    if OPPOSITE_DIRECTIONS[current] == requested:
        return current
    return requested


def direction_for_key(key_code: int) -> Optional[str]:
    """Map an arrow key code to a direction; unknown codes map to None."""
    return KEY_CODE_DIRECTIONS.get(key_code)
