"""
GameState entity - the state record owned by the game loop.
"""

from typing import Any, Dict, List, Optional

from .constants import CELL_SIZE, DEFAULT_DIRECTION, NOT_STARTED
from .grid import Cell
from .snake import Snake


class GameState:
    """
    Everything the simulation needs between two ticks.

    Attributes:
        snake: the Snake entity
        direction: current direction of travel
        pending_direction: last direction requested since the previous tick
        direction_locked: debounce flag, set once a change has been applied this tick
        food: position of the food, or None before the game starts
        obstacles: list of obstacle cells
        status: not_started / running / game_over
        tick_number: ticks completed in this game (0-based)
        score: food eaten in this game
        width, height: board dimensions
    """

    def __init__(
        self,
        snake: Snake,
        width: int,
        height: int,
        direction: str = DEFAULT_DIRECTION,
        food: Optional[Cell] = None,
        obstacles: Optional[List[Cell]] = None,
        status: str = NOT_STARTED,
        tick_number: int = 0,
        score: int = 0,
        pending_direction: Optional[str] = None,
        direction_locked: bool = False,
        cell_size: int = CELL_SIZE
    ):
        self.snake = snake
        self.width = width
        self.height = height
        self.direction = direction
        self.food = food
        self.obstacles = list(obstacles or [])
        self.status = status
        self.tick_number = tick_number
        self.score = score
        self.pending_direction = pending_direction
        self.direction_locked = direction_locked
        self.cell_size = cell_size

    def copy(self) -> "GameState":
        """Return a snapshot that later ticks will not mutate."""
        snake = Snake(self.snake.positions)
        snake.alive = self.snake.alive
        snake.death_reason = self.snake.death_reason
        snake.death_tick = self.snake.death_tick
        return GameState(
            snake=snake,
            width=self.width,
            height=self.height,
            direction=self.direction,
            food=self.food,
            obstacles=list(self.obstacles),
            status=self.status,
            tick_number=self.tick_number,
            score=self.score,
            pending_direction=self.pending_direction,
            direction_locked=self.direction_locked,
            cell_size=self.cell_size,
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation. Tuples become lists when dumped."""
        return {
            "tick_number": self.tick_number,
            "status": self.status,
            "snake": list(self.snake.positions),
            "alive": self.snake.alive,
            "death_reason": self.snake.death_reason,
            "direction": self.direction,
            "food": self.food,
            "obstacles": list(self.obstacles),
            "score": self.score,
            "width": self.width,
            "height": self.height,
        }

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        # = obstacle
        H = snake head
        S = snake body
        Row 0 is the top of the board, as on the canvas.
        """
        columns = self.width // self.cell_size
        rows = self.height // self.cell_size
        board = [['.' for _ in range(columns)] for _ in range(rows)]

        def mark(cell: Cell, char: str) -> None:
            x, y = cell
            board[y // self.cell_size][x // self.cell_size] = char

        if self.food is not None:
            mark(self.food, 'F')

        for obstacle in self.obstacles:
            mark(obstacle, '#')

        # Body first so the head wins when they overlap
        for cell in list(self.snake.positions)[1:]:
            mark(cell, 'S')
        mark(self.snake.head, 'H')

        return "\n".join(''.join(row) for row in board)

    def __repr__(self):
        return (
            f"<GameState tick={self.tick_number}, status={self.status}, "
            f"length={len(self.snake)}, food={self.food}, score={self.score}>"
        )
