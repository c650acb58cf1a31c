"""
Game configuration.

Values come from the environment (a `.env` file is loaded if present) and
can be overridden on the command line:

    SNAKE_BOARD_WIDTH     board width in canvas units (default 300)
    SNAKE_BOARD_HEIGHT    board height in canvas units (default 300)
    SNAKE_TICK_MS         tick period in milliseconds (default 100)
    SNAKE_OBSTACLE_COUNT  obstacles placed per game (default 10)
    SNAKE_LOG_LEVEL       logging level for the CLI (default INFO)
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from domain.constants import (
    CELL_SIZE,
    DEFAULT_BOARD_HEIGHT,
    DEFAULT_BOARD_WIDTH,
    OBSTACLE_COUNT,
    TICK_MS,
)
from domain.grid import validate_board

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class GameConfig:
    """Fixed configuration supplied once when a game is created."""
    width: int = DEFAULT_BOARD_WIDTH
    height: int = DEFAULT_BOARD_HEIGHT
    cell_size: int = CELL_SIZE
    tick_ms: int = TICK_MS
    obstacle_count: int = OBSTACLE_COUNT
    log_level: str = "INFO"

    def __post_init__(self):
        validate_board(self.width, self.height, self.cell_size)
        if self.tick_ms <= 0:
            raise ValueError(f"Tick period must be positive, got {self.tick_ms} ms.")
        if self.obstacle_count < 0:
            raise ValueError(f"Obstacle count must be non-negative, got {self.obstacle_count}.")

    @classmethod
    def from_env(cls) -> "GameConfig":
        return cls(
            width=_int_env("SNAKE_BOARD_WIDTH", DEFAULT_BOARD_WIDTH),
            height=_int_env("SNAKE_BOARD_HEIGHT", DEFAULT_BOARD_HEIGHT),
            tick_ms=_int_env("SNAKE_TICK_MS", TICK_MS),
            obstacle_count=_int_env("SNAKE_OBSTACLE_COUNT", OBSTACLE_COUNT),
            log_level=os.getenv("SNAKE_LOG_LEVEL", "INFO").upper(),
        )

    @property
    def start_cell(self):
        """Board centre snapped to the grid: (150, 150) on a 300x300 board."""
        return (
            (self.width // 2) // self.cell_size * self.cell_size,
            (self.height // 2) // self.cell_size * self.cell_size,
        )
