"""
Domain entities for the arcade snake engine.

This module contains the core game rules that are independent of
rendering, audio and input concerns.
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES,
    CELL_SIZE, OBSTACLE_COUNT, TICK_MS,
    NOT_STARTED, RUNNING, GAME_OVER,
)
from .grid import wrap
from .snake import Snake, advance, change_direction, direction_for_key
from .collision import check_self_collision, check_obstacle_collision, is_game_over
from .placement import PlacementError, place_food, place_obstacles
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES',
    'CELL_SIZE', 'OBSTACLE_COUNT', 'TICK_MS',
    'NOT_STARTED', 'RUNNING', 'GAME_OVER',
    'wrap',
    'Snake', 'advance', 'change_direction', 'direction_for_key',
    'check_self_collision', 'check_obstacle_collision', 'is_game_over',
    'PlacementError', 'place_food', 'place_obstacles',
    'GameState',
]
