"""
Random player implementation - picks random safe moves.
"""

from typing import List

from domain.constants import DIRECTION_DELTAS, OPPOSITE_DIRECTIONS, VALID_MOVES
from domain.game_state import GameState
from domain.grid import wrap
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a direction whose next cell avoids obstacles and its own body.
    """

    def get_move(self, game_state: GameState) -> str:
        snake_positions = list(game_state.snake.positions)
        head_x, head_y = snake_positions[0]
        obstacles = set(game_state.obstacles)

        # Filter out moves that:
        # 1. Reverse straight back (the game would ignore them anyway)
        # 2. Hit an obstacle
        # 3. Hit own body (except tail, which will move)
        valid_moves: List[str] = []
        for move in sorted(VALID_MOVES):
            if move == OPPOSITE_DIRECTIONS[game_state.direction]:
                continue

            dx, dy = DIRECTION_DELTAS[move]
            next_cell = wrap((head_x + dx, head_y + dy), game_state.width, game_state.height, game_state.cell_size)

            if next_cell in obstacles:
                continue

            if next_cell in snake_positions[:-1]:
                continue

            valid_moves.append(move)

        # Prefer heading for the food when it is one step away
        if game_state.food is not None:
            for move in valid_moves:
                dx, dy = DIRECTION_DELTAS[move]
                if wrap((head_x + dx, head_y + dy), game_state.width, game_state.height, game_state.cell_size) == game_state.food:
                    return move

        # If no valid moves, keep going (we'll die anyway)
        if not valid_moves:
            return game_state.direction

        return self.rng.choice(valid_moves)
