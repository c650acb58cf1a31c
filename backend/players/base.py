"""
Base input interface for the game engine.
"""

import random
from typing import Callable, Optional

from domain.constants import DIRECTION_KEY_CODES
from domain.game_state import GameState

KeyHandler = Callable[[int], None]


class Player:
    """
    Base class/interface for direction input.

    The game registers its key handler through listen_direction_input().
    Automated players decide a move in get_move() and send it to that
    handler as an arrow key code from act(), which the driver calls once
    before every tick.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self._handler: Optional[KeyHandler] = None

    def listen_direction_input(self, handler: KeyHandler) -> None:
        """Register the handler that receives key codes."""
        self._handler = handler

    def press(self, key_code: int) -> None:
        """Send a raw key code to the registered handler."""
        if self._handler is not None:
            self._handler(key_code)

    def get_move(self, game_state: GameState) -> Optional[str]:
        """
        Return a direction for the next tick, or None to keep going straight.

        Args:
            game_state: Current state of the game

        Returns:
            One of: "UP", "DOWN", "LEFT", "RIGHT", or None
        """
        raise NotImplementedError

    def act(self, game_state: GameState) -> Optional[str]:
        """Pick a move and press the matching key. Returns the move."""
        move = self.get_move(game_state)
        if move is not None:
            self.press(DIRECTION_KEY_CODES[move])
        return move
