"""
Scripted player - replays a fixed list of key codes, one per tick.
"""

import random
from typing import Iterable, List, Optional

from domain.constants import KEY_CODE_DIRECTIONS
from domain.game_state import GameState
from .base import Player


class ScriptedPlayer(Player):
    """
    Presses the next scripted key code on every tick.

    A None entry skips that tick. Codes that are not arrow keys are still
    pressed, so the game's handling of unknown input can be exercised.
    """

    def __init__(self, key_codes: Iterable[Optional[int]], rng: Optional[random.Random] = None):
        super().__init__(rng=rng)
        self.key_codes: List[Optional[int]] = list(key_codes)
        self.position = 0

    @property
    def exhausted(self) -> bool:
        return self.position >= len(self.key_codes)

    def get_move(self, game_state: GameState) -> Optional[str]:
        if self.exhausted:
            return None
        return KEY_CODE_DIRECTIONS.get(self.key_codes[self.position])

    def act(self, game_state: GameState) -> Optional[str]:
        if self.exhausted:
            return None
        key_code = self.key_codes[self.position]
        self.position += 1
        if key_code is not None:
            self.press(key_code)
        return KEY_CODE_DIRECTIONS.get(key_code)
