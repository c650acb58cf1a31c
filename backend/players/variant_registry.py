"""
Registry for player variants.

Maps variant keys (e.g., 'random', 'idle') to player classes so the
command line can pick how the snake is steered.
"""

import random
from typing import Dict, List, Optional, Type

from .base import Player
from .random_player import RandomPlayer


class IdlePlayer(Player):
    """Never presses anything; the snake keeps its heading."""

    def get_move(self, game_state):
        return None


PLAYER_VARIANTS: Dict[str, Type[Player]] = {
    "random": RandomPlayer,
    "idle": IdlePlayer,
}

AVAILABLE_VARIANTS = list(PLAYER_VARIANTS.keys())


def get_player_class(variant: str = "random") -> Type[Player]:
    """
    Get the player class for a given variant key.

    Raises:
        ValueError: if the variant is unknown
    """
    try:
        return PLAYER_VARIANTS[variant]
    except KeyError:
        raise ValueError(
            f"Unknown player variant '{variant}'. Available: {', '.join(AVAILABLE_VARIANTS)}"
        ) from None


def create_player(variant: str = "random", rng: Optional[random.Random] = None) -> Player:
    """Instantiate a registered player, handing it the random source it should use."""
    return get_player_class(variant)(rng=rng)


def list_variants() -> List[str]:
    return list(AVAILABLE_VARIANTS)


__all__ = [
    'IdlePlayer',
    'PLAYER_VARIANTS',
    'AVAILABLE_VARIANTS',
    'create_player',
    'get_player_class',
    'list_variants',
]
