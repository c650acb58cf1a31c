"""
Player implementations for the arcade snake engine.

This module contains the direction-input abstractions and the
automated players that steer the snake in headless runs.
"""

from .base import Player
from .random_player import RandomPlayer
from .scripted_player import ScriptedPlayer
from .variant_registry import IdlePlayer, create_player, get_player_class, list_variants, AVAILABLE_VARIANTS

__all__ = [
    'Player',
    'RandomPlayer',
    'ScriptedPlayer',
    'IdlePlayer',
    'create_player',
    'get_player_class',
    'list_variants',
    'AVAILABLE_VARIANTS',
]
