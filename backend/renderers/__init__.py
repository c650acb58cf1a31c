"""
Drawing collaborators for the arcade snake engine.
"""

from .base import Renderer, NullRenderer
from .text_renderer import TextRenderer

__all__ = [
    'Renderer',
    'NullRenderer',
    'TextRenderer',
]
