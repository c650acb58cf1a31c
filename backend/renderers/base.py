"""
Base drawing interface for the game engine.
"""

from domain.grid import Cell


class Renderer:
    """
    Base class/interface for drawing the board.

    The game calls these once per tick in a fixed order: draw_clear,
    draw_food, draw_snake_segment for every segment from head to tail,
    draw_obstacle for every obstacle, then finish_frame.
    """

    def draw_clear(self) -> None:
        raise NotImplementedError

    def draw_snake_segment(self, cell: Cell) -> None:
        raise NotImplementedError

    def draw_food(self, cell: Cell) -> None:
        raise NotImplementedError

    def draw_obstacle(self, cell: Cell) -> None:
        raise NotImplementedError

    def finish_frame(self) -> None:
        """Called after a complete frame has been drawn. Optional."""


class NullRenderer(Renderer):
    """Renderer that draws nothing, for headless runs."""

    def draw_clear(self) -> None:
        pass

    def draw_snake_segment(self, cell: Cell) -> None:
        pass

    def draw_food(self, cell: Cell) -> None:
        pass

    def draw_obstacle(self, cell: Cell) -> None:
        pass
