"""
Image renderer for snake games.

Paints every draw call onto a Pillow canvas in the classic colours:
- White board with a black border
- Light green snake segments outlined in dark green
- Red food outlined in dark red
- Grey obstacles outlined in black

Finished frames can be saved as PNG or exported together as an animated GIF.
"""

import logging
import os
from typing import List, Optional, Tuple

from PIL import Image, ImageColor, ImageDraw

from domain.constants import CELL_SIZE, TICK_MS
from domain.grid import Cell
from .base import Renderer

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


class ColorScheme:
    """Fill/outline pairs for each kind of cell"""

    BOARD = "white"
    BOARD_BORDER = "black"

    SNAKE = "lightgreen"
    SNAKE_BORDER = "darkgreen"

    FOOD = "red"
    FOOD_BORDER = "darkred"

    OBSTACLE = "grey"
    OBSTACLE_BORDER = "black"


def color_to_rgb(color: str) -> RGB:
    """Convert a colour name or hex string to an RGB tuple"""
    return ImageColor.getrgb(color)[:3]


class ImageRenderer(Renderer):
    """Draws the board onto a Pillow image, one cell at a time."""

    def __init__(
        self,
        width: int,
        height: int,
        cell_size: int = CELL_SIZE,
        scale: int = 1,
        max_frames: Optional[int] = None
    ):
        if scale < 1:
            raise ValueError(f"Scale must be at least 1, got {scale}.")
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.scale = scale
        self.max_frames = max_frames
        self.frames: List[Image.Image] = []
        self.image = Image.new('RGB', (width * scale, height * scale), color_to_rgb(ColorScheme.BOARD))
        self._draw = ImageDraw.Draw(self.image)

    def _draw_cell(self, cell: Cell, fill: str, outline: str) -> None:
        """Fill a cell and stroke its edge"""
        x, y = cell
        size = self.cell_size * self.scale
        left, top = x * self.scale, y * self.scale
        self._draw.rectangle(
            [left, top, left + size - 1, top + size - 1],
            fill=color_to_rgb(fill),
            outline=color_to_rgb(outline)
        )

    def draw_clear(self) -> None:
        self._draw.rectangle(
            [0, 0, self.image.width - 1, self.image.height - 1],
            fill=color_to_rgb(ColorScheme.BOARD),
            outline=color_to_rgb(ColorScheme.BOARD_BORDER)
        )

    def draw_snake_segment(self, cell: Cell) -> None:
        self._draw_cell(cell, ColorScheme.SNAKE, ColorScheme.SNAKE_BORDER)

    def draw_food(self, cell: Cell) -> None:
        self._draw_cell(cell, ColorScheme.FOOD, ColorScheme.FOOD_BORDER)

    def draw_obstacle(self, cell: Cell) -> None:
        self._draw_cell(cell, ColorScheme.OBSTACLE, ColorScheme.OBSTACLE_BORDER)

    def finish_frame(self) -> None:
        if self.max_frames is not None and len(self.frames) >= self.max_frames:
            return
        self.frames.append(self.image.copy())

    def pixel(self, cell: Cell) -> RGB:
        """Colour at the centre of a cell, handy for inspecting a frame"""
        x, y = cell
        centre = (self.cell_size * self.scale) // 2
        return self.image.getpixel((x * self.scale + centre, y * self.scale + centre))

    def save_frame(self, output_path: str) -> str:
        """Save the current canvas as a single image"""
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self.image.save(output_path)
        logger.info("Frame saved to %s", output_path)
        return output_path

    def save_animation(self, output_path: str, frame_ms: int = TICK_MS) -> str:
        """
        Export the collected frames as an animated GIF

        Args:
            output_path: Where to write the GIF
            frame_ms: Display time of each frame

        Returns:
            Path to the written file
        """
        if not self.frames:
            raise ValueError("No frames have been rendered yet.")

        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        logger.info("Writing %s frames to %s", len(self.frames), output_path)
        first, *rest = self.frames
        first.save(
            output_path,
            save_all=True,
            append_images=rest,
            duration=frame_ms,
            loop=0
        )
        return output_path
