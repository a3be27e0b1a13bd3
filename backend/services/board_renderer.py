"""
Board rendering service.

Renders a GameState snapshot to an image with PIL (Pillow) using the same
look as the browser view:
- Black board with a faint grid
- Snake cells in green (head slightly darker)
- Food cell in red
- PAUSED / GAME OVER overlay
"""

import io
import logging
from typing import Tuple

from PIL import Image, ImageDraw, ImageFont

from domain.constants import CELL_SIZE, GameStatus
from domain.game_state import GameState

logger = logging.getLogger(__name__)

BORDER_WIDTH = 4


class ColorScheme:
    """Color configuration matching the browser view"""

    BACKGROUND = "#000000"
    GRID_LINE = "#0B1F0B"
    BORDER = "#22C55E"
    SNAKE = "#22C55E"
    FOOD = "#EF4444"
    OVERLAY = (0, 0, 0, 190)
    GAME_OVER_TEXT = "#EF4444"
    PAUSED_TEXT = "#EAB308"
    SCORE_TEXT = "#22C55E"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple"""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def darken_color(hex_color: str, amount: float = 0.3) -> Tuple[int, int, int]:
    """Darken a hex color by a given amount"""
    r, g, b = hex_to_rgb(hex_color)
    r = max(0, int(r * (1 - amount)))
    g = max(0, int(g * (1 - amount)))
    b = max(0, int(b * (1 - amount)))
    return (r, g, b)


class BoardRenderer:
    """Draw game snapshots as positioned cells on a grid"""

    def __init__(self, cell_size: int = CELL_SIZE):
        self.cell_size = cell_size
        self.font = ImageFont.load_default()

    def image_size(self, grid_size: int) -> int:
        return grid_size * self.cell_size + 2 * BORDER_WIDTH

    def render(self, state: GameState) -> Image.Image:
        """Render a single frame of the game"""
        size = self.image_size(state.grid_size)
        img = Image.new('RGB', (size, size), hex_to_rgb(ColorScheme.BACKGROUND))
        draw = ImageDraw.Draw(img)

        # Border
        draw.rectangle(
            [0, 0, size - 1, size - 1],
            outline=hex_to_rgb(ColorScheme.BORDER),
            width=BORDER_WIDTH
        )

        # Grid
        board_end = BORDER_WIDTH + state.grid_size * self.cell_size
        for i in range(1, state.grid_size):
            offset = BORDER_WIDTH + i * self.cell_size
            draw.line([offset, BORDER_WIDTH, offset, board_end], fill=hex_to_rgb(ColorScheme.GRID_LINE), width=1)
            draw.line([BORDER_WIDTH, offset, board_end, offset], fill=hex_to_rgb(ColorScheme.GRID_LINE), width=1)

        if state.food is not None:
            self._draw_cell(draw, state.food, hex_to_rgb(ColorScheme.FOOD))

        # Draw the body first so the head stays on top
        for segment in reversed(state.snake[1:]):
            self._draw_cell(draw, segment, hex_to_rgb(ColorScheme.SNAKE))
        self._draw_cell(draw, state.head, darken_color(ColorScheme.SNAKE, 0.25))

        if state.status is not GameStatus.RUNNING:
            img = self._draw_overlay(img, state)

        return img

    def render_png(self, state: GameState) -> bytes:
        """Render a frame and return it encoded as PNG bytes"""
        buffer = io.BytesIO()
        self.render(state).save(buffer, format="PNG")
        return buffer.getvalue()

    def cell_origin(self, cell: Tuple[int, int]) -> Tuple[int, int]:
        """Top-left pixel of a grid cell"""
        x, y = cell
        return (BORDER_WIDTH + x * self.cell_size, BORDER_WIDTH + y * self.cell_size)

    def _draw_cell(self, draw: ImageDraw.ImageDraw, cell: Tuple[int, int], color: Tuple[int, int, int]):
        """Draw a single grid cell with a 1px gap"""
        left, top = self.cell_origin(cell)
        draw.rectangle(
            [left + 1, top + 1, left + self.cell_size - 2, top + self.cell_size - 2],
            fill=color
        )

    def _draw_overlay(self, img: Image.Image, state: GameState) -> Image.Image:
        """Dim the board and write the PAUSED / GAME OVER banner"""
        overlay = Image.new('RGBA', img.size, ColorScheme.OVERLAY)
        composed = Image.alpha_composite(img.convert('RGBA'), overlay)
        draw = ImageDraw.Draw(composed)

        if state.game_over:
            lines = [("GAME OVER", ColorScheme.GAME_OVER_TEXT), (f"Score: {state.score}", ColorScheme.SCORE_TEXT)]
        else:
            lines = [("PAUSED", ColorScheme.PAUSED_TEXT)]

        y = img.size[1] // 2 - 10 * len(lines)
        for text, color in lines:
            bbox = draw.textbbox((0, 0), text, font=self.font)
            text_width = bbox[2] - bbox[0]
            draw.text((img.size[0] // 2 - text_width // 2, y), text, fill=hex_to_rgb(color), font=self.font)
            y += 20

        return composed.convert('RGB')
