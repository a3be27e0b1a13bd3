"""
Game constants for the snake arcade.
"""

from enum import Enum

# Board settings
GRID_SIZE = 25
CELL_SIZE = 24  # Size of each grid cell in pixels
GAME_SPEED_MS = 120

# Movement directions as unit vectors (screen coordinates, y grows downward)
UP = (0, -1)
DOWN = (0, 1)
LEFT = (-1, 0)
RIGHT = (1, 0)
VALID_DIRECTIONS = {UP, DOWN, LEFT, RIGHT}

DIRECTION_NAMES = {
    "UP": UP,
    "DOWN": DOWN,
    "LEFT": LEFT,
    "RIGHT": RIGHT,
}

# Starting layout
INITIAL_SNAKE = ((12, 12),)
INITIAL_DIRECTION = RIGHT

# Death reasons
WALL = "wall"
SELF = "self"

# Browser KeyboardEvent.key -> command
KEY_BINDINGS = {
    "ArrowUp": ("direction", UP),
    "ArrowDown": ("direction", DOWN),
    "ArrowLeft": ("direction", LEFT),
    "ArrowRight": ("direction", RIGHT),
    " ": ("pause",),
}


class GameStatus(str, Enum):
    """Current phase of the game."""

    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"
