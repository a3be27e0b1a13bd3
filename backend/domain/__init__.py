"""
Domain entities for the snake arcade game engine.

This module contains the core game entities that are independent of
infrastructure concerns (HTTP, timers, rendering).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_DIRECTIONS, DIRECTION_NAMES,
    GRID_SIZE, GAME_SPEED_MS, KEY_BINDINGS, GameStatus,
)
from .snake import Snake
from .game_config import GameConfig
from .game_state import GameState
from .engine import GameEngine

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_DIRECTIONS', 'DIRECTION_NAMES',
    'GRID_SIZE', 'GAME_SPEED_MS', 'KEY_BINDINGS', 'GameStatus',
    'Snake',
    'GameConfig',
    'GameState',
    'GameEngine',
]
