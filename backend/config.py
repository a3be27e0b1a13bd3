"""
Runtime configuration for the snake arcade.

Values come from the environment (a local .env file is honoured through
python-dotenv) and fall back to the defaults in domain.constants.
"""

import os
from typing import Optional

from dotenv import load_dotenv

from domain.constants import GAME_SPEED_MS, GRID_SIZE, INITIAL_SNAKE
from domain.game_config import DEFAULT_MAX_FOOD_ATTEMPTS, GameConfig


def _int_from_env(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_config() -> GameConfig:
    """
    Build a GameConfig from environment variables.

    Recognised variables:
        SNAKE_GRID_SIZE, SNAKE_TICK_MS, SNAKE_SEED, SNAKE_MAX_FOOD_ATTEMPTS
    """
    load_dotenv()

    grid_size = _int_from_env("SNAKE_GRID_SIZE", GRID_SIZE)
    # Keep the start in the middle when the board size changes
    initial_snake = INITIAL_SNAKE if grid_size == GRID_SIZE else ((grid_size // 2, grid_size // 2),)

    return GameConfig(
        grid_size=grid_size,
        tick_interval_ms=_int_from_env("SNAKE_TICK_MS", GAME_SPEED_MS),
        initial_snake=initial_snake,
        max_food_attempts=_int_from_env("SNAKE_MAX_FOOD_ATTEMPTS", DEFAULT_MAX_FOOD_ATTEMPTS),
        seed=_int_from_env("SNAKE_SEED", None),
    )
