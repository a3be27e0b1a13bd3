"""
GameConfig - the parameters a game is built from.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .constants import (
    GAME_SPEED_MS,
    GRID_SIZE,
    INITIAL_DIRECTION,
    INITIAL_SNAKE,
    VALID_DIRECTIONS,
)

Position = Tuple[int, int]

DEFAULT_MAX_FOOD_ATTEMPTS = 1000


@dataclass(frozen=True)
class GameConfig:
    """
    Parameters the engine and its timer are built from.

    initial_food is only used for the very first placement; None means the
    engine picks a random interior cell straight away.
    """

    grid_size: int = GRID_SIZE
    tick_interval_ms: int = GAME_SPEED_MS
    initial_snake: Tuple[Position, ...] = INITIAL_SNAKE
    initial_direction: Position = INITIAL_DIRECTION
    initial_food: Optional[Position] = None
    max_food_attempts: int = DEFAULT_MAX_FOOD_ATTEMPTS
    seed: Optional[int] = None

    def __post_init__(self):
        # Normalise lists coming from JSON / callers into tuples
        object.__setattr__(self, "initial_snake", tuple(tuple(p) for p in self.initial_snake))
        object.__setattr__(self, "initial_direction", tuple(self.initial_direction))
        if self.initial_food is not None:
            object.__setattr__(self, "initial_food", tuple(self.initial_food))
        self.validate()

    def validate(self) -> None:
        """Raise ValueError if the configuration cannot start a game."""
        if self.grid_size < 3:
            raise ValueError(f"grid_size must be at least 3, got {self.grid_size}")
        if self.tick_interval_ms <= 0:
            raise ValueError(f"tick_interval_ms must be positive, got {self.tick_interval_ms}")
        if self.max_food_attempts < 1:
            raise ValueError(f"max_food_attempts must be positive, got {self.max_food_attempts}")
        if not self.initial_snake:
            raise ValueError("initial_snake needs at least one segment")
        if len(set(self.initial_snake)) != len(self.initial_snake):
            raise ValueError(f"initial_snake has duplicate segments: {self.initial_snake}")
        for x, y in self.initial_snake:
            if not self.in_bounds((x, y)):
                raise ValueError(f"initial_snake segment out of bounds at {(x, y)}")
        if self.initial_direction not in VALID_DIRECTIONS:
            raise ValueError(f"initial_direction must be a unit vector, got {self.initial_direction}")
        if self.initial_food is not None and not self.in_bounds(self.initial_food):
            raise ValueError(f"initial_food out of bounds at {self.initial_food}")

    def in_bounds(self, cell: Position) -> bool:
        x, y = cell
        return 0 <= x < self.grid_size and 0 <= y < self.grid_size
