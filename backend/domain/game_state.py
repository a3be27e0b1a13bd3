"""
GameState entity - a read-only snapshot of the game at a point in time.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .constants import GameStatus

Position = Tuple[int, int]


@dataclass(frozen=True)
class GameState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        snake: positions from head (index 0) to tail
        food: position of the food, or None when no free interior cell is left
        score: number of food items eaten since the last reset
        status: RUNNING, PAUSED or OVER
        direction: unit vector the next tick will move the head by
        grid_size: number of cells per side
        death_reason: 'wall' or 'self' once the game is over
        tick_count: ticks that advanced the snake since the last reset
    """

    snake: Tuple[Position, ...]
    food: Optional[Position]
    score: int
    status: GameStatus
    direction: Position
    grid_size: int
    death_reason: Optional[str] = None
    tick_count: int = 0

    @property
    def head(self) -> Position:
        return self.snake[0]

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.OVER

    @property
    def paused(self) -> bool:
        return self.status is GameStatus.PAUSED

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the snapshot to a JSON-serializable dict for the browser view.
        Positions become {"x": .., "y": ..} objects.
        """
        return {
            "snake": [{"x": x, "y": y} for x, y in self.snake],
            "food": {"x": self.food[0], "y": self.food[1]} if self.food else None,
            "score": self.score,
            "status": self.status.value,
            "direction": {"x": self.direction[0], "y": self.direction[1]},
            "grid_size": self.grid_size,
            "death_reason": self.death_reason,
            "tick_count": self.tick_count,
        }

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        H = snake head
        S = snake body
        Row 0 is printed first (top of the screen).
        """
        board = [['.' for _ in range(self.grid_size)] for _ in range(self.grid_size)]

        if self.food is not None:
            fx, fy = self.food
            board[fy][fx] = 'F'

        for pos_idx, (x, y) in enumerate(self.snake):
            board[y][x] = 'H' if pos_idx == 0 else 'S'

        result = [f"{y:2d} {' '.join(row)}" for y, row in enumerate(board)]
        return "\n".join(result)

    def __repr__(self):
        return (
            f"<GameState status={self.status.value}, score={self.score}, "
            f"head={self.head}, length={len(self.snake)}, food={self.food}>"
        )
