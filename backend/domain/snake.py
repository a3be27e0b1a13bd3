"""
Snake entity for the game engine.
"""

from collections import deque
from typing import Iterable, Iterator, Tuple

Position = Tuple[int, int]


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
    """

    def __init__(self, positions: Iterable[Position]):
        self.positions = deque(tuple(p) for p in positions)
        if not self.positions:
            raise ValueError("Snake needs at least one segment.")

    @property
    def head(self) -> Position:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Position:
        """Return the tail position (last element)."""
        return self.positions[-1]

    def occupies(self, cell: Position) -> bool:
        return cell in self.positions

    def advance(self, new_head: Position, grow: bool = False) -> None:
        """
        Move the snake one cell: prepend the new head and drop the tail
        unless the snake is growing this step.
        """
        self.positions.appendleft(new_head)
        if not grow:
            self.positions.pop()

    def __contains__(self, cell) -> bool:
        return self.occupies(cell)

    def __iter__(self) -> Iterator[Position]:
        return iter(self.positions)

    def __len__(self) -> int:
        return len(self.positions)

    def __repr__(self):
        return f"<Snake head={self.head} length={len(self)}>"
