"""
GameEngine - the authoritative game state and the rules that advance it.

The engine has no timers, threads or I/O. A timer
collaborator calls tick() at a fixed cadence, an input source calls
set_direction()/toggle_pause()/reset(), and a renderer reads the `state`
snapshot (or subscribes to it) after every operation.
"""

import logging
import random
from typing import Callable, Iterable, List, Optional, Tuple

from .game_config import GameConfig
from .constants import SELF, VALID_DIRECTIONS, WALL, GameStatus
from .game_state import GameState
from .snake import Snake

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
FoodSampler = Callable[[int], Position]
Listener = Callable[[GameState], None]


def _axis(vector: Position) -> int:
    """Index of the non-zero component of a unit vector."""
    return 0 if vector[0] != 0 else 1


class GameEngine:
    """
    Single-player snake game state machine.

    States are RUNNING, PAUSED and OVER. RUNNING <-> PAUSED via
    toggle_pause(), RUNNING -> OVER when tick() detects a collision, and only
    reset() leaves OVER.

    Randomness is only used for food placement. Pass a seeded `rng`
    (anything with randrange) or a `food_sampler(grid_size) -> (x, y)` to make
    placements deterministic.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        food_sampler: Optional[FoodSampler] = None,
    ):
        self.config = config or GameConfig()
        self.grid_size = self.config.grid_size
        if rng is None:
            rng = random.Random(self.config.seed)
        self._rng = rng
        self._food_sampler = food_sampler or self._sample_interior_cell
        self._listeners: List[Listener] = []

        self._init_fields()
        initial_food = self.config.initial_food
        if initial_food is not None and self._is_interior(initial_food) and initial_food not in self.snake:
            self.food: Optional[Position] = initial_food
        else:
            self.food = self.generate_food(self.snake)

    def _init_fields(self) -> None:
        self.snake = Snake(self.config.initial_snake)
        self.direction: Position = self.config.initial_direction
        self.score = 0
        self.status = GameStatus.RUNNING
        self.death_reason: Optional[str] = None
        self.tick_count = 0

    # ------------------------------------------------------------------
    # Snapshot / subscriptions
    # ------------------------------------------------------------------

    @property
    def state(self) -> GameState:
        """Return an immutable snapshot of the current game."""
        return GameState(
            snake=tuple(self.snake.positions),
            food=self.food,
            score=self.score,
            status=self.status,
            direction=self.direction,
            grid_size=self.grid_size,
            death_reason=self.death_reason,
            tick_count=self.tick_count,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call `listener(state)` after every operation that changed the game.
        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.state
        for listener in list(self._listeners):
            listener(snapshot)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """
        Advance the snake by one cell.

        Does nothing unless the game is RUNNING. Walls are checked before the
        body; the body check includes the tail cell even though it is about to
        move away.
        """
        if self.status is not GameStatus.RUNNING:
            return

        hx, hy = self.snake.head
        dx, dy = self.direction
        new_head = (hx + dx, hy + dy)

        if not (0 <= new_head[0] < self.grid_size and 0 <= new_head[1] < self.grid_size):
            self._end_game(WALL)
        elif new_head in self.snake:
            self._end_game(SELF)
        else:
            eats_food = new_head == self.food
            self.snake.advance(new_head, grow=eats_food)
            self.tick_count += 1
            if eats_food:
                self.score += 1
                self.food = self.generate_food(self.snake)

        self._notify()

    def set_direction(self, requested: Position) -> bool:
        """
        Request the direction used by the next tick.

        Ignored while paused or over, and when the request lies on the axis
        the snake is already moving along (a reversal or a repeat).
        Returns True if the direction was changed.
        """
        requested = tuple(requested)
        if requested not in VALID_DIRECTIONS:
            logger.debug("Ignoring unknown direction %s", requested)
            return False
        if self.status is not GameStatus.RUNNING:
            return False
        if _axis(requested) == _axis(self.direction):
            return False

        self.direction = requested
        self._notify()
        return True

    def toggle_pause(self) -> None:
        """Flip between RUNNING and PAUSED. No effect once the game is over."""
        if self.status is GameStatus.OVER:
            return
        if self.status is GameStatus.RUNNING:
            self.status = GameStatus.PAUSED
        else:
            self.status = GameStatus.RUNNING
        self._notify()

    def reset(self) -> None:
        """Start a new game on this engine with fresh random food."""
        self._init_fields()
        self.food = self.generate_food(self.snake)
        logger.info("Game reset, food placed at %s", self.food)
        self._notify()

    # ------------------------------------------------------------------
    # Food placement
    # ------------------------------------------------------------------

    def generate_food(self, avoid: Iterable[Position]) -> Optional[Position]:
        """
        Return a random interior cell not occupied by any of `avoid`.

        Samples up to config.max_food_attempts cells, then scans the interior
        row by row. Returns None when every interior cell is taken.
        """
        occupied = set(avoid)
        for _ in range(self.config.max_food_attempts):
            cell = tuple(self._food_sampler(self.grid_size))
            if self._is_interior(cell) and cell not in occupied:
                return cell

        for y in range(1, self.grid_size - 1):
            for x in range(1, self.grid_size - 1):
                if (x, y) not in occupied:
                    return (x, y)

        logger.warning("No free interior cell left for food (snake length %s)", len(occupied))
        return None

    def _sample_interior_cell(self, grid_size: int) -> Position:
        return (
            self._rng.randrange(1, grid_size - 1),
            self._rng.randrange(1, grid_size - 1),
        )

    def _is_interior(self, cell: Position) -> bool:
        x, y = cell
        return 1 <= x < self.grid_size - 1 and 1 <= y < self.grid_size - 1

    def _end_game(self, reason: str) -> None:
        self.status = GameStatus.OVER
        self.death_reason = reason
        logger.info("Game Over: %s collision at score %s", reason, self.score)

    def __repr__(self):
        return f"<GameEngine status={self.status.value}, score={self.score}, snake={self.snake!r}>"
