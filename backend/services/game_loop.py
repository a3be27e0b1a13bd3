"""
Game loop service - owns the timer and the input subscription that drive a
GameEngine.

Both resources are acquired together when the loop is entered and released
together when it exits, so no tick can fire after the owner is torn down.
Everything that touches the engine runs on the caller's thread: other threads
(a keyboard reader, a web handler) only push commands into the InputQueue.
"""

import logging
import queue
import time
from typing import Callable, List, Optional, Tuple

from domain.constants import KEY_BINDINGS
from domain.engine import GameEngine
from domain.game_state import GameState

logger = logging.getLogger(__name__)

Command = Tuple


class InputQueue:
    """
    Thread-safe hand-off of player commands to the loop.

    Commands are tuples: ("direction", (dx, dy)), ("pause",) or ("reset",).
    Commands pushed while the queue is not subscribed are dropped.
    """

    def __init__(self):
        self._queue: "queue.Queue[Command]" = queue.Queue()
        self.subscribed = False

    def subscribe(self) -> None:
        self.subscribed = True

    def unsubscribe(self) -> None:
        self.subscribed = False
        self.drain()

    def push(self, command: Command) -> bool:
        if not self.subscribed:
            return False
        self._queue.put(command)
        return True

    def press(self, key: str) -> bool:
        """Translate a browser-style key name into a command and queue it."""
        command = KEY_BINDINGS.get(key)
        if command is None:
            return False
        return self.push(command)

    def drain(self) -> List[Command]:
        commands = []
        while True:
            try:
                commands.append(self._queue.get_nowait())
            except queue.Empty:
                return commands


class Ticker:
    """Fixed-cadence timer handle. wait() blocks until the next deadline."""

    def __init__(
        self,
        interval_ms: int,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.interval = interval_ms / 1000.0
        self._clock = clock
        self._sleep = sleep
        self._next_deadline: Optional[float] = None

    @property
    def armed(self) -> bool:
        return self._next_deadline is not None

    def arm(self) -> None:
        self._next_deadline = self._clock() + self.interval

    def cancel(self) -> None:
        self._next_deadline = None

    def wait(self) -> None:
        if self._next_deadline is None:
            raise RuntimeError("Ticker is not armed.")
        remaining = self._next_deadline - self._clock()
        if remaining > 0:
            self._sleep(remaining)
        # Schedule from the previous deadline so the cadence does not drift
        self._next_deadline = max(self._next_deadline + self.interval, self._clock())


def apply_command(engine: GameEngine, command: Command) -> None:
    """Apply a single queued command to the engine."""
    kind = command[0]
    if kind == "direction":
        engine.set_direction(command[1])
    elif kind == "pause":
        engine.toggle_pause()
    elif kind == "reset":
        engine.reset()
    else:
        logger.debug("Ignoring unknown command %r", command)


class GameLoop:
    """
    Drives a GameEngine at a fixed interval.

    Usage:
        with GameLoop(engine, interval_ms=120) as loop:
            loop.run(max_ticks=500)
    """

    def __init__(
        self,
        engine: GameEngine,
        interval_ms: Optional[int] = None,
        inputs: Optional[InputQueue] = None,
        ticker: Optional[Ticker] = None,
    ):
        self.engine = engine
        self.inputs = inputs or InputQueue()
        if ticker is None:
            ticker = Ticker(interval_ms or engine.config.tick_interval_ms)
        self.ticker = ticker
        self.active = False

    def __enter__(self) -> "GameLoop":
        self.inputs.subscribe()
        try:
            self.ticker.arm()
        except Exception:
            self.inputs.unsubscribe()
            raise
        self.active = True
        logger.info("Game loop started (interval %.0f ms)", self.ticker.interval * 1000)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the timer and the input subscription together."""
        if not self.active:
            return
        self.active = False
        try:
            self.ticker.cancel()
        finally:
            self.inputs.unsubscribe()
        logger.info("Game loop stopped after %s ticks", self.engine.tick_count)

    def step(self) -> GameState:
        """Apply every queued command, then advance the engine by one tick."""
        if not self.active:
            raise RuntimeError("Game loop is not running; enter it with a `with` block first.")
        for command in self.inputs.drain():
            apply_command(self.engine, command)
        self.engine.tick()
        return self.engine.state

    def run(
        self,
        max_ticks: Optional[int] = None,
        controller=None,
        stop_on_game_over: bool = True,
    ) -> GameState:
        """
        Run until the game is over (or max_ticks steps have been taken).

        `controller` is an optional players.Player whose choice is queued
        before every step, standing in for the keyboard.
        """
        steps = 0
        state = self.engine.state
        while self.active:
            if max_ticks is not None and steps >= max_ticks:
                break
            if stop_on_game_over and state.game_over:
                logger.info("Game over after %s steps, score %s", steps, state.score)
                break
            self.ticker.wait()
            if controller is not None:
                self.inputs.push(("direction", controller.get_direction(state)))
            state = self.step()
            steps += 1
        return state
