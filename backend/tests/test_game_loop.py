"""
Tests for services/game_loop.py - timer and input ownership.
"""

import pytest
import sys
import os
from unittest.mock import Mock

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import DOWN, LEFT, RIGHT, UP, GameStatus
from domain.engine import GameEngine
from domain.game_config import GameConfig
from services.game_loop import GameLoop, InputQueue, Ticker, apply_command


class FakeClock:
    """Monotonic clock that only moves when something sleeps on it."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(round(seconds, 6))
        self.now += seconds


def make_engine(snake=((5, 5),), direction=RIGHT):
    return GameEngine(GameConfig(initial_snake=snake, initial_direction=direction, initial_food=(20, 20)))


def make_loop(engine=None, inputs=None):
    clock = FakeClock()
    ticker = Ticker(120, clock=clock, sleep=clock.sleep)
    return GameLoop(engine or make_engine(), inputs=inputs, ticker=ticker), clock


class TestInputQueue:
    """Tests for InputQueue."""

    def test_push_requires_subscription(self):
        """Commands are dropped until the queue is subscribed."""
        inputs = InputQueue()
        assert inputs.push(("pause",)) is False

        inputs.subscribe()
        assert inputs.push(("pause",)) is True
        assert inputs.drain() == [("pause",)]

    def test_press_maps_keys(self):
        """Arrow keys and space map to commands; other keys are ignored."""
        inputs = InputQueue()
        inputs.subscribe()

        assert inputs.press("ArrowUp") is True
        assert inputs.press(" ") is True
        assert inputs.press("q") is False
        assert inputs.drain() == [("direction", UP), ("pause",)]

    def test_unsubscribe_discards_pending(self):
        """Releasing the subscription throws away queued commands."""
        inputs = InputQueue()
        inputs.subscribe()
        inputs.press("ArrowDown")
        inputs.unsubscribe()

        assert inputs.drain() == []
        assert inputs.press("ArrowDown") is False


class TestTicker:
    """Tests for the fixed-cadence Ticker."""

    def test_wait_sleeps_until_deadline(self):
        """wait() sleeps for the remainder of the interval."""
        clock = FakeClock()
        ticker = Ticker(120, clock=clock, sleep=clock.sleep)
        ticker.arm()

        ticker.wait()
        clock.now += 0.02  # work done between ticks
        ticker.wait()

        assert clock.sleeps == [0.12, 0.1]

    def test_wait_without_arm_raises(self):
        """An unarmed ticker cannot be waited on."""
        ticker = Ticker(120, sleep=lambda _: None)
        with pytest.raises(RuntimeError):
            ticker.wait()

    def test_cancel_disarms(self):
        """cancel() releases the timer."""
        ticker = Ticker(120, sleep=lambda _: None)
        ticker.arm()
        ticker.cancel()
        assert ticker.armed is False


class TestApplyCommand:
    """Tests for apply_command()."""

    def test_dispatch(self):
        """Each command kind calls the matching engine operation."""
        engine = Mock()
        apply_command(engine, ("direction", UP))
        apply_command(engine, ("pause",))
        apply_command(engine, ("reset",))
        apply_command(engine, ("jump",))

        engine.set_direction.assert_called_once_with(UP)
        engine.toggle_pause.assert_called_once_with()
        engine.reset.assert_called_once_with()


class TestGameLoop:
    """Tests for GameLoop resource handling and ordering."""

    def test_enter_acquires_and_exit_releases(self):
        """Timer and input subscription are held only inside the with block."""
        loop, _ = make_loop()
        with loop:
            assert loop.active is True
            assert loop.ticker.armed is True
            assert loop.inputs.subscribed is True

        assert loop.active is False
        assert loop.ticker.armed is False
        assert loop.inputs.subscribed is False

    def test_release_on_error(self):
        """Both resources are released when the block raises."""
        loop, _ = make_loop()
        with pytest.raises(KeyError):
            with loop:
                raise KeyError("boom")

        assert loop.ticker.armed is False
        assert loop.inputs.subscribed is False

    def test_no_tick_after_teardown(self):
        """step() refuses to run once the loop is closed."""
        loop, _ = make_loop()
        with loop:
            loop.step()

        with pytest.raises(RuntimeError):
            loop.step()
        assert loop.engine.tick_count == 1

    def test_inputs_apply_before_tick(self):
        """Commands queued during an interval are consumed by the next tick."""
        loop, _ = make_loop()
        with loop:
            loop.inputs.press("ArrowDown")
            state = loop.step()

        assert state.snake == ((5, 6),)
        assert state.direction == DOWN

    def test_reversal_in_queue_is_ignored(self):
        """A queued reversal is rejected by the engine and the snake keeps going."""
        loop, _ = make_loop()
        with loop:
            loop.inputs.press("ArrowLeft")
            state = loop.step()

        assert state.snake == ((6, 5),)
        assert state.direction == RIGHT

    def test_pause_from_input(self):
        """A space press pauses before the tick, so the snake does not move."""
        loop, _ = make_loop()
        with loop:
            loop.inputs.press(" ")
            state = loop.step()

        assert state.status is GameStatus.PAUSED
        assert state.snake == ((5, 5),)

    def test_run_stops_at_max_ticks(self):
        """run() honours max_ticks and waits one interval per step."""
        loop, clock = make_loop()
        with loop:
            state = loop.run(max_ticks=3)

        assert state.snake == ((8, 5),)
        assert len(clock.sleeps) == 3

    def test_run_stops_on_game_over(self):
        """run() returns once the snake hits a wall."""
        engine = make_engine(snake=((22, 5),))
        loop, _ = make_loop(engine)
        with loop:
            state = loop.run(max_ticks=100)

        assert state.status is GameStatus.OVER
        assert state.snake == ((24, 5),)

    def test_run_with_controller(self):
        """A controller's choice is queued before every step."""
        controller = Mock()
        controller.get_direction.return_value = UP
        loop, _ = make_loop()
        with loop:
            state = loop.run(max_ticks=2, controller=controller)

        assert state.snake == ((5, 3),)
        assert controller.get_direction.call_count == 2

    def test_default_ticker_uses_engine_interval(self):
        """Without an explicit ticker the engine's configured interval is used."""
        engine = GameEngine(GameConfig(tick_interval_ms=80))
        loop = GameLoop(engine)
        assert loop.ticker.interval == pytest.approx(0.08)
