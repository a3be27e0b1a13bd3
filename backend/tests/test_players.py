"""
Tests for the player implementations.
"""

import random
import sys
import os

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import DOWN, LEFT, RIGHT, UP, VALID_DIRECTIONS, GameStatus
from domain.game_state import GameState
from players import Player, RandomPlayer


def make_state(snake, direction, food=None, grid_size=10):
    return GameState(
        snake=tuple(snake),
        food=food,
        score=0,
        status=GameStatus.RUNNING,
        direction=direction,
        grid_size=grid_size,
    )


class TestRandomPlayer:
    """Tests for the RandomPlayer class."""

    def test_base_player_is_abstract(self):
        """Player.get_direction must be implemented by subclasses."""
        try:
            Player().get_direction(make_state([(5, 5)], RIGHT))
        except NotImplementedError:
            pass
        else:
            raise AssertionError("Expected NotImplementedError")

    def test_random_player_returns_valid_direction(self):
        """RandomPlayer.get_direction() returns one of the unit vectors."""
        player = RandomPlayer(random.Random(0))
        direction = player.get_direction(make_state([(5, 5)], RIGHT))
        assert direction in VALID_DIRECTIONS

    def test_random_player_avoids_walls_when_possible(self):
        """In the top-left corner moving up, only RIGHT is safe."""
        player = RandomPlayer(random.Random(1))
        state = make_state([(0, 0)], UP)

        for _ in range(20):
            assert player.get_direction(state) == RIGHT

    def test_random_player_never_reverses(self):
        """The reverse of the current direction is never chosen."""
        player = RandomPlayer(random.Random(2))
        state = make_state([(5, 5)], RIGHT)

        for _ in range(50):
            assert player.get_direction(state) != LEFT

    def test_random_player_avoids_self_collision(self):
        """Cells occupied by the body, tail included, are avoided."""
        player = RandomPlayer(random.Random(3))
        # Heading right with the body wrapped above and below the head
        state = make_state([(5, 5), (4, 5), (4, 4), (5, 4), (6, 4), (6, 6), (5, 6)], RIGHT)

        for _ in range(20):
            assert player.get_direction(state) == RIGHT

    def test_random_player_takes_adjacent_food(self):
        """Food next to the head is always taken when safe."""
        player = RandomPlayer(random.Random(4))
        state = make_state([(5, 5), (4, 5)], RIGHT, food=(5, 6))

        for _ in range(20):
            assert player.get_direction(state) == DOWN

    def test_random_player_trapped_keeps_direction(self):
        """With no safe move it keeps the current direction."""
        player = RandomPlayer(random.Random(5))
        state = make_state([(0, 0), (0, 1), (1, 1), (1, 0)], UP)

        assert player.get_direction(state) == UP
