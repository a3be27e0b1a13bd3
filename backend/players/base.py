"""
Base player interface for the game engine.
"""

from typing import Tuple

from domain.game_state import GameState


class Player:
    """
    Base class/interface for player logic.

    A player plays the part of the keyboard: given the current snapshot it
    returns the direction it would press next.
    """

    name = "player"

    def get_direction(self, game_state: GameState) -> Tuple[int, int]:
        """
        Return a direction given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            One of the unit vectors in domain.constants.VALID_DIRECTIONS
        """
        raise NotImplementedError
