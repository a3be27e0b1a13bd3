"""
Random player implementation - picks random safe moves.
"""

import random
from typing import List, Optional, Tuple

from domain.constants import VALID_DIRECTIONS
from domain.game_state import GameState
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a direction that avoids walls and self-collisions.
    """

    name = "random"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_direction(self, game_state: GameState) -> Tuple[int, int]:
        head_x, head_y = game_state.head
        current = game_state.direction

        # Reversing is never accepted by the engine, so only consider
        # going straight or turning.
        candidates = [
            d for d in VALID_DIRECTIONS
            if d != (-current[0], -current[1])
        ]

        # Filter out moves that:
        # 1. Hit walls
        # 2. Hit own body (tail included, the engine counts it as a hit)
        valid_moves: List[Tuple[int, int]] = []
        for dx, dy in sorted(candidates):
            new_x, new_y = head_x + dx, head_y + dy
            if not (0 <= new_x < game_state.grid_size and 0 <= new_y < game_state.grid_size):
                continue
            if (new_x, new_y) in game_state.snake:
                continue
            valid_moves.append((dx, dy))

        # Head towards the food when it is one of the safe moves
        if game_state.food is not None:
            fx, fy = game_state.food
            for dx, dy in valid_moves:
                if (head_x + dx, head_y + dy) == (fx, fy):
                    return (dx, dy)

        # If no valid moves, keep going (we'll die anyway)
        if not valid_moves:
            return current

        return self.rng.choice(valid_moves)
