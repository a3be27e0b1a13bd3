"""
Player implementations for the snake arcade.

A player stands in for the keyboard when the game runs headless.
"""

from .base import Player
from .random_player import RandomPlayer

__all__ = [
    'Player',
    'RandomPlayer',
]
