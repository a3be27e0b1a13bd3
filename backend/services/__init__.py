"""
Services that sit around the game engine: the timer/input loop and the
board renderer.
"""
