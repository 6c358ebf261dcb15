"""UI package - Tk presentation of the round engine.

Renders engine snapshots and forwards player intents; it never mutates
game state directly.
"""

from __future__ import annotations

from .game_window import GameWindow
from .intro_screen import IntroProgress, IntroScreen

__all__ = [
    "GameWindow",
    "IntroProgress",
    "IntroScreen",
]
