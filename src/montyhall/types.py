"""Shared type aliases for the montyhall project.

``GameState`` is the three-door layout produced by
:func:`montyhall.game.engine.create_game`; ``DoorIndex`` is a 1-based door
number.
"""

from __future__ import annotations

from typing import Literal, Tuple, TypeAlias

Prize: TypeAlias = Literal["car", "goat"]
Outcome: TypeAlias = Literal["WIN", "LOSE"]
DoorIndex: TypeAlias = int  # 1, 2 or 3
GameState: TypeAlias = Tuple[str, str, str]  # prize behind doors 1-3
