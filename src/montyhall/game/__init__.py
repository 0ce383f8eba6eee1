# src/montyhall/game/__init__.py
"""Door-level game logic: layout, pick, reveal, resolve, score."""

from __future__ import annotations

from .engine import (
    CAR,
    DOORS,
    GOAT,
    LOSE,
    WIN,
    InvalidArgumentError,
    change_door,
    create_game,
    determine_winner,
    open_goat_door,
    select_door,
)

__all__ = [
    "CAR",
    "DOORS",
    "GOAT",
    "LOSE",
    "WIN",
    "InvalidArgumentError",
    "change_door",
    "create_game",
    "determine_winner",
    "open_goat_door",
    "select_door",
]
