# src/montyhall/simulation/__init__.py
"""Trial and batch simulation of the stay-vs-switch experiment."""

from __future__ import annotations

from .simulation import (
    TrialResult,
    aggregate_metrics,
    outcome_table,
    play_game,
    play_n_games,
    play_trial,
    simulate_many_games,
    simulate_many_games_from_seeds,
    strategy_summary,
)
from .strategies import Strategy

__all__ = [
    "Strategy",
    "TrialResult",
    "aggregate_metrics",
    "outcome_table",
    "play_game",
    "play_n_games",
    "play_trial",
    "simulate_many_games",
    "simulate_many_games_from_seeds",
    "strategy_summary",
]
