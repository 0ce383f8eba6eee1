from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from math import ceil
from typing import Any, Dict, Iterable, List, Sequence, TextIO, Tuple

import numpy as np
import pandas as pd

from montyhall.game.engine import (
    LOSE,
    WIN,
    InvalidArgumentError,
    change_door,
    create_game,
    determine_winner,
    open_goat_door,
    select_door,
)
from montyhall.simulation.strategies import STRATEGY_ORDER, Strategy
from montyhall.utils.parallel import process_map
from montyhall.utils.random import make_rng, spawn_seeds
from montyhall.utils.stats import wilson_ci

"""simulation.py
================
Trial and batch simulation for the stay-vs-switch experiment.

This is the entry point most users will reach for:

* ``play_game`` - play one trial and return its two-row
  strategy/outcome table.
* ``simulate_many_games`` - run *N* trials, optionally in parallel, and
  return the tidy per-trial rows.
* ``play_n_games`` - the same, printing the row-normalised outcome table.
* ``outcome_table`` / ``strategy_summary`` / ``aggregate_metrics`` -
  summarise a DataFrame of trial results.
"""

__all__: list[str] = [
    "TrialResult",
    "RESULT_COLUMNS",
    "play_trial",
    "play_game",
    "simulate_many_games",
    "simulate_many_games_from_seeds",
    "play_n_games",
    "validate_batch_args",
    "outcome_table",
    "strategy_summary",
    "aggregate_metrics",
]

LOGGER = logging.getLogger(__name__)

RESULT_COLUMNS: list[str] = ["trial", "strategy", "outcome"]
OUTCOME_ORDER: tuple[str, ...] = (LOSE, WIN)  # alphabetical


@dataclass(frozen=True, slots=True)
class TrialResult:
    """Outcome of one strategy in one trial."""

    strategy: str
    outcome: str


# ---------------------------------------------------------------------------
# Argument checks
# ---------------------------------------------------------------------------


def _positive_int(value: Any, name: str) -> int:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")
    if value <= 0:
        raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")
    return int(value)


def _resolve_jobs(n_jobs: int | None) -> int:
    return 1 if n_jobs is None else _positive_int(n_jobs, "n_jobs")


def validate_batch_args(n_games: Any, n_jobs: Any = 1) -> Tuple[int, int]:
    """Return ``(n_games, n_jobs)`` checked as positive integers.

    ``n_jobs=None`` means a single in-process worker.
    """
    return _positive_int(n_games, "n_games"), _resolve_jobs(n_jobs)


def _require_columns(results: pd.DataFrame) -> None:
    missing = [c for c in ("strategy", "outcome") if c not in results.columns]
    if missing:
        raise InvalidArgumentError(f"results is missing columns: {', '.join(missing)}")


# ---------------------------------------------------------------------------
# Single trial
# ---------------------------------------------------------------------------


def play_trial(rng: np.random.Generator | None = None) -> Tuple[TrialResult, TrialResult]:
    """Play one game and score both strategies against the same reveal.

    Inputs
    ------
    rng
        Random source for the layout, the first pick and (when the first
        pick hides the car) the host's choice of goat.

    Returns
    -------
    tuple[TrialResult, TrialResult]
        The ``stay`` result followed by the ``switch`` result.
    """
    rng = make_rng() if rng is None else rng
    new_game = create_game(rng)
    first_pick = select_door(rng)
    opened_door = open_goat_door(new_game, first_pick, rng)

    stay, switch = (
        TrialResult(
            strategy=strategy.value,
            outcome=determine_winner(change_door(strategy, opened_door, first_pick), new_game),
        )
        for strategy in Strategy
    )
    return stay, switch


def play_game(rng: np.random.Generator | None = None) -> pd.DataFrame:
    """Return one trial as a two-row ``strategy``/``outcome`` DataFrame."""
    return pd.DataFrame([asdict(r) for r in play_trial(rng)], columns=["strategy", "outcome"])


def _play_game(trial: int, seed: int) -> List[Dict[str, Any]]:
    # every trial owns an independent, reproducible generator
    return [
        {"trial": trial, **asdict(result)}
        for result in play_trial(make_rng(seed))
    ]


def _play_chunk(chunk: Tuple[int, Sequence[int]]) -> List[Dict[str, Any]]:
    """Play consecutive trials starting at trial number ``chunk[0]``."""
    start, seeds = chunk
    rows: List[Dict[str, Any]] = []
    for offset, seed in enumerate(seeds):
        rows.extend(_play_game(start + offset, seed))
    return rows


def _chunks(seeds: Sequence[int], n_jobs: int) -> Iterable[Tuple[int, Sequence[int]]]:
    size = len(seeds) if n_jobs == 1 else max(1, ceil(len(seeds) / (n_jobs * 4)))
    for start in range(0, len(seeds), size):
        yield start, seeds[start : start + size]


# ---------------------------------------------------------------------------
# Batch simulation
# ---------------------------------------------------------------------------


def simulate_many_games_from_seeds(
    *,
    seeds: Sequence[int],
    n_jobs: int | None = 1,
) -> pd.DataFrame:
    """Play one trial per seed and return the rows ordered by trial.

    Worker processes finish in any order; rows are sorted afterwards so the
    frame depends only on ``seeds``, never on ``n_jobs``.
    """
    seeds = [int(s) for s in seeds]
    if not seeds:
        raise InvalidArgumentError("seeds must contain at least one seed")
    n_jobs = _resolve_jobs(n_jobs)

    rows: List[Dict[str, Any]] = []
    for chunk_rows in process_map(_play_chunk, _chunks(seeds, n_jobs), n_jobs=n_jobs):
        rows.extend(chunk_rows)

    df = pd.DataFrame(rows, columns=RESULT_COLUMNS)
    return df.sort_values(["trial", "strategy"], kind="stable", ignore_index=True)


def simulate_many_games(
    *,
    n_games: int,
    seed: int | None = None,
    n_jobs: int | None = 1,
) -> pd.DataFrame:
    """Run *n_games* trials in parallel (if *n_jobs>1*) and return tidy rows.

    Returns
    -------
    pandas.DataFrame
        ``2 * n_games`` rows with columns ``trial``, ``strategy`` and
        ``outcome``.

    Raises
    ------
    InvalidArgumentError
        If ``n_games`` or ``n_jobs`` is not a positive integer.
    """
    n_games, n_jobs = validate_batch_args(n_games, n_jobs)
    seeds = spawn_seeds(n_games, seed=seed).tolist()

    LOGGER.info(
        "Batch simulation start",
        extra={"stage": "simulation", "n_games": n_games, "seed": seed, "n_jobs": n_jobs},
    )
    df = simulate_many_games_from_seeds(seeds=seeds, n_jobs=n_jobs)
    LOGGER.info(
        "Batch simulation finished",
        extra={"stage": "simulation", "n_games": n_games, "rows": len(df)},
    )
    return df


def play_n_games(
    n: int = 100,
    *,
    seed: int | None = None,
    n_jobs: int | None = 1,
    decimals: int | None = 2,
    file: TextIO | None = None,
) -> pd.DataFrame:
    """Play *n* trials, print the outcome table and return every row.

    The printed table holds, per strategy, the share of WIN and LOSE
    outcomes rounded to ``decimals``.  ``file`` defaults to standard output.
    """
    results = simulate_many_games(n_games=n, seed=seed, n_jobs=n_jobs)
    print(outcome_table(results, decimals=decimals), file=file)
    return results


# ---------------------------------------------------------------------------
# Aggregation helpers
# ---------------------------------------------------------------------------


def outcome_table(results: pd.DataFrame, decimals: int | None = 2) -> pd.DataFrame:
    """Return the strategy x outcome frequency table normalised per row.

    Both strategies and both outcomes are always present; cells that never
    occurred are ``0.0``.  Pass ``decimals=None`` to skip rounding.
    """
    _require_columns(results)
    table = pd.crosstab(results["strategy"], results["outcome"], normalize="index")
    table = table.reindex(
        index=list(STRATEGY_ORDER), columns=list(OUTCOME_ORDER), fill_value=0.0
    ).astype(float)
    table.index.name = "strategy"
    table.columns.name = "outcome"
    return table if decimals is None else table.round(decimals)


def strategy_summary(results: pd.DataFrame, alpha: float = 0.05) -> pd.DataFrame:
    """Return games, wins, win rate and a Wilson interval per strategy."""
    _require_columns(results)
    rows = []
    for strategy in STRATEGY_ORDER:
        outcomes = results.loc[results["strategy"] == strategy, "outcome"]
        games = int(len(outcomes))
        wins = int((outcomes == WIN).sum())
        if games:
            lower, upper = wilson_ci(wins, games, alpha=alpha)
            rate = wins / games
        else:
            lower = upper = rate = float("nan")
        rows.append(
            {
                "strategy": strategy,
                "games": games,
                "wins": wins,
                "win_rate": rate,
                "ci_lower": lower,
                "ci_upper": upper,
            }
        )
    return pd.DataFrame(rows)


def aggregate_metrics(results: pd.DataFrame) -> Dict[str, Any]:
    """Return a *dict* with high-level summary statistics."""
    _require_columns(results)
    games = (
        int(results["trial"].nunique())
        if "trial" in results.columns
        else len(results) // len(STRATEGY_ORDER)
    )
    wins = results["outcome"].eq(WIN).groupby(results["strategy"]).mean()
    return {
        "games": games,
        "win_rate": {s: float(wins.get(s, float("nan"))) for s in STRATEGY_ORDER},
    }
