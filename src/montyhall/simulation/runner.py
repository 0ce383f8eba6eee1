"""High level batch runner using configuration objects.

:func:`run_batch` is a thin wrapper around
:func:`montyhall.simulation.simulation.play_n_games` that takes its
parameters from an :class:`~montyhall.config.AppConfig` and persists the
results under ``cfg.results_dir``.
"""

from __future__ import annotations

import logging
from typing import TextIO

import pandas as pd

from montyhall.config import AppConfig
from montyhall.simulation.simulation import outcome_table, play_n_games, strategy_summary
from montyhall.utils.artifacts import write_csv_atomic, write_parquet_atomic

LOGGER = logging.getLogger(__name__)


def run_batch(cfg: AppConfig, *, file: TextIO | None = None) -> pd.DataFrame:
    """Run ``cfg.sim.n_games`` trials and write the outputs.

    Files written to ``cfg.results_dir``:

    * ``outcome_table.csv`` - row-normalised strategy x outcome table,
    * ``strategy_summary.csv`` - wins, win rate and Wilson interval,
    * ``trial_rows.parquet`` - every per-trial row (only with
      ``sim.write_rows``).

    Returns the per-trial rows.
    """
    sim = cfg.sim
    LOGGER.info(
        "Batch run start",
        extra={
            "stage": "runner",
            "n_games": sim.n_games,
            "seed": sim.seed,
            "n_jobs": sim.n_jobs,
            "results_dir": str(cfg.results_dir),
        },
    )
    results = play_n_games(
        sim.n_games, seed=sim.seed, n_jobs=sim.n_jobs, decimals=sim.decimals, file=file
    )

    table = outcome_table(results, decimals=sim.decimals)
    summary = strategy_summary(results, alpha=sim.alpha)

    cfg.results_dir.mkdir(parents=True, exist_ok=True)
    write_csv_atomic(table, cfg.table_path, index=True)
    write_csv_atomic(summary, cfg.summary_path)
    if sim.write_rows:
        write_parquet_atomic(results, cfg.rows_path)

    for row in summary.itertuples(index=False):
        LOGGER.info(
            "%s: %d/%d wins (%.3f, %.0f%% CI %.3f-%.3f)",
            row.strategy,
            row.wins,
            row.games,
            row.win_rate,
            100 * (1 - sim.alpha),
            row.ci_lower,
            row.ci_upper,
            extra={"stage": "runner", "strategy": row.strategy},
        )
    LOGGER.info(
        "Batch run finished",
        extra={
            "stage": "runner",
            "rows_written": len(results) if sim.write_rows else 0,
            "results_dir": str(cfg.results_dir),
        },
    )
    return results


__all__ = ["run_batch"]
