# src/montyhall/cli/main.py
"""
Command line interface for the :mod:`montyhall` package.

Examples
--------
Run 10 000 trials on four processes and keep every row::

    montyhall --set sim.n_games=10000 run --jobs 4 --write-rows

Watch one deterministic game::

    montyhall watch --seed 7
"""
from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path
from typing import Sequence

import yaml  # type: ignore[import-untyped]

from montyhall.config import AppConfig, apply_dot_overrides, load_app_config
from montyhall.simulation import runner
from montyhall.simulation.simulation import validate_batch_args
from montyhall.simulation.watch_game import watch_game
from montyhall.utils.artifacts import write_text_atomic
from montyhall.utils.logging import setup_info_logging

LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="montyhall",
        description="Monte Carlo comparison of the stay and switch strategies.",
    )
    parser.add_argument("--config", type=Path, help="Path to YAML configuration")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override configuration values, e.g. sim.n_games=500",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Root logging level",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    # run
    run_parser = sub.add_parser("run", help="Play a batch of games and report win rates")
    run_parser.add_argument(
        "--n-games",
        dest="n_games",
        type=int,
        help="Number of games to play (default: sim.n_games)",
    )
    run_parser.add_argument("--seed", type=int, help="Seed (default: sim.seed)")
    run_parser.add_argument("--jobs", type=int, help="Parallel jobs (default: sim.n_jobs)")
    run_parser.add_argument(
        "--write-rows",
        action="store_true",
        help="Also write every per-trial row to parquet",
    )

    # watch
    watch_parser = sub.add_parser("watch", help="Play one game with step-by-step logging")
    watch_parser.add_argument("--seed", type=int, default=None, help="Seed for deterministic play")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _parse_level(level: str | int) -> int:
    """Normalize a logging level string or integer to ``logging`` constants."""
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return int(level)


def _stringify_paths(obj: object) -> object:
    """Recursively convert :class:`pathlib.Path` instances to strings."""
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, dict):
        return {k: _stringify_paths(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_stringify_paths(v) for v in obj]
    return obj


def _write_active_config(cfg: AppConfig, dest_dir: Path) -> None:
    """Persist the resolved configuration alongside batch results."""
    resolved_yaml = yaml.safe_dump(_stringify_paths(dataclasses.asdict(cfg)), sort_keys=True)
    write_text_atomic(resolved_yaml, dest_dir / "active_config.yaml")


def _apply_run_args(cfg: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Let explicit ``run`` flags win over the config file and ``--set``."""
    if args.n_games is not None:
        cfg.sim.n_games = args.n_games
    if args.seed is not None:
        cfg.sim.seed = args.seed
    if args.jobs is not None:
        cfg.sim.n_jobs = args.jobs
    if args.write_rows:
        cfg.sim.write_rows = True
    return cfg


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for the ``montyhall`` CLI dispatcher."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_info_logging(args.log_file)
    root_logger = logging.getLogger()
    root_logger.setLevel(_parse_level(args.log_level))

    LOGGER.info(
        "CLI arguments parsed",
        extra={
            "stage": "cli",
            "command": args.command,
            "config_path": str(args.config) if args.config is not None else None,
            "overrides": list(args.overrides or []),
            "log_level": logging.getLevelName(root_logger.level),
        },
    )

    if args.command == "run":
        cfg = load_app_config(args.config) if args.config is not None else AppConfig()
        cfg = apply_dot_overrides(cfg, list(args.overrides or []))
        cfg = _apply_run_args(cfg, args)
        validate_batch_args(cfg.sim.n_games, cfg.sim.n_jobs)
        _write_active_config(cfg, cfg.results_dir)
        LOGGER.info(
            "Dispatching run command",
            extra={
                "stage": "cli",
                "command": "run",
                "n_games": cfg.sim.n_games,
                "seed": cfg.sim.seed,
                "n_jobs": cfg.sim.n_jobs,
                "results_dir": str(cfg.results_dir),
            },
        )
        runner.run_batch(cfg)
        LOGGER.info("Run command completed", extra={"stage": "cli", "command": "run"})
    elif args.command == "watch":
        LOGGER.info(
            "Dispatching watch_game",
            extra={"stage": "cli", "command": "watch", "seed": args.seed},
        )
        watch_game(seed=args.seed)
    else:  # pragma: no cover - argparse enforces valid choices
        parser.error(f"Unknown command {args.command}")


if __name__ == "__main__":  # pragma: no cover
    main()
