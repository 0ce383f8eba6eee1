# src/montyhall/utils/__init__.py
"""Utility subpackage for montyhall.

Helpers shared by the simulation layer and the CLI live here so that the
game logic in :mod:`montyhall.game` stays free of side effects like file
I/O, logging configuration or multiprocessing.
"""

from __future__ import annotations

from .logging import configure_logging, setup_info_logging
from .random import MAX_UINT32, make_rng, spawn_seeds
from .stats import wilson_ci

__all__ = [
    "configure_logging",
    "setup_info_logging",
    "MAX_UINT32",
    "make_rng",
    "spawn_seeds",
    "wilson_ci",
]
