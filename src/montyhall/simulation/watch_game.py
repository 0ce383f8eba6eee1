"""
watch_game.py - play a *single* Monty Hall game with very chatty logging.

It
 • logs the hidden layout,
 • logs the first pick and the host's reveal,
 • logs each strategy's final door and outcome.

No game-logic is duplicated - we only *wrap* the real engine calls made by
:func:`montyhall.simulation.simulation.play_trial`.
"""

from __future__ import annotations

import contextlib
import functools
import logging
from typing import Any, Callable, Iterator, Tuple

import numpy as np

import montyhall.simulation.simulation as _sim_mod
from montyhall.simulation.simulation import TrialResult
from montyhall.simulation.strategies import Strategy
from montyhall.utils.random import make_rng

LOGGER = logging.getLogger(__name__)

# engine functions looked up by name inside play_trial
TRACED_CALLS: tuple[str, ...] = (
    "create_game",
    "select_door",
    "open_goat_door",
    "change_door",
    "determine_winner",
)


def _format_arg(value: Any) -> str:
    if isinstance(value, Strategy):
        return value.value
    return repr(value)


def _traced(name: str, fn: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        result = fn(*args, **kwargs)
        shown = ", ".join(
            _format_arg(a) for a in args if not isinstance(a, np.random.Generator)
        )
        LOGGER.info("%s(%s) -> %r", name, shown, result, extra={"stage": "watch"})
        return result

    return wrapper


@contextlib.contextmanager
def trace_engine() -> Iterator[None]:
    """Patch the engine calls of :mod:`montyhall.simulation.simulation` to log.

    The patched functions behave identically to the originals.  They are
    restored on exit, even if the wrapped block raises.
    """
    originals = {name: getattr(_sim_mod, name) for name in TRACED_CALLS}
    try:
        for name, fn in originals.items():
            setattr(_sim_mod, name, _traced(name, fn))
        yield
    finally:
        for name, fn in originals.items():
            setattr(_sim_mod, name, fn)


def watch_game(seed: int | None = None) -> Tuple[TrialResult, TrialResult]:
    """Play one trial, logging every engine call, and return its results.

    Inputs
    ------
    seed
        Seed for deterministic play; ``None`` draws fresh entropy.
    """
    LOGGER.info("Watching one game", extra={"stage": "watch", "seed": seed})
    with trace_engine():
        results = _sim_mod.play_trial(make_rng(seed))
    for result in results:
        LOGGER.info(
            "%-6s : %s", result.strategy, result.outcome, extra={"stage": "watch"}
        )
    return results


__all__ = ["TRACED_CALLS", "trace_engine", "watch_game"]
