# src/montyhall/utils/random.py
"""Random number generator helpers.

Every random draw in the package goes through an explicit
:class:`numpy.random.Generator`; nothing here touches the global NumPy or
:mod:`random` state.
"""

from __future__ import annotations

import numpy as np

# Seeds handed to per-trial generators are unsigned 32-bit integers.
MAX_UINT32 = 2**32 - 1


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Return a :class:`numpy.random.Generator` seeded with *seed*."""

    return np.random.default_rng(seed)


def spawn_seeds(n: int, *, seed: int | None = None) -> np.ndarray:
    """Return ``n`` 32-bit seeds derived from ``seed``.

    The same ``seed`` always yields the same sequence, so a batch can be
    replayed trial by trial or split across worker processes.
    """

    rng = make_rng(seed)
    return rng.integers(0, MAX_UINT32, size=n, dtype=np.uint32)


__all__ = ["MAX_UINT32", "make_rng", "spawn_seeds"]
