# src/montyhall/utils/parallel.py
"""Parallel execution helpers used by simulations.

Small, testable utilities for mapping work with a ProcessPoolExecutor.
Keep simulation-specific logic outside utils.
"""

from __future__ import annotations

import contextlib
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Callable, Iterable, Iterator, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def process_map(
    fn: Callable[[T], R],
    items: Iterable[T],
    *,
    n_jobs: int | None = None,
    window: int = 0,
) -> Iterator[R]:
    """Map ``fn`` across ``items`` with optional multiprocessing support.

    With ``n_jobs`` of ``None``, 0 or 1 the work runs in-process and results
    arrive in input order. Otherwise results are yielded as they complete,
    so callers that care about order must carry a key in each result.
    ``window`` bounds the number of in-flight futures (default ``4 * n_jobs``).
    """
    if n_jobs in (None, 0, 1):
        for it in items:
            yield fn(it)
        return
    if window <= 0:
        window = n_jobs * 4

    with ProcessPoolExecutor(max_workers=n_jobs) as pool:
        it = iter(items)
        futs = []
        # prefill the window
        for _ in range(window):
            try:
                futs.append(pool.submit(fn, next(it)))
            except StopIteration:
                break
        while futs:
            done = next(as_completed(futs))
            futs.remove(done)
            yield done.result()
            with contextlib.suppress(StopIteration):
                futs.append(pool.submit(fn, next(it)))


__all__ = ["process_map"]
