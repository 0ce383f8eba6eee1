# src/montyhall/utils/writer.py
"""Atomic file replacement. Exposes :func:`atomic_path`."""
from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager, suppress
from typing import Iterator


@contextmanager
def atomic_path(final_path: str) -> Iterator[str]:
    """Write to a temp file in the same directory, then atomic replace."""
    dir_ = os.path.dirname(os.path.abspath(final_path)) or "."
    fd, tmp = tempfile.mkstemp(prefix="._tmp_", dir=dir_)
    os.close(fd)
    try:
        yield tmp
        os.replace(tmp, final_path)  # atomic on same filesystem
    finally:
        with suppress(FileNotFoundError):
            os.remove(tmp)


__all__ = ["atomic_path"]
