# pragma: no cover
import logging
import os
import sys
from pathlib import Path
from typing import Generator

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH.exists():
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture
def tmp_results_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Isolated working directory for tests that touch the filesystem.

    Pins the process CWD to ``tmp_path`` so relative ``results`` paths from
    the default config never land in the repository.
    """

    prev = os.getcwd()
    monkeypatch.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(prev)


@pytest.fixture
def capinfo(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    caplog.set_level(logging.INFO)
    return caplog


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(12345)
