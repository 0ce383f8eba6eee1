# src/montyhall/__init__.py
"""montyhall - Monte Carlo estimate of the stay vs switch win rates.

The public surface is loaded lazily so that light utilities (config
loading, the type aliases) do not pay for importing pandas and SciPy.
"""

from __future__ import annotations

import tomllib
from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _v
from pathlib import Path

# Path to the project's pyproject.toml for local version fallback
PYPROJECT_TOML = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"

__all__ = [  # loads lazily, that's why reportUnsupportedDunderAll is triggered
    "InvalidArgumentError",  # pyright: ignore[reportUnsupportedDunderAll]
    "create_game",  # pyright: ignore[reportUnsupportedDunderAll]
    "select_door",  # pyright: ignore[reportUnsupportedDunderAll]
    "open_goat_door",  # pyright: ignore[reportUnsupportedDunderAll]
    "change_door",  # pyright: ignore[reportUnsupportedDunderAll]
    "determine_winner",  # pyright: ignore[reportUnsupportedDunderAll]
    "Strategy",  # pyright: ignore[reportUnsupportedDunderAll]
    "TrialResult",  # pyright: ignore[reportUnsupportedDunderAll]
    "play_game",  # pyright: ignore[reportUnsupportedDunderAll]
    "play_n_games",  # pyright: ignore[reportUnsupportedDunderAll]
    "simulate_many_games",  # pyright: ignore[reportUnsupportedDunderAll]
    "outcome_table",  # pyright: ignore[reportUnsupportedDunderAll]
    "strategy_summary",  # pyright: ignore[reportUnsupportedDunderAll]
]

_LAZY_IMPORTS = {
    "InvalidArgumentError": "montyhall.game.engine",
    "create_game": "montyhall.game.engine",
    "select_door": "montyhall.game.engine",
    "open_goat_door": "montyhall.game.engine",
    "change_door": "montyhall.game.engine",
    "determine_winner": "montyhall.game.engine",
    "Strategy": "montyhall.simulation.strategies",
    "TrialResult": "montyhall.simulation.simulation",
    "play_game": "montyhall.simulation.simulation",
    "play_n_games": "montyhall.simulation.simulation",
    "simulate_many_games": "montyhall.simulation.simulation",
    "outcome_table": "montyhall.simulation.simulation",
    "strategy_summary": "montyhall.simulation.simulation",
}


def __getattr__(name: str):  # pragma: no cover - simple dynamic loader
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    attr = getattr(import_module(module_name), name)
    globals()[name] = attr
    return attr


def _read_version_from_toml() -> str:
    """Return the package version declared in ``pyproject.toml``."""
    with PYPROJECT_TOML.open("rb") as fh:
        data = tomllib.load(fh)
    return data["project"]["version"]


try:
    __version__ = _v("montyhall")
except PackageNotFoundError:
    __version__ = _read_version_from_toml()
