"""Configuration schemas and helpers for montyhall batch runs.

Defines dataclasses describing I/O and simulation settings and includes
utilities for loading YAML-based application configs and applying
``section.option=value`` overrides from the command line.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, get_args, get_origin, get_type_hints

import yaml  # type: ignore[import-untyped]

from montyhall.utils.yaml_helpers import expand_dotted_keys

# ─────────────────────────────────────────────────────────────────────────────
# Dataclasses (schema)
# ─────────────────────────────────────────────────────────────────────────────


@dataclass
class IOConfig:
    """File-system locations for the application."""

    results_dir: Path = Path("results")
    append_seed: bool = True
    rows_name: str = "trial_rows.parquet"
    table_name: str = "outcome_table.csv"
    summary_name: str = "strategy_summary.csv"


@dataclass
class SimConfig:
    """Simulation parameters."""

    n_games: int = 100
    seed: int = 0
    n_jobs: int | None = 1
    decimals: int = 2  # rounding of the printed outcome table
    alpha: float = 0.05  # two-sided level of the win-rate intervals
    write_rows: bool = False


# ─────────────────────────────────────────────────────────────────────────────
# AppConfig + convenience properties
# ─────────────────────────────────────────────────────────────────────────────


@dataclass
class AppConfig:
    """Top-level configuration container."""

    io: IOConfig = field(default_factory=IOConfig)
    sim: SimConfig = field(default_factory=SimConfig)

    @property
    def results_dir(self) -> Path:
        """Root directory where batch outputs are written.

        With ``io.append_seed`` the current ``sim.seed`` is appended, so the
        suffix always follows the seed that is actually simulated.
        """
        base = self.io.results_dir
        if self.io.append_seed:
            return Path(f"{base}_seed_{self.sim.seed}")
        return base

    @property
    def rows_path(self) -> Path:
        """Parquet file holding every per-trial row."""
        return self.results_dir / self.io.rows_name

    @property
    def table_path(self) -> Path:
        """CSV copy of the row-normalised outcome table."""
        return self.results_dir / self.io.table_name

    @property
    def summary_path(self) -> Path:
        """CSV of per-strategy win rates and intervals."""
        return self.results_dir / self.io.summary_name


# ─────────────────────────────────────────────────────────────────────────────
# Loader (one or more YAML overlays; dotted keys allowed)
# ─────────────────────────────────────────────────────────────────────────────


def _deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge ``overlay`` onto ``base`` and return a new mapping."""
    result: dict[str, Any] = dict(base)
    for key, val in overlay.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(val, Mapping):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _annotation_contains(annotation: Any, target: type) -> bool:
    """Recursively inspect type annotations for the presence of ``target``."""
    if annotation is None:
        return False
    if annotation is target:
        return True
    origin = get_origin(annotation)
    if origin is None:
        return False
    return any(_annotation_contains(arg, target) for arg in get_args(annotation))


def _build(cls: type, section: Mapping[str, Any]) -> Any:
    """Instantiate the dataclass ``cls`` from a mapping of attributes."""
    if not isinstance(section, Mapping):
        raise TypeError(f"Section for {cls.__name__} must be a mapping, got {section!r}")
    obj = cls()
    type_hints = get_type_hints(cls)
    known = {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise AttributeError(f"Unknown option(s) for {cls.__name__}: {', '.join(unknown)}")
    for name, val in section.items():
        annotation = type_hints.get(name)
        if _annotation_contains(annotation, Path) and isinstance(val, str):
            val = Path(val)
        setattr(obj, name, val)
    return obj


def load_app_config(*overlays: Path) -> AppConfig:
    """Deterministically merge one or more YAML overlays into an :class:`AppConfig`.

    Files are read in the order provided, dotted keys are expanded, and later
    overlays always win.  ``io.results_dir`` keeps the configured base; the
    seed suffix is derived by :attr:`AppConfig.results_dir`.
    """
    data: dict[str, Any] = {}
    for path in overlays:
        with Path(path).open("r", encoding="utf-8") as fh:
            overlay = yaml.safe_load(fh) or {}
        if not isinstance(overlay, Mapping):
            raise TypeError(f"Config file {path} must contain a mapping")
        data = _deep_merge(data, expand_dotted_keys(overlay))

    # ``sim.n`` is accepted as a short alias of ``sim.n_games``
    sim_section = data.get("sim")
    if isinstance(sim_section, Mapping) and "n" in sim_section and "n_games" not in sim_section:
        sim_section = dict(sim_section)
        sim_section["n_games"] = sim_section.pop("n")
        data["sim"] = sim_section

    unknown = sorted(set(data) - {"io", "sim"})
    if unknown:
        raise AttributeError(f"Unknown config section(s): {', '.join(unknown)}")

    return AppConfig(
        io=_build(IOConfig, data.get("io", {})),
        sim=_build(SimConfig, data.get("sim", {})),
    )


def _coerce(value: str, current: Any, annotation: Any | None = None) -> Any:
    """Coerce ``value`` to the type of ``current``."""
    if isinstance(current, bool) or _annotation_contains(annotation, bool):
        val_lower = value.lower()
        if val_lower in {"1", "true", "yes", "on"}:
            return True
        if val_lower in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"Cannot parse boolean value from {value!r}")
    if value.lower() in {"none", "null"} and _annotation_contains(annotation, type(None)):
        return None
    if isinstance(current, int) or _annotation_contains(annotation, int):
        return int(value)
    if isinstance(current, float) or _annotation_contains(annotation, float):
        return float(value)
    if isinstance(current, Path) or _annotation_contains(annotation, Path):
        return Path(value)
    return value


def apply_dot_overrides(cfg: AppConfig, pairs: list[str]) -> AppConfig:
    """Apply ``section.option=value`` overrides to *cfg*."""
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Invalid override {pair!r}")
        key, raw = pair.split("=", 1)
        if "." not in key:
            raise ValueError(f"Invalid override {pair!r}")
        section_name, option = key.split(".", 1)
        if section_name not in {f.name for f in dataclasses.fields(cfg)}:
            raise AttributeError(f"Unknown config section {section_name!r}")
        section = getattr(cfg, section_name)
        if not hasattr(section, option):
            raise AttributeError(f"Unknown option {option!r} in section {section_name!r}")
        current = getattr(section, option)
        annotation = get_type_hints(type(section)).get(option)
        setattr(section, option, _coerce(raw, current, annotation))
    return cfg


__all__ = [
    "IOConfig",
    "SimConfig",
    "AppConfig",
    "load_app_config",
    "apply_dot_overrides",
]
