# src/montyhall/utils/yaml_helpers.py
"""
YAML parsing helpers. ``expand_dotted_keys`` turns overlay keys such as
``sim.n_games`` into nested sections so they merge like hand-written ones.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _merge_into(target: dict[str, Any], key: str, value: Any, *, raw_key: str) -> None:
    """Store ``value`` under ``key``, merging when both sides are sections."""
    existing = target.get(key)
    if isinstance(existing, dict) and isinstance(value, dict):
        existing.update(value)
    elif existing is not None and not isinstance(existing, dict) and isinstance(value, dict):
        raise TypeError(
            f"Cannot expand dotted key {raw_key!r}; {key!r} is already set to a non-mapping value"
        )
    else:
        target[key] = value


def expand_dotted_keys(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """Return a nested dict from *mapping* that may contain dotted keys.

    >>> expand_dotted_keys({"sim.n_games": 10, "io": {"append_seed": False}})
    {'sim': {'n_games': 10}, 'io': {'append_seed': False}}
    """

    result: dict[str, Any] = {}
    for raw_key, raw_value in mapping.items():
        value = expand_dotted_keys(raw_value) if isinstance(raw_value, Mapping) else raw_value
        if not (isinstance(raw_key, str) and "." in raw_key):
            _merge_into(result, raw_key, value, raw_key=str(raw_key))
            continue

        *parents, leaf = [part for part in raw_key.split(".") if part] or [""]
        if not leaf:
            continue
        target = result
        for part in parents:
            section = target.setdefault(part, {})
            if not isinstance(section, dict):
                raise TypeError(
                    f"Cannot expand dotted key {raw_key!r}; {part!r} is already set to a non-mapping value"
                )
            target = section
        _merge_into(target, leaf, value, raw_key=raw_key)
    return result


__all__ = ["expand_dotted_keys"]
