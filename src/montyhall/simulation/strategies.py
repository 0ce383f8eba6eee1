# src/montyhall/simulation/strategies.py
"""strategies.py
================
The two contestant policies compared by the simulation.  A *strategy*
decides only whether the contestant keeps the first pick once the host
has revealed a goat; door bookkeeping lives in
:func:`montyhall.game.engine.change_door`.
"""
from __future__ import annotations

from enum import Enum

__all__: list[str] = ["Strategy", "STRATEGY_ORDER"]


class Strategy(Enum):
    """Stay with the first pick or switch to the remaining closed door."""

    STAY = "stay"
    SWITCH = "switch"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value

    @property
    def stays(self) -> bool:
        """``True`` when the final pick is the first pick."""
        return self is Strategy.STAY

    @classmethod
    def parse(cls, value: "Strategy | str") -> "Strategy":
        """Return the member named by ``value`` (case-insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown strategy {value!r}; expected one of: {valid}") from None


# Row order used by every results table.
STRATEGY_ORDER: tuple[str, ...] = tuple(s.value for s in Strategy)
