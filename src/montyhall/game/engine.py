from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from montyhall.types import DoorIndex, GameState, Outcome
from montyhall.utils.random import make_rng

"""engine.py
============
Door-level building blocks for a single Monty Hall game.

High-level flow
---------------
* create_game hides one car and two goats behind doors 1-3.
* select_door makes the contestant's first pick.
* open_goat_door has the host reveal a goat the contestant did not pick.
* change_door resolves the final pick under the stay or switch policy.
* determine_winner maps the final pick to WIN or LOSE.

The module keeps no global state; every random draw comes from the
numpy Generator passed in by the caller (a fresh unseeded one is made
when none is given).
"""


__all__ = [
    "CAR",
    "GOAT",
    "WIN",
    "LOSE",
    "DOORS",
    "PRIZES",
    "InvalidArgumentError",
    "validate_door",
    "validate_game",
    "validate_stay",
    "create_game",
    "select_door",
    "open_goat_door",
    "change_door",
    "determine_winner",
]

CAR: str = "car"
GOAT: str = "goat"
WIN: Outcome = "WIN"
LOSE: Outcome = "LOSE"

DOORS: tuple[DoorIndex, ...] = (1, 2, 3)
PRIZES: tuple[str, str, str] = (GOAT, GOAT, CAR)


class InvalidArgumentError(ValueError):
    """Raised when a door index, game layout or trial count is malformed."""


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_door(door: Any, name: str = "door") -> DoorIndex:
    """Return ``door`` as a plain ``int`` after checking it is 1, 2 or 3.

    NumPy integers are accepted; bools and floats are not.
    """
    if isinstance(door, (bool, np.bool_)) or not isinstance(door, (int, np.integer)):
        raise InvalidArgumentError(f"{name} must be an integer door index, got {door!r}")
    if int(door) not in DOORS:
        raise InvalidArgumentError(f"{name} must be one of {DOORS}, got {door!r}")
    return int(door)


def validate_game(game: Any) -> GameState:
    """Return ``game`` as a tuple after checking it holds one car and two goats."""
    if isinstance(game, (str, bytes)) or not isinstance(game, (Sequence, np.ndarray)):
        raise InvalidArgumentError(f"game must be a sequence of three prizes, got {game!r}")
    labels = tuple(str(prize) for prize in game)
    if len(labels) != len(DOORS) or sorted(labels) != sorted(PRIZES):
        raise InvalidArgumentError(
            f"game must hold exactly one {CAR!r} and two {GOAT!r} entries, got {labels!r}"
        )
    return labels  # type: ignore[return-value]


# ---------------------------------------------------------------------------
# Game steps
# ---------------------------------------------------------------------------


def create_game(rng: np.random.Generator | None = None) -> GameState:
    """Hide a car and two goats behind the three doors.

    Inputs
    ------
    rng
        Random source; a fresh unseeded generator when ``None``.

    Returns
    -------
    GameState
        Prize behind doors 1-3, e.g. ``("goat", "car", "goat")``. Each of
        the three car positions is equally likely.
    """
    rng = make_rng() if rng is None else rng
    return tuple(str(prize) for prize in rng.permutation(PRIZES))  # type: ignore[return-value]


def select_door(rng: np.random.Generator | None = None) -> DoorIndex:
    """Return the contestant's first pick, uniform over doors 1-3."""
    rng = make_rng() if rng is None else rng
    return int(rng.integers(DOORS[0], DOORS[-1] + 1))


def open_goat_door(
    game: Sequence[str],
    a_pick: DoorIndex,
    rng: np.random.Generator | None = None,
) -> DoorIndex:
    """Return the door the host opens to reveal a goat.

    Inputs
    ------
    game
        Layout from :func:`create_game`.
    a_pick
        The contestant's first pick.
    rng
        Random source, only drawn from when ``a_pick`` hides the car.

    Returns
    -------
    DoorIndex
        A goat door other than ``a_pick``. When the contestant picked the
        car the host chooses between the two goats uniformly; otherwise the
        single remaining goat door is returned.

    Raises
    ------
    InvalidArgumentError
        If ``game`` or ``a_pick`` is malformed.
    """
    game = validate_game(game)
    a_pick = validate_door(a_pick, "a_pick")

    goat_doors = [door for door in DOORS if game[door - 1] == GOAT]
    if game[a_pick - 1] == CAR:
        rng = make_rng() if rng is None else rng
        return int(rng.choice(goat_doors))
    # a_pick is one of the two goats; the host must open the other one
    return next(door for door in goat_doors if door != a_pick)


def validate_stay(stay: Any) -> bool:
    """Return ``True`` for the stay policy and ``False`` for switch.

    Accepts a bool, a :class:`~montyhall.simulation.strategies.Strategy`
    member or its name (``"stay"`` / ``"switch"``, case-insensitive).
    """
    # imported here: the simulation package imports this module
    from montyhall.simulation.strategies import Strategy

    if isinstance(stay, (bool, np.bool_)):
        return bool(stay)
    if isinstance(stay, (Strategy, str)):
        try:
            return Strategy.parse(stay).stays
        except ValueError as exc:
            raise InvalidArgumentError(str(exc)) from None
    raise InvalidArgumentError(f"stay must be a bool or a strategy, got {stay!r}")


def change_door(stay: Any, opened_door: DoorIndex, a_pick: DoorIndex) -> DoorIndex:
    """Resolve the contestant's final pick.

    ``stay`` keeps ``a_pick``; otherwise the contestant takes the only door
    that is neither opened nor picked. ``stay`` is a bool, a
    :class:`montyhall.simulation.strategies.Strategy` or a strategy name.
    """
    stays = validate_stay(stay)
    opened_door = validate_door(opened_door, "opened_door")
    a_pick = validate_door(a_pick, "a_pick")
    if opened_door == a_pick:
        raise InvalidArgumentError("opened_door must differ from a_pick")

    if stays:
        return a_pick
    return next(door for door in DOORS if door not in (opened_door, a_pick))


def determine_winner(final_pick: DoorIndex, game: Sequence[str]) -> Outcome:
    """Return ``"WIN"`` if ``final_pick`` hides the car, else ``"LOSE"``."""
    final_pick = validate_door(final_pick, "final_pick")
    game = validate_game(game)
    return WIN if game[final_pick - 1] == CAR else LOSE
