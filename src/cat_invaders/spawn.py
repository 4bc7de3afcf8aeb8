"""
Adversary spawn policy
"""

from __future__ import annotations

import random
from typing import Iterable

from cat_invaders.entities import Adversary
from cat_invaders.settings import GameSettings


class SpawnError(RuntimeError):
    """Raised when every lane is already taken."""


def free_lanes(population: Iterable[Adversary], settings: GameSettings) -> list[float]:
    """Lanes not occupied by any live adversary."""
    occupied = {a.x for a in population if not a.destroyed}
    return [x for x in settings.lanes if x not in occupied]


def next_spot(
    population: Iterable[Adversary],
    settings: GameSettings,
    rng: random.Random | None = None,
) -> float:
    """
    Pick a horizontal position for a new adversary

    :param population: Current live adversaries
    :type population: Iterable[Adversary]

    :param settings: Game settings, provides the lanes
    :type settings: GameSettings

    :param rng: Random source, module-level random by default
    :type rng: random.Random | None

    :raise SpawnError: If no lane is free

    :return: x of a lane nobody occupies
    :rtype: float
    """
    candidates = free_lanes(population, settings)
    if not candidates:
        raise SpawnError("No free lane for a new adversary")
    return (rng or random).choice(candidates)


def spawn_adversary(
    population: list[Adversary],
    settings: GameSettings,
    rng: random.Random | None = None,
) -> Adversary:
    """Create an adversary at the top of a free lane."""
    return Adversary(
        x=next_spot(population, settings, rng),
        y=0.0,
        velocity=settings.adversary_velocity,
        bottom=float(settings.height),
    )
