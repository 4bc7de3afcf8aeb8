"""
Collision detection.

Both checks are column-based: an adversary touches the avatar or the
projectile only when it sits in exactly the same column and has come within
a vertical threshold. The whole population is scanned; nothing short-circuits.
"""

from __future__ import annotations

from typing import Iterable

from cat_invaders.entities import Adversary, Lifecycle, PlayerState


def avatar_contacts(
    player: PlayerState, adversaries: Iterable[Adversary], threshold: float
) -> list[Adversary]:
    """
    Adversaries touching the avatar

    :param player: Player state, provides the avatar position
    :type player: PlayerState

    :param adversaries: Live population
    :type adversaries: Iterable[Adversary]

    :param threshold: How far above the avatar contact starts
    :type threshold: float

    :return: Every colliding adversary
    :rtype: list[Adversary]
    """
    return [
        a
        for a in adversaries
        if a.state is Lifecycle.ALIVE
        and a.y >= player.y - threshold
        and a.x == player.x
    ]


def projectile_contacts(
    player: PlayerState,
    adversaries: Iterable[Adversary],
    threshold: float,
    x_offset: float,
) -> list[Adversary]:
    """
    Adversaries touching the projectile in flight

    :param x_offset: Horizontal offset between the projectile and the column it
        was fired from
    :type x_offset: float

    :return: Every adversary the projectile reached, empty when nothing flies
    :rtype: list[Adversary]
    """
    projectile = player.projectile
    if not projectile.in_flight:
        return []

    column = projectile.x - x_offset
    return [
        a
        for a in adversaries
        if a.state is Lifecycle.ALIVE
        and a.y >= projectile.y - threshold
        and a.x == column
    ]
