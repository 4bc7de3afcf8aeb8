"""
Cat Invaders entities
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum

from cat_invaders.constants import ADVERSARY_VELOCITY, HEIGHT, START_LIVES
from cat_invaders.utils import clamp

_ids = itertools.count(1)


def next_entity_id() -> int:
    """Return a process-wide unique id for presentation bookkeeping."""
    return next(_ids)


class Lifecycle(str, Enum):
    """Adversary lifecycle."""

    ALIVE = "alive"
    HIT = "hit"  # projectile contact, removal pending this tick
    DESTROYED = "destroyed"


class CombatState(str, Enum):
    """Whether the player may fire."""

    IDLE = "idle"
    IN_FLIGHT = "in_flight"


@dataclass
class Adversary:
    """
    Adversary entity

    Drifts straight down at a fixed velocity until it leaves the bottom of
    the playfield or gets destroyed.
    """

    x: float
    y: float = 0.0
    velocity: float = ADVERSARY_VELOCITY
    bottom: float = HEIGHT
    state: Lifecycle = Lifecycle.ALIVE
    id: int = field(default_factory=next_entity_id)

    @property
    def hit(self) -> bool:
        return self.state is Lifecycle.HIT

    @property
    def destroyed(self) -> bool:
        return self.state is Lifecycle.DESTROYED

    def update(self, elapsed: float) -> None:
        """
        Update the position of the adversary

        :param elapsed: Milliseconds since the previous update
        :type elapsed: float
        """
        if self.destroyed:
            return

        self.y += self.velocity * elapsed

        if self.y > self.bottom:
            self.state = Lifecycle.DESTROYED

    def mark_hit(self) -> None:
        if not self.destroyed:
            self.state = Lifecycle.HIT

    def destroy(self) -> None:
        self.state = Lifecycle.DESTROYED


@dataclass
class Projectile:
    """
    Projectile entity

    ``x`` is the drawn column: the firing lane plus the horizontal offset
    passed to :meth:`PlayerState.fire`. Subtract that offset to get the lane
    it can hit. ``y`` is None while nothing is in flight.
    """

    x: float = 0.0
    y: float | None = None

    @property
    def in_flight(self) -> bool:
        return self.y is not None

    def reset(self) -> None:
        self.y = None


@dataclass
class PlayerState:  # pylint: disable=too-many-instance-attributes
    """
    Player and combat state
    """

    x: float
    y: float
    lives: int = START_LIVES
    score: int = 0
    combat: CombatState = CombatState.IDLE
    projectile: Projectile = field(default_factory=Projectile)
    last_damage_at: float | None = None
    visible: bool = True

    @property
    def can_shoot(self) -> bool:
        return self.combat is CombatState.IDLE

    @property
    def is_alive(self) -> bool:
        return self.lives > 0

    def move(self, dx: float, lo: float, hi: float) -> None:
        """
        Move the avatar horizontally, staying inside [lo, hi]

        :param dx: Signed distance in pixels
        :type dx: float
        """
        self.x = clamp(self.x + dx, lo, hi)

    def fire(self, base_y: float, x_offset: float) -> bool:
        """
        Launch a projectile from the avatar's current column

        :param base_y: Starting height of the projectile
        :type base_y: float

        :param x_offset: Horizontal offset between avatar and projectile
        :type x_offset: float

        :return: True if a projectile was launched
        :rtype: bool
        """
        if not self.can_shoot:
            return False

        self.projectile.x = self.x + x_offset
        self.projectile.y = base_y
        self.combat = CombatState.IN_FLIGHT
        return True

    def resolve_projectile(self) -> None:
        """Projectile left the playfield or hit something."""
        self.projectile.reset()
        self.combat = CombatState.IDLE

    def take_damage(self, now: float | None = None) -> None:
        """Decrement player lives when hit."""
        self.lives = max(0, self.lives - 1)
        self.last_damage_at = now

    def add_score(self, points: int) -> None:
        if points > 0:
            self.score += points

    def reset(self, x: float, lives: int = START_LIVES) -> None:
        """Reset player to starting position, lives and score."""
        self.x = x
        self.lives = lives
        self.score = 0
        self.last_damage_at = None
        self.visible = True
        self.resolve_projectile()


@dataclass
class Effect:
    """
    Short-lived visual shown at a fixed position
    """

    kind: str  # "explosion" or "reward"
    x: float
    y: float
    ttl_ms: int
    variant: int = 0
    text: str = ""
    id: int = field(default_factory=next_entity_id)
