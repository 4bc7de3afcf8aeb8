"""
Effect sequencing.

Effects are cosmetic. They are driven by fire-once timers on the shared
scheduler and never feed back into the simulation.
"""

from __future__ import annotations

import random
from functools import partial

from cat_invaders.constants import FLASH_PATTERN
from cat_invaders.entities import Effect, PlayerState
from cat_invaders.presentation import Presenter
from cat_invaders.scheduler import Scheduler, Timer
from cat_invaders.settings import GameSettings


class EffectSequencer:
    """
    Schedules damage flashes, explosions and reward indicators
    """

    def __init__(
        self,
        scheduler: Scheduler,
        presenter: Presenter,
        settings: GameSettings,
        rng: random.Random | None = None,
    ):
        self._scheduler = scheduler
        self._presenter = presenter
        self._settings = settings
        self._rng = rng or random.Random()
        self.active: dict[int, Effect] = {}
        self._flash_timers: list[Timer] = []

    def damage_flash(self, player: PlayerState) -> None:
        """
        Blink the avatar, then leave it visible

        :param player: Player whose visibility flag mirrors the avatar
        :type player: PlayerState
        """
        interval = self._settings.flash_interval_ms
        self._cancel_flash()
        steps = list(FLASH_PATTERN) + [True]
        self._flash_timers = [
            self._scheduler.call_later(
                i * interval,
                partial(self._set_avatar_visible, player, visible),
                name="flash",
            )
            for i, visible in enumerate(steps, start=1)
        ]

    def _cancel_flash(self) -> None:
        for timer in self._flash_timers:
            timer.cancel()
        self._flash_timers = []

    def _set_avatar_visible(self, player: PlayerState, visible: bool) -> None:
        player.visible = visible
        self._presenter.set_avatar_visible(visible)

    def explosion(self, x: float, y: float) -> Effect:
        """
        Show an explosion at the given position, removed after a while

        :return: The effect, tracked in ``active`` until removed
        :rtype: Effect
        """
        effect = Effect(
            kind="explosion",
            x=x,
            y=y,
            ttl_ms=self._settings.explosion_duration_ms,
            variant=self._rng.randrange(self._settings.explosion_variants),
        )
        self.active[effect.id] = effect
        self._presenter.show_explosion(effect.id, x, y, effect.variant)
        self._expire_later(effect)
        return effect

    def reward(self, x: float, y: float, points: int) -> Effect:
        """Show "+points" at the given position for a moment."""
        effect = Effect(
            kind="reward",
            x=x,
            y=y,
            ttl_ms=self._settings.reward_duration_ms,
            text=f"+{points}",
        )
        self.active[effect.id] = effect
        self._presenter.show_reward(effect.id, x, y, effect.text)
        self._expire_later(effect)
        return effect

    def _expire_later(self, effect: Effect) -> None:
        self._scheduler.call_later(
            effect.ttl_ms, partial(self._remove, effect.id), name=effect.kind
        )

    def _remove(self, effect_id: int) -> None:
        if self.active.pop(effect_id, None) is not None:
            self._presenter.remove_effect(effect_id)

    def clear(self) -> None:
        """Remove every active effect and stop a running flash right away."""
        self._cancel_flash()
        for effect_id in list(self.active):
            self._remove(effect_id)
