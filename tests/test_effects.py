"""Unit tests for the effect sequencer."""

from __future__ import annotations

import random

import pytest

from cat_invaders.effects import EffectSequencer
from cat_invaders.entities import PlayerState
from cat_invaders.settings import GameSettings


@pytest.fixture
def effects(scheduler, presenter) -> EffectSequencer:
    return EffectSequencer(scheduler, presenter, GameSettings(), random.Random(3))


def test_damage_flash_alternates_then_restores(clock, scheduler, presenter, effects):
    player = PlayerState(x=150, y=436)
    effects.damage_flash(player)
    assert presenter.visibility_log == []

    clock.advance(100)
    scheduler.run_pending()
    assert presenter.visibility_log == [False]
    assert not player.visible

    clock.advance(600)
    scheduler.run_pending()
    assert presenter.visibility_log == [False, True, False, True, False, True, False]

    clock.advance(100)
    scheduler.run_pending()
    assert presenter.avatar_visible
    assert player.visible
    assert scheduler.pending("flash") == 0


def test_explosion_removes_itself(clock, scheduler, presenter, effects):
    effect = effects.explosion(75, 120)
    assert presenter.effects[effect.id][0] == "explosion"
    assert 0 <= effect.variant < GameSettings().explosion_variants

    clock.advance(1999)
    scheduler.run_pending()
    assert effect.id in presenter.effects

    clock.advance(1)
    scheduler.run_pending()
    assert effect.id not in presenter.effects
    assert effects.active == {}


def test_reward_shows_points_briefly(clock, scheduler, presenter, effects):
    effect = effects.reward(75, 120, 50)
    assert presenter.effects[effect.id] == ("reward", 75, 120, "+50")

    clock.advance(1000)
    scheduler.run_pending()
    assert effect.id not in presenter.effects


def test_clear_removes_everything_at_once(clock, scheduler, presenter, effects):
    effects.explosion(0, 0)
    effects.reward(0, 0, 50)
    effects.clear()
    assert presenter.effects == {}

    # the pending removals are harmless afterwards
    clock.advance(5000)
    scheduler.run_pending()
    assert presenter.effects == {}


def test_clear_stops_a_running_flash(clock, scheduler, presenter, effects):
    player = PlayerState(x=150, y=436)
    effects.damage_flash(player)
    clock.advance(100)
    scheduler.run_pending()
    assert presenter.visibility_log == [False]

    effects.clear()
    assert scheduler.pending("flash") == 0

    clock.advance(1000)
    scheduler.run_pending()
    assert presenter.visibility_log == [False]


def test_new_flash_replaces_the_previous_one(clock, scheduler, presenter, effects):
    player = PlayerState(x=150, y=436)
    effects.damage_flash(player)
    clock.advance(300)
    scheduler.run_pending()

    effects.damage_flash(player)
    assert scheduler.pending("flash") == 8
