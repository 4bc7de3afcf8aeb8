"""Unit tests for the spawn policy."""

from __future__ import annotations

import random

import pytest

from cat_invaders.entities import Adversary
from cat_invaders.settings import GameSettings
from cat_invaders.spawn import SpawnError, free_lanes, next_spot, spawn_adversary


@pytest.fixture
def settings() -> GameSettings:
    return GameSettings()


def test_default_lanes(settings):
    assert settings.lanes == [0.0, 75.0, 150.0, 225.0, 300.0]
    assert len(settings.lanes) > settings.max_adversaries


def test_next_spot_skips_occupied_lanes(settings):
    population = [Adversary(x=x) for x in (0.0, 75.0, 150.0, 225.0)]
    for seed in range(20):
        assert next_spot(population, settings, random.Random(seed)) == 300.0


def test_destroyed_adversaries_free_their_lane(settings):
    gone = Adversary(x=300.0)
    gone.destroy()
    population = [Adversary(x=x) for x in (0.0, 75.0, 150.0, 225.0)] + [gone]
    assert free_lanes(population, settings) == [300.0]


def test_spawned_lanes_never_overlap(settings):
    rng = random.Random(7)
    for _ in range(200):
        population: list[Adversary] = []
        while len(population) < settings.max_adversaries:
            population.append(spawn_adversary(population, settings, rng))
        xs = [a.x for a in population]
        assert len(set(xs)) == len(xs)
        assert set(xs) <= set(settings.lanes)


def test_no_free_lane_raises(settings):
    population = [Adversary(x=x) for x in settings.lanes]
    with pytest.raises(SpawnError):
        next_spot(population, settings)


def test_new_adversary_starts_at_top(settings):
    a = spawn_adversary([], settings, random.Random(0))
    assert a.y == 0.0
    assert a.velocity == settings.adversary_velocity
    assert a.bottom == settings.height
