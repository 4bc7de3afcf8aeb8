"""Shared fixtures: a controllable clock and recording collaborators."""

from __future__ import annotations

import random

import pytest

from cat_invaders.entities import Adversary
from cat_invaders.scenes.cat_invaders import GameEngine
from cat_invaders.scheduler import Scheduler
from cat_invaders.settings import GameSettings


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class RecordingPresenter:
    """Presenter that keeps the last written state and a call log."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.adversaries: dict[int, tuple[float, float]] = {}
        self.effects: dict[int, tuple] = {}
        self.avatar = (0.0, 0.0)
        self.avatar_visible = True
        self.visibility_log: list[bool] = []
        self.projectile: tuple[float, float] | None = None
        self.lives = 0
        self.score = ""
        self.game_over = False

    def set_avatar_position(self, x, y):
        self.calls.append(("set_avatar_position", x, y))
        self.avatar = (x, y)

    def set_avatar_visible(self, visible):
        self.avatar_visible = visible
        self.visibility_log.append(visible)

    def add_adversary(self, adversary):
        self.calls.append(("add_adversary", adversary.id))
        self.adversaries[adversary.id] = (adversary.x, adversary.y)

    def move_adversary(self, adversary):
        self.adversaries[adversary.id] = (adversary.x, adversary.y)

    def remove_adversary(self, adversary):
        self.calls.append(("remove_adversary", adversary.id))
        self.adversaries.pop(adversary.id, None)

    def show_projectile(self, x, y):
        self.projectile = (x, y)

    def hide_projectile(self):
        self.projectile = None

    def show_explosion(self, effect_id, x, y, variant):
        self.calls.append(("show_explosion", effect_id))
        self.effects[effect_id] = ("explosion", x, y, variant)

    def show_reward(self, effect_id, x, y, text):
        self.calls.append(("show_reward", effect_id, text))
        self.effects[effect_id] = ("reward", x, y, text)

    def remove_effect(self, effect_id):
        self.effects.pop(effect_id, None)

    def add_life_indicator(self):
        self.lives += 1

    def remove_life_indicator(self):
        self.lives -= 1

    def set_score(self, text):
        self.score = text

    def set_game_over_visible(self, visible):
        self.game_over = visible


class RecordingAudio:
    def __init__(self) -> None:
        self.played: list[str] = []

    def play_hit(self) -> None:
        self.played.append("hit")

    def play_explosion(self) -> None:
        self.played.append("explosion")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(clock) -> Scheduler:
    return Scheduler(clock=clock)


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def audio() -> RecordingAudio:
    return RecordingAudio()


@pytest.fixture
def make_engine(scheduler, presenter, audio):
    """Factory building an engine wired to the fakes."""

    def _make(**overrides) -> GameEngine:
        settings = GameSettings(**overrides)
        return GameEngine(
            settings=settings,
            presenter=presenter,
            audio=audio,
            scheduler=scheduler,
            rng=random.Random(1234),
        )

    return _make


def place(engine: GameEngine, x: float, y: float = 0.0, velocity: float = 0.0) -> Adversary:
    """Put an adversary straight into the live population."""
    adversary = Adversary(
        x=x, y=y, velocity=velocity, bottom=float(engine.settings.height)
    )
    engine.world.adversaries.append(adversary)
    engine.presenter.add_adversary(adversary)
    return adversary


def run_for(clock: FakeClock, engine: GameEngine, ms: float, step: float = 20.0) -> None:
    """Advance time in ``step`` slices, running whatever comes due."""
    elapsed = 0.0
    while elapsed < ms:
        clock.advance(step)
        elapsed += step
        engine.scheduler.run_pending()
