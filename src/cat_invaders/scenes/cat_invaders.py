"""
Cat Invaders Scene
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field

from mini_arcade_core.engine.commands import CommandQueue
from mini_arcade_core.runtime.input_frame import InputFrame
from mini_arcade_core.scenes.sim_scene import (  # pyright: ignore[reportMissingImports]
    BaseTickContext,
    BaseWorld,
)
from mini_arcade_core.scenes.systems.base_system import BaseSystem
from mini_arcade_core.scenes.systems.system_pipeline import SystemPipeline

from cat_invaders.audio import Audio, NullAudio
from cat_invaders.collisions import avatar_contacts, projectile_contacts
from cat_invaders.effects import EffectSequencer
from cat_invaders.entities import Adversary, PlayerState
from cat_invaders.presentation import NullPresenter, Presenter
from cat_invaders.scheduler import Scheduler, Timer
from cat_invaders.settings import GameSettings
from cat_invaders.spawn import spawn_adversary
from cat_invaders.utils import logger


@dataclass
class CatInvadersWorld(BaseWorld):
    """
    Cat Invaders World
    """

    settings: GameSettings
    player: PlayerState
    adversaries: list[Adversary] = field(default_factory=list)
    game_over: bool = False


# pylint: disable=too-many-instance-attributes
@dataclass
class CatInvadersTickContext(BaseTickContext[CatInvadersWorld, None]):
    """
    Cat Invaders Tick Context

    ``dt`` and ``now`` are in milliseconds.
    """

    now: float = 0.0
    presenter: Presenter = field(default_factory=NullPresenter)
    audio: Audio = field(default_factory=NullAudio)
    effects: EffectSequencer | None = None
    rng: random.Random = field(default_factory=random.Random)
    halted: bool = False  # terminal condition fired, skip the rest
    projectile_hit: bool = False


@dataclass
class HaltableSystem:
    """Base for systems that stop running once the tick is halted."""

    name: str = "cat_invaders_system"
    order: int = 0

    def enabled(self, ctx: CatInvadersTickContext) -> bool:
        return not ctx.halted

    def step(self, ctx: CatInvadersTickContext):
        raise NotImplementedError


@dataclass
class AdversaryMoveSystem(HaltableSystem):
    """
    Advance every adversary by the measured elapsed time.
    """

    name: str = "cat_invaders_adversary_move"
    order: int = 10

    def step(self, ctx: CatInvadersTickContext):
        for a in ctx.world.adversaries:
            a.update(ctx.dt)
            if not a.destroyed:
                ctx.presenter.move_adversary(a)


@dataclass
class AdversaryCullSystem(HaltableSystem):
    """Removes adversaries that left the playfield."""

    name: str = "cat_invaders_adversary_cull"
    order: int = 20

    def step(self, ctx: CatInvadersTickContext):
        alive: list[Adversary] = []
        for a in ctx.world.adversaries:
            if a.destroyed:
                ctx.presenter.remove_adversary(a)
                logger.debug(f"Adversary {a.id} left the playfield at x={a.x}")
                continue
            alive.append(a)

        ctx.world.adversaries = alive


@dataclass
class PopulationSystem(HaltableSystem):
    """
    Keep the population at exactly ``max_adversaries``.
    """

    name: str = "cat_invaders_population"
    order: int = 30

    def step(self, ctx: CatInvadersTickContext):
        w = ctx.world
        limit = w.settings.max_adversaries

        if len(w.adversaries) > limit:
            logger.warning(
                f"Population of {len(w.adversaries)} exceeds the limit of "
                f"{limit}; dropping the extras"
            )
            for a in w.adversaries[limit:]:
                a.destroy()
                ctx.presenter.remove_adversary(a)
            del w.adversaries[limit:]

        while len(w.adversaries) < limit:
            a = spawn_adversary(w.adversaries, w.settings, ctx.rng)
            w.adversaries.append(a)
            ctx.presenter.add_adversary(a)
            logger.debug(f"Spawned adversary {a.id} at x={a.x}")


@dataclass
class TerminalSystem(HaltableSystem):
    """
    Halts the tick once the player is out of lives.
    """

    name: str = "cat_invaders_terminal"
    order: int = 40

    def step(self, ctx: CatInvadersTickContext):
        w = ctx.world
        if w.player.lives > 0:
            return

        ctx.halted = True
        if w.game_over:
            return

        w.game_over = True
        ctx.presenter.set_game_over_visible(True)
        logger.info(f"Game over, final score {w.player.score}")


@dataclass
class ProjectileCollisionSystem(HaltableSystem):
    """Marks adversaries reached by the projectile and rewards the player."""

    name: str = "cat_invaders_projectile_collision"
    order: int = 50

    def step(self, ctx: CatInvadersTickContext):
        w = ctx.world
        s = w.settings
        player = w.player

        hits = projectile_contacts(
            player,
            w.adversaries,
            s.projectile_hit_threshold,
            s.projectile_x_offset,
        )
        if not hits:
            return

        for a in hits:
            a.mark_hit()
            ctx.effects.explosion(a.x, a.y)
            ctx.effects.reward(a.x, a.y, s.kill_bonus)
            ctx.audio.play_explosion()
            player.add_score(s.kill_bonus)
            logger.debug(f"Hit adversary {a.id} at ({a.x}, {a.y:.1f})")

        player.resolve_projectile()
        ctx.presenter.hide_projectile()
        ctx.presenter.set_score(f"SCORE: {player.score}")
        ctx.projectile_hit = True


@dataclass
class HitResolutionSystem(HaltableSystem):
    """Finalizes adversaries marked hit during this tick."""

    name: str = "cat_invaders_hit_resolution"
    order: int = 55

    def step(self, ctx: CatInvadersTickContext):
        if not ctx.projectile_hit:
            return

        alive: list[Adversary] = []
        for a in ctx.world.adversaries:
            if a.hit:
                ctx.presenter.remove_adversary(a)
                a.destroy()
                continue
            alive.append(a)

        ctx.world.adversaries = alive


@dataclass
class AvatarCollisionSystem(HaltableSystem):
    """
    Costs a life when an adversary reaches the avatar's column.
    """

    name: str = "cat_invaders_avatar_collision"
    order: int = 60

    def step(self, ctx: CatInvadersTickContext):
        w = ctx.world
        s = w.settings
        player = w.player

        if (
            s.damage_grace_ms
            and player.last_damage_at is not None
            and ctx.now - player.last_damage_at < s.damage_grace_ms
        ):
            return

        contacts = avatar_contacts(player, w.adversaries, s.avatar_hit_threshold)
        if not contacts:
            return

        player.take_damage(ctx.now)
        for a in contacts:
            a.destroy()
            ctx.presenter.remove_adversary(a)
            ctx.effects.explosion(a.x, a.y)
        w.adversaries = [a for a in w.adversaries if not a.destroyed]

        ctx.audio.play_hit()
        ctx.effects.damage_flash(player)
        ctx.presenter.remove_life_indicator()
        logger.debug(f"Avatar hit, {player.lives} lives left")


@dataclass
class ProjectileMoveSystem(HaltableSystem):
    """Moves the projectile up and frees the gun once it leaves the top."""

    name: str = "cat_invaders_projectile_move"
    order: int = 70

    def step(self, ctx: CatInvadersTickContext):
        player = ctx.world.player
        projectile = player.projectile
        if not projectile.in_flight:
            return

        projectile.y -= ctx.dt * ctx.world.settings.projectile_speed

        if projectile.y < 0:
            player.resolve_projectile()
            ctx.presenter.hide_projectile()
        else:
            ctx.presenter.show_projectile(projectile.x, projectile.y)


@dataclass
class ScoreSystem(HaltableSystem):
    """Survival time is worth points too."""

    name: str = "cat_invaders_score"
    order: int = 80

    def step(self, ctx: CatInvadersTickContext):
        player = ctx.world.player
        if not player.is_alive:
            return

        player.add_score(math.floor(ctx.dt / ctx.world.settings.score_time_divisor))
        ctx.presenter.set_score(f"SCORE: {player.score}")


def default_systems() -> list[BaseSystem[CatInvadersTickContext]]:
    return [
        AdversaryMoveSystem(),
        AdversaryCullSystem(),
        PopulationSystem(),
        TerminalSystem(),
        ProjectileCollisionSystem(),
        HitResolutionSystem(),
        AvatarCollisionSystem(),
        ProjectileMoveSystem(),
        ScoreSystem(),
        # lives may have reached zero during this tick
        TerminalSystem(name="cat_invaders_terminal_final", order=95),
    ]


class GameEngine:  # pylint: disable=too-many-instance-attributes
    """
    Owns the world and drives the self-rescheduling tick
    """

    def __init__(
        self,
        settings: GameSettings | None = None,
        presenter: Presenter | None = None,
        audio: Audio | None = None,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
    ):  # pylint: disable=too-many-arguments,too-many-positional-arguments
        """
        :param settings: Game settings, defaults when omitted
        :type settings: GameSettings | None

        :param presenter: Visual collaborator
        :type presenter: Presenter | None

        :param audio: Sound collaborator
        :type audio: Audio | None

        :param scheduler: Timer queue; its clock is the engine's time source
        :type scheduler: Scheduler | None

        :param rng: Random source for spawns and effect variants
        :type rng: random.Random | None
        """
        self.settings = (settings or GameSettings()).validate()
        self.presenter = presenter or NullPresenter()
        self.audio = audio or NullAudio()
        self.scheduler = scheduler or Scheduler()
        self.rng = rng or random.Random(self.settings.seed)
        self.effects = EffectSequencer(
            self.scheduler, self.presenter, self.settings, self.rng
        )
        self.pipeline: SystemPipeline[CatInvadersTickContext] = SystemPipeline()
        self.pipeline.extend(default_systems())

        self.world = CatInvadersWorld(
            entities=[],
            settings=self.settings,
            player=PlayerState(
                x=self.settings.avatar_start_x,
                y=self.settings.avatar_y,
                lives=self.settings.start_lives,
            ),
        )

        self._running = False
        self._last_tick: float | None = None
        self._next_tick: Timer | None = None
        self._frame_index = 0

        for _ in range(self.world.player.lives):
            self.presenter.add_life_indicator()
        self._sync_presentation()

    @property
    def running(self) -> bool:
        return self._running

    @property
    def player(self) -> PlayerState:
        return self.world.player

    def _sync_presentation(self) -> None:
        player = self.world.player
        self.presenter.set_avatar_position(player.x, player.y)
        self.presenter.set_avatar_visible(True)
        self.presenter.hide_projectile()
        self.presenter.set_score(f"SCORE: {player.score}")
        self.presenter.set_game_over_visible(self.world.game_over)

    def start(self) -> bool:
        """
        Start the loop

        :return: False if a loop is already running or the game is over
        :rtype: bool
        """
        if self._running:
            logger.debug("Loop already running, ignoring start")
            return False
        if self.world.game_over:
            logger.info("Game is over, restart to play again")
            return False

        logger.info("Starting Cat Invaders...")
        self._running = True
        self._last_tick = None
        self.tick()
        return True

    def restart(self) -> bool:
        """
        Reset lives, score and population, then start if not running

        :return: True if a new loop was started
        :rtype: bool
        """
        logger.info("Restarting Cat Invaders")
        w = self.world
        for a in w.adversaries:
            self.presenter.remove_adversary(a)
        w.adversaries.clear()
        self.effects.clear()

        for _ in range(self.settings.start_lives - w.player.lives):
            self.presenter.add_life_indicator()
        w.player.reset(self.settings.avatar_start_x, self.settings.start_lives)
        w.game_over = False
        self._sync_presentation()

        if self._running:
            return False
        return self.start()

    def tick(self) -> CatInvadersTickContext:
        """
        Run one discrete update and reschedule unless the game ended

        :return: The context of this tick
        :rtype: CatInvadersTickContext
        """
        if self._next_tick is not None:
            self._next_tick.cancel()
            self._next_tick = None

        now = self.scheduler.now()
        elapsed = 0.0 if self._last_tick is None else max(0.0, now - self._last_tick)
        self._last_tick = now

        self._frame_index += 1
        ctx = CatInvadersTickContext(
            input_frame=InputFrame(frame_index=self._frame_index, dt=elapsed / 1000.0),
            world=self.world,
            dt=elapsed,
            commands=CommandQueue(),
            now=now,
            presenter=self.presenter,
            audio=self.audio,
            effects=self.effects,
            rng=self.rng,
        )
        self.pipeline.step(ctx)

        if ctx.halted:
            self._running = False
            return ctx

        self._running = True
        self._next_tick = self.scheduler.call_later(
            self.settings.tick_delay_ms, self.tick, name="tick"
        )
        return ctx

    def move_left(self) -> None:
        self._move(-self.settings.avatar_step)

    def move_right(self) -> None:
        self._move(self.settings.avatar_step)

    def _move(self, dx: float) -> None:
        if self.world.game_over:
            return
        player = self.world.player
        player.move(dx, 0.0, self.settings.avatar_max_x)
        self.presenter.set_avatar_position(player.x, player.y)

    def fire(self) -> bool:
        """
        Fire a projectile if none is in flight

        :return: True if a projectile was launched
        :rtype: bool
        """
        if self.world.game_over:
            return False

        player = self.world.player
        if not player.fire(self.settings.projectile_base_y, self.settings.projectile_x_offset):
            return False

        projectile = player.projectile
        self.presenter.show_projectile(projectile.x, projectile.y)
        logger.debug(f"Fired from x={player.x}")
        return True
