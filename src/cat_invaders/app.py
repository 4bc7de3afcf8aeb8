"""
Main application for Cat Invaders using pygame.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Sequence

import pygame

from cat_invaders.audio import PygameAudio
from cat_invaders.constants import WINDOW_TITLE
from cat_invaders.presentation import PygamePresenter
from cat_invaders.scenes.cat_invaders import GameEngine
from cat_invaders.scheduler import Scheduler
from cat_invaders.settings import GameSettings, SettingsError
from cat_invaders.utils import configure_logging, logger, set_screen


class CatInvaders:
    """
    Cat Invaders class
    """

    _clock = pygame.time.Clock()

    _carry_on = True

    def __init__(self, settings: GameSettings):
        """
        :param settings: Validated game settings
        :type settings: GameSettings
        """
        logger.debug(f"Initializing {WINDOW_TITLE}")
        pygame.init()

        self._settings = settings
        self._screen = set_screen(WINDOW_TITLE, settings.width, settings.height)
        self._presenter = PygamePresenter(self._screen, settings)
        self.engine = GameEngine(
            settings=settings,
            presenter=self._presenter,
            audio=PygameAudio(settings.hit_sound, settings.explosion_sound),
            scheduler=Scheduler(clock=pygame.time.get_ticks),
        )

    def handle_events(self):
        """
        Handle the events
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logger.debug("Quitting the game")
                self._carry_on = False
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event.key)

    def _handle_key(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self._carry_on = False
        elif key == pygame.K_LEFT:
            self.engine.move_left()
        elif key == pygame.K_RIGHT:
            self.engine.move_right()
        elif key == pygame.K_SPACE:
            self.engine.fire()
        elif key == pygame.K_RETURN:
            if self.engine.start():
                self._presenter.hint = ""
        elif key == pygame.K_r:
            self.engine.restart()
            self._presenter.hint = ""

    def handle_game_logic(self):
        """
        Run every tick and effect timer that came due
        """
        self.engine.scheduler.run_pending()

    def draw_stuff(self):
        """
        Draw the stuff
        """
        self._presenter.draw()
        pygame.display.flip()

    def run(self):
        """
        Run the game
        """
        logger.debug("Running the game")

        while self._carry_on:
            self._clock.tick(self._settings.fps)
            self.handle_events()
            self.handle_game_logic()
            self.draw_stuff()

        pygame.quit()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="cat-invaders", description=WINDOW_TITLE)
    parser.add_argument("--config", help="YAML file with game settings")
    parser.add_argument("--width", type=int)
    parser.add_argument("--height", type=int)
    parser.add_argument("--max-adversaries", type=int, dest="max_adversaries")
    parser.add_argument("--seed", type=int)
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> GameSettings:
    """
    Settings from the optional YAML file, overridden by CLI flags

    :raise SettingsError: If the result is invalid
    """
    settings = GameSettings.from_yaml(args.config) if args.config else GameSettings()

    overrides = {
        key: value
        for key, value in vars(args).items()
        if key != "config" and value is not None
    }
    # avatar row follows the playfield height unless configured explicitly
    if "height" in overrides and not args.config:
        avatar_y = overrides["height"] - settings.avatar_height - 10
        overrides.setdefault("avatar_y", avatar_y)
        overrides.setdefault("projectile_base_y", avatar_y)
    return replace(settings, **overrides).validate()


def run(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for Cat Invaders.

    - Loads settings from ``--config`` and CLI flags.
    - Opens the window and runs the frame loop until the window closes.
    """
    args = parse_args(argv)
    try:
        settings = load_settings(args)
    except (SettingsError, OSError) as e:
        configure_logging()
        logger.error(f"Invalid settings: {e}")
        return 2

    configure_logging(settings.log_level)
    logger.info(settings.to_dict())

    game = CatInvaders(settings)
    game.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(run())
