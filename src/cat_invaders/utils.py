"""
Cat Invaders utils
"""

from __future__ import annotations

import logging

import pygame

logger = logging.getLogger("cat_invaders")


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging for the game.

    :param level: Level name, e.g. "DEBUG"
    :type level: str
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if value < lo else hi if value > hi else value


def set_screen(caption: str, width: int, height: int) -> pygame.Surface:
    """
    Set the screen

    :param caption: Caption of the screen
    :type caption: str

    :param width: Width of the screen
    :type width: int

    :param height: Height of the screen
    :type height: int

    :return: pygame.Surface
    """

    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption(caption)

    return screen
