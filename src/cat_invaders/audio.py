"""
Audio layer.

Playback is fire-and-forget: any failure is logged and dropped.
"""

from __future__ import annotations

from typing import Protocol

import pygame

from cat_invaders.utils import logger


class Audio(Protocol):
    """Outbound sound collaborator."""

    def play_hit(self) -> None: ...

    def play_explosion(self) -> None: ...


class NullAudio:
    """Silent audio."""

    def play_hit(self) -> None:
        pass

    def play_explosion(self) -> None:
        pass


class PygameAudio:
    """
    Audio backed by pygame.mixer
    """

    def __init__(self, hit_sound: str | None = None, explosion_sound: str | None = None):
        """
        :param hit_sound: Path of the sound played when the avatar is hit
        :type hit_sound: str | None

        :param explosion_sound: Path of the sound played when an adversary explodes
        :type explosion_sound: str | None
        """
        self._sounds: dict[str, pygame.mixer.Sound] = {}
        if not (hit_sound or explosion_sound):
            return

        try:
            pygame.mixer.init()
        except pygame.error as e:
            logger.warning(f"Audio disabled: {e}")
            return

        for key, path in (("hit", hit_sound), ("explosion", explosion_sound)):
            if not path:
                continue
            try:
                self._sounds[key] = pygame.mixer.Sound(path)
            except (pygame.error, FileNotFoundError) as e:
                logger.warning(f"Failed to load sound {path}: {e}")

    def _play(self, key: str) -> None:
        sound = self._sounds.get(key)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as e:
            logger.debug(f"Could not play {key} sound: {e}")

    def play_hit(self) -> None:
        self._play("hit")

    def play_explosion(self) -> None:
        self._play("explosion")
