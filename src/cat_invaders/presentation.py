"""
Presentation layer.

The simulation only ever writes to a :class:`Presenter`; it never reads
geometry back. :class:`PygamePresenter` keeps one sprite per entity and
draws them every frame.
"""

from __future__ import annotations

from typing import Protocol

import pygame

from cat_invaders.constants import BACKGROUND_COLOR, PROJECTILE_HEIGHT, PROJECTILE_WIDTH
from cat_invaders.entities import Adversary
from cat_invaders.settings import GameSettings

EXPLOSION_COLORS = [
    (255, 170, 0),
    (255, 90, 40),
    (255, 230, 90),
    (230, 60, 160),
]


class Presenter(Protocol):
    """Outbound visual collaborator."""

    def set_avatar_position(self, x: float, y: float) -> None: ...

    def set_avatar_visible(self, visible: bool) -> None: ...

    def add_adversary(self, adversary: Adversary) -> None: ...

    def move_adversary(self, adversary: Adversary) -> None: ...

    def remove_adversary(self, adversary: Adversary) -> None: ...

    def show_projectile(self, x: float, y: float) -> None: ...

    def hide_projectile(self) -> None: ...

    def show_explosion(self, effect_id: int, x: float, y: float, variant: int) -> None: ...

    def show_reward(self, effect_id: int, x: float, y: float, text: str) -> None: ...

    def remove_effect(self, effect_id: int) -> None: ...

    def add_life_indicator(self) -> None: ...

    def remove_life_indicator(self) -> None: ...

    def set_score(self, text: str) -> None: ...

    def set_game_over_visible(self, visible: bool) -> None: ...


class NullPresenter:
    """Presenter that draws nothing, for headless runs."""

    def set_avatar_position(self, x: float, y: float) -> None:
        pass

    def set_avatar_visible(self, visible: bool) -> None:
        pass

    def add_adversary(self, adversary: Adversary) -> None:
        pass

    def move_adversary(self, adversary: Adversary) -> None:
        pass

    def remove_adversary(self, adversary: Adversary) -> None:
        pass

    def show_projectile(self, x: float, y: float) -> None:
        pass

    def hide_projectile(self) -> None:
        pass

    def show_explosion(self, effect_id: int, x: float, y: float, variant: int) -> None:
        pass

    def show_reward(self, effect_id: int, x: float, y: float, text: str) -> None:
        pass

    def remove_effect(self, effect_id: int) -> None:
        pass

    def add_life_indicator(self) -> None:
        pass

    def remove_life_indicator(self) -> None:
        pass

    def set_score(self, text: str) -> None:
        pass

    def set_game_over_visible(self, visible: bool) -> None:
        pass


def _adversary_image(w: int, h: int) -> pygame.Surface:
    image = pygame.Surface((w, h), pygame.SRCALPHA)
    body = (160, 160, 175)
    pygame.draw.polygon(image, body, [(4, h // 3), (w // 5, 0), (w // 3, h // 3)])
    pygame.draw.polygon(
        image, body, [(w - 4, h // 3), (w - w // 5, 0), (w - w // 3, h // 3)]
    )
    pygame.draw.ellipse(image, body, (0, h // 4, w, h - h // 4))
    pygame.draw.circle(image, (250, 220, 60), (w // 3, h // 2), 5)
    pygame.draw.circle(image, (250, 220, 60), (w - w // 3, h // 2), 5)
    return image


def _avatar_image(w: int, h: int) -> pygame.Surface:
    image = pygame.Surface((w, h), pygame.SRCALPHA)
    pygame.draw.ellipse(image, (214, 140, 50), (0, 0, w, h // 2))
    pygame.draw.rect(image, (80, 180, 60), (2, h // 2 - 6, w - 4, 8))
    pygame.draw.rect(image, (120, 60, 30), (0, h // 2, w, h // 4))
    pygame.draw.rect(image, (214, 140, 50), (2, h - h // 4, w - 4, h // 4), border_radius=6)
    return image


class _Block(pygame.sprite.Sprite):
    """
    Sprite with a fixed image placed by its top-left corner
    """

    def __init__(self, image: pygame.Surface, x: float = 0, y: float = 0):
        pygame.sprite.Sprite.__init__(self)
        self.image = image
        self.rect = self.image.get_rect()
        self.place(x, y)

    def place(self, x: float, y: float) -> None:
        self.rect.topleft = (int(x), int(y))


class PygamePresenter:  # pylint: disable=too-many-instance-attributes
    """
    Presenter drawing with pygame primitives
    """

    def __init__(self, screen: pygame.Surface, settings: GameSettings):
        """
        :param screen: Surface returned by ``set_screen``
        :type screen: pygame.Surface

        :param settings: Game settings, for sizes
        :type settings: GameSettings
        """
        self._screen = screen
        self._settings = settings

        self._font = pygame.font.Font(None, 32)
        self._small_font = pygame.font.Font(None, 22)
        self._banner_font = pygame.font.Font(None, 56)

        self._adversary_image = _adversary_image(
            settings.adversary_width, settings.adversary_height
        )
        self._avatar = _Block(_avatar_image(settings.avatar_width, settings.avatar_height))
        self._avatar_visible = True

        projectile = pygame.Surface((PROJECTILE_WIDTH, PROJECTILE_HEIGHT), pygame.SRCALPHA)
        pygame.draw.ellipse(projectile, (255, 240, 120), projectile.get_rect())
        self._projectile = _Block(projectile)
        self._projectile_visible = False

        self._adversaries: dict[int, _Block] = {}
        self._effects: dict[int, _Block] = {}
        self._lives: list[_Block] = []
        self._score_text = ""
        self._game_over = False
        self.hint = "ENTER to play, arrows to move, SPACE to shoot"

    def set_avatar_position(self, x: float, y: float) -> None:
        self._avatar.place(x, y)

    def set_avatar_visible(self, visible: bool) -> None:
        self._avatar_visible = visible

    def add_adversary(self, adversary: Adversary) -> None:
        self._adversaries[adversary.id] = _Block(
            self._adversary_image, adversary.x, adversary.y
        )

    def move_adversary(self, adversary: Adversary) -> None:
        sprite = self._adversaries.get(adversary.id)
        if sprite is not None:
            sprite.place(adversary.x, adversary.y)

    def remove_adversary(self, adversary: Adversary) -> None:
        self._adversaries.pop(adversary.id, None)

    def show_projectile(self, x: float, y: float) -> None:
        self._projectile.place(x, y)
        self._projectile_visible = True

    def hide_projectile(self) -> None:
        self._projectile_visible = False

    def show_explosion(self, effect_id: int, x: float, y: float, variant: int) -> None:
        size = int(self._settings.adversary_width * 0.9)
        image = pygame.Surface((size, size), pygame.SRCALPHA)
        color = EXPLOSION_COLORS[variant % len(EXPLOSION_COLORS)]
        pygame.draw.circle(image, color, (size // 2, size // 2), size // 2)
        pygame.draw.circle(image, (255, 255, 255), (size // 2, size // 2), size // 5)
        self._effects[effect_id] = _Block(image, x, y)

    def show_reward(self, effect_id: int, x: float, y: float, text: str) -> None:
        image = self._font.render(text, True, (120, 255, 120))
        self._effects[effect_id] = _Block(image, x, y)

    def remove_effect(self, effect_id: int) -> None:
        self._effects.pop(effect_id, None)

    def add_life_indicator(self) -> None:
        icon = pygame.transform.smoothscale(self._avatar.image, (30, 22))
        x = self._settings.width - 36 * (len(self._lives) + 1)
        self._lives.append(_Block(icon, x, 8))

    def remove_life_indicator(self) -> None:
        if self._lives:
            self._lives.pop()

    def set_score(self, text: str) -> None:
        self._score_text = text

    def set_game_over_visible(self, visible: bool) -> None:
        self._game_over = visible

    def draw(self) -> None:
        """
        Draw the stuff
        """
        screen = self._screen
        screen.fill(BACKGROUND_COLOR)

        for sprite in self._adversaries.values():
            screen.blit(sprite.image, sprite.rect)
        if self._projectile_visible:
            screen.blit(self._projectile.image, self._projectile.rect)
        if self._avatar_visible:
            screen.blit(self._avatar.image, self._avatar.rect)
        for sprite in self._effects.values():
            screen.blit(sprite.image, sprite.rect)
        for sprite in self._lives:
            screen.blit(sprite.image, sprite.rect)

        screen.blit(self._font.render(self._score_text, True, (255, 255, 255)), (10, 10))

        if self.hint:
            hint = self._small_font.render(self.hint, True, (200, 200, 200))
            screen.blit(hint, hint.get_rect(center=(self._settings.width // 2, 60)))

        if self._game_over:
            banner = self._banner_font.render("GAME OVER", True, (230, 30, 30))
            center = (self._settings.width // 2, self._settings.height // 2 - 40)
            screen.blit(banner, banner.get_rect(center=center))
