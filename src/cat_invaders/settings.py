"""
Game settings.

Every tunable the simulation reads lives here. The core treats an instance as
read-only; build a new one with :func:`dataclasses.replace` or
:meth:`GameSettings.from_dict` instead of mutating it mid-game.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from cat_invaders import constants as C


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SettingsError(ValueError):
    """Raised when settings are malformed or break a game invariant."""


@dataclass(frozen=True)
class GameSettings:  # pylint: disable=too-many-instance-attributes
    """
    Game settings
    """

    width: int = C.WIDTH
    height: int = C.HEIGHT
    fps: int = C.FPS
    tick_delay_ms: int = C.TICK_DELAY_MS

    max_adversaries: int = C.MAX_ADVERSARIES
    adversary_width: int = C.ADVERSARY_WIDTH
    adversary_height: int = C.ADVERSARY_HEIGHT
    lane_width: int = C.LANE_WIDTH
    adversary_velocity: float = C.ADVERSARY_VELOCITY

    avatar_width: int = C.AVATAR_WIDTH
    avatar_height: int = C.AVATAR_HEIGHT
    avatar_y: float = C.AVATAR_Y
    avatar_start_x: float = C.AVATAR_START_X
    avatar_step: int = C.AVATAR_STEP
    start_lives: int = C.START_LIVES

    projectile_speed: float = C.PROJECTILE_SPEED
    projectile_x_offset: float = C.PROJECTILE_X_OFFSET
    projectile_base_y: float = C.PROJECTILE_BASE_Y

    avatar_hit_threshold: float = C.AVATAR_HIT_THRESHOLD
    projectile_hit_threshold: float = C.PROJECTILE_HIT_THRESHOLD
    damage_grace_ms: int = C.DAMAGE_GRACE_MS

    score_time_divisor: int = C.SCORE_TIME_DIVISOR
    kill_bonus: int = C.KILL_BONUS

    flash_interval_ms: int = C.FLASH_INTERVAL_MS
    explosion_duration_ms: int = C.EXPLOSION_DURATION_MS
    explosion_variants: int = C.EXPLOSION_VARIANTS
    reward_duration_ms: int = C.REWARD_DURATION_MS

    seed: int | None = None
    log_level: str = "INFO"
    hit_sound: str | None = None
    explosion_sound: str | None = None

    @property
    def lanes(self) -> list[float]:
        """Horizontal spawn positions, left edges, one per column."""
        last = self.width - self.adversary_width
        return [float(x) for x in range(0, last + 1, self.lane_width)]

    @property
    def avatar_max_x(self) -> float:
        """Rightmost lane the whole avatar fits in."""
        limit = self.width - self.avatar_width
        return max((x for x in self.lanes if x <= limit), default=0.0)

    def _check_types(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.type == "int":
                ok = isinstance(value, int)
            elif f.type == "float":
                ok = isinstance(value, (int, float))
            elif f.type == "int | None":
                ok = value is None or isinstance(value, int)
            elif f.type == "str | None":
                ok = value is None or isinstance(value, str)
            else:
                ok = isinstance(value, str)
            if not ok or isinstance(value, bool):
                raise SettingsError(f"{f.name} has the wrong type: {value!r}")

    def validate(self) -> GameSettings:
        """
        Check invariants the simulation relies on.

        :raise SettingsError: If any invariant does not hold.

        :return: self, to allow chaining
        :rtype: GameSettings
        """
        self._check_types()

        positive = (
            "width",
            "height",
            "tick_delay_ms",
            "max_adversaries",
            "adversary_width",
            "lane_width",
            "avatar_width",
            "avatar_step",
            "start_lives",
            "score_time_divisor",
            "explosion_variants",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise SettingsError(f"{name} must be positive")

        if self.adversary_width > self.width:
            raise SettingsError("adversary_width does not fit the playfield")
        if self.avatar_width > self.width:
            raise SettingsError("avatar_width does not fit the playfield")
        if self.log_level not in LOG_LEVELS:
            raise SettingsError(f"log_level must be one of {', '.join(LOG_LEVELS)}")

        # the spawn policy needs a free lane for every missing adversary
        if len(self.lanes) <= self.max_adversaries:
            raise SettingsError(
                f"{len(self.lanes)} lanes cannot host "
                f"{self.max_adversaries} adversaries; need more lanes than "
                "adversaries"
            )

        if self.adversary_velocity < 0 or self.projectile_speed <= 0:
            raise SettingsError(
                "adversary_velocity must not be negative and "
                "projectile_speed must be positive"
            )
        if self.damage_grace_ms < 0:
            raise SettingsError("damage_grace_ms must not be negative")

        # collisions compare columns exactly, so the avatar must stay on a lane
        if (
            self.avatar_start_x not in self.lanes
            or self.avatar_start_x > self.avatar_max_x
        ):
            raise SettingsError(f"avatar_start_x {self.avatar_start_x} is not on a lane")
        if self.avatar_step % self.lane_width:
            raise SettingsError(
                f"avatar_step {self.avatar_step} is not a multiple of "
                f"lane_width {self.lane_width}"
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        """Return the settings as a plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> GameSettings:
        """
        Build settings from a dictionary, validating the result.

        :param data: Mapping of field name to value, missing keys use defaults
        :type data: dict[str, Any] | None

        :raise SettingsError: On unknown keys or broken invariants.

        :return: GameSettings
        :rtype: GameSettings
        """
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise SettingsError(f"Unknown settings: {', '.join(unknown)}")
        return cls(**data).validate()

    @classmethod
    def from_yaml(cls, path: str | Path) -> GameSettings:
        """
        Load settings from a YAML file.

        :param path: Path to the YAML file
        :type path: str | Path

        :raise SettingsError: If the file is not a mapping or is invalid.

        :return: GameSettings
        :rtype: GameSettings
        """
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise SettingsError(f"{path}: expected a mapping at top level")
        return cls.from_dict(data)
