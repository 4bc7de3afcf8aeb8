"""
Constants for the game.
"""

from __future__ import annotations

FPS = 60
WIDTH = 375
HEIGHT = 500
WINDOW_TITLE = "Cat Invaders"
BACKGROUND_COLOR = (20, 18, 38)

# Simulation loop
TICK_DELAY_MS = 20

# Population
MAX_ADVERSARIES = 3
ADVERSARY_WIDTH = 75
ADVERSARY_HEIGHT = 75
LANE_WIDTH = 75
ADVERSARY_VELOCITY = 0.1  # px per ms, downwards

# Avatar
AVATAR_WIDTH = 75
AVATAR_HEIGHT = 54
AVATAR_Y = HEIGHT - AVATAR_HEIGHT - 10
AVATAR_START_X = 2 * AVATAR_WIDTH
AVATAR_STEP = AVATAR_WIDTH
START_LIVES = 3

# Projectile
PROJECTILE_SPEED = 0.5  # px per ms, upwards
PROJECTILE_X_OFFSET = 30
PROJECTILE_BASE_Y = AVATAR_Y
PROJECTILE_WIDTH = 14
PROJECTILE_HEIGHT = 24

# Collisions
AVATAR_HIT_THRESHOLD = 90
PROJECTILE_HIT_THRESHOLD = 40
DAMAGE_GRACE_MS = 0

# Scoring
SCORE_TIME_DIVISOR = 10
KILL_BONUS = 50

# Effects
FLASH_INTERVAL_MS = 100
FLASH_PATTERN = (False, True, False, True, False, True, False)
EXPLOSION_DURATION_MS = 2000
EXPLOSION_VARIANTS = 4
REWARD_DURATION_MS = 1000
