# jumpjump/game/config.py
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Tuple

# --- Display ---
WIDTH = 960
HEIGHT = 540
FPS = 60

# --- World / Physics (per logical tick) ---
GRAVITY = 0.6               # px/tick^2, positive = down
JUMP_FORCE = 15.0           # initial upward speed at full power (px/tick)
MIN_POWER = 0.3             # floor applied before solving a jump
MAX_POWER = 1.0
CHARGE_RATE = 0.8           # power gained per second of holding

# --- Player ---
PLAYER_SIZE = 90

# --- Platforms / stream ---
PLATFORM_WIDTH = 80
PLATFORM_HEIGHT = 20
BASE_DISTANCE = 100         # D0
DISTANCE_JITTER = 100       # uniform extra spacing in [0, jitter)
DIFFICULTY_FACTOR = 1.5     # k, extra spacing per point of score
SECOND_PLATFORM_OFFSET = 150
STREAM_MARGIN = 200
BONUS_CHANCE = 0.10
SPRING_CHANCE = 0.05
SEED_DEFAULT = 12345

# --- Landing / scoring ---
GROUND_RATIO = 0.75         # ground y as a fraction of viewport height
PERFECT_TOLERANCE = 5.0     # epsilon
LANDING_SLACK = 5           # extra px below platform bottom still counted as a hit
BONUS_POINTS = 5

# --- Camera ---
CAMERA_SMOOTHING = 0.1

# --- Colors (RGB) ---
COLOR_BG = (206, 232, 245)
COLOR_GROUND = (120, 170, 90)
COLOR_FG = (51, 51, 51)
COLOR_PLAYER = (255, 107, 107)
COLOR_PLAT = (139, 94, 60)
COLOR_BONUS = (255, 200, 60)
COLOR_SPRING = (90, 200, 140)
COLOR_CHARGE = (76, 175, 80)
COLOR_CHARGE_HOT = (255, 68, 68)
COLOR_DANGER = (255, 86, 110)


@dataclass(frozen=True)
class GameConfig:
    """
    Immutable bundle of every gameplay tunable.

    A resize never edits a config in place: it builds a new one
    (see `resized`) and the session swaps it wholesale.
    """
    width: int = WIDTH
    height: int = HEIGHT
    ground_y: float = HEIGHT * GROUND_RATIO

    gravity: float = GRAVITY
    jump_force: float = JUMP_FORCE
    min_power: float = MIN_POWER
    max_power: float = MAX_POWER
    charge_rate: float = CHARGE_RATE

    player_size: float = PLAYER_SIZE
    platform_width: float = PLATFORM_WIDTH
    platform_height: float = PLATFORM_HEIGHT

    base_distance: float = BASE_DISTANCE
    distance_jitter: float = DISTANCE_JITTER
    difficulty_factor: float = DIFFICULTY_FACTOR
    second_platform_offset: float = SECOND_PLATFORM_OFFSET
    stream_margin: float = STREAM_MARGIN
    type_weights: Tuple[Tuple[str, float], ...] = field(
        default=(("bonus", BONUS_CHANCE), ("spring", SPRING_CHANCE))
    )

    perfect_tolerance: float = PERFECT_TOLERANCE
    landing_slack: float = LANDING_SLACK
    bonus_points: int = BONUS_POINTS

    camera_smoothing: float = CAMERA_SMOOTHING

    def __post_init__(self):
        if self.gravity <= 0 or self.jump_force <= 0:
            raise ValueError("gravity and jump_force must be positive")
        if not (0.0 < self.max_power <= 1.0):
            raise ValueError(f"max_power must be in (0, 1], got {self.max_power}")
        if not (0.0 < self.min_power <= self.max_power):
            raise ValueError(f"min_power must be in (0, max_power], got {self.min_power}")
        if not (0.0 < self.camera_smoothing < 1.0):
            raise ValueError(f"camera_smoothing must be in (0, 1), got {self.camera_smoothing}")
        if sum(w for _, w in self.type_weights) > 1.0:
            raise ValueError("platform type weights must sum to at most 1")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("viewport must have a positive size")

    @property
    def rest_y(self) -> float:
        """Top y of an actor standing on a ground-level platform."""
        return self.ground_y - self.player_size

    @classmethod
    def for_viewport(cls, width: int, height: int, mobile: bool = False, **overrides) -> "GameConfig":
        """Pick tuned constants for a viewport profile."""
        width, height = int(width), int(height)
        landscape = width > height
        tuned = {}

        if mobile and landscape:
            ratio = width / max(1, height)
            if ratio > 2.0:      # ultra-wide / foldable
                tuned = dict(base_distance=max(180.0, width * 0.08), platform_width=max(100.0, width * 0.05),
                             jump_force=25.0, player_size=max(60.0, height * 0.08), gravity=0.8)
            elif ratio > 1.8:
                tuned = dict(base_distance=max(150.0, width * 0.1), platform_width=max(90.0, width * 0.06),
                             jump_force=22.0, player_size=max(55.0, height * 0.09), gravity=0.75)
            else:
                tuned = dict(base_distance=max(120.0, width * 0.12), platform_width=max(80.0, width * 0.07),
                             jump_force=20.0, player_size=max(50.0, height * 0.1), gravity=0.7)
            tuned["perfect_tolerance"] = 8.0
            ground_ratio = 0.85
        elif mobile:             # portrait phone
            tuned = dict(base_distance=max(80.0, width * 0.15), platform_width=max(60.0, width * 0.08),
                         jump_force=18.0, player_size=max(40.0, height * 0.08), gravity=0.65,
                         perfect_tolerance=6.0)
            ground_ratio = 0.85
        elif landscape:
            if width > 1024:
                tuned = dict(base_distance=160.0, platform_width=120.0, jump_force=22.0,
                             player_size=80.0, gravity=0.7)
            ground_ratio = GROUND_RATIO
        else:
            ground_ratio = 0.8

        tuned.update(overrides)
        tuned.setdefault("ground_y", height * ground_ratio)
        return cls(width=width, height=height, **tuned)

    def resized(self, width: int, height: int, mobile: bool = False) -> "GameConfig":
        """New config for a new viewport; non-profile tunables carry over."""
        fresh = GameConfig.for_viewport(width, height, mobile=mobile)
        return replace(
            fresh,
            min_power=self.min_power,
            max_power=self.max_power,
            charge_rate=self.charge_rate,
            difficulty_factor=self.difficulty_factor,
            distance_jitter=self.distance_jitter,
            type_weights=self.type_weights,
            bonus_points=self.bonus_points,
            camera_smoothing=self.camera_smoothing,
        )
