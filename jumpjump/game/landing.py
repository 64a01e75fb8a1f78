# jumpjump/game/landing.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional, Tuple
from .config import GameConfig
from .level import Platform, PlatformType
from .player import Player, GROUND_EPS

# Float slack on the perfect test; an exact-aim landing can sit 1e-12 past the tolerance.
DISTANCE_EPS = 1e-6


class LandingKind(Enum):
    PERFECT = auto()
    NORMAL = auto()
    MISS = auto()


@dataclass(frozen=True)
class LandingOutcome:
    kind: LandingKind
    platform: Optional[Platform] = None
    distance: float = 0.0   # |platform center - actor center|
    points: int = 0         # score to add
    combo: int = 0          # combo after this landing
    bonus: bool = False

    @property
    def success(self) -> bool:
        return self.kind is not LandingKind.MISS


def score_landing(distance: float, ptype: PlatformType, combo: int,
                  tolerance: float, bonus_points: int = 5) -> Tuple[LandingKind, int, int]:
    """
    Pure scoring rule -> (kind, points, new_combo).
      perfect (distance <= tolerance): combo + 1, points 2 + new combo
      normal:                          combo reset, 1 point
      bonus platform:                  +bonus_points on top of either
    """
    if distance <= tolerance + DISTANCE_EPS:
        kind = LandingKind.PERFECT
        combo = combo + 1
        points = 2 + combo
    else:
        kind = LandingKind.NORMAL
        combo = 0
        points = 1
    if ptype is PlatformType.BONUS:
        points += bonus_points
    return kind, points, combo


def find_landing_platform(player: Player, platforms: Iterable[Platform],
                          cfg: GameConfig) -> Optional[Platform]:
    """
    Platform whose span holds the actor's center and whose top is in the contact band under its feet.

    The band reaches at least one tick of fall below the top, so a fast arc that
    overshoots the ground line on its last tick still counts.
    """
    cx = player.center_x
    bottom = player.bottom
    fall = max(player.vy, 0.0)
    for p in platforms:
        if not (p.x < cx < p.right):
            continue
        if p.y - GROUND_EPS <= bottom <= p.y + max(p.height + cfg.landing_slack, fall):
            return p
    return None


def evaluate_landing(player: Player, platforms: Iterable[Platform],
                     cfg: GameConfig, combo: int) -> LandingOutcome:
    """
    Resolve a touchdown. On a hit the actor is snapped onto the platform top;
    on a miss it is left exactly where it is.
    """
    platform = find_landing_platform(player, platforms, cfg)
    if platform is None:
        return LandingOutcome(kind=LandingKind.MISS, combo=0)

    player.land(platform.y - player.size)
    distance = abs(platform.center_x - player.center_x)
    kind, points, new_combo = score_landing(
        distance, platform.type, combo, cfg.perfect_tolerance, cfg.bonus_points
    )
    return LandingOutcome(
        kind=kind,
        platform=platform,
        distance=distance,
        points=points,
        combo=new_combo,
        bonus=platform.type is PlatformType.BONUS,
    )
