# jumpjump/game/level.py
from __future__ import annotations
import logging
import random
from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple
import pygame
from .config import GameConfig, COLOR_PLAT, COLOR_BONUS, COLOR_SPRING

logger = logging.getLogger(__name__)


class PlatformType(Enum):
    NORMAL = "normal"
    BONUS = "bonus"
    SPRING = "spring"


@dataclass
class Platform:
    x: float
    y: float
    width: float
    height: float
    type: PlatformType = PlatformType.NORMAL

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), int(self.width), int(self.height))


class TypeTable:
    """
    Weighted platform-type draw as an explicit cumulative table.

    Each (type, p) row takes the next slice of [0, 1); whatever is left over
    falls through to `default`.
    """
    def __init__(self, weights: Sequence[Tuple[PlatformType, float]],
                 default: PlatformType = PlatformType.NORMAL):
        self.default = default
        self.types: List[PlatformType] = []
        self.cumulative: List[float] = []
        acc = 0.0
        for ptype, p in weights:
            if p < 0.0:
                raise ValueError(f"negative weight for {ptype}")
            acc += p
            self.types.append(ptype)
            self.cumulative.append(acc)
        if acc > 1.0 + 1e-9:
            raise ValueError(f"weights sum to {acc:.3f} > 1")

    @classmethod
    def from_config(cls, cfg: GameConfig) -> "TypeTable":
        return cls([(PlatformType(name), p) for name, p in cfg.type_weights])

    def pick(self, u: float) -> PlatformType:
        """Map a uniform sample u in [0, 1) to a type."""
        i = bisect_right(self.cumulative, u)
        return self.types[i] if i < len(self.types) else self.default

    def draw(self, rng: random.Random) -> PlatformType:
        return self.pick(rng.random())


class PlatformStream:
    """
    Endless, x-sorted run of ground-level platforms.
    Grows ahead of the viewport and drops what has scrolled out behind the camera.
    """
    def __init__(self, cfg: GameConfig, seed: int | None = None):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self.cfg = cfg
        self.table = TypeTable.from_config(cfg)
        self.platforms: List[Platform] = []
        self._init_start()

    def _init_start(self):
        """Start platform centred on the viewport (under the actor) plus one target to its right."""
        cfg = self.cfg
        mid = cfg.width / 2
        self.platforms = [
            self._create_platform(mid - cfg.platform_width / 2, PlatformType.NORMAL),
            self._create_platform(mid + cfg.second_platform_offset, PlatformType.NORMAL),
        ]

    def _create_platform(self, x: float, ptype: PlatformType) -> Platform:
        cfg = self.cfg
        return Platform(x=float(x), y=float(cfg.ground_y),
                        width=float(cfg.platform_width), height=float(cfg.platform_height),
                        type=ptype)

    def next_spacing(self, score: int) -> float:
        cfg = self.cfg
        return cfg.base_distance + self.rng.uniform(0, cfg.distance_jitter) + score * cfg.difficulty_factor

    def extend(self, camera_x: float, score: int = 0) -> int:
        """Append platforms until the rightmost one sits past the look-ahead edge. Returns how many."""
        horizon = camera_x + self.cfg.width + self.cfg.stream_margin
        added = 0
        last_x = self.platforms[-1].x if self.platforms else camera_x
        while last_x < horizon:
            last_x += self.next_spacing(score)
            ptype = self.table.draw(self.rng)
            self.platforms.append(self._create_platform(last_x, ptype))
            added += 1
        if added:
            logger.debug("stream: +%d platforms (rightmost x=%.1f)", added, self.platforms[-1].x)
        return added

    def evict(self, camera_x: float) -> int:
        """Drop platforms that are not strictly ahead of camera_x - margin. Returns how many."""
        cutoff = camera_x - self.cfg.stream_margin
        before = len(self.platforms)
        self.platforms = [p for p in self.platforms if p.x > cutoff]
        return before - len(self.platforms)

    def update(self, camera_x: float, score: int = 0):
        self.extend(camera_x, score)
        self.evict(camera_x)

    def next_platform_after(self, x: float) -> Optional[Platform]:
        """First platform (ascending x) whose x is strictly greater than `x`."""
        for p in self.platforms:
            if p.x > x:
                return p
        return None

    def rescale(self, sx: float, cfg: GameConfig):
        """
        Scale x to a new viewport and adopt the new config's platform size.
        Platforms stay on the ground line, which may sit at a different height ratio.
        """
        self.cfg = cfg
        self.table = TypeTable.from_config(cfg)
        for p in self.platforms:
            p.x *= sx
            p.y = float(cfg.ground_y)
            p.width = float(cfg.platform_width)
            p.height = float(cfg.platform_height)

    def draw(self, surf: pygame.Surface, camera_x: float):
        draw_platforms(surf, self.platforms, camera_x)


PLATFORM_COLORS = {
    PlatformType.NORMAL: COLOR_PLAT,
    PlatformType.BONUS: COLOR_BONUS,
    PlatformType.SPRING: COLOR_SPRING,
}


def draw_platforms(surf: pygame.Surface, platforms: Sequence[Platform], camera_x: float):
    """Draw platforms in screen space, colour-coded by type."""
    for p in platforms:
        r = p.rect
        r.x = int(p.x - camera_x)
        pygame.draw.rect(surf, PLATFORM_COLORS[p.type], r)
