# jumpjump/game/player.py
from __future__ import annotations
import pygame
from dataclasses import dataclass
from .physics import step

# Float slack on the ground test so an arc that returns exactly to launch height
# is not pushed one extra tick by rounding.
GROUND_EPS = 1e-6


@dataclass
class Player:
    """
    Square actor, top-left anchored:
    - airborne == False implies vx == vy == 0
    - only moves while airborne
    """
    x: float
    y: float
    size: float
    vx: float = 0.0
    vy: float = 0.0
    airborne: bool = False

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), int(self.size), int(self.size))

    @property
    def center_x(self) -> float:
        return self.x + self.size / 2

    @property
    def bottom(self) -> float:
        return self.y + self.size

    def jump(self, vy: float, vx: float):
        self.vy = float(vy)
        self.vx = float(vx)
        self.airborne = True

    def update_physics(self, gravity: float):
        """Advance one tick; no-op on the ground."""
        if not self.airborne:
            return
        self.x += self.vx
        self.y, self.vy = step(self.y, self.vy, gravity)

    def land(self, y: float):
        """Snap to rest with the top edge at y."""
        self.y = float(y)
        self.vx = 0.0
        self.vy = 0.0
        self.airborne = False

    def is_landing(self, ground_y: float) -> bool:
        """Descending and the bottom edge has reached the ground reference."""
        return self.airborne and self.vy > 0 and self.bottom >= ground_y - GROUND_EPS
