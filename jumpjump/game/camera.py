# jumpjump/game/camera.py
from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Camera:
    """Horizontal follow cam. One fixed lerp step per tick, not scaled by frame time."""
    x: float = 0.0

    def follow(self, actor_x: float, viewport_width: float, smoothing: float):
        target_x = actor_x - viewport_width / 2
        self.x += (target_x - self.x) * smoothing

    def rescale(self, sx: float):
        self.x *= sx
