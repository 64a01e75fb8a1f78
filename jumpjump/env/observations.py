# jumpjump/env/observations.py
"""
Observation vector for agents, built from a read-only session snapshot.

Layout (shape (6,), float32, all in [0, 1]):
    [next_dx, second_dx, next_bonus, next_spring, combo, charge]
"""
from __future__ import annotations
from typing import List, Optional, Tuple
import numpy as np

from ..game.level import Platform, PlatformType
from ..game.session import SessionSnapshot

OBS_SIZE = 6
COMBO_CAP = 10.0  # combos above this read as 1.0


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def _targets_ahead(snap: SessionSnapshot, n: int = 2) -> List[Optional[Platform]]:
    """The next n platforms the actor could aim at (same rule the session uses)."""
    edge = snap.player.x + snap.player.size
    ahead = [p for p in snap.platforms if p.x > edge][:n]
    return ahead + [None] * (n - len(ahead))


def _dx_norm(p: Optional[Platform], actor_x: float, scale: float) -> float:
    """Anchor-to-anchor (left edge) distance over `scale`, the same dx the jump solver gets; 1.0 when nothing is there."""
    if p is None:
        return 1.0
    return _clamp01((p.x - actor_x) / max(1.0, scale))


def build_observation(snap: SessionSnapshot) -> np.ndarray:
    cfg = snap.config
    ax = snap.player.x
    nxt, second = _targets_ahead(snap, 2)

    obs = np.array([
        _dx_norm(nxt, ax, cfg.width),
        _dx_norm(second, ax, 2 * cfg.width),
        1.0 if (nxt is not None and nxt.type is PlatformType.BONUS) else 0.0,
        1.0 if (nxt is not None and nxt.type is PlatformType.SPRING) else 0.0,
        _clamp01(snap.combo / COMBO_CAP),
        _clamp01(snap.charge_power / cfg.max_power),
    ], dtype=np.float32)
    return obs


def observation_bounds() -> Tuple[np.ndarray, np.ndarray]:
    low = np.zeros(OBS_SIZE, dtype=np.float32)
    high = np.ones(OBS_SIZE, dtype=np.float32)
    return low, high
