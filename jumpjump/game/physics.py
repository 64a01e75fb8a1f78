# jumpjump/game/physics.py
"""
Closed-form jump solver.

Units are per logical tick: gravity in px/tick^2, speeds in px/tick.
Negative vy points up (screen coordinates).
"""
from __future__ import annotations
import math
from typing import Tuple

from .config import MIN_POWER, MAX_POWER


def clamp_power(power: float, min_power: float, max_power: float) -> float:
    """Clamp a raw charge into [min_power, max_power]; min_power > 0 keeps flight time finite."""
    return max(min_power, min(float(power), max_power))


def flight_time(vy0: float, gravity: float) -> float:
    """Ticks for a symmetric arc launched at vy0 to come back to launch height."""
    return 2.0 * abs(vy0) / gravity


def time_to_ground(vy: float, height: float, gravity: float) -> float:
    """Continuous ticks until something `height` px above the ground, moving at vy, reaches it."""
    disc = max(0.0, vy * vy + 2.0 * gravity * max(0.0, height))
    return (-vy + math.sqrt(disc)) / gravity


def solve_jump(power: float, gravity: float, dx: float,
               jump_force: float, min_power: float = MIN_POWER,
               max_power: float = MAX_POWER) -> Tuple[float, float]:
    """
    Velocity pair (vy0, vx) that covers `dx` over one full up-and-down arc.

    vy0 = -F * power, T = 2|vy0| / G, vx = dx / T. The landing x depends only on dx,
    never on power; power only changes how high and how long the arc is.
    """
    p = clamp_power(power, min_power, max_power)
    vy0 = -jump_force * p
    t = flight_time(vy0, gravity)
    vx = dx / t
    return vy0, vx


def step(y: float, vy: float, gravity: float) -> Tuple[float, float]:
    """One exact constant-acceleration tick: y(t+1) = y + vy + G/2, vy(t+1) = vy + G."""
    return y + vy + 0.5 * gravity, vy + gravity
