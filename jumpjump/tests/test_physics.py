# jumpjump/tests/test_physics.py
"""
Jump solver checks.

Usage (from repo root):
  python -m pytest jumpjump/tests/test_physics.py
"""
import math

from jumpjump.game.config import MIN_POWER
from jumpjump.game.physics import solve_jump, flight_time, clamp_power, step, time_to_ground
from jumpjump.game.player import Player

GROUND_Y = 405.0
SIZE = 90.0


def _fly(power: float, dx: float, gravity: float = 0.6, force: float = 15.0):
    """Launch from rest and integrate tick by tick until touchdown; returns (player, vx, ticks)."""
    vy, vx = solve_jump(power, gravity, dx, force, min_power=0.01)
    p = Player(x=0.0, y=GROUND_Y - SIZE, size=SIZE)
    p.jump(vy, vx)
    ticks = 0
    while not p.is_landing(GROUND_Y):
        p.update_physics(gravity)
        ticks += 1
        assert ticks < 10_000, "never came back down"
    return p, vx, ticks


def test_reference_scenario():
    vy0, vx = solve_jump(1.0, 0.6, 100.0, 15.0)
    assert vy0 == -15.0
    assert math.isclose(flight_time(vy0, 0.6), 50.0)
    assert math.isclose(vx, 2.0)


def test_returns_to_launch_height_at_target():
    for power in (0.05, 0.3, 0.37, 0.5, 0.81, 0.99, 1.0):
        for dx in (1.0, 57.5, 100.0, 190.0, 333.3):
            p, vx, ticks = _fly(power, dx)
            assert abs(p.x - dx) <= vx + 1e-9, f"power={power} dx={dx}: x={p.x:.3f}"
            # within one tick of the closed-form flight time
            t = flight_time(-15.0 * power, 0.6)
            assert t - 1e-9 <= ticks <= t + 1, f"power={power}: {ticks} ticks vs T={t:.2f}"


def test_integer_flight_time_lands_exactly():
    p, vx, ticks = _fly(1.0, 100.0)
    assert ticks == 50
    assert math.isclose(p.x, 100.0, abs_tol=1e-9)
    assert math.isclose(p.bottom, GROUND_Y, abs_tol=1e-6)


def test_zero_power_is_clamped():
    vy0, vx = solve_jump(0.0, 0.6, 100.0, 15.0, min_power=0.3)
    assert math.isclose(vy0, -4.5)
    assert math.isfinite(vx) and math.isclose(vx, 100.0 / 15.0)
    assert clamp_power(-1.0, 0.3, 1.0) == 0.3
    assert clamp_power(7.0, 0.3, 1.0) == 1.0


def test_step_matches_closed_form():
    y, vy = 0.0, -10.0
    for t in range(1, 40):
        y, vy = step(y, vy, 0.6)
        assert math.isclose(y, -10.0 * t + 0.3 * t * t, abs_tol=1e-9)


def test_resting_player_does_not_move():
    p = Player(x=10.0, y=20.0, size=SIZE)
    p.update_physics(0.6)
    assert (p.x, p.y, p.vx, p.vy, p.airborne) == (10.0, 20.0, 0.0, 0.0, False)


def test_default_power_floor_matches_config():
    vy0, _ = solve_jump(0.0, 0.6, 100.0, 15.0)
    assert math.isclose(vy0, -15.0 * MIN_POWER)


def test_time_to_ground():
    assert math.isclose(time_to_ground(-15.0, 0.0, 0.6), 50.0)   # whole arc from the ground
    assert math.isclose(time_to_ground(0.0, 187.5, 0.6), 25.0)   # from the apex
    assert time_to_ground(3.0, 0.0, 0.6) == 0.0                  # already down and falling
