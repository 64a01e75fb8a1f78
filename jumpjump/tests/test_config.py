# jumpjump/tests/test_config.py
import dataclasses

import pytest

from jumpjump.game.config import GameConfig, GROUND_RATIO, HEIGHT, WIDTH


def test_defaults():
    cfg = GameConfig()
    assert (cfg.width, cfg.height) == (WIDTH, HEIGHT)
    assert cfg.ground_y == HEIGHT * GROUND_RATIO
    assert cfg.rest_y == cfg.ground_y - cfg.player_size
    assert cfg.gravity == 0.6 and cfg.jump_force == 15.0
    assert cfg.perfect_tolerance == 5.0


def test_frozen():
    cfg = GameConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.gravity = 1.0


@pytest.mark.parametrize("bad", [
    dict(gravity=0.0),
    dict(jump_force=-1.0),
    dict(max_power=1.5),
    dict(min_power=0.0),
    dict(min_power=0.9, max_power=0.5),
    dict(camera_smoothing=1.0),
    dict(type_weights=(("bonus", 0.7), ("spring", 0.4))),
    dict(width=0),
])
def test_rejects_invalid_values(bad):
    with pytest.raises(ValueError):
        GameConfig(**bad)


def test_desktop_profiles():
    small = GameConfig.for_viewport(800, 600)
    assert small.ground_y == 600 * GROUND_RATIO
    assert small.jump_force == 15.0

    wide = GameConfig.for_viewport(1920, 1080)
    assert wide.jump_force == 22.0 and wide.player_size == 80.0
    assert wide.platform_width == 120.0

    portrait = GameConfig.for_viewport(600, 900)
    assert portrait.ground_y == 900 * 0.8


def test_mobile_profiles():
    ultra = GameConfig.for_viewport(2400, 1000, mobile=True)
    assert ultra.jump_force == 25.0
    assert ultra.ground_y == 1000 * 0.85
    assert ultra.perfect_tolerance == 8.0

    phone = GameConfig.for_viewport(390, 844, mobile=True)
    assert phone.jump_force == 18.0
    assert phone.perfect_tolerance == 6.0


def test_overrides_win_over_profile():
    cfg = GameConfig.for_viewport(1920, 1080, gravity=0.5, ground_y=900.0)
    assert cfg.gravity == 0.5 and cfg.ground_y == 900.0


def test_resized_carries_tuning_and_keeps_old_value():
    cfg = dataclasses.replace(GameConfig(), charge_rate=1.2, difficulty_factor=3.0)
    big = cfg.resized(1920, 1080)
    assert big is not cfg
    assert (big.width, big.height) == (1920, 1080)
    assert big.charge_rate == 1.2 and big.difficulty_factor == 3.0
    assert (cfg.width, cfg.height) == (WIDTH, HEIGHT)
