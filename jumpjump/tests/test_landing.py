# jumpjump/tests/test_landing.py
from jumpjump.game.config import GameConfig
from jumpjump.game.landing import (
    LandingKind, evaluate_landing, find_landing_platform, score_landing,
)
from jumpjump.game.level import Platform, PlatformType
from jumpjump.game.player import Player

CFG = GameConfig()  # ground 405, actor 90, platform 80x20, epsilon 5


def _platform(x=100.0, ptype=PlatformType.NORMAL):
    return Platform(x=x, y=CFG.ground_y, width=CFG.platform_width, height=CFG.platform_height, type=ptype)


def _falling_player(center_x: float, bottom: float = None, vy: float = 6.0):
    bottom = CFG.ground_y if bottom is None else bottom
    p = Player(x=center_x - CFG.player_size / 2, y=bottom - CFG.player_size, size=CFG.player_size)
    p.jump(vy, 2.0)
    return p


def test_perfect_landing_scenario():
    plat = _platform()                       # center 140
    player = _falling_player(143.0)          # distance 3 <= 5
    out = evaluate_landing(player, [plat], CFG, combo=0)
    assert out.kind is LandingKind.PERFECT
    assert out.distance == 3.0
    assert out.combo == 1
    assert out.points == 3
    # snapped to rest on the top
    assert not player.airborne and player.vx == 0.0 and player.vy == 0.0
    assert player.bottom == plat.y


def test_normal_landing_scenario():
    out = evaluate_landing(_falling_player(148.0), [_platform()], CFG, combo=4)
    assert out.kind is LandingKind.NORMAL
    assert out.distance == 8.0
    assert out.combo == 0
    assert out.points == 1


def test_bonus_normal_landing_scores_six():
    out = evaluate_landing(_falling_player(148.0), [_platform(ptype=PlatformType.BONUS)], CFG, combo=0)
    assert out.kind is LandingKind.NORMAL
    assert out.points == 6
    assert out.bonus


def test_bonus_perfect_landing_stacks():
    kind, points, combo = score_landing(0.0, PlatformType.BONUS, combo=2, tolerance=5.0)
    assert kind is LandingKind.PERFECT
    assert combo == 3
    assert points == 2 + 3 + 5


def test_spring_scores_like_normal_platform():
    a = score_landing(8.0, PlatformType.SPRING, combo=0, tolerance=5.0)
    b = score_landing(8.0, PlatformType.NORMAL, combo=0, tolerance=5.0)
    assert a == b


def test_tolerance_boundary_is_perfect():
    kind, _, _ = score_landing(5.0, PlatformType.NORMAL, combo=0, tolerance=5.0)
    assert kind is LandingKind.PERFECT


def test_miss_leaves_player_frozen():
    player = _falling_player(400.0, bottom=CFG.ground_y + 3.0)
    before = (player.x, player.y, player.vx, player.vy, player.airborne)
    out = evaluate_landing(player, [_platform()], CFG, combo=3)
    assert out.kind is LandingKind.MISS
    assert not out.success
    assert out.combo == 0 and out.points == 0
    assert (player.x, player.y, player.vx, player.vy, player.airborne) == before


def test_center_must_be_strictly_inside_span():
    plat = _platform()
    assert find_landing_platform(_falling_player(plat.x), [plat], CFG) is None
    assert find_landing_platform(_falling_player(plat.right), [plat], CFG) is None
    assert find_landing_platform(_falling_player(plat.x + 1), [plat], CFG) is plat


def test_vertical_contact_band():
    plat = _platform()
    cx = plat.center_x
    deepest = plat.y + plat.height + CFG.landing_slack
    assert find_landing_platform(_falling_player(cx, bottom=plat.y - 1.0), [plat], CFG) is None
    assert find_landing_platform(_falling_player(cx, bottom=deepest), [plat], CFG) is plat
    assert find_landing_platform(_falling_player(cx, bottom=deepest + 0.5), [plat], CFG) is None


def test_picks_platform_under_center():
    a, b = _platform(100.0), _platform(300.0)
    out = evaluate_landing(_falling_player(b.center_x + 1.0), [a, b], CFG, combo=0)
    assert out.platform is b


def test_contact_band_covers_one_tick_of_fast_fall():
    plat = _platform()
    cx = plat.center_x
    fast = _falling_player(cx, bottom=plat.y + 28.0, vy=30.0)   # past the static 25 px band
    assert find_landing_platform(fast, [plat], CFG) is plat
    too_deep = _falling_player(cx, bottom=plat.y + 31.0, vy=30.0)
    assert find_landing_platform(too_deep, [plat], CFG) is None


def test_perfect_boundary_tolerates_float_noise():
    kind, _, _ = score_landing(5.0 + 1e-12, PlatformType.NORMAL, combo=0, tolerance=5.0)
    assert kind is LandingKind.PERFECT
    kind, _, _ = score_landing(5.01, PlatformType.NORMAL, combo=0, tolerance=5.0)
    assert kind is LandingKind.NORMAL
