# jumpjump/game/session.py
"""
Game session: the charge-and-jump state machine.

States:
    START:     resting on a platform, waiting for a press
    CHARGING:  control held, charge power grows with wall time
    JUMPING:   airborne, gravity integrated every tick
    GAME_OVER: terminal until the next press, which resets everything

Per tick, in order: charge update -> actor integration -> landing check
-> camera follow -> stream extend/evict. Input (press/release) is applied
immediately when it arrives. Everything the outside world should react to
is returned from `tick()` as a list of `GameEvent`.
"""
from __future__ import annotations
import logging
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .camera import Camera
from .config import GameConfig
from .events import EventType, GameEvent
from .landing import LandingKind, LandingOutcome, evaluate_landing
from .level import Platform, PlatformStream
from .physics import clamp_power, solve_jump, time_to_ground
from .player import Player

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
_KEEP = object()


class GameState(Enum):
    START = "start"
    CHARGING = "charging"
    JUMPING = "jumping"
    GAME_OVER = "game_over"


class ManualClock:
    """Monotonic clock that only moves when told to (replays, agents, tests)."""

    def __init__(self, start: float = 0.0):
        self.now = float(start)

    def advance(self, seconds: float) -> float:
        assert seconds >= 0.0, "a monotonic clock cannot go back"
        self.now += seconds
        return self.now

    def __call__(self) -> float:
        return self.now


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only copy of everything a renderer or an agent may look at."""
    state: GameState
    score: int
    combo: int
    charge_power: float
    camera_x: float
    player: Player
    platforms: Tuple[Platform, ...]
    tick: int
    config: GameConfig
    seed: int


class GameSession:
    def __init__(self, config: Optional[GameConfig] = None,
                 clock: Clock = time.monotonic, seed: Optional[int] = None):
        self.config = config or GameConfig()
        self.clock = clock
        self._base_seed = seed
        self._events: List[GameEvent] = []
        self.tick_count = 0
        self._new_world(seed)
        logger.info(f"GameSession initialized (seed={self.seed}, viewport={self.config.width}x{self.config.height})")

    # -------------------- World setup --------------------

    def _new_world(self, seed: Optional[int]):
        cfg = self.config
        self.player = Player(x=cfg.width / 2 - cfg.player_size / 2, y=cfg.rest_y, size=cfg.player_size)
        self.stream = PlatformStream(cfg, seed)
        self.seed = self.stream.seed
        self.camera = Camera(0.0)
        self.score = 0
        self.combo = 0
        self.charge_power = 0.0
        self.charge_start: Optional[float] = None
        self.state = GameState.START
        self.last_landing: Optional[LandingOutcome] = None
        self.stream.extend(self.camera.x, self.score)

    def reset(self, seed=_KEEP):
        """Full reset. Without `seed`, reuse the seed given at construction (None = fresh random layout)."""
        if seed is _KEEP:
            seed = self._base_seed
        self._new_world(seed)
        self._emit(EventType.RESET, seed=self.seed)
        logger.info(f"Session reset (seed={self.seed})")

    # -------------------- Input --------------------

    def press(self):
        if self.state == GameState.START:
            self.charge_start = self.clock()
            self.charge_power = 0.0
            self._set_state(GameState.CHARGING)
            self._emit(EventType.CHARGE_START)
        elif self.state == GameState.GAME_OVER:
            self.reset()

    def release(self):
        if self.state != GameState.CHARGING:
            return
        self._update_charge()
        self._jump()

    # -------------------- Tick --------------------

    def tick(self) -> List[GameEvent]:
        """Advance one fixed logical step; returns events produced since the previous tick."""
        self.tick_count += 1
        cfg = self.config

        if self.state == GameState.CHARGING:
            self._update_charge()

        if self.state == GameState.JUMPING:
            self.player.update_physics(cfg.gravity)
            if self.player.is_landing(cfg.ground_y):
                self._resolve_landing()

        if self.state != GameState.GAME_OVER:
            self.camera.follow(self.player.x, cfg.width, cfg.camera_smoothing)

        self.stream.update(self.camera.x, self.score)
        return self.drain_events()

    def drain_events(self) -> List[GameEvent]:
        events, self._events = self._events, []
        return events

    # -------------------- Rules --------------------

    def _update_charge(self):
        if self.charge_start is None:
            return
        held = max(0.0, self.clock() - self.charge_start)
        self.charge_power = min(held * self.config.charge_rate, self.config.max_power)

    def next_platform(self) -> Optional[Platform]:
        return self.stream.next_platform_after(self.player.x + self.player.size)

    def _jump(self):
        cfg = self.config
        target = self.next_platform()
        if target is None:
            self._game_over("no_target")
            return

        power = clamp_power(self.charge_power, cfg.min_power, cfg.max_power)
        dx = target.x - self.player.x   # anchor to anchor: left edge lands on left edge
        vy, vx = solve_jump(power, cfg.gravity, dx, cfg.jump_force, cfg.min_power, cfg.max_power)
        self.player.jump(vy, vx)
        self.charge_start = None
        self._set_state(GameState.JUMPING)
        logger.debug(f"jump power={power:.2f} dx={dx:.1f} vy0={vy:.2f} vx={vx:.2f}")
        self._emit(EventType.JUMP, power=power, vx=vx, vy=vy, target_x=target.x)

    def _resolve_landing(self):
        outcome = evaluate_landing(self.player, self.stream.platforms, self.config, self.combo)
        self.last_landing = outcome
        if not outcome.success:
            self._game_over("miss")
            return

        self.score += outcome.points
        self.combo = outcome.combo
        self._set_state(GameState.START)

        kind = EventType.LANDING_PERFECT if outcome.kind is LandingKind.PERFECT else EventType.LANDING_NORMAL
        self._emit(kind, score=self.score, combo=self.combo, points=outcome.points, distance=outcome.distance)
        if outcome.bonus:
            self._emit(EventType.BONUS, points=self.config.bonus_points)

    def _game_over(self, reason: str):
        self.combo = 0
        self.charge_start = None
        self._set_state(GameState.GAME_OVER)
        self._emit(EventType.GAME_OVER, score=self.score, reason=reason)

    def _set_state(self, new_state: GameState):
        old = self.state
        self.state = new_state
        logger.info(f"State transition: {old.name} -> {new_state.name}")

    def _emit(self, event_type: EventType, **data):
        self._events.append(GameEvent(type=event_type, data=data, tick=self.tick_count))

    # -------------------- Host integration --------------------

    def resize(self, width: int, height: int, mobile: bool = False):
        self.apply_config(self.config.resized(width, height, mobile=mobile))

    def apply_config(self, new_cfg: GameConfig):
        """Swap in a new config, rescaling world positions to keep gameplay proportions."""
        old = self.config
        sx = new_cfg.width / old.width
        sy = new_cfg.height / old.height

        p = self.player
        if p.airborne:
            self._rescale_flight(old, new_cfg, sx, sy)
        else:
            p.x *= sx
            p.size = new_cfg.player_size
            p.y = new_cfg.rest_y

        self.stream.rescale(sx, new_cfg)
        self.camera.rescale(sx)
        self.config = new_cfg
        logger.info(f"Config replaced: viewport {old.width}x{old.height} -> {new_cfg.width}x{new_cfg.height}")

    def _rescale_flight(self, old: GameConfig, new_cfg: GameConfig, sx: float, sy: float):
        """
        Re-solve the rest of an arc under a new config.

        Height above ground scales by sy and the arc keeps its shape under the new
        gravity; vx is re-solved so the actor still touches down on the rescaled
        landing x it was headed for.
        """
        p = self.player
        height = old.ground_y - p.bottom
        t_old = time_to_ground(p.vy, height, old.gravity)
        land_x = (p.x + p.vx * t_old) * sx

        vy = p.vy * (new_cfg.gravity * sy / old.gravity) ** 0.5
        t_new = time_to_ground(vy, height * sy, new_cfg.gravity)

        p.x *= sx
        p.size = new_cfg.player_size
        p.y = new_cfg.ground_y - height * sy - p.size
        p.vy = vy
        p.vx = (land_x - p.x) / t_new if t_new > 0 else p.vx * sx
        logger.debug(f"flight rescaled: vx={p.vx:.2f} vy={p.vy:.2f} ticks left={t_new:.1f}")

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            state=self.state,
            score=self.score,
            combo=self.combo,
            charge_power=self.charge_power,
            camera_x=self.camera.x,
            player=replace(self.player),
            platforms=tuple(replace(p) for p in self.stream.platforms),
            tick=self.tick_count,
            config=self.config,
            seed=self.seed,
        )
