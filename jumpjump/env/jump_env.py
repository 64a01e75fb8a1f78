# jumpjump/env/jump_env.py
from __future__ import annotations
from typing import Optional, Dict, Any, List
import numpy as np
import gymnasium as gym
import pygame

from ..game.config import GameConfig
from ..game.events import EventType, GameEvent
from ..game.game import draw_world
from ..game.session import GameSession, GameState, ManualClock
from .observations import build_observation, observation_bounds


class JumpEnv(gym.Env):
    """
    Charge-and-jump Gymnasium environment (vector observations).
    - One decision = one jump: the action is the charge power in [0, 1].
    - The env holds the control for power / charge_rate seconds on a manual clock,
      releases, then ticks the session until the actor rests again or the run ends.
    - Observation: shape (6,), float32 (see observations.py).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 config: Optional[GameConfig] = None,
                 max_jumps: Optional[int] = 200,
                 settle_ticks: int = 30,
                 max_flight_ticks: int = 10_000):
        super().__init__()
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unknown render_mode {render_mode}"
        assert settle_ticks >= 0, "settle_ticks must be >= 0"
        self.render_mode = render_mode
        self.config = config or GameConfig()
        self.max_jumps = max_jumps
        self.settle_ticks = int(settle_ticks)
        self.max_flight_ticks = int(max_flight_ticks)

        # --- Gym spaces ---
        # Action: normalized charge power
        self.action_space = gym.spaces.Box(low=0.0, high=1.0, shape=(1,), dtype=np.float32)
        low, high = observation_bounds()
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.session: Optional[GameSession] = None
        self.clock: Optional[ManualClock] = None
        self.jumps: int = 0
        self.current_seed: Optional[int] = None
        self._seed_rng: Optional[np.random.Generator] = None

        # Rendering
        self.screen = None
        self.frame_clock = None
        self.font = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Seed given -> use it for the platform stream directly and start a private seed
        # sequence for later unseeded resets. np_random itself is left untouched.
        if seed is not None:
            level_seed = int(seed)
            self._seed_rng = np.random.default_rng(level_seed)
        elif self._seed_rng is not None:
            level_seed = int(self._seed_rng.integers(0, 2**31 - 1))
        else:
            level_seed = None  # PlatformStream randomizes

        self.clock = ManualClock()
        self.session = GameSession(self.config, clock=self.clock, seed=level_seed)
        self.session.drain_events()
        self.jumps = 0
        self.current_seed = self.session.seed

        obs = self._get_obs()
        info = {"seed": self.current_seed, "score": 0}
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action):
        assert self.session is not None and self.clock is not None, "call reset() first"
        a = np.asarray(action, dtype=np.float32).reshape(1)
        assert self.action_space.contains(a), f"Invalid action {action}"

        s = self.session
        cfg = s.config
        score_before = s.score
        power = float(a[0]) * cfg.max_power

        # Hold, then release
        s.press()
        self.clock.advance(power / cfg.charge_rate)
        s.release()
        events: List[GameEvent] = s.drain_events()

        flight = 0
        while s.state == GameState.JUMPING and flight < self.max_flight_ticks:
            events += s.tick()
            flight += 1
            if self.render_mode == "human":
                self.render()

        # Let the camera and the stream catch up before the next decision
        if s.state == GameState.START:
            for _ in range(self.settle_ticks):
                events += s.tick()

        self.jumps += 1
        terminated = s.state == GameState.GAME_OVER
        reward = -1.0 if terminated else float(s.score - score_before)
        truncated = (not terminated) and self.max_jumps is not None and self.jumps >= self.max_jumps

        landing = s.last_landing
        info = {
            "score": s.score,
            "combo": s.combo,
            "jumps": self.jumps,
            "seed": self.current_seed,
            "flight_ticks": flight,
            "landing": landing.kind.name if landing is not None else None,
            "perfect": any(e.type == EventType.LANDING_PERFECT for e in events),
            "events": [e.type.name for e in events],
        }
        return self._get_obs(), reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.session is not None
        return build_observation(self.session.snapshot())

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.session is None:
            return None
        snap = self.session.snapshot()
        cfg = snap.config

        if self.render_mode == "human":
            if self.screen is None:
                pygame.init()
                self.screen = pygame.display.set_mode((cfg.width, cfg.height))
                pygame.display.set_caption("Jump Jump — Gym Env")
                self.frame_clock = pygame.time.Clock()
                self.font = pygame.font.SysFont("arial", 22, bold=True)
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
            draw_world(self.screen, snap, self.font)
            pygame.display.flip()
            self.frame_clock.tick(self.metadata["render_fps"])
            return None

        # rgb_array: offscreen surface, no window
        surf = pygame.Surface((cfg.width, cfg.height))
        draw_world(surf, snap)
        arr = pygame.surfarray.array3d(surf)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.frame_clock = None
            self.font = None
