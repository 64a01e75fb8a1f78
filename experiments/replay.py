# experiments/replay.py
"""
Replay tool for JumpEnv: quick command cheat sheet

# Typical usage (run from REPO ROOT)

# Replay a FULL-CHARGE episode by seed (uses experiments/runs/traces/full/<seed>_powers.npy)
python -m experiments.replay --policy full --seed 105

# Replay a RANDOM episode by seed
python -m experiments.replay --policy random --seed 112

# Replay by pointing directly to a specific powers file
python -m experiments.replay --trace experiments/runs/traces/full/105_powers.npy --seed 105

# Controls during replay
SPACE = pause/resume
R     = restart episode
ESC   = quit

# Notes
- Deterministic: given the same seed and power sequence, replay matches the recorded run.
- Expected trace layout from sanity rollouts: experiments/runs/traces/<policy>/<seed>_powers.npy
"""

from __future__ import annotations
import argparse
from pathlib import Path
from typing import Optional

import numpy as np
import pygame

from jumpjump.env.jump_env import JumpEnv

DEFAULT_OUT_DIR = "experiments/runs"


def _find_trace(out_dir: Path, policy: str, seed: int) -> Path:
    p = out_dir / "traces" / policy / f"{seed}_powers.npy"
    if not p.exists():
        raise FileNotFoundError(f"Trace not found: {p}")
    return p


def _draw_overlay(env: JumpEnv, step_idx: int, power: Optional[float], last_info: dict):
    surf = pygame.display.get_surface()
    if surf is None or env.session is None:
        return
    font = pygame.font.SysFont("jetbrainsmono", 16)
    s = env.session

    lines = [
        f"Jump={step_idx}  Power={'-' if power is None else f'{power:.2f}'}",
        f"Score={s.score}  Combo={s.combo}  State={s.state.name}",
        f"Last={last_info.get('landing') or '—'}  Flight={last_info.get('flight_ticks', 0)} ticks",
    ]

    panel = pygame.Surface((360, 20 * (len(lines) + 1)), pygame.SRCALPHA)
    panel.fill((10, 20, 35, 160))
    surf.blit(panel, (12, 80))
    for i, txt in enumerate(lines):
        surf.blit(font.render(txt, True, (210, 230, 255)), (20, 86 + i * 20))
    pygame.display.flip()


def replay_episode(seed: int, powers: np.ndarray):
    """
    Replays an episode deterministically with on-screen overlay.
    Controls: SPACE pause/resume, R restart, ESC quit.
    """
    env = JumpEnv(render_mode="human", max_jumps=None)
    env.reset(seed=seed)

    paused = False
    step_idx = 0
    info: dict = {}
    clock = pygame.time.Clock()

    try:
        running = True
        while running and step_idx < len(powers):
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        paused = not paused
                    elif event.key == pygame.K_r:
                        env.reset(seed=seed)
                        step_idx = 0
                        info = {}
                        paused = False

            if paused:
                env.render()
                _draw_overlay(env, step_idx, None, info)
                clock.tick(30)
                continue

            power = float(powers[step_idx])
            _, _, term, trunc, info = env.step(np.array([power], dtype=np.float32))
            env.render()
            _draw_overlay(env, step_idx, power, info)
            step_idx += 1

            if term or trunc:
                pygame.time.delay(900)
                break
    finally:
        env.close()


def main():
    ap = argparse.ArgumentParser(description="Replay a recorded JumpEnv episode with overlay.")
    ap.add_argument("--seed", type=int, help="Episode seed")
    ap.add_argument("--policy", type=str, default="full",
                    help="Trace subfolder name, e.g. random / full")
    ap.add_argument("--trace", type=str, default="",
                    help="Optional explicit path to a .npy powers file")
    ap.add_argument("--out-dir", type=str, default=DEFAULT_OUT_DIR,
                    help="Base directory where experiments/runs live")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)

    if args.trace:
        trace_path = Path(args.trace)
        if not trace_path.exists():
            raise FileNotFoundError(f"Trace file not found: {trace_path}")
        if args.seed is None:
            # <seed>_powers.npy
            stem = trace_path.stem.split("_")[0]
            if not stem.isdigit():
                raise SystemExit("Could not infer --seed from the trace name; pass it explicitly")
            args.seed = int(stem)
    else:
        if args.seed is None:
            raise SystemExit("Please provide --seed or --trace")
        trace_path = _find_trace(out_dir, args.policy, args.seed)

    powers = np.load(trace_path)
    if powers.ndim != 1:
        raise ValueError(f"Expected 1D power array, got shape {powers.shape}")

    print(f"Replaying seed={args.seed}  policy={args.policy}  jumps={len(powers)}")
    print("Controls: SPACE pause/resume | R restart | ESC quit")

    replay_episode(seed=args.seed, powers=powers)


if __name__ == "__main__":
    main()
