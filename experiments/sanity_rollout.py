# experiments/sanity_rollout.py
"""
Sanity rollouts for JumpEnv:
- Runs RANDOM, FULL-CHARGE and/or TAP (minimum charge) policies over fixed seeds
- Prints a per-policy summary: mean score, perfect-landing rate, game-over rate
- Writes an episodes CSV for notebook analysis
- Saves per-episode power sequences for exact replay

Usage examples (from repo root):
  # Run both policies over 20 default seeds, save traces:
  python -m experiments.sanity_rollout --policies both --save-traces

  # Only full-charge, custom seeds:
  python -m experiments.sanity_rollout --policies full --seeds 111,222,333 --save-traces

  # Quick random-only smoke with fewer jumps and a scratch dir:
  python -m experiments.sanity_rollout --policies random --jumps 50 --out-dir /tmp/sanity

  # Every policy, including minimum-charge taps, with the summary table:
  python -m experiments.sanity_rollout --policies all --jumps 100
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import List, Tuple

import numpy as np

from jumpjump.env.jump_env import JumpEnv


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> np.ndarray:
        return np.array([rng.uniform(0.0, 1.0)], dtype=np.float32)
    return act

def full_charge_policy_init():
    """Always hold to max power: the longest, highest arc and the smallest per-tick overshoot."""
    def act(_obs: np.ndarray) -> np.ndarray:
        return np.array([1.0], dtype=np.float32)
    return act

def tap_policy_init():
    """Release immediately; the session floors this at min_power (shortest, flattest arc)."""
    def act(_obs: np.ndarray) -> np.ndarray:
        return np.array([0.0], dtype=np.float32)
    return act

POLICIES = {
    "random": lambda seed: random_policy_init(10_000 + seed),
    "full": lambda seed: full_charge_policy_init(),
    "tap": lambda seed: tap_policy_init(),
}


# ------------------------ Rollout core ------------------------

def ensure_dir(p: Path):
    p.mkdir(parents=True, exist_ok=True)

def write_episode_row(csv_path: Path, header: List[str], row: List):
    exists = csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if not exists:
            w.writerow(header)
        w.writerow(row)

def run_one_episode(policy_name: str,
                    seed: int,
                    jumps_limit: int,
                    save_traces: bool,
                    out_dir: Path) -> Tuple[int, float, int, int, bool, bool]:
    """
    Returns: (ep_len, ret_sum, score, perfect_count, terminated, truncated)
    Also writes the power trace to disk if requested.
    """
    env = JumpEnv(max_jumps=jumps_limit)
    policy = POLICIES[policy_name](seed)

    powers: List[float] = []
    ret_sum = 0.0
    perfect = 0
    ep_len = 0
    term = trunc = False
    info = {}

    try:
        obs, info = env.reset(seed=seed)
        while True:
            a = policy(obs)
            powers.append(float(a[0]))
            obs, r, term, trunc, info = env.step(a)
            ret_sum += float(r)
            ep_len += 1
            perfect += int(info.get("perfect", False))
            if term or trunc:
                break
    finally:
        env.close()

    if save_traces:
        trace_dir = out_dir / "traces" / policy_name
        ensure_dir(trace_dir)
        np.save(trace_dir / f"{seed}_powers.npy", np.asarray(powers, dtype=np.float32))
        meta_lines = [
            f"seed={seed}",
            f"policy={policy_name}",
            f"jumps_limit={jumps_limit}",
        ]
        (trace_dir / f"{seed}_meta.txt").write_text("\n".join(meta_lines), encoding="utf-8")

    return ep_len, ret_sum, int(info.get("score", 0)), perfect, bool(term), bool(trunc)


def print_summary(summary):
    """One line per policy: mean score, share of jumps that were perfect, share of runs that ended early."""
    print("\npolicy    mean_score  perfect_rate  game_over_rate")
    for name, rows in summary.items():
        if not rows:
            continue
        arr = np.asarray(rows, dtype=np.float64)
        jumps = max(1.0, arr[:, 2].sum())
        print(f"{name:<9} {arr[:, 0].mean():>10.1f}  {arr[:, 1].sum() / jumps:>12.2f}  {arr[:, 3].mean():>14.2f}")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "full", "tap", "both", "all"],
                    help="Which policy to run (both = random + full, all = every policy)")
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds. If empty, uses 20 defaults: 101..120")
    ap.add_argument("--jumps", type=int, default=200,
                    help="Jumps per episode before truncation")
    ap.add_argument("--out-dir", type=str, default="experiments/runs",
                    help="Directory to store episodes.csv and traces/")
    ap.add_argument("--save-traces", action="store_true",
                    help="Save power sequences for replay")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)
    ensure_dir(out_dir)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = list(range(101, 121))

    episodes_csv = out_dir / "episodes.csv"
    header = [
        "env_name", "policy_name", "seed",
        "episode_len_jumps", "return_sum", "score", "perfect_landings",
        "terminated", "truncated",
    ]

    if args.policies == "all":
        to_run = list(POLICIES)
    elif args.policies == "both":
        to_run = ["random", "full"]
    else:
        to_run = [args.policies]
    summary = {name: [] for name in to_run}

    print(f"Running policies={to_run} on {len(seeds)} seeds (jumps<={args.jumps})")
    print(f"Writing summaries to {episodes_csv} and traces under {out_dir}/traces/")

    for policy_name in to_run:
        for seed in seeds:
            ep_len, ret_sum, score, perfect, terminated, truncated = run_one_episode(
                policy_name=policy_name,
                seed=seed,
                jumps_limit=args.jumps,
                save_traces=args.save_traces,
                out_dir=out_dir,
            )
            row = [
                "JumpEnv", policy_name, seed,
                ep_len, f"{ret_sum:.1f}", score, perfect,
                int(terminated), int(truncated),
            ]
            write_episode_row(episodes_csv, header, row)
            summary[policy_name].append((score, perfect, ep_len, terminated))

            print(f"[{policy_name}] seed={seed}  len={ep_len}  score={score}  "
                  f"perfect={perfect}  ret={ret_sum:.1f}  term={terminated} trunc={truncated}")

    print_summary(summary)
    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()
