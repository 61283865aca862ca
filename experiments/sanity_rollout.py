# /experiments/sanity_rollout.py
"""
Sanity rollouts for PlatformerEnv:
- Runs RANDOM and/or RUN-RIGHT heuristic policies over fixed seeds
- Writes an episodes CSV for notebook analysis
- Optionally saves per-episode action sequences

Usage examples (from repo root):
  # Both policies over 10 default seeds on the zoom variant:
  python -m experiments.sanity_rollout --policies both

  # Heuristic only, columns variant, custom seeds, keep the actions:
  python -m experiments.sanity_rollout --policies heuristic --variant columns --seeds 7,8,9 --save-traces
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import List, Tuple

import numpy as np

from src.env.platformer_env import PlatformerEnv
from src.game.config import VARIANTS, VARIANT_ZOOM


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> np.ndarray:
        return np.array([rng.randint(0, 3), rng.randint(0, 2)], dtype=np.int64)
    return act

def run_right_policy_init():
    """
    Hold right; jump whenever grounded and a branch is overhead within reach
    (obs[6] < 1 means "something above"), otherwise every now and then.
    """
    counter = {"t": 0}
    def act(obs: np.ndarray) -> np.ndarray:
        counter["t"] += 1
        grounded = obs[4] > 0.5
        branch_near = obs[6] < 0.9
        jump = 1 if grounded and (branch_near or counter["t"] % 20 == 0) else 0
        return np.array([2, jump], dtype=np.int64)
    return act


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
                    variant: str,
                    seed: int,
                    frame_skip: int,
                    steps_limit: int,
                    save_traces: bool,
                    out_dir: Path) -> Tuple[int, float, float, float, int, float]:
    """
    Returns: (ep_len, ret_sum, final_x, min_zoom, jumps, grounded_ratio)
    """
    env = PlatformerEnv(variant=variant, frame_skip=frame_skip)

    if policy_name == "random":
        policy = random_policy_init(10_000 + seed)
    elif policy_name == "heuristic":
        policy = run_right_policy_init()
    else:
        raise ValueError("Unknown policy")

    actions: List[np.ndarray] = []
    ret_sum = 0.0
    grounded_count = 0
    ep_len = 0
    min_zoom = 1.0
    info = {}

    try:
        obs, info = env.reset(seed=seed)
        for _ in range(steps_limit):
            a = policy(obs)
            actions.append(a)
            obs, r, term, trunc, info = env.step(a)
            ret_sum += float(r)
            ep_len += 1
            grounded_count += int(bool(info.get("grounded", False)))
            min_zoom = min(min_zoom, float(info.get("zoom", 1.0)))
            if term or trunc:
                break
    finally:
        env.close()

    if save_traces:
        trace_dir = out_dir / "traces" / variant / policy_name
        ensure_dir(trace_dir)
        np.save(trace_dir / f"{seed}_actions.npy", np.asarray(actions, dtype=np.int8).reshape(-1, 2))

    final_x = float(info.get("x", 0.0))
    jumps = int(info.get("jumps", 0))
    return ep_len, ret_sum, final_x, min_zoom, jumps, grounded_count / max(1, ep_len)


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "heuristic", "both"])
    ap.add_argument("--variant", type=str, default=VARIANT_ZOOM, choices=VARIANTS)
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds. If empty, uses 10 defaults: 101..110")
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--steps", type=int, default=10_000,
                    help="Hard cap on decision steps (env truncates earlier)")
    ap.add_argument("--out-dir", type=str, default="experiments/runs")
    ap.add_argument("--save-traces", action="store_true")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)
    ensure_dir(out_dir)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = list(range(101, 111))

    episodes_csv = out_dir / "episodes.csv"
    header = [
        "variant", "policy_name", "seed", "frame_skip",
        "episode_len_decisions", "return_sum", "final_x", "min_zoom", "jumps", "grounded_ratio",
    ]
    to_run = ["random", "heuristic"] if args.policies == "both" else [args.policies]

    print(f"Running policies={to_run} variant={args.variant} on {len(seeds)} seeds "
          f"(frame_skip={args.frame_skip})")

    for policy_name in to_run:
        for seed in seeds:
            ep_len, ret_sum, final_x, min_zoom, jumps, g_ratio = run_one_episode(
                policy_name=policy_name,
                variant=args.variant,
                seed=seed,
                frame_skip=args.frame_skip,
                steps_limit=args.steps,
                save_traces=args.save_traces,
                out_dir=out_dir,
            )
            write_episode_row(episodes_csv, header, [
                args.variant, policy_name, seed, args.frame_skip,
                ep_len, f"{ret_sum:.2f}", f"{final_x:.1f}", f"{min_zoom:.3f}", jumps, f"{g_ratio:.3f}",
            ])
            print(f"[{policy_name}] seed={seed}  len={ep_len}  x={final_x:.1f}  "
                  f"ret={ret_sum:.2f}  min_zoom={min_zoom:.2f}  jumps={jumps}")

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()
