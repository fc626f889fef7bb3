"""
experiments/sweep_capacity.py

Sweep the queue capacity of a scenario on an integer grid and report how the
rejection rate and waiting times respond. Every candidate capacity is run
with the same seeds (common random numbers), so differences between rows
come from the capacity alone. The smallest capacity whose mean rejection
rate stays under a target is reported as the recommended lot size.
"""

from __future__ import annotations
import argparse, copy, os
from typing import Dict, List, Optional, Tuple

from carwash.config import ROOT, load_cfg
from carwash.simulation import run_one_day
from .run_experiments import apply_overrides
from .scenarios import SCENARIOS

# Inclusive capacity bounds used when the config has no explicit list.
CAPACITY_RANGE = (1, 10)
CAPACITY_STEP = 1
# Monte Carlo controls: replications per candidate and the seed to start from.
SWEEP_ITERATIONS = 10
SWEEP_START_SEED = 0
# Rejection rate (fraction of arrivals) considered acceptable.
TARGET_REJECTION_RATE = 0.05

def int_grid(bounds: Tuple[int, int], step: int) -> List[int]:
    """Generate integer grid values within [lo, hi] inclusive with stride=step."""
    lo, hi = bounds
    stride = max(1, int(step))
    vals = list(range(int(lo), int(hi) + 1, stride))
    if vals and vals[-1] != hi:
        vals.append(hi)
    return vals

def evaluate(cfg: Dict, iterations: int, start_seed: int) -> Dict[str, float]:
    """
    Run replications with seeds start_seed..start_seed+iterations-1 and return
    mean KPIs. Averaging smooths randomness when comparing candidates.
    """
    iterations = max(1, iterations)
    totals = {"average_wait": 0.0, "max_waiting_time": 0.0, "car_count_rejected": 0.0, "rejection_rate": 0.0}
    for i in range(iterations):
        cand = copy.deepcopy(cfg)
        cand.setdefault("sim", {})["seed"] = start_seed + i
        res = run_one_day(cand)
        for key in totals:
            totals[key] += float(res[key])
    return {key: val / iterations for key, val in totals.items()}

def sweep(base_cfg: Dict, capacities: List[int], iterations: int, start_seed: int) -> List[Dict[str, float]]:
    rows = []
    for cap in capacities:
        cand = copy.deepcopy(base_cfg)
        cand.setdefault("sim", {})["queue_capacity"] = int(cap)
        row = evaluate(cand, iterations, start_seed)
        row["queue_capacity"] = int(cap)
        rows.append(row)
    return rows

def smallest_acceptable(rows: List[Dict[str, float]], target: float) -> Optional[int]:
    """First capacity (in sweep order) whose mean rejection rate is <= target."""
    for row in sorted(rows, key=lambda r: r["queue_capacity"]):
        if row["rejection_rate"] <= target:
            return int(row["queue_capacity"])
    return None

def plot_sweep(rows: List[Dict[str, float]], scenario_name: str, out_dir: Optional[str] = None) -> Optional[str]:
    """Plot rejection rate and average wait against queue capacity (twin axes)."""
    if not rows:
        return None
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    x = [r["queue_capacity"] for r in rows]
    fig, ax1 = plt.subplots(figsize=(9, 5))
    ax1.plot(x, [r["rejection_rate"] * 100.0 for r in rows], marker="o", color="#d97706", label="Rejection rate (%)")
    ax1.set_xlabel("Queue capacity (cars)")
    ax1.set_ylabel("Rejected arrivals (%)")
    ax2 = ax1.twinx()
    ax2.plot(x, [r["average_wait"] for r in rows], marker="s", color="#2563eb", label="Average wait (min)")
    ax2.set_ylabel("Average wait (minutes)")
    ax1.set_xticks(x)
    ax1.grid(True, linestyle="--", alpha=0.4)
    fig.legend(loc="upper center")
    ax1.set_title(f"{scenario_name}: capacity sweep")
    out_dir = out_dir or os.path.join(ROOT, "experiments", "output")
    os.makedirs(out_dir, exist_ok=True)
    safe_name = scenario_name.lower().replace(" ", "_")
    out_path = os.path.join(out_dir, f"{safe_name}_capacity_sweep.png")
    fig.tight_layout()
    fig.savefig(out_path, dpi=160)
    plt.close(fig)
    return out_path

def main(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(description="Sweep queue capacity for a scenario")
    p.add_argument("--config", type=str, default=None)
    p.add_argument("--scenario", type=str, default="baseline")
    p.add_argument("--iterations", type=int, default=SWEEP_ITERATIONS)
    p.add_argument("--seed", type=int, default=SWEEP_START_SEED)
    p.add_argument("--target", type=float, default=TARGET_REJECTION_RATE, help="acceptable rejection fraction")
    p.add_argument("--no-plots", action="store_true")
    args = p.parse_args(argv)

    cfg = load_cfg(args.config)
    sc_index = {s["name"]: s for s in SCENARIOS}
    sc = sc_index.get(args.scenario)
    if sc is None:
        print(f"[warn] unknown scenario {args.scenario!r}, falling back to baseline")
        sc = sc_index["baseline"]
    base_cfg = apply_overrides(cfg, sc["overrides"])
    sweep_cfg = (cfg.get("experiments", {}) or {}).get("sweep", {}) or {}
    capacities = sweep_cfg.get("capacities") or int_grid(CAPACITY_RANGE, CAPACITY_STEP)

    rows = sweep(base_cfg, capacities, args.iterations, args.seed)
    print(f"Capacity sweep: {sc['name']} (iterations={args.iterations}, seeds {args.seed}-{args.seed + args.iterations - 1})")
    print("  Capacity | Avg wait | Max wait | Rejected | Rejection rate")
    for r in rows:
        print(f"    {r['queue_capacity']:4d}   | {r['average_wait']:8.2f} | {r['max_waiting_time']:8.2f} | "
              f"{r['car_count_rejected']:8.1f} | {r['rejection_rate'] * 100.0:6.2f}%")
    best = smallest_acceptable(rows, args.target)
    if best is None:
        print(f"  No capacity in the sweep keeps rejections under {args.target * 100.0:.1f}%")
    else:
        print(f"  Smallest capacity with rejections under {args.target * 100.0:.1f}%: {best}")
    if not args.no_plots:
        out_dir = (cfg.get("experiments", {}) or {}).get("output_dir")
        if out_dir and not os.path.isabs(out_dir):
            out_dir = os.path.join(ROOT, out_dir)
        path = plot_sweep(rows, sc["name"], out_dir)
        if path:
            print(f"  Sweep plot saved to: {path}")

if __name__ == "__main__":
    main()
