"""
experiments/run_experiments.py

Experiment harness that loads the baseline config, applies scenario overrides,
runs multiple independent replications, and reports KPIs with confidence
intervals. Queue occupancy averaged across replications is plotted per
scenario so congestion over the run can be eyeballed.
"""

from __future__ import annotations
import argparse, copy, math, os
from typing import Callable, Dict, List, Optional
from statistics import mean, stdev

from scipy.stats import t

from carwash.config import ROOT, SimulationConfig, load_cfg
from carwash.simulation import run_one_day
from .scenarios import SCENARIOS

def apply_overrides(cfg: Dict, overrides: Dict) -> Dict:
    """Apply scenario overrides (recursive merge) on top of the base config."""
    new = copy.deepcopy(cfg)

    def _merge(dst: Dict, src: Dict):
        for key, val in src.items():
            if isinstance(val, dict) and isinstance(dst.get(key), dict):
                _merge(dst[key], val)
            else:
                dst[key] = copy.deepcopy(val)

    _merge(new, overrides)
    return new

def mean_ci(values: List[float], confidence_level: float) -> tuple[float, float]:
    """Return (mean, half-width) using a t-distribution critical value."""
    if not values:
        return 0.0, 0.0
    mu = mean(values)
    n = len(values)
    if n < 2:
        return mu, 0.0
    level = min(max(confidence_level, 0.0), 0.999999)
    alpha = 1.0 - level
    tcrit = t.ppf(1 - alpha / 2.0, n - 1)
    half = tcrit * (stdev(values) / math.sqrt(n))
    return mu, float(half)

def sample_stddev(values: List[float]) -> float:
    """Return sample standard deviation or 0 if insufficient data."""
    if len(values) < 2:
        return 0.0
    return stdev(values)

def series(results: List[Dict], extractor: Callable[[Dict], float]) -> List[float]:
    """Collect a numeric series from each replication result."""
    return [float(extractor(res)) for res in results]

def run_replications(cfg: Dict, replications: int, base_seed: Optional[int] = None,
                     track_timeline: bool = False) -> List[Dict]:
    """
    Run `replications` independent days of one configuration. Replication i
    uses seed base_seed + i so every replication is reproducible on its own.
    """
    if base_seed is None:
        base_seed = cfg.get("sim", {}).get("seed") or 0
    results = []
    for rep in range(replications):
        run_cfg = copy.deepcopy(cfg)
        run_cfg.setdefault("sim", {})["seed"] = base_seed + rep
        res = run_one_day(run_cfg, track_timeline=track_timeline)
        res["seed"] = base_seed + rep
        results.append(res)
    return results

def run_crn(cfg: Dict, sc_a: Dict, sc_b: Dict, replications: int, base_seed: int, confidence: float) -> Dict:
    """
    Run a common-random-number comparison between two scenarios, using the same
    seed stream per replication, and report paired differences in average wait.
    """
    cfg_a = apply_overrides(cfg, sc_a["overrides"])
    cfg_b = apply_overrides(cfg, sc_b["overrides"])
    res_a = run_replications(cfg_a, replications, base_seed)
    res_b = run_replications(cfg_b, replications, base_seed)
    pairs = [(a["seed"], a["average_wait"], b["average_wait"]) for a, b in zip(res_a, res_b)]
    diffs = [wb - wa for (_, wa, wb) in pairs]
    mean_diff, half = mean_ci(diffs, confidence)
    print("CRN paired average-wait comparison (Scenario2 - Scenario1):")
    print("  Replication | Seed | Wait1 | Wait2 | Difference")
    for idx, (seed, w1, w2) in enumerate(pairs, start=1):
        print(f"    {idx:2d}        | {seed:4d} | {w1:5.2f} | {w2:5.2f} | {w2 - w1:+.2f}")
    print(f"  Mean difference (wait2 - wait1): {mean_diff:+.2f} min")
    print(f"  Std dev of differences: {sample_stddev(diffs):.2f}")
    print(f"  {confidence*100:.1f}% CI of mean diff: {mean_diff - half:+.2f} to {mean_diff + half:+.2f}")
    return {"mean_diff": mean_diff, "half_width": half, "diffs": diffs}

def aggregate_occupancy(results: List[Dict], interval: int) -> List[Dict[str, float]]:
    """
    Average queue occupancy over fixed tick intervals across replications.
    Each result must carry a per-tick "time_series" (track_timeline=True).
    """
    if not results:
        return []
    interval = max(1, int(interval))
    buckets: Dict[int, List[int]] = {}
    for res in results:
        for pt in res.get("time_series", []):
            start = (pt["time"] // interval) * interval
            buckets.setdefault(start, []).append(pt["queue_size"])
    return [
        {"time": float(start), "mean_queue_size": sum(vals) / len(vals)}
        for start, vals in sorted(buckets.items())
    ]

def plot_occupancy(series_pts: List[Dict[str, float]], capacity: int, scenario_name: str,
                   out_dir: Optional[str] = None) -> Optional[str]:
    """
    Persist a PNG plot of mean queue occupancy versus time with the queue
    capacity drawn as a horizontal line.
    """
    if not series_pts:
        return None
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    x = [pt["time"] for pt in series_pts]
    y = [pt["mean_queue_size"] for pt in series_pts]
    plt.figure(figsize=(9, 5))
    plt.step(x, y, where="post", label="Mean cars in queue", color="#2563eb")
    plt.axhline(capacity, color="#f59e0b", linestyle="--", label="Queue capacity")
    plt.xlim(left=0, right=max(x) if x else 1)
    plt.ylim(bottom=0, top=capacity + 1)
    plt.xlabel("Time (minutes)")
    plt.ylabel("Cars waiting")
    plt.title(f"{scenario_name}: queue occupancy")
    plt.legend()
    plt.grid(True, linestyle="--", alpha=0.4)
    out_dir = out_dir or os.path.join(ROOT, "experiments", "output")
    os.makedirs(out_dir, exist_ok=True)
    safe_name = scenario_name.lower().replace(" ", "_")
    out_path = os.path.join(out_dir, f"{safe_name}_occupancy.png")
    plt.tight_layout()
    plt.savefig(out_path, dpi=160)
    plt.close()
    return out_path

def summarize(results: List[Dict], confidence: float) -> Dict[str, tuple]:
    """Mean and CI half-width for each KPI across replications."""
    return {
        "average_wait": mean_ci(series(results, lambda r: r["average_wait"]), confidence),
        "average_min_wait": mean_ci(series(results, lambda r: r["average_min_wait"]), confidence),
        "max_waiting_time": mean_ci(series(results, lambda r: r["max_waiting_time"]), confidence),
        "car_count_joining": mean_ci(series(results, lambda r: r["car_count_joining"]), confidence),
        "car_count_rejected": mean_ci(series(results, lambda r: r["car_count_rejected"]), confidence),
        "car_count_total": mean_ci(series(results, lambda r: r["car_count_total"]), confidence),
        "rejection_rate": mean_ci(series(results, lambda r: r["rejection_rate"] * 100.0), confidence),
    }

def main(argv: Optional[List[str]] = None):
    """Entry point: drive all scenarios, replications, and report KPIs."""
    p = argparse.ArgumentParser(description="Run car wash scenarios with replications")
    p.add_argument("--config", type=str, default=None)
    p.add_argument("--replications", type=int, default=None)
    p.add_argument("--scenario", action="append", default=None, help="limit to named scenario(s)")
    p.add_argument("--no-plots", action="store_true")
    args = p.parse_args(argv)

    cfg = load_cfg(args.config)
    exp_cfg = cfg.get("experiments", {}) or {}
    replications = max(1, int(args.replications or exp_cfg.get("replications", 1)))
    confidence = float(exp_cfg.get("confidence_level", 0.95))
    interval = int(exp_cfg.get("occupancy_interval_minutes", 10))
    out_dir = exp_cfg.get("output_dir")
    if out_dir and not os.path.isabs(out_dir):
        out_dir = os.path.join(ROOT, out_dir)
    level_pct = confidence * 100.0
    default_seed = cfg.get("sim", {}).get("seed") or 0

    scenarios = SCENARIOS
    if args.scenario:
        known = {s["name"]: s for s in SCENARIOS}
        for name in args.scenario:
            if name not in known:
                print(f"[warn] unknown scenario: {name}")
        scenarios = [known[n] for n in args.scenario if n in known]

    for sc in scenarios:
        sc_cfg = apply_overrides(cfg, sc["overrides"])
        scenario_seed = sc_cfg.get("sim", {}).get("seed") or default_seed
        results = run_replications(sc_cfg, replications, scenario_seed, track_timeline=not args.no_plots)
        kpi = summarize(results, confidence)
        sim_cfg = SimulationConfig.from_dict(sc_cfg.get("sim"))

        print(f"Scenario: {sc['name']} (replications={replications}, {level_pct:.1f}% CI, "
              f"seeds {scenario_seed}-{scenario_seed + replications - 1})")
        print(f"  Queue capacity {sim_cfg.queue_capacity}, wash {sim_cfg.car_wash_duration} min, "
              f"arrivals every <{sim_cfg.arrival_interval} min, {sim_cfg.simulation_length} min simulated")
        print(f"  Avg wait: {kpi['average_wait'][0]:.2f} ± {kpi['average_wait'][1]:.2f} min")
        print(f"  Avg min. wait: {kpi['average_min_wait'][0]:.2f} ± {kpi['average_min_wait'][1]:.2f} min")
        print(f"  Max wait: {kpi['max_waiting_time'][0]:.2f} ± {kpi['max_waiting_time'][1]:.2f} min")
        print(f"  Cars admitted: {kpi['car_count_joining'][0]:.1f} ± {kpi['car_count_joining'][1]:.1f}")
        print(f"  Cars rejected: {kpi['car_count_rejected'][0]:.1f} ± {kpi['car_count_rejected'][1]:.1f}")
        print(f"  Total cars: {kpi['car_count_total'][0]:.1f} ± {kpi['car_count_total'][1]:.1f}")
        print(f"  Rejection rate: {kpi['rejection_rate'][0]:.1f}% ± {kpi['rejection_rate'][1]:.1f}%")
        if not args.no_plots:
            occupancy = aggregate_occupancy(results, interval)
            plot_path = plot_occupancy(occupancy, sim_cfg.queue_capacity, sc["name"], out_dir)
            if plot_path:
                print(f"  Occupancy plot saved to: {plot_path}")
        print("-")

    # Optional CRN comparison between two named scenarios using common random numbers
    crn_pairs = exp_cfg.get("crn_compare")
    if crn_pairs:
        sc_index = {s["name"]: s for s in SCENARIOS}
        for pair in crn_pairs:
            if len(pair) != 2:
                print(f"[warn] skipping CRN entry (needs 2 names): {pair}")
                continue
            sc_a = sc_index.get(pair[0])
            sc_b = sc_index.get(pair[1])
            if sc_a and sc_b:
                print(f"\nCRN Comparison: {sc_a['name']} vs {sc_b['name']} (replications={replications}, seeds shared)")
                run_crn(cfg, sc_a, sc_b, replications, default_seed, confidence)
            else:
                print(f"[warn] CRN pair not found: {pair}")

if __name__ == "__main__":
    main()
