"""
Command line entry point: run a single car wash simulation and print the
report.

    python -m carwash --capacity 4 --duration 4 --interval 15 --seed 1
    python -m carwash --config config/baseline.yaml --json
"""

from __future__ import annotations
import argparse
import json
import logging
from typing import List, Optional

from .config import ConfigError, SimulationConfig, load_cfg
from .logging_utils import setup_logging, logger
from .simulation import CarWashSimulator

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="carwash", description="Car wash queueing simulator")
    p.add_argument("--config", type=str, default=None, help="YAML file with a 'sim' section")
    p.add_argument("--duration", type=int, default=None, help="wash cycle length (minutes)")
    p.add_argument("--interval", type=int, default=None, help="arrival interval upper bound (minutes)")
    p.add_argument("--capacity", type=int, default=None, help="queue capacity (cars)")
    p.add_argument("--length", type=int, default=None, help="simulation length (minutes)")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--json", action="store_true", help="print the summary as JSON instead of the report")
    p.add_argument("--verbose", "-v", action="store_true", help="log every arrival")
    return p


def resolve_config(args: argparse.Namespace) -> SimulationConfig:
    """Merge YAML settings (if any) with command line overrides."""
    sim_cfg = {}
    if args.config:
        sim_cfg = dict(load_cfg(args.config).get("sim") or {})
    overrides = {
        "car_wash_duration": args.duration,
        "arrival_interval": args.interval,
        "queue_capacity": args.capacity,
        "simulation_length": args.length,
        "seed": args.seed,
    }
    sim_cfg.update({k: v for k, v in overrides.items() if v is not None})
    return SimulationConfig.from_dict(sim_cfg)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        cfg = resolve_config(args)
    except (ConfigError, OSError) as exc:
        parser.error(str(exc))

    sim = CarWashSimulator.from_config(cfg)
    stats = sim.run()
    if args.json:
        summary = stats.summary()
        summary.pop("time_series")
        print(json.dumps({"config": cfg.to_dict(), "results": summary}, indent=2))
    else:
        print(sim.report())
    logger.debug("Total cars %d = %d joined + %d rejected",
                 stats.car_count_total, stats.car_count_joining, stats.car_count_rejected)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
