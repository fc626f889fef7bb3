# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# report.py
# -----------------------------------------------------------------------------
# Purpose:
#   Render a run's configuration and results as a banner-style text report.
#
# Usage:
#   print(format_report(sim.config, sim.stats))
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import List

from .config import SimulationConfig
from .metrics import SimulationStats

RULE = "*" * 60
TITLE = "*\tC A R     W A S H     S I M U L A T O R  *"

def _row(label: str, value: str) -> str:
    return f"\t{label + ': ':.<39} {value}"

def format_report(config: SimulationConfig, stats: SimulationStats) -> str:
    no_data = "" if stats.has_joins else "  (no cars admitted)"
    lines: List[str] = [
        "",
        RULE,
        TITLE,
        RULE,
        "",
        _row("Queue capacity", f"{config.queue_capacity:5d} cars"),
        _row("Duration of wash cycle", f"{config.car_wash_duration:5d} minutes"),
        _row("Arrival interval, up to", f"{config.arrival_interval:5d} minutes"),
        _row("Length of simulation", f"{config.simulation_length:5d} minutes"),
        "",
        _row("Number of cars admitted", f"{stats.car_count_joining:5d}"),
        _row("Number of cars rejected", f"{stats.car_count_rejected:5d}"),
        _row("Total number of cars", f"{stats.car_count_total:5d}"),
        "",
        _row("Average waiting time", f"{stats.average_wait:8.2f} minutes{no_data}"),
        _row("Average min. waiting time", f"{stats.average_min_wait:8.2f} minutes{no_data}"),
        _row("Max. waiting time", f"{stats.max_waiting_time:5d} minutes"),
        "",
        RULE,
        "",
    ]
    return "\n".join(lines)
