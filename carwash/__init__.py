"""
carwash package initializer.

This package contains the tick-driven car wash simulator, its bounded FIFO
queue, arrival sources, statistics collection and text report.
"""
from .config import ConfigError, SimulationConfig, load_cfg
from .queues import BoundedQueue
from .arrivals import FixedArrivals, UniformArrivals
from .metrics import SimulationStats
from .report import format_report
from .simulation import CarWashSimulator, run_one_day

__all__ = [
    "BoundedQueue", "CarWashSimulator", "ConfigError", "FixedArrivals",
    "SimulationConfig", "SimulationStats", "UniformArrivals",
    "format_report", "load_cfg", "run_one_day",
]
