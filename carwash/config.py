# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# config.py
# -----------------------------------------------------------------------------
# Purpose:
#   Immutable simulation parameters plus YAML loading for the car wash model.
#
# Design notes:
#   - Values are validated once in __post_init__; a bad value raises
#     ConfigError before any simulation state exists.
#   - The YAML layout mirrors config/baseline.yaml: a "sim" section holds the
#     model parameters, an "experiments" section holds harness settings.
#
# Usage:
#   from carwash.config import SimulationConfig, load_cfg
#   cfg = SimulationConfig.from_dict(load_cfg()["sim"])
# -----------------------------------------------------------------------------

from __future__ import annotations
import os
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional

import yaml

DEFAULT_CAR_WASH_DURATION = 3
DEFAULT_ARRIVAL_INTERVAL = 5
DEFAULT_QUEUE_CAPACITY = 4
DEFAULT_SIMULATION_LENGTH = 720

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_CONFIG_PATH = os.path.join(ROOT, "config", "baseline.yaml")


class ConfigError(ValueError):
    """Raised when simulation parameters are missing or out of range."""


def _check_int(name: str, value: Any, minimum: int):
    # bool is an int subclass; True as a capacity is almost certainly a typo
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")


@dataclass(frozen=True)
class SimulationConfig:
    # ticks the bay is occupied by one wash
    car_wash_duration: int = DEFAULT_CAR_WASH_DURATION
    # exclusive upper bound for the inter-arrival draw
    arrival_interval: int = DEFAULT_ARRIVAL_INTERVAL
    # cars allowed to wait at once
    queue_capacity: int = DEFAULT_QUEUE_CAPACITY
    # number of ticks simulated
    simulation_length: int = DEFAULT_SIMULATION_LENGTH
    # None -> nondeterministic arrivals
    seed: Optional[int] = None

    def __post_init__(self):
        _check_int("car_wash_duration", self.car_wash_duration, 1)
        _check_int("arrival_interval", self.arrival_interval, 1)
        _check_int("queue_capacity", self.queue_capacity, 1)
        _check_int("simulation_length", self.simulation_length, 0)
        if self.seed is not None:
            _check_int("seed", self.seed, 0)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationConfig":
        """Build a config from the "sim" section of a parsed YAML file."""
        if data is None:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown sim settings: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> dict:
        return asdict(self)


def load_cfg(path: Optional[str] = None) -> Dict:
    """Read a YAML config file (defaults to config/baseline.yaml)."""
    path = path or DEFAULT_CONFIG_PATH
    with open(path, "r") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    if "sim" not in cfg:
        raise ConfigError(f"{path}: missing 'sim' section")
    return cfg
