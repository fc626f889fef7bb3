# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# simulation.py
# -----------------------------------------------------------------------------
# Purpose:
#   Simulate one car wash run: walk the tick range, admit or reject arriving
#   cars against a bounded queue, start washes when the bay frees up, and
#   return the accumulated statistics.
#
# Design notes:
#   - Every run() builds a fresh queue, accumulator and (unless one was
#     injected) arrival source, so repeated runs never share state.
#   - Replications and scenario sweeps live outside, in experiments/.
#
# Usage:
#   from carwash.simulation import CarWashSimulator, run_one_day
#   stats = CarWashSimulator(seed=7).run()
#   results = run_one_day(cfg)
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import Dict, Optional

from .arrivals import UniformArrivals, car_name
from .config import (
    DEFAULT_ARRIVAL_INTERVAL,
    DEFAULT_CAR_WASH_DURATION,
    DEFAULT_QUEUE_CAPACITY,
    DEFAULT_SIMULATION_LENGTH,
    SimulationConfig,
)
from .logging_utils import logger
from .metrics import SimulationStats
from .queues import BoundedQueue
from .report import format_report

class CarWashSimulator:
    """Single-bay car wash fed by a bounded FIFO queue.

    Parameters
    ----------
    car_wash_duration : int
        Ticks one wash occupies the bay.
    arrival_interval : int
        Exclusive upper bound of the uniform inter-arrival draw.
    queue_capacity : int
        Cars allowed to wait at once; arrivals beyond that are rejected.
    simulation_length : int
        Number of ticks to simulate.
    seed : int, optional
        Seed for the default uniform arrival source.
    arrivals : object, optional
        Anything with next_offset(bound) -> int; replaces the default source.
    track_timeline : bool
        Record per-tick queue state in stats.time_series.
    """
    def __init__(
        self,
        car_wash_duration: int = DEFAULT_CAR_WASH_DURATION,
        arrival_interval: int = DEFAULT_ARRIVAL_INTERVAL,
        queue_capacity: int = DEFAULT_QUEUE_CAPACITY,
        simulation_length: int = DEFAULT_SIMULATION_LENGTH,
        *,
        seed: Optional[int] = None,
        arrivals=None,
        track_timeline: bool = False,
    ):
        self.config = SimulationConfig(
            car_wash_duration=car_wash_duration,
            arrival_interval=arrival_interval,
            queue_capacity=queue_capacity,
            simulation_length=simulation_length,
            seed=seed,
        )
        self.arrivals = arrivals
        self.track_timeline = track_timeline
        self._stats = SimulationStats(track_timeline=track_timeline)

    @classmethod
    def from_config(cls, config: SimulationConfig, arrivals=None, track_timeline: bool = False) -> "CarWashSimulator":
        return cls(
            config.car_wash_duration,
            config.arrival_interval,
            config.queue_capacity,
            config.simulation_length,
            seed=config.seed,
            arrivals=arrivals,
            track_timeline=track_timeline,
        )

    def run(self) -> SimulationStats:
        cfg = self.config
        duration = cfg.car_wash_duration
        bound = cfg.arrival_interval
        source = self.arrivals if self.arrivals is not None else UniformArrivals(cfg.seed)

        queue = BoundedQueue(cfg.queue_capacity)
        M = SimulationStats(track_timeline=self.track_timeline)
        logger.info(
            "Running car wash: duration=%d interval<%d capacity=%d length=%d seed=%s",
            duration, bound, cfg.queue_capacity, cfg.simulation_length, cfg.seed,
        )

        next_car_at = source.next_offset(bound)  # first car may arrive at tick 0
        time_for_next_wash = 0                   # bay is free from the start
        time_wash_starts = 0

        for time_index in range(cfg.simulation_length):
            if time_index == next_car_at:
                M.note_arrival()
                name = car_name(time_index)
                # +1 keeps arrivals strictly increasing when the draw is 0
                next_car_at = time_index + source.next_offset(bound) + 1

                if queue.arrival(name):
                    # Time left on a wash in progress; negative means the bay is idle
                    remaining = max(0, time_wash_starts + duration - time_index)
                    waiting_time = (queue.size - 1) * duration + remaining
                    M.note_join(waiting_time, remaining, alone=queue.size == 1)
                    logger.debug("t=%d %s joined (queue=%d, wait=%d)", time_index, name, queue.size, waiting_time)
                else:
                    M.note_reject()
                    logger.debug("t=%d %s rejected, queue full", time_index, name)

            if time_index == time_for_next_wash:
                if queue.departure():
                    time_wash_starts = time_index
                    time_for_next_wash = time_index + duration
                    M.note_wash_start()
                else:
                    # Nothing waiting: poll again next tick
                    time_for_next_wash += 1

            M.note_tick(time_index, queue.size, next_car_at, time_for_next_wash)

        M.finalize()
        self._stats = M
        logger.info(
            "Car wash finished: %d admitted, %d rejected, avg wait %.2f",
            M.car_count_joining, M.car_count_rejected, M.average_wait,
        )
        return M

    # Read-only views of the most recent run
    @property
    def stats(self) -> SimulationStats:
        return self._stats

    @property
    def average_wait(self) -> float:
        return self._stats.average_wait

    @property
    def average_min_wait(self) -> float:
        return self._stats.average_min_wait

    @property
    def max_waiting_time(self) -> int:
        return self._stats.max_waiting_time

    @property
    def car_count_joining(self) -> int:
        return self._stats.car_count_joining

    @property
    def car_count_rejected(self) -> int:
        return self._stats.car_count_rejected

    @property
    def car_count_total(self) -> int:
        return self._stats.car_count_total

    def report(self) -> str:
        return format_report(self.config, self._stats)


def run_one_day(cfg: Dict, track_timeline: bool = False) -> Dict:
    """Build a simulator from a parsed YAML dict, run it, return the summary."""
    sim_cfg = SimulationConfig.from_dict(cfg.get("sim"))
    sim = CarWashSimulator.from_config(sim_cfg, track_timeline=track_timeline)
    return sim.run().summary()
