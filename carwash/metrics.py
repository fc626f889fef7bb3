# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# metrics.py
# -----------------------------------------------------------------------------
# Purpose:
#   Accumulate car wash KPIs during a run: waits, admissions, rejections.
#
# Design notes:
#   - Side-effect methods (note_*) are called from the event loop; finalize()
#     turns the running sums into averages once the loop ends.
#   - With no admitted cars the averages are reported as 0.0.
#   - summary() returns a JSON-serializable dict for easy tabulation.
#
# Usage:
#   M = SimulationStats(); ...; M.finalize(); M.summary()
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import Dict, List

class SimulationStats:
    def __init__(self, track_timeline: bool = False):
        self.track_timeline = track_timeline
        self.car_count_joining = 0
        self.car_count_rejected = 0
        self.car_count_total = 0
        self.waiting_time_sum = 0          # accumulated expected waits of admitted cars
        self.min_waiting_time_sum = 0      # remaining-wash time for cars that found the line empty
        self.max_waiting_time = 0
        self.average_wait = 0.0
        self.average_min_wait = 0.0
        self.washes_started = 0
        self.finalized = False
        self.time_series: List[Dict[str, int]] = []

    def note_arrival(self):
        self.car_count_total += 1

    def note_join(self, waiting_time: int, remaining_wash: int, alone: bool):
        """Record an admitted car and its expected wait."""
        if alone:
            self.min_waiting_time_sum += remaining_wash
        self.waiting_time_sum += waiting_time
        self.car_count_joining += 1
        if waiting_time > self.max_waiting_time:
            self.max_waiting_time = waiting_time

    def note_reject(self):
        self.car_count_rejected += 1

    def note_wash_start(self):
        self.washes_started += 1

    def note_tick(self, t: int, queue_size: int, next_car_at: int, time_for_next_wash: int):
        """Capture the loop state after tick t when the timeline is enabled."""
        if not self.track_timeline:
            return
        self.time_series.append({
            "time": t,
            "queue_size": queue_size,
            "next_car_at": next_car_at,
            "time_for_next_wash": time_for_next_wash,
            "car_count_total": self.car_count_total,
            "car_count_joining": self.car_count_joining,
            "car_count_rejected": self.car_count_rejected,
        })

    def finalize(self):
        if self.car_count_joining > 0:
            self.average_wait = self.waiting_time_sum / self.car_count_joining
            self.average_min_wait = self.min_waiting_time_sum / self.car_count_joining
        else:
            self.average_wait = 0.0
            self.average_min_wait = 0.0
        self.finalized = True

    @property
    def has_joins(self) -> bool:
        return self.car_count_joining > 0

    @property
    def rejection_rate(self) -> float:
        return self.car_count_rejected / self.car_count_total if self.car_count_total else 0.0

    def summary(self) -> Dict:
        return {
            "average_wait": self.average_wait,
            "average_min_wait": self.average_min_wait,
            "max_waiting_time": self.max_waiting_time,
            "car_count_joining": self.car_count_joining,
            "car_count_rejected": self.car_count_rejected,
            "car_count_total": self.car_count_total,
            "rejection_rate": self.rejection_rate,
            "washes_started": self.washes_started,
            # Per-tick trace, empty unless track_timeline was set
            "time_series": list(self.time_series),
        }
