"""
experiments/scenarios.py

Holds scenario definitions (decision variables) to sweep during experiments.
Each scenario overrides keys of the baseline "sim" section.
"""

from __future__ import annotations

BASELINE = {
    "name": "baseline",
    "overrides": {},  # override config keys here per scenario
}

# Slow washes and sparse arrivals, as in the classroom demo run.
COURSE_DEMO = {
    "name": "course_demo",
    "overrides": {
        "sim": {
            "car_wash_duration": 4,
            "arrival_interval": 15,
            "queue_capacity": 4,
        },
    },
}

BIGGER_LOT = {
    "name": "bigger_lot",
    "overrides": {
        "sim": {
            "queue_capacity": 8,
        },
    },
}

RUSH_HOUR = {
    "name": "rush_hour",
    "overrides": {
        "sim": {
            "arrival_interval": 3,
            "queue_capacity": 6,
        },
    },
}

SCENARIOS = [BASELINE, COURSE_DEMO, BIGGER_LOT, RUSH_HOUR]
