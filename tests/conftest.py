import pytest

from carwash import CarWashSimulator, FixedArrivals


@pytest.fixture
def zero_offset_sim() -> CarWashSimulator:
    """
    Cars every tick (offset always 0), capacity 4, 3-minute washes, 20 ticks.
    Small enough to trace by hand.
    """
    return CarWashSimulator(
        car_wash_duration=3,
        arrival_interval=5,
        queue_capacity=4,
        simulation_length=20,
        arrivals=FixedArrivals([0]),
        track_timeline=True,
    )


@pytest.fixture
def base_cfg() -> dict:
    return {
        "sim": {
            "car_wash_duration": 3,
            "arrival_interval": 5,
            "queue_capacity": 4,
            "simulation_length": 120,
            "seed": 1,
        },
        "experiments": {
            "replications": 3,
            "confidence_level": 0.95,
        },
    }
