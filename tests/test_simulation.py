"""
Tests for the car wash event loop.

The hand-traced scenario (cars every tick, capacity 4, 3-minute washes,
20 ticks) pins down the exact admission/rejection pattern and the wait
arithmetic; the remaining tests check invariants that must hold for any
configuration.
"""

import pytest

from carwash import CarWashSimulator, ConfigError, FixedArrivals, run_one_day


def test_zero_offsets_exact_trace(zero_offset_sim):
    stats = zero_offset_sim.run()

    assert stats.car_count_total == 20
    assert stats.car_count_joining == 11
    assert stats.car_count_rejected == 9
    # Waits: 3, 2, 4, 6, 8, 10 then 11 for every later admission
    assert stats.waiting_time_sum == 88
    assert stats.average_wait == pytest.approx(8.0)
    assert stats.max_waiting_time == 11
    # Only the cars at ticks 0 and 1 found the line empty (3 + 2)
    assert stats.min_waiting_time_sum == 5
    assert stats.average_min_wait == pytest.approx(5 / 11)
    # Washes start at 0, 3, 6, ..., 18
    assert stats.washes_started == 7


def test_zero_offsets_first_rejection_and_wash_schedule(zero_offset_sim):
    timeline = zero_offset_sim.run().time_series
    by_tick = {pt["time"]: pt for pt in timeline}

    # The line fills at tick 5; the first car turned away arrives at tick 6
    assert by_tick[5]["queue_size"] == 4
    assert by_tick[5]["car_count_rejected"] == 0
    assert by_tick[6]["car_count_rejected"] == 1

    # time_for_next_wash moves only when a wash starts
    assert [by_tick[t]["time_for_next_wash"] for t in range(8)] == [3, 3, 3, 6, 6, 6, 9, 9]


def test_zero_offsets_arrive_every_tick(zero_offset_sim):
    timeline = zero_offset_sim.run().time_series
    assert [pt["next_car_at"] for pt in timeline] == list(range(1, 21))


def test_idle_bay_gives_zero_wait():
    # A car every 11 ticks; each wash is long finished before the next car
    sim = CarWashSimulator(3, 20, 4, 50, arrivals=FixedArrivals([10]))
    stats = sim.run()
    assert stats.car_count_total == 4  # ticks 10, 21, 32, 43
    assert stats.car_count_joining == 4
    assert stats.max_waiting_time == 0
    assert stats.average_wait == 0.0
    assert stats.average_min_wait == 0.0
    assert stats.washes_started == 4


def test_car_at_tick_zero_waits_out_initial_window():
    sim = CarWashSimulator(3, 5, 4, 1, arrivals=FixedArrivals([0]))
    stats = sim.run()
    assert stats.car_count_joining == 1
    assert stats.max_waiting_time == 3
    assert stats.average_min_wait == pytest.approx(3.0)


def test_capacity_one_every_tick_rejections_dominate():
    sim = CarWashSimulator(car_wash_duration=3, arrival_interval=1, queue_capacity=1, simulation_length=100)
    stats = sim.run()
    assert stats.car_count_total == 100
    assert stats.car_count_joining == 34
    assert stats.car_count_rejected == 66
    assert stats.car_count_rejected > stats.car_count_joining


def test_huge_capacity_never_rejects():
    sim = CarWashSimulator(car_wash_duration=5, arrival_interval=2, queue_capacity=1000,
                           simulation_length=720, seed=9)
    stats = sim.run()
    assert stats.car_count_rejected == 0
    assert stats.car_count_total == stats.car_count_joining > 0


def test_zero_length_run_is_empty():
    sim = CarWashSimulator(simulation_length=0, seed=1)
    stats = sim.run()
    assert stats.car_count_total == 0
    assert stats.car_count_joining == 0
    assert stats.car_count_rejected == 0
    assert stats.average_wait == 0.0
    assert stats.average_min_wait == 0.0
    assert stats.max_waiting_time == 0
    assert "no cars admitted" in sim.report()


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_invariants_hold_every_tick(seed):
    sim = CarWashSimulator(car_wash_duration=4, arrival_interval=3, queue_capacity=3,
                           simulation_length=500, seed=seed, track_timeline=True)
    stats = sim.run()
    timeline = stats.time_series
    assert len(timeline) == 500
    for pt in timeline:
        assert pt["car_count_total"] == pt["car_count_joining"] + pt["car_count_rejected"]
        assert 0 <= pt["queue_size"] <= 3
    assert stats.car_count_total == stats.car_count_joining + stats.car_count_rejected


def test_next_arrival_strictly_increasing():
    sim = CarWashSimulator(car_wash_duration=2, arrival_interval=4, queue_capacity=2,
                           simulation_length=300, seed=17, track_timeline=True)
    timeline = sim.run().time_series
    scheduled = []
    for pt in timeline:
        if not scheduled or pt["next_car_at"] != scheduled[-1]:
            scheduled.append(pt["next_car_at"])
    assert all(b > a for a, b in zip(scheduled, scheduled[1:]))
    # An arrival always schedules the next one in the future
    for pt in timeline:
        assert pt["next_car_at"] > pt["time"]


def test_injected_offsets_are_reproducible():
    def make():
        return CarWashSimulator(3, 5, 2, 200, arrivals=FixedArrivals([2, 0, 4, 1, 0]), track_timeline=True)

    first = make().run().summary()
    second = make().run().summary()
    assert first == second


def test_seeded_runs_repeat_and_do_not_leak_state():
    sim = CarWashSimulator(seed=123)
    first = sim.run()
    second = sim.run()
    assert first is not second
    assert first.summary() == second.summary()
    assert sim.stats is second


def test_accessors_reflect_last_run(zero_offset_sim):
    zero_offset_sim.run()
    assert zero_offset_sim.car_count_total == 20
    assert zero_offset_sim.car_count_joining == 11
    assert zero_offset_sim.car_count_rejected == 9
    assert zero_offset_sim.max_waiting_time == 11
    assert zero_offset_sim.average_wait == pytest.approx(8.0)
    assert zero_offset_sim.average_min_wait == pytest.approx(5 / 11)


def test_defaults():
    sim = CarWashSimulator()
    assert sim.config.car_wash_duration == 3
    assert sim.config.arrival_interval == 5
    assert sim.config.queue_capacity == 4
    assert sim.config.simulation_length == 720
    # Nothing has run yet
    assert sim.car_count_total == 0


@pytest.mark.parametrize("kwargs", [
    {"car_wash_duration": 0},
    {"arrival_interval": 0},
    {"queue_capacity": 0},
    {"simulation_length": -1},
    {"queue_capacity": -2},
])
def test_bad_parameters_rejected(kwargs):
    with pytest.raises(ConfigError):
        CarWashSimulator(**kwargs)


def test_run_one_day_returns_summary(base_cfg):
    res = run_one_day(base_cfg)
    assert res["car_count_total"] == res["car_count_joining"] + res["car_count_rejected"]
    assert res["time_series"] == []
    assert run_one_day(base_cfg) == res
