from carwash import CarWashSimulator, FixedArrivals, SimulationConfig, SimulationStats, format_report


def test_report_lists_every_field(zero_offset_sim):
    zero_offset_sim.run()
    text = zero_offset_sim.report()
    for label in (
        "Queue capacity", "Duration of wash cycle", "Arrival interval, up to",
        "Length of simulation", "Number of cars admitted", "Number of cars rejected",
        "Total number of cars", "Average waiting time", "Average min. waiting time",
        "Max. waiting time",
    ):
        assert label in text
    assert "8.00 minutes" in text
    assert "0.45 minutes" in text
    assert "no cars admitted" not in text


def test_report_flags_empty_run():
    stats = SimulationStats()
    stats.finalize()
    text = format_report(SimulationConfig(simulation_length=0), stats)
    assert text.count("no cars admitted") == 2
    assert "0.00 minutes" in text


def test_summary_is_json_friendly():
    import json

    stats = CarWashSimulator(3, 5, 2, 60, arrivals=FixedArrivals([1])).run()
    data = json.loads(json.dumps(stats.summary()))
    assert data["car_count_total"] == stats.car_count_total
    assert 0.0 <= data["rejection_rate"] <= 1.0
