import json

import pytest

from carwash.__main__ import main


def test_cli_prints_report(capsys):
    assert main(["--capacity", "2", "--length", "60", "--seed", "3"]) == 0
    out = capsys.readouterr().out
    assert "C A R     W A S H" in out
    assert "Queue capacity" in out


def test_cli_json_output(capsys):
    main(["--duration", "4", "--interval", "15", "--length", "100", "--seed", "0", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["config"]["car_wash_duration"] == 4
    assert data["config"]["arrival_interval"] == 15
    res = data["results"]
    assert res["car_count_total"] == res["car_count_joining"] + res["car_count_rejected"]
    assert "time_series" not in res


def test_cli_reads_yaml_and_overrides(tmp_path, capsys):
    path = tmp_path / "cfg.yaml"
    path.write_text("sim:\n  queue_capacity: 7\n  simulation_length: 30\n  seed: 2\n")
    main(["--config", str(path), "--length", "40", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["config"]["queue_capacity"] == 7
    assert data["config"]["simulation_length"] == 40


def test_cli_rejects_bad_capacity(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--capacity", "0"])
    assert exc.value.code == 2
    assert "queue_capacity" in capsys.readouterr().err
