"""Tests for the prioritysim command line."""

import json

import pytest

from prioritysim.cli import build_parser, main


class TestCli:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.replications == 1
        assert args.config is None
        assert not args.json

    def test_single_run_prints_report(self, capsys):
        assert main(["--seed", "3", "--max-time", "50"]) == 0
        out = capsys.readouterr().out
        assert "=== SIMULATION RESULTS ===" in out
        assert "S3" in out
        assert "D2" in out

    def test_json_output(self, capsys):
        assert main(["--seed", "3", "--max-served", "20", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["served"] == 20
        assert data["stop_reason"] == "max_served"
        assert len(data["sources"]) == 3

    def test_config_file_and_overrides(self, tmp_path, capsys):
        path = tmp_path / "topology.json"
        path.write_text(json.dumps({
            "sources": [{"min_interval": 1.0, "max_interval": 2.0}],
            "devices": [{"mean_service_time": 0.5}],
            "buffer_capacity": 1,
        }))
        assert main(["--config", str(path), "--seed", "1", "--max-served", "5", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [s["name"] for s in data["sources"]] == ["S1"]
        assert data["discipline"]["buffer_capacity"] == 1

    def test_invalid_config_exits_2(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "missing.json")]) == 2
        assert "invalid configuration" in capsys.readouterr().err

    def test_replications(self, capsys):
        assert main(["--replications", "3", "--seed", "1", "--max-time", "30"]) == 0
        out = capsys.readouterr().out
        assert "Replications: 3" in out
        assert "utilization" in out

    def test_plot(self, test_output_dir, capsys):
        target = test_output_dir / "summary.png"
        assert main(["--seed", "2", "--max-time", "40", "--plot", str(target)]) == 0
        assert target.exists()

    @pytest.mark.parametrize("count", ["0", "-2"])
    def test_non_positive_replications_is_usage_error(self, count, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--replications", count])
        assert excinfo.value.code == 2
        assert "--replications must be >= 1" in capsys.readouterr().err

    def test_plot_with_replications_is_usage_error(self, test_output_dir, capsys):
        target = test_output_dir / "never.png"
        with pytest.raises(SystemExit) as excinfo:
            main(["--replications", "3", "--plot", str(target)])
        assert excinfo.value.code == 2
        assert "--plot" in capsys.readouterr().err
        assert not target.exists()

    def test_unset_flags_keep_file_values(self, tmp_path, capsys):
        path = tmp_path / "topology.json"
        path.write_text(json.dumps({
            "sources": [{"min_interval": 1.0, "max_interval": 2.0}],
            "devices": [{"mean_service_time": 0.5}],
            "buffer_capacity": 2,
            "max_served": 4,
            "seed": 8,
        }))
        assert main(["--config", str(path), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["served"] == 4
        assert data["discipline"]["buffer_capacity"] == 2
