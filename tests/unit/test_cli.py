"""Tests for the command-line interface."""

import io
import json

import pytest

from spcengine.cli import build_config, build_parser, main
from spcengine.schemas import ChartType, Phase


@pytest.fixture
def data_file(tmp_path, reference_text):
    path = tmp_path / "data.txt"
    path.write_text(reference_text, encoding="utf-8")
    return path


class TestBuildConfig:
    """Test argument to ChartConfig translation."""

    def test_defaults(self):
        config = build_config(build_parser().parse_args(["data.txt"]))
        assert config.chart_type == ChartType.IMR
        assert config.phase == Phase.PHASE1
        assert config.baseline is None

    def test_xbar_r_default_subgroup_size(self):
        config = build_config(build_parser().parse_args(["x", "--chart", "xbar-r"]))
        assert config.effective_subgroup_size == 5

    def test_tunables(self):
        args = build_parser().parse_args(
            ["x", "--chart", "ewma", "--lambda", "0.25", "--L", "3", "--h", "4", "--k", "1"]
        )
        config = build_config(args)
        assert config.ewma.lambda_ == 0.25
        assert config.ewma.L == 3.0
        assert config.cusum.h == 4.0
        assert config.cusum.k == 1.0

    def test_phase2_baseline(self):
        args = build_parser().parse_args(
            ["x", "--phase", "phase2", "--mean", "10", "--sigma", "1"]
        )
        config = build_config(args)
        assert config.baseline.mean == 10.0
        assert config.baseline.sigma == 1.0


class TestMain:
    """Test the CLI entry point end to end."""

    def test_prints_json_result(self, data_file, capsys):
        exit_code = main([str(data_file), "--usl", "13", "--lsl", "7"])
        data = json.loads(capsys.readouterr().out)

        assert exit_code == 0
        assert data["chart_type"] == "imr"
        assert data["secondary"]["label"] == "Moving Range (MR)"
        assert data["capability"]["cp"] is not None

    def test_xbar_r(self, data_file, capsys):
        exit_code = main([str(data_file), "--chart", "xbar-r", "-n", "3"])
        data = json.loads(capsys.readouterr().out)

        assert exit_code == 0
        assert len(data["main"]["points"]) == 10

    def test_phase2_without_baseline_fails(self, data_file, capsys):
        exit_code = main([str(data_file), "--phase", "phase2"])
        assert exit_code == 2
        assert "Invalid configuration" in capsys.readouterr().err

    def test_unsupported_subgroup_size_fails(self, data_file, capsys):
        exit_code = main([str(data_file), "--chart", "xbar-r", "-n", "12"])
        assert exit_code == 2
        assert "between 2 and 10" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        exit_code = main([str(tmp_path / "missing.txt")])
        assert exit_code == 1
        assert "Error reading" in capsys.readouterr().err

    def test_undecodable_bytes_are_dropped(self, tmp_path, capsys):
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"10\n12\xff\n11\n13\n")

        exit_code = main([str(path)])
        data = json.loads(capsys.readouterr().out)

        assert exit_code == 0
        assert [p["value"] for p in data["main"]["points"]] == [10.0, 11.0, 13.0]

    def test_reads_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("10\n12\n11\n13\n"))
        exit_code = main(["-"])
        data = json.loads(capsys.readouterr().out)

        assert exit_code == 0
        assert data["baseline"]["mean"] == pytest.approx(11.5)
