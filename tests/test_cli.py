"""
Tests for the command-line interface.
"""

from pathlib import Path

import numpy as np
import yaml
from click.testing import CliRunner

from seismo1d.cli import cli
from seismo1d.config import SimulationConfig
from seismo1d.modeling.results import load_result


def _write_config(path, data):
    with open(path, "w") as f:
        yaml.safe_dump(data, f)
    # end with
    return path
# end def _write_config


def test_init_config_writes_reference_configuration():
    runner = CliRunner()
    with runner.isolated_filesystem():
        result = runner.invoke(cli, ["init-config", "config.yaml"])
        assert result.exit_code == 0, result.output
        assert SimulationConfig.from_yaml("config.yaml").model_dump() == SimulationConfig().model_dump()

        again = runner.invoke(cli, ["init-config", "config.yaml"])
        assert again.exit_code != 0
        assert "already exists" in again.output

        forced = runner.invoke(cli, ["init-config", "config.yaml", "--force"])
        assert forced.exit_code == 0
    # end with
# end def test_init_config_writes_reference_configuration


def test_plan_prints_discretization(small_config_dict):
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config("config.yaml", small_config_dict)
        result = runner.invoke(cli, ["plan", "config.yaml"])
        assert result.exit_code == 0, result.output
        assert "Discretization" in result.output
        assert "2.5" in result.output
        assert "Receiver 3" in result.output
    # end with
# end def test_plan_prints_discretization


def test_simulate_saves_results_and_figures(small_config_dict):
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config("config.yaml", small_config_dict)
        result = runner.invoke(
            cli,
            [
                "simulate", "config.yaml",
                "--output", "out/seismograms.npz",
                "--format", "numpy",
                "--plot-dir", "figures",
                "--snapshots",
                "--snapshot-interval", "40",
                "--quiet",
            ],
        )
        assert result.exit_code == 0, result.output

        loaded = load_result("out/seismograms.npz")
        assert loaded.seismogram.shape[0] == 3
        assert np.any(loaded.seismogram != 0.0)

        for name in ("model.png", "source.png", "seismograms.png"):
            assert (Path("figures") / name).exists()
        # end for
        snapshots = sorted(Path("figures/snapshots").glob("snapshot_*.png"))
        assert [p.name for p in snapshots] == ["snapshot_000040.png", "snapshot_000080.png"]
    # end with
# end def test_simulate_saves_results_and_figures


def test_simulate_default_mat_output(small_config_dict):
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config("config.yaml", small_config_dict)
        result = runner.invoke(cli, ["simulate", "config.yaml"])
        assert result.exit_code == 0, result.output
        assert Path("seismograms.mat").exists()
        assert "Seismograms saved to" in result.output
    # end with
# end def test_simulate_default_mat_output


def test_invalid_configuration_is_reported(small_config_dict):
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config("config.yaml", {**small_config_dict, "c2": 1.5})
        result = runner.invoke(cli, ["simulate", "config.yaml", "--quiet"])
        assert result.exit_code != 0
        assert "c2" in result.output
        assert not Path("seismograms.mat").exists()

        missing = runner.invoke(cli, ["plan", "missing.yaml"])
        assert missing.exit_code != 0
        assert "not found" in missing.output
    # end with
# end def test_invalid_configuration_is_reported


def test_ricker_wavelet_command():
    runner = CliRunner()
    with runner.isolated_filesystem():
        result = runner.invoke(
            cli,
            [
                "wavelets", "ricker-wavelet",
                "--frequency", "25.0",
                "--time-step", "0.001",
                "--num-samples", "200",
                "--output", "ricker.png",
                "--save-data", "ricker.npz",
            ],
        )
        assert result.exit_code == 0, result.output
        assert Path("ricker.png").exists()

        data = np.load("ricker.npz")
        assert data["wavelet"].shape == (200,)
        assert np.argmax(data["wavelet"]) == 60

        bad = runner.invoke(
            cli,
            ["wavelets", "ricker-wavelet", "-f", "0", "-dt", "0.001", "-n", "10", "-o", "bad.png"],
        )
        assert bad.exit_code != 0
    # end with
# end def test_ricker_wavelet_command


def test_negative_grid_size_is_reported(small_config_dict):
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config("config.yaml", {**small_config_dict, "nx": -1})
        for command in (["plan", "config.yaml"], ["simulate", "config.yaml", "--quiet"]):
            result = runner.invoke(cli, command)
            assert result.exit_code == 1
            assert isinstance(result.exception, SystemExit)
            assert "nx" in result.output
        # end for
    # end with
# end def test_negative_grid_size_is_reported
