"""
Command-line interface for running seismo1d simulations.

This module exposes a Click-based CLI that wraps the configuration loader,
the simulator, result persistence and the plotting helpers.
"""

# Imports
from __future__ import annotations

from pathlib import Path
from typing import Optional

import click
import matplotlib.pyplot as plt
from rich.console import Console
from rich.table import Table

from seismo1d.cli_wavelets import wavelets
from seismo1d.config import SimulationConfig
from seismo1d.errors import Seismo1DError
from seismo1d.modeling.discretization import DiscretizationPlan
from seismo1d.plotting import plot_medium, plot_seismograms, plot_snapshot, plot_source_wavelet
from seismo1d.simulation import load_config, run_simulation

# Shared rich console instance to keep styling consistent across commands.
console = Console()


class ClickBaseException(click.ClickException):
    """
    Convert package exceptions into Click-friendly messages.

    Click expects errors to inherit from ``click.ClickException`` to show user
    friendly output without tracebacks.
    """

    def __init__(self, exc: Exception):
        super().__init__(str(exc))
    # end def __init__

# end class ClickBaseException


def _load(config_path: Optional[Path]) -> SimulationConfig:
    try:
        return load_config(config_path)
    except (Seismo1DError, FileNotFoundError, ValueError) as exc:
        raise ClickBaseException(exc) from exc
    # end try
# end def _load


def _plan_table(config: SimulationConfig, plan: DiscretizationPlan) -> Table:
    """Summary of the derived discretization."""
    table = Table(title="Discretization")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", justify="right")
    table.add_column("Unit")

    table.add_row("nx", str(plan.nx), "")
    table.add_row("dx", f"{plan.dx:.6g}", "m")
    table.add_row("dt", f"{plan.dt:.6g}", "s")
    table.add_row("nt", str(plan.nt), "")
    table.add_row("Courant number", f"{plan.courant:.4g}", "")
    table.add_row("Model size", f"{plan.model_length:.6g}", "m")
    table.add_row("Points per minimum wavelength", f"{plan.points_per_wavelength:.4g}", "")
    table.add_row("Source", f"{config.source_index} ({config.source_index * plan.dx:g} m)", "")
    for i, receiver in enumerate(config.receiver_indices):
        table.add_row(f"Receiver {i + 1}", f"{receiver} ({receiver * plan.dx:g} m)", "")
    # end for
    return table
# end def _plan_table


@click.group(help="Command-line interface for 1D acoustic finite-difference modelling.")
def cli() -> None:
    """
    Top-level Click group used as the entry point for all subcommands.
    """
# end def cli

# Add the wavelets command group to the main CLI
cli.add_command(wavelets)


@cli.command("init-config", help="Write the reference configuration to a YAML file.")
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False))
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
def init_config(path: Path, force: bool) -> None:
    """
    Write the default two-layer configuration.

    Args:
        path: Destination YAML file.
        force: Overwrite the file if it exists.
    """
    if path.exists() and not force:
        raise click.ClickException(f"{path} already exists; use --force to overwrite it.")
    # end if
    SimulationConfig().to_yaml(path)
    console.print(f"[green]Configuration written to[/] {path}")
# end def init_config


@cli.command(help="Show the discretization derived from a configuration.")
@click.argument("config_path", required=False, type=click.Path(path_type=Path, dir_okay=False))
def plan(config_path: Optional[Path]) -> None:
    """
    Print dx, dt, nt and the acquisition geometry.

    Args:
        config_path: YAML configuration; the reference configuration when omitted.
    """
    config = _load(config_path)
    try:
        simulator = config.build_simulator()
    except (Seismo1DError, ValueError) as exc:
        raise ClickBaseException(exc) from exc
    # end try
    console.print(_plan_table(config, simulator.plan))
# end def plan


@cli.command(help="Run a simulation and save the seismograms.")
@click.argument("config_path", required=False, type=click.Path(path_type=Path, dir_okay=False))
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path, dir_okay=False),
    default=Path("seismograms.mat"),
    show_default=True,
    help="Result file.",
)
@click.option(
    "--format", "result_format",
    type=click.Choice(["mat", "numpy"]),
    default="mat",
    show_default=True,
    help="Result file format.",
)
@click.option(
    "--plot-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory for the model, source and seismogram figures.",
)
@click.option("--snapshots", is_flag=True, help="Also save a figure for every wavefield snapshot (needs --plot-dir).")
@click.option("--snapshot-interval", type=int, default=None, help="Override the snapshot cadence in time steps.")
@click.option("--quiet", "-q", is_flag=True, help="Do not print progress information.")
def simulate(
        config_path: Optional[Path],
        output: Path,
        result_format: str,
        plot_dir: Optional[Path],
        snapshots: bool,
        snapshot_interval: Optional[int],
        quiet: bool,
) -> None:
    """
    Run the configured experiment.

    Args:
        config_path: YAML configuration; the reference configuration when omitted.
        output: Destination of the result record.
        result_format: ``mat`` or ``numpy``.
        plot_dir: Directory receiving figures.
        snapshots: Save snapshot figures as well.
        snapshot_interval: Snapshot cadence override.
        quiet: Suppress console output.
    """
    config = _load(config_path)
    if snapshot_interval is not None:
        try:
            config = SimulationConfig(**{**config.model_dump(), "snapshot_interval": snapshot_interval})
        except (Seismo1DError, ValueError) as exc:
            raise ClickBaseException(exc) from exc
        # end try
    # end if

    try:
        simulator = config.build_simulator()
    except (Seismo1DError, ValueError) as exc:
        raise ClickBaseException(exc) from exc
    # end try

    plan_ = simulator.plan
    if not quiet:
        console.print(_plan_table(config, plan_))
    # end if

    callback = None
    if plot_dir is not None and snapshots:
        snapshot_dir = Path(plot_dir) / "snapshots"
        amplitude = abs(config.q0) if config.q0 != 0 else 1.0

        def callback(pressure, velocity, time_step_index, current_time):
            fig = plot_snapshot(
                pressure,
                plan_.x,
                current_time,
                receiver_indices=config.receiver_indices,
                source_index=config.source_index,
                amplitude_scale=2.0 * config.c2,
                amplitude_limit=amplitude,
                output=snapshot_dir / f"snapshot_{time_step_index:06d}.png",
            )
            plt.close(fig)
        # end def callback
    # end if

    try:
        result = run_simulation(config, callback=callback, progress=not quiet, log=not quiet)
    except (Seismo1DError, ValueError) as exc:
        raise ClickBaseException(exc) from exc
    # end try

    saved = result.save(output, format=result_format)
    if not quiet:
        console.print(f"[green]Seismograms saved to[/] {saved}")
    # end if

    if plot_dir is not None:
        plot_dir = Path(plot_dir)
        figures = [
            plot_medium(simulator.medium, plan_.x, output=plot_dir / "model.png"),
            plot_source_wavelet(result.time_vector, result.source_wavelet, output=plot_dir / "source.png"),
            plot_seismograms(result, output=plot_dir / "seismograms.png"),
        ]
        for fig in figures:
            plt.close(fig)
        # end for
        if not quiet:
            console.print(f"[green]Figures saved to[/] {plot_dir}")
        # end if
    # end if
# end def simulate


if __name__ == "__main__":
    cli()
# end if
