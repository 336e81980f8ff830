"""
High-level helpers to run a configured simulation.

These functions glue the configuration, the simulator and the optional
progress display together; they contain no numerical logic.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn, TimeRemainingColumn

from .config import SimulationConfig
from .modeling.results import SimulationResult
from .modeling.simulator import SnapshotCallback


console = Console()


def load_config(path: Optional[Union[str, Path]] = None) -> SimulationConfig:
    """
    Load a configuration file, or the reference configuration when ``path`` is None.

    Args:
        path: Path to a YAML configuration file.

    Returns:
        SimulationConfig: The validated configuration.
    """
    if path is None:
        return SimulationConfig()
    # end if
    return SimulationConfig.from_yaml(path)
# end def load_config


def run_simulation(
        config: SimulationConfig,
        callback: Optional[SnapshotCallback] = None,
        store_wavefields: bool = False,
        progress: bool = False,
        log: bool = False,
) -> SimulationResult:
    """
    Validate a configuration and run it to completion.

    Args:
        config (SimulationConfig): Run inputs.
        callback (callable, optional): Snapshot observer, see ``Simulator.simulate``.
        store_wavefields (bool, optional): Keep the pressure snapshots in the result.
        progress (bool, optional): Show a progress bar advanced at every snapshot.
        log (bool, optional): Print the discretization and timing information.

    Returns:
        SimulationResult: Seismograms and run metadata.

    Raises:
        ConfigurationError: If the configuration is invalid; nothing is simulated.
    """
    simulator = config.build_simulator()
    nt = simulator.plan.nt

    if not progress:
        return simulator.simulate(
            callback=callback,
            snapshot_interval=config.snapshot_interval,
            store_wavefields=store_wavefields,
            divergence_threshold=config.divergence_threshold,
            log=log,
        )
    # end if

    with Progress(
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeRemainingColumn(),
        console=console,
    ) as bar:
        task = bar.add_task("[cyan]Time stepping...", total=nt)

        def _observer(pressure, velocity, time_step_index, current_time):
            bar.update(task, completed=time_step_index)
            if callback is not None:
                callback(pressure, velocity, time_step_index, current_time)
            # end if
        # end def _observer

        result = simulator.simulate(
            callback=_observer,
            snapshot_interval=config.snapshot_interval,
            store_wavefields=store_wavefields,
            divergence_threshold=config.divergence_threshold,
            log=log,
        )
        bar.update(task, completed=nt)
    # end with

    return result
# end def run_simulation
