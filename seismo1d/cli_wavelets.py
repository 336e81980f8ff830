"""
Command-line interface for generating and visualizing source wavelets.
"""

# Imports
from pathlib import Path
from typing import Optional

import click
import matplotlib.pyplot as plt
import numpy as np

from seismo1d.errors import Seismo1DError
from seismo1d.modeling.wavelets import RickerWavelet
from seismo1d.plotting import plot_source_wavelet


@click.group(help="Commands for generating and visualizing wavelets.")
def wavelets() -> None:
    """
    Click group for wavelet-related commands.
    """
    pass
# end wavelets


@wavelets.command(help="Generate and visualize a Ricker wavelet.")
@click.option("--frequency", "-f", type=float, required=True, help="Central frequency of the wavelet in Hz.")
@click.option("--time-step", "-dt", type=float, required=True, help="Sampling interval in seconds.")
@click.option("--num-samples", "-n", type=int, required=True, help="Number of samples to generate.")
@click.option("--amplitude", "-a", type=float, default=1.0, show_default=True, help="Peak amplitude.")
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Path to save the plot. If not provided, the plot will be displayed interactively.",
)
@click.option(
    "--save-data",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Path to save the wavelet data as a NumPy .npz file.",
)
def ricker_wavelet(
    frequency: float,
    time_step: float,
    num_samples: int,
    amplitude: float,
    output: Optional[Path],
    save_data: Optional[Path],
) -> None:
    """
    Generate a Ricker wavelet and display or save it as a plot.

    Args:
        frequency: Central frequency of the wavelet in Hz.
        time_step: Sampling interval in seconds.
        num_samples: Number of samples to generate.
        amplitude: Peak amplitude of the wavelet.
        output: Path to save the plot. If not provided, the plot will be
            displayed interactively.
        save_data: Path to save the wavelet samples and times.
    """
    try:
        wavelet, time_vector = RickerWavelet(frequency, amplitude=amplitude).generate(time_step, num_samples)
    except (Seismo1DError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    # end try

    if save_data is not None:
        save_data = Path(save_data)
        save_data.parent.mkdir(parents=True, exist_ok=True)
        with open(save_data, "wb") as f:
            np.savez(f, wavelet=wavelet, time=time_vector)
        # end with
        click.echo(f"Wavelet data saved to {save_data}")
    # end if

    fig = plot_source_wavelet(time_vector, wavelet, output=output, show=output is None)
    if output is not None:
        click.echo(f"Plot saved to {output}")
    # end if
    plt.close(fig)
# end def ricker_wavelet
