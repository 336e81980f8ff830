"""
Figures for 1D acoustic simulations.

Plots of the medium, the source wavelet, pressure snapshots and the recorded
seismograms. Every function returns the figure and saves it when an output
path is given; nothing here feeds back into the solver.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import matplotlib.pyplot as plt
import numpy as np

from .modeling.medium import MediumModel
from .modeling.results import SimulationResult


def _finalize(fig: plt.Figure, output: Optional[Union[str, Path]], show: bool) -> plt.Figure:
    """Save and/or display a figure."""
    fig.tight_layout()
    if output is not None:
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output, dpi=150, bbox_inches="tight")
    # end if
    if show:
        plt.show()
    # end if
    return fig
# end def _finalize


def plot_medium(
        medium: MediumModel,
        x: np.ndarray,
        output: Optional[Union[str, Path]] = None,
        show: bool = False,
) -> plt.Figure:
    """
    Plot the velocity and density profiles against depth.

    Args:
        medium (MediumModel): Medium to plot.
        x (np.ndarray): Grid coordinates (m).
        output (Path, optional): File to save the figure to.
        show (bool, optional): Display the figure.

    Returns:
        matplotlib.figure.Figure: The figure.
    """
    fig, (ax_v, ax_rho) = plt.subplots(2, 1, figsize=(10, 8))

    ax_v.plot(x, medium.velocity_profile, "r", linewidth=2)
    ax_v.set_xlabel("Depth in m")
    ax_v.set_ylabel("VP in m/s")
    ax_v.set_title("Model")

    ax_rho.plot(x, medium.density_profile, linewidth=2)
    ax_rho.set_xlabel("Depth in m")
    ax_rho.set_ylabel("Density in g/cm^3")

    return _finalize(fig, output, show)
# end def plot_medium


def plot_source_wavelet(
        time_vector: np.ndarray,
        wavelet: np.ndarray,
        output: Optional[Union[str, Path]] = None,
        show: bool = False,
) -> plt.Figure:
    """Plot the source-time function."""
    fig, ax = plt.subplots(figsize=(10, 4))
    ax.plot(time_vector, wavelet)
    ax.set_title("Source signal Ricker-Wavelet")
    ax.set_xlabel("Time in s")
    ax.set_ylabel("Amplitude")
    ax.grid(True)
    return _finalize(fig, output, show)
# end def plot_source_wavelet


def plot_snapshot(
        pressure: np.ndarray,
        x: np.ndarray,
        current_time: float,
        receiver_indices: Sequence[int] = (),
        source_index: Optional[int] = None,
        amplitude_scale: float = 1.0,
        amplitude_limit: Optional[float] = None,
        output: Optional[Union[str, Path]] = None,
        show: bool = False,
) -> plt.Figure:
    """
    Plot a pressure snapshot with depth increasing downwards.

    Args:
        pressure (np.ndarray): Pressure field.
        x (np.ndarray): Grid coordinates (m).
        current_time (float): Time of the snapshot (s).
        receiver_indices (Sequence[int]): Receivers to mark on the depth axis.
        source_index (int, optional): Source to mark on the depth axis.
        amplitude_scale (float, optional): Factor applied to the pressure before plotting.
        amplitude_limit (float, optional): Symmetric limit of the amplitude axis.
        output (Path, optional): File to save the figure to.
        show (bool, optional): Display the figure.

    Returns:
        matplotlib.figure.Figure: The figure.
    """
    dx = float(x[1] - x[0]) if len(x) > 1 else 1.0

    fig, ax = plt.subplots(figsize=(6, 8))
    ax.plot(np.asarray(pressure) * amplitude_scale, x)

    markers = [index * dx for index in receiver_indices]
    if markers:
        ax.plot(np.zeros(len(markers)), markers, ".", markersize=20, label="Receivers")
    # end if
    if source_index is not None:
        ax.plot([0.0], [source_index * dx], "r*", markersize=14, label="Source")
    # end if

    if amplitude_limit is not None:
        ax.set_xlim(-amplitude_limit, amplitude_limit)
    # end if
    ax.set_ylim(x[-1] + dx if len(x) else 1.0, 0.0)
    ax.set_ylabel("Depth in m")
    ax.set_xlabel("Amplitude")
    ax.set_title(f"Wavefield at {current_time:.3f} s")
    if markers or source_index is not None:
        ax.legend(loc="upper right")
    # end if

    return _finalize(fig, output, show)
# end def plot_snapshot


def plot_seismograms(
        result: SimulationResult,
        output: Optional[Union[str, Path]] = None,
        show: bool = False,
        figsize: Tuple[float, float] = (10, 8),
) -> plt.Figure:
    """
    Plot one trace per receiver, titled with the receiver depth.

    Args:
        result (SimulationResult): Simulation output.
        output (Path, optional): File to save the figure to.
        show (bool, optional): Display the figure.
        figsize (tuple, optional): Figure size in inches.

    Returns:
        matplotlib.figure.Figure: The figure.
    """
    n_receivers = result.n_receivers
    fig, axes = plt.subplots(n_receivers, 1, figsize=figsize, squeeze=False)

    for i, ax in enumerate(axes[:, 0]):
        ax.plot(result.time_vector, result.trace(i))
        ax.set_xlabel("Time in s")
        ax.set_ylabel("Amplitude")
        ax.set_title(f"Receiver at {result.receiver_positions[i]:g} m")
    # end for

    return _finalize(fig, output, show)
# end def plot_seismograms
