"""
Tests for the plotting helpers.
"""

import matplotlib.pyplot as plt
import numpy as np

from seismo1d.plotting import plot_medium, plot_seismograms, plot_snapshot, plot_source_wavelet
from seismo1d.simulation import run_simulation


def test_figures_are_written(tmp_path, small_config):
    result = run_simulation(small_config)
    medium = small_config.build_medium()

    figures = [
        plot_medium(medium, result.x, output=tmp_path / "model.png"),
        plot_source_wavelet(result.time_vector, result.source_wavelet, output=tmp_path / "source.png"),
        plot_snapshot(
            result.pressure,
            result.x,
            0.1,
            receiver_indices=result.receiver_indices,
            source_index=result.source_index,
            amplitude_limit=1.0,
            output=tmp_path / "snapshots" / "last.png",
        ),
        plot_seismograms(result, output=tmp_path / "seismograms.png"),
    ]

    for name in ("model.png", "source.png", "snapshots/last.png", "seismograms.png"):
        assert (tmp_path / name).exists()
    # end for

    assert len(figures[3].axes) == 3
    assert figures[3].axes[0].get_title() == f"Receiver at {60 * result.dx:g} m"
    for fig in figures:
        plt.close(fig)
    # end for
# end def test_figures_are_written


def test_snapshot_depth_axis_points_down():
    x = np.arange(50) * 2.0
    fig = plot_snapshot(np.zeros(50), x, 0.0)
    bottom, top = fig.axes[0].get_ylim()
    assert bottom > top
    plt.close(fig)
# end def test_snapshot_depth_axis_points_down
