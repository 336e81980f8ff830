"""
Shared fixtures for the seismo1d tests.
"""

import matplotlib
matplotlib.use("Agg")  # Use non-interactive backend to avoid display issues

import pytest

from seismo1d.config import LayerConfig, SimulationConfig


@pytest.fixture
def small_config():
    """Two-layer experiment small enough to run in a fraction of a second."""
    return SimulationConfig(
        c1=20.0,
        c2=0.5,
        nx=200,
        total_time=0.1,
        f0=10.0,
        q0=1.0,
        source_index=50,
        receiver_indices=[60, 120, 180],
        layers=[
            LayerConfig(thickness=100, velocity=1000.0, density=1.0),
            LayerConfig(thickness=0, velocity=1500.0, density=1.5),
        ],
        snapshot_interval=10,
    )
# end def small_config


@pytest.fixture
def small_config_dict():
    """The same experiment as plain YAML-ready data."""
    return {
        "c1": 20.0,
        "c2": 0.5,
        "nx": 200,
        "total_time": 0.1,
        "f0": 10.0,
        "q0": 1.0,
        "source_index": 50,
        "receiver_indices": [60, 120, 180],
        "layers": [
            {"thickness": 100, "velocity": 1000.0, "density": 1.0},
            {"thickness": 0, "velocity": 1500.0, "density": 1.5},
        ],
        "snapshot_interval": 10,
    }
# end def small_config_dict
