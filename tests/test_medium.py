"""
Tests for the 1D medium model.
"""

import numpy as np
import pytest

from seismo1d.errors import ConfigurationError
from seismo1d.modeling.medium import MediumModel


def test_lame_parameter_is_density_times_velocity_squared():
    """lambda = rho * v^2 at every grid point."""
    medium = MediumModel.from_arrays([1000.0, 1500.0, 2000.0], [1.0, 1.5, 2.0])

    np.testing.assert_allclose(medium.lame_profile, [1.0e6, 3.375e6, 8.0e6])
    assert medium.lame(1) == pytest.approx(3.375e6)
    assert medium.lambda_(2) == pytest.approx(8.0e6)
    assert medium.velocity(0) == 1000.0
    assert medium.density(2) == 2.0
    assert medium.nx == 3
    assert medium.min_velocity == 1000.0
    assert medium.max_velocity == 2000.0
# end def test_lame_parameter_is_density_times_velocity_squared


def test_profiles_are_copied_and_read_only():
    velocity = np.array([1000.0, 1200.0])
    medium = MediumModel.from_arrays(velocity, [1.0, 1.0])

    velocity[0] = -1.0
    assert medium.velocity(0) == 1000.0
    assert medium.velocity_profile.dtype == np.float64

    with pytest.raises(ValueError):
        medium.velocity_profile[0] = 5.0
    # end with

    with pytest.raises(ValueError):
        medium.velocity_profile = np.ones(2)
    # end with
# end def test_profiles_are_copied_and_read_only


@pytest.mark.parametrize(
    "velocity, density, parameter",
    [
        ([1000.0, 0.0, 1000.0], [1.0, 1.0, 1.0], "velocity"),
        ([1000.0, -5.0, 1000.0], [1.0, 1.0, 1.0], "velocity"),
        ([1000.0, 1000.0, 1000.0], [1.0, -1.0, 1.0], "density"),
        ([1000.0, np.nan, 1000.0], [1.0, 1.0, 1.0], "velocity"),
    ],
)
def test_non_positive_values_are_rejected(velocity, density, parameter):
    with pytest.raises(ConfigurationError) as exc_info:
        MediumModel.from_arrays(velocity, density)
    # end with
    assert exc_info.value.parameter == parameter
# end def test_non_positive_values_are_rejected


def test_profile_lengths_must_agree():
    with pytest.raises(ConfigurationError):
        MediumModel.from_arrays([1000.0, 1000.0], [1.0, 1.0, 1.0])
    # end with

    with pytest.raises(ConfigurationError) as exc_info:
        MediumModel.from_arrays([1000.0, 1000.0], [1.0, 1.0], nx=3)
    # end with
    assert "nx=3" in str(exc_info.value)
# end def test_profile_lengths_must_agree


def test_homogeneous_medium():
    medium = MediumModel.homogeneous(50, 1200.0, 1.3)
    assert medium.nx == 50
    assert np.all(medium.velocity_profile == 1200.0)
    assert np.all(medium.density_profile == 1.3)
    np.testing.assert_allclose(medium.buoyancy_profile, 1.0 / 1.3)
# end def test_homogeneous_medium


def test_layers_fill_the_grid():
    medium = MediumModel.from_layers(10, [(4, 1000.0, 1.0), (0, 1500.0, 1.5)])
    np.testing.assert_array_equal(medium.velocity_profile, [1000.0] * 4 + [1500.0] * 6)
    np.testing.assert_array_equal(medium.density_profile, [1.0] * 4 + [1.5] * 6)

    from_mappings = MediumModel.from_layers(
        10,
        [
            {"thickness": 4, "velocity": 1000.0, "density": 1.0},
            {"thickness": 6, "velocity": 1500.0, "density": 1.5},
        ],
    )
    np.testing.assert_array_equal(from_mappings.velocity_profile, medium.velocity_profile)
# end def test_layers_fill_the_grid


@pytest.mark.parametrize(
    "layers",
    [
        [],
        [(4, 1000.0, 1.0), (4, 1500.0, 1.5)],
        [(8, 1000.0, 1.0), (4, 1500.0, 1.5)],
        [(0, 1000.0, 1.0), (0, 1500.0, 1.5)],
        [(10, 1000.0, 1.0), (0, 1500.0, 1.5)],
        [(-1, 1000.0, 1.0), (0, 1500.0, 1.5)],
    ],
)
def test_invalid_layers_are_rejected(layers):
    with pytest.raises(ConfigurationError):
        MediumModel.from_layers(10, layers)
    # end with
# end def test_invalid_layers_are_rejected


def test_accessor_index_out_of_range():
    medium = MediumModel.homogeneous(5, 1000.0, 1.0)
    with pytest.raises(IndexError):
        medium.velocity(5)
    # end with
    with pytest.raises(IndexError):
        medium.lame(-1)
    # end with
# end def test_accessor_index_out_of_range


@pytest.mark.parametrize("nx", [-1, 0, 2.5])
def test_layers_need_a_positive_grid_size(nx):
    with pytest.raises(ConfigurationError) as exc_info:
        MediumModel.from_layers(nx, [(0, 1000.0, 1.0)])
    # end with
    assert exc_info.value.parameter == "nx"
# end def test_layers_need_a_positive_grid_size
