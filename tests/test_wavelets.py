"""
Tests for the Ricker source wavelet.
"""

import numpy as np
import pytest

from seismo1d.errors import ConfigurationError
from seismo1d.modeling.wavelets import RickerWavelet, ricker


def test_ricker_formula():
    """q = q0 (1 - 2 tau^2) exp(-tau^2) with tau = pi f0 (t - 1.5/f0)."""
    f0, q0 = 10.0, 2.0
    t = np.arange(400) * 0.001
    tau = np.pi * f0 * (t - 1.5 / f0)
    expected = q0 * (1.0 - 2.0 * tau ** 2) * np.exp(-tau ** 2)

    np.testing.assert_allclose(ricker(f0, t, amplitude=q0), expected, rtol=1e-14, atol=1e-15)
# end def test_ricker_formula


def test_ricker_peak_at_delay():
    f0 = 10.0
    t = np.arange(1000) * 0.001
    wavelet = ricker(f0, t)

    assert np.argmax(wavelet) == 150
    assert wavelet[150] == pytest.approx(1.0)
    assert abs(wavelet[0]) < 1e-6
# end def test_ricker_peak_at_delay


def test_ricker_has_zero_mean():
    t = np.arange(4000) * 0.0005
    wavelet = ricker(10.0, t)
    assert abs(np.sum(wavelet) * 0.0005) < 1e-6
# end def test_ricker_has_zero_mean


def test_generate_samples_every_time_step():
    source = RickerWavelet(10.0, amplitude=3.0)
    wavelet, time_vector = source.generate(0.001, 500)

    assert wavelet.shape == (500,)
    assert time_vector.shape == (500,)
    assert time_vector[1] == pytest.approx(0.001)
    assert wavelet.max() == pytest.approx(3.0)
    np.testing.assert_allclose(wavelet, ricker(10.0, time_vector, amplitude=3.0))
# end def test_generate_samples_every_time_step


def test_generated_wavelet_is_read_only():
    wavelet, _ = RickerWavelet(10.0).generate(0.001, 100)
    with pytest.raises(ValueError):
        wavelet[0] = 1.0
    # end with
# end def test_generated_wavelet_is_read_only


def test_custom_delay():
    source = RickerWavelet(20.0, delay=0.2)
    wavelet, _ = source.generate(0.001, 400)
    assert np.argmax(wavelet) == 200
# end def test_custom_delay


@pytest.mark.parametrize("frequency", [0.0, -5.0])
def test_invalid_frequency(frequency):
    with pytest.raises(ConfigurationError):
        RickerWavelet(frequency)
    # end with
    with pytest.raises(ConfigurationError):
        ricker(frequency, np.arange(10) * 0.001)
    # end with
# end def test_invalid_frequency


def test_invalid_sampling():
    source = RickerWavelet(10.0)
    with pytest.raises(ConfigurationError):
        source.generate(0.0, 100)
    # end with
    with pytest.raises(ConfigurationError):
        source.generate(0.001, 0)
    # end with
# end def test_invalid_sampling
