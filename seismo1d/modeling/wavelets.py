"""
Source Wavelets for Seismic Modeling.

This module provides the Ricker wavelet (Mexican hat wavelet) used as the
source-time function of the finite-difference solver. The wavelet is sampled
once for every time step of a run and then read by index.
"""

from typing import Optional, Tuple

import numpy as np
from rich.console import Console

from ..errors import ConfigurationError


console = Console()


def ricker(
        frequency: float,
        time_vector: np.ndarray,
        amplitude: float = 1.0,
        delay: Optional[float] = None,
        log: bool = False,
) -> np.ndarray:
    """
    Sample a Ricker wavelet on a time vector.

    With ``tau = pi * f0 * (t - delay)`` the samples are
    ``q0 * (1 - 2 * tau**2) * exp(-tau**2)``. The default delay of
    ``1.5 / f0`` makes the wavelet start close to zero at ``t = 0``.

    Args:
        frequency (float): Central frequency of the wavelet in Hz.
        time_vector (numpy.ndarray): Sampling times in seconds.
        amplitude (float, optional): Peak amplitude ``q0``. Defaults to 1.0.
        delay (float, optional): Time of the central peak in seconds.
            Defaults to ``1.5 / frequency``.
        log (bool, optional): If True, the wavelet parameters are printed.

    Returns:
        numpy.ndarray: The wavelet samples, same length as ``time_vector``.

    Raises:
        ConfigurationError: If the frequency is not positive.

    Example:
        >>> t = np.arange(1000) * 0.001
        >>> q = ricker(10.0, t)
        >>> float(q[150])
        1.0
    """
    if not np.isfinite(frequency) or frequency <= 0:
        raise ConfigurationError("f0", frequency, "centre frequency must be positive")
    # end if

    if delay is None:
        delay = 1.5 / frequency
    # end if

    if log:
        console.print(f"[green]Generating Ricker wavelet[/]")
        console.print(f"[yellow]Frequency: [/] {frequency}")
        console.print(f"[yellow]Amplitude: [/] {amplitude}")
        console.print(f"[yellow]Delay: [/] {delay}")
        console.print(f"[yellow]Number of samples: [/] {len(time_vector)}")
    # end if

    time_vector = np.asarray(time_vector, dtype=np.float64)
    tau = np.pi * frequency * (time_vector - delay)
    tau_squared = tau ** 2

    # (1 - 2 tau^2) e^(-tau^2): negative normalised second derivative of a Gaussian
    return amplitude * (1.0 - 2.0 * tau_squared) * np.exp(-tau_squared)
# end def ricker


class RickerWavelet:
    """
    Ricker wavelet source.

    A Ricker wavelet is commonly used in seismic modeling to represent
    a seismic source. It has zero mean, a main peak and two smaller side lobes.

    Args:
        frequency (float): Central frequency of the wavelet in Hz.
        amplitude (float, optional): Peak amplitude. Defaults to 1.0.
        delay (float, optional): Time of the central peak. Defaults to ``1.5 / frequency``.
    """

    def __init__(self, frequency: float, amplitude: float = 1.0, delay: Optional[float] = None):
        if not np.isfinite(frequency) or frequency <= 0:
            raise ConfigurationError("f0", frequency, "centre frequency must be positive")
        # end if
        self.frequency = float(frequency)
        self.amplitude = float(amplitude)
        self.delay = 1.5 / self.frequency if delay is None else float(delay)
    # end def __init__

    def generate(
            self,
            time_step: float,
            num_samples: int,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Sample the wavelet at ``num_samples`` instants spaced by ``time_step``.

        The returned wavelet is read-only: it is computed once and consumed by
        random access during a run.

        Args:
            time_step (float): Sampling interval in seconds.
            num_samples (int): Number of samples, one per time step.

        Returns:
            Tuple[np.ndarray, np.ndarray]: A tuple containing:
                - wavelet (numpy.ndarray): The Ricker wavelet samples
                - time_vector (numpy.ndarray): The corresponding time values in seconds
        """
        if time_step <= 0:
            raise ConfigurationError("dt", time_step, "time step must be positive")
        # end if

        if num_samples <= 0:
            raise ConfigurationError("nt", num_samples, "number of samples must be positive")
        # end if

        time_vector = np.arange(int(num_samples), dtype=np.float64) * time_step
        wavelet = ricker(self.frequency, time_vector, amplitude=self.amplitude, delay=self.delay)
        wavelet.setflags(write=False)
        return wavelet, time_vector
    # end def generate

    def __repr__(self) -> str:
        return f"RickerWavelet(frequency={self.frequency}, amplitude={self.amplitude}, delay={self.delay})"
    # end def __repr__

# end class RickerWavelet
