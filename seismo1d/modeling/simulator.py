"""
1D Acoustic Finite-Difference Simulator.

This module marches the first-order velocity-pressure acoustic equations

    rho dv/dt = -dp/dx
    dp/dt     = -lambda dv/dx

in time on a staggered grid, with fourth-order spatial derivatives and the
staggered fourth-order Adams-Bashforth integrator. Each time step injects the
source, updates the particle velocity, updates the pressure from the freshly
updated velocity and records the pressure at the receivers.
"""

from __future__ import annotations

import time
from typing import Callable, List, Optional, Sequence

import numpy as np
from rich.console import Console

from ..errors import ConfigurationError, NumericalDivergence
from .discretization import DiscretizationPlan
from .integrator import AdamsBashforthIntegrator
from .medium import MediumModel
from .results import SimulationResult
from .stencil import INTERIOR_MARGIN, FiniteDifferenceStencil
from .wavelets import RickerWavelet


console = Console()

# Called as callback(pressure, velocity, time_step_index, time)
SnapshotCallback = Callable[[np.ndarray, np.ndarray, int, float], None]

DEFAULT_SNAPSHOT_INTERVAL = 20


class WaveField:
    """
    Particle velocity and pressure of a run.

    Both fields start at zero and are updated in place by the simulator that
    owns them.

    Args:
        nx (int): Number of grid points.
    """

    def __init__(self, nx: int):
        self.velocity = np.zeros(nx, dtype=np.float64)
        self.pressure = np.zeros(nx, dtype=np.float64)
    # end def __init__

    @property
    def nx(self) -> int:
        return int(self.pressure.size)
    # end def nx

    def max_pressure(self) -> float:
        return float(np.max(np.abs(self.pressure)))
    # end def max_pressure

# end class WaveField


class Simulator:
    """
    Time-stepping driver of the staggered-grid scheme.

    Args:
        medium (MediumModel): Velocity and density of every grid point.
        plan (DiscretizationPlan): Derived ``dx``, ``dt`` and ``nt``.
        source_index (int): Grid index of the point source.
        receiver_indices (Sequence[int]): Grid indices of the receivers.
        wavelet (RickerWavelet, optional): Source-time function. Defaults to a
            unit Ricker wavelet at the plan's centre frequency.

    Raises:
        ConfigurationError: If the medium and the plan disagree on ``nx`` or a
            source or receiver lies outside the updated interior
            ``5 <= index < nx - 5``.
    """

    def __init__(
            self,
            medium: MediumModel,
            plan: DiscretizationPlan,
            source_index: int,
            receiver_indices: Sequence[int],
            wavelet: Optional[RickerWavelet] = None,
    ):
        if medium.nx != plan.nx:
            raise ConfigurationError(
                "nx", plan.nx, f"discretization plan must match the medium size ({medium.nx})"
            )
        # end if

        self.medium = medium
        self.plan = plan
        self.source_index = self._check_position("source_index", source_index)

        if len(receiver_indices) == 0:
            raise ConfigurationError("receiver_indices", list(receiver_indices), "at least one receiver is required")
        # end if
        self.receiver_indices = tuple(
            self._check_position(f"receiver_indices[{i}]", index)
            for i, index in enumerate(receiver_indices)
        )

        self.wavelet = wavelet if wavelet is not None else RickerWavelet(plan.f0)
        self.stencil = FiniteDifferenceStencil(plan.nx, plan.dx)
    # end def __init__

    def _check_position(self, name: str, index: int) -> int:
        """Sources and receivers must sit on updated grid points."""
        nx = self.plan.nx
        if int(index) != index or not INTERIOR_MARGIN <= index < nx - INTERIOR_MARGIN:
            raise ConfigurationError(
                name, index, f"must be an integer in [{INTERIOR_MARGIN}, {nx - INTERIOR_MARGIN})"
            )
        # end if
        return int(index)
    # end def _check_position

    def simulate(
            self,
            callback: Optional[SnapshotCallback] = None,
            snapshot_interval: int = DEFAULT_SNAPSHOT_INTERVAL,
            store_wavefields: bool = False,
            divergence_threshold: Optional[float] = None,
            log: bool = False,
    ) -> SimulationResult:
        """
        Run the simulation over every time step of the plan.

        Steps ``n = 1 .. nt - 2`` are computed; the seismogram samples at
        ``n = 0`` and ``n = nt - 1`` stay zero.

        Args:
            callback (callable, optional): Called every ``snapshot_interval`` steps with
                copies of the pressure and velocity fields, the step index and the time.
            snapshot_interval (int, optional): Cadence of snapshots in time steps.
                Defaults to 20.
            store_wavefields (bool, optional): Keep every pressure snapshot in the result.
            divergence_threshold (float, optional): Abort with ``NumericalDivergence``
                when ``max |p|`` exceeds this value or becomes non-finite.
            log (bool, optional): Print the discretization and timing information.

        Returns:
            SimulationResult: Seismograms and run metadata.
        """
        if snapshot_interval <= 0:
            raise ConfigurationError("snapshot_interval", snapshot_interval, "must be a positive number of steps")
        # end if

        if divergence_threshold is not None and not divergence_threshold > 0:
            raise ConfigurationError("divergence_threshold", divergence_threshold, "must be positive")
        # end if

        plan = self.plan
        nx, nt, dt = plan.nx, plan.nt, plan.dt

        if log:
            console.print(f"[green]Medium:[/] {self.medium}")
            plan.describe()
        # end if

        # Precomputed once: source samples and material coefficients
        source_wavelet, time_vector = self.wavelet.generate(dt, nt)
        buoyancy = self.medium.buoyancy_profile
        lame = self.medium.lame_profile

        # Run state, exclusively owned by this call
        wavefield = WaveField(nx)
        velocity_integrator = AdamsBashforthIntegrator(nx, self.stencil.interior)
        pressure_integrator = AdamsBashforthIntegrator(nx, self.stencil.interior)
        pressure_derivative = np.zeros(nx, dtype=np.float64)
        velocity_derivative = np.zeros(nx, dtype=np.float64)

        seismogram = np.zeros((len(self.receiver_indices), nt), dtype=np.float64)
        receivers = np.asarray(self.receiver_indices, dtype=np.intp)

        wavefields: List[np.ndarray] = []
        snapshot_steps: List[int] = []

        if log:
            console.print("[green]Starting time stepping...[/]")
        # end if

        start = time.perf_counter()
        for n in range(1, nt - 1):
            vx = wavefield.velocity
            p = wavefield.pressure

            # Continuous point source
            p[self.source_index] += source_wavelet[n]

            # Velocity from the pressure gradient
            self.stencil.forward(p, out=pressure_derivative)
            velocity_integrator.advance(vx, pressure_derivative, buoyancy, dt)

            # Pressure from the divergence of the updated velocity
            self.stencil.backward(vx, out=velocity_derivative)
            pressure_integrator.advance(p, velocity_derivative, lame, dt)

            seismogram[:, n] = p[receivers]

            if divergence_threshold is not None:
                peak = wavefield.max_pressure()
                if not np.isfinite(peak) or peak > divergence_threshold:
                    raise NumericalDivergence(n, peak, divergence_threshold)
                # end if
            # end if

            if n % snapshot_interval == 0:
                if store_wavefields:
                    wavefields.append(p.copy())
                    snapshot_steps.append(n)
                # end if
                if callback is not None:
                    callback(p.copy(), vx.copy(), n, n * dt)
                # end if
            # end if
        # end for
        elapsed = time.perf_counter() - start

        steps = max(nt - 2, 0)
        if log:
            console.print(f"[green]Finished with {steps} time steps, in {elapsed:.3f} s[/]")
            if steps > 0:
                console.print(f"[yellow]Time per time step:[/] {elapsed / steps:.3e} s (average)")
            # end if
        # end if

        return SimulationResult(
            seismogram=seismogram,
            dt=dt,
            dx=plan.dx,
            total_time=plan.total_time,
            elapsed_time=elapsed,
            nt=nt,
            source_index=self.source_index,
            receiver_indices=self.receiver_indices,
            time_vector=time_vector,
            x=plan.x,
            source_wavelet=np.array(source_wavelet),
            pressure=wavefield.pressure.copy(),
            velocity=wavefield.velocity.copy(),
            wavefields=np.array(wavefields) if store_wavefields else None,
            snapshot_steps=snapshot_steps,
        )
    # end def simulate

# end class Simulator
