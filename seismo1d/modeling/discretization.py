"""
Discretization planning.

The grid spacing is chosen so that the slowest wave is sampled by ``c1``
points per wavelength at the maximum frequency ``fmax = 2 * f0``; the time
step then follows from the target Courant number ``c2`` and the fastest
velocity of the medium.
"""

from __future__ import annotations

import math
from typing import Any, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator
from rich.console import Console

from ..errors import ConfigurationError, as_configuration_error
from .medium import MediumModel


console = Console()

# Smallest grid that still leaves room for the stencil margins on both sides
MIN_GRID_POINTS = 11

# Relative guard applied before flooring T / dt
_NT_ROUNDING_GUARD = 1e-9

# Rounding slack on the realised Courant number
_COURANT_TOLERANCE = 1e-9


class DiscretizationPlan(BaseModel):
    """
    Derived discretization parameters of a run.

    Instances are frozen: the plan is computed once before time stepping and
    never changes during a run. A plan built directly is held to the same
    stability and size constraints as one returned by ``plan_discretization``.

    Attributes:
        dx (float): Spatial step (m).
        dt (float): Temporal step (s).
        nx (int): Number of grid points.
        nt (int): Number of time samples over the total propagation time.
        total_time (float): Total propagation time (s).
        c1 (float): Grid points per dominant wavelength.
        c2 (float): Target Courant number.
        f0 (float): Centre frequency of the source (Hz).
        cmin (float): Lowest P-wave velocity of the medium (m/s).
        cmax (float): Highest P-wave velocity of the medium (m/s).
    """
    dx: float
    dt: float
    nx: int
    nt: int
    total_time: float
    c1: float
    c2: float
    f0: float
    cmin: float
    cmax: float

    model_config = ConfigDict(frozen=True)

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise as_configuration_error(exc, "discretization") from exc
        # end try
    # end def __init__

    @model_validator(mode="after")
    def _check_stability(self) -> "DiscretizationPlan":
        """Reject plans the explicit scheme cannot run."""
        for name in ("dx", "dt", "cmin", "cmax"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0.0:
                raise ConfigurationError(name, value, "must be a positive finite number")
            # end if
        # end for

        if not 0.0 < self.c2 <= 1.0:
            raise ConfigurationError("c2", self.c2, "Courant number must lie in (0, 1]")
        # end if

        if self.courant > 1.0 + _COURANT_TOLERANCE:
            raise ConfigurationError(
                "dt", self.dt, f"realised Courant number dt * cmax / dx = {self.courant:.6g} exceeds 1"
            )
        # end if

        if self.nx < MIN_GRID_POINTS:
            raise ConfigurationError("nx", self.nx, f"must be an integer greater than {MIN_GRID_POINTS - 1}")
        # end if

        if self.nt < 3:
            raise ConfigurationError("nt", self.nt, "at least 3 time samples are required")
        # end if
        return self
    # end def _check_stability

    @property
    def fmax(self) -> float:
        """Maximum frequency resolved by the grid."""
        return 2.0 * self.f0
    # end def fmax

    @property
    def min_wavelength(self) -> float:
        """Smallest wavelength ``cmin / fmax`` (m)."""
        return self.cmin / self.fmax
    # end def min_wavelength

    @property
    def points_per_wavelength(self) -> float:
        return self.min_wavelength / self.dx
    # end def points_per_wavelength

    @property
    def courant(self) -> float:
        """Courant number actually realised, ``dt * cmax / dx``."""
        return self.dt * self.cmax / self.dx
    # end def courant

    @property
    def model_length(self) -> float:
        """Length of the modelled domain, ``nx * dx`` (m)."""
        return self.nx * self.dx
    # end def model_length

    @property
    def x(self) -> np.ndarray:
        """Space vector, ``nx`` samples spaced by ``dx``."""
        return np.arange(self.nx, dtype=np.float64) * self.dx
    # end def x

    @property
    def t(self) -> np.ndarray:
        """Time vector, ``nt`` samples spaced by ``dt``."""
        return np.arange(self.nt, dtype=np.float64) * self.dt
    # end def t

    @classmethod
    def from_medium(
            cls,
            medium: MediumModel,
            c1: float,
            c2: float,
            total_time: float,
            f0: float,
    ) -> DiscretizationPlan:
        """
        Plan the discretization of a medium.

        Args:
            medium (MediumModel): Medium providing ``nx`` and the velocity extrema.
            c1 (float): Grid points per dominant wavelength.
            c2 (float): Target Courant number.
            total_time (float): Total propagation time (s).
            f0 (float): Centre frequency of the source (Hz).

        Returns:
            DiscretizationPlan: The derived parameters.
        """
        return plan_discretization(
            c1=c1,
            c2=c2,
            nx=medium.nx,
            total_time=total_time,
            f0=f0,
            cmin=medium.min_velocity,
            cmax=medium.max_velocity,
        )
    # end def from_medium

    def describe(self) -> None:
        """Print the plan on the console."""
        console.print(f"[yellow]Model size:[/] x: {self.model_length:g} m")
        console.print(f"[yellow]Temporal discretization:[/] {self.dt:g} s")
        console.print(f"[yellow]Spatial discretization:[/] {self.dx:g} m")
        console.print(
            f"[yellow]Number of grid points per minimum wavelength:[/] {self.points_per_wavelength:g}"
        )
        console.print(f"[yellow]Number of time samples:[/] {self.nt}")
    # end def describe

# end class DiscretizationPlan


def _require_positive(name: str, value: float) -> float:
    if not math.isfinite(value) or value <= 0.0:
        raise ConfigurationError(name, value, "must be a positive finite number")
    # end if
    return float(value)
# end def _require_positive


def plan_discretization(
        c1: float,
        c2: float,
        nx: int,
        total_time: float,
        f0: float,
        cmin: float,
        cmax: float,
        log: bool = False,
) -> DiscretizationPlan:
    """
    Derive ``dx``, ``dt`` and ``nt`` from resolution and stability targets.

    ``dx = cmin / (2 * f0 * c1)``, ``dt = dx / cmax * c2`` and
    ``nt = floor(total_time / dt)``.

    Args:
        c1 (float): Grid points per dominant wavelength, positive.
        c2 (float): Target Courant number in ``(0, 1]``.
        nx (int): Number of grid points, more than 10.
        total_time (float): Total propagation time (s), positive.
        f0 (float): Centre frequency of the source (Hz), positive.
        cmin (float): Lowest P-wave velocity of the medium (m/s).
        cmax (float): Highest P-wave velocity of the medium (m/s).
        log (bool, optional): Print the derived parameters.

    Returns:
        DiscretizationPlan: The derived parameters.

    Raises:
        ConfigurationError: If any input violates its constraint, in particular
            when ``c2 > 1``, which would make the explicit scheme unstable.

    Example:
        >>> plan = plan_discretization(20, 0.5, 2000, 10.0, 10.0, 1000.0, 1500.0)
        >>> plan.dx
        2.5
    """
    c1 = _require_positive("c1", c1)
    c2 = _require_positive("c2", c2)
    if c2 > 1.0:
        raise ConfigurationError("c2", c2, "Courant number must not exceed 1 (explicit scheme would diverge)")
    # end if

    if int(nx) != nx or nx < MIN_GRID_POINTS:
        raise ConfigurationError("nx", nx, f"must be an integer greater than {MIN_GRID_POINTS - 1}")
    # end if

    total_time = _require_positive("total_time", total_time)
    f0 = _require_positive("f0", f0)
    cmin = _require_positive("cmin", cmin)
    cmax = _require_positive("cmax", cmax)
    if cmin > cmax:
        raise ConfigurationError("cmin", cmin, f"must not exceed cmax={cmax}")
    # end if

    fmax = 2.0 * f0
    dx = cmin / (fmax * c1)
    dt = dx / cmax * c2
    nt = int(math.floor(total_time / dt * (1.0 + _NT_ROUNDING_GUARD)))

    # The first sample is the cold start and the last one is never written
    if nt < 3:
        raise ConfigurationError(
            "total_time", total_time, f"must span at least 3 time steps of dt={dt:g} s (got nt={nt})"
        )
    # end if

    plan = DiscretizationPlan(
        dx=dx,
        dt=dt,
        nx=int(nx),
        nt=nt,
        total_time=total_time,
        c1=c1,
        c2=c2,
        f0=f0,
        cmin=cmin,
        cmax=cmax,
    )

    if log:
        plan.describe()
    # end if

    return plan
# end def plan_discretization
