"""
Fourth-order staggered-grid first derivative.

Velocity and pressure live on grids shifted by half a cell. The derivative of
pressure is evaluated half a cell forward of each node and the derivative of
particle velocity half a cell backward, with the classical fourth-order
coefficients ``9/8`` and ``-1/24``.

Only the interior ``[INTERIOR_MARGIN, nx - INTERIOR_MARGIN)`` is evaluated.
The margins are not an absorbing boundary: the cells there are simply never
updated and keep their initial value.
"""

from enum import Enum
from typing import Optional

import numpy as np

from ..errors import ConfigurationError


# Stencil weights of the inner and outer point pairs
C_INNER = 9.0 / 8.0
C_OUTER = -1.0 / 24.0

# Cells excluded from the update at each edge of the grid
INTERIOR_MARGIN = 5


class Staggering(str, Enum):
    """Direction of the half-cell shift of the derivative."""
    FORWARD = "forward"
    BACKWARD = "backward"
# end class Staggering


def interior_slice(nx: int) -> slice:
    """Grid indices updated by the solver, ``slice(5, nx - 5)``."""
    return slice(INTERIOR_MARGIN, nx - INTERIOR_MARGIN)
# end def interior_slice


class FiniteDifferenceStencil:
    """
    Staggered fourth-order first derivative on a fixed grid.

    Args:
        nx (int): Number of grid points.
        dx (float): Grid spacing (m).
    """

    def __init__(self, nx: int, dx: float):
        if nx <= 2 * INTERIOR_MARGIN:
            raise ConfigurationError("nx", nx, f"must be greater than {2 * INTERIOR_MARGIN}")
        # end if

        if not np.isfinite(dx) or dx <= 0:
            raise ConfigurationError("dx", dx, "grid spacing must be positive")
        # end if

        self.nx = int(nx)
        self.dx = float(dx)
        self.inverse_dx = 1.0 / self.dx
        self.interior = interior_slice(self.nx)
    # end def __init__

    @property
    def first(self) -> int:
        """First updated index."""
        return self.interior.start
    # end def first

    @property
    def last(self) -> int:
        """Last updated index (inclusive)."""
        return self.interior.stop - 1
    # end def last

    def forward(self, field: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Forward-staggered derivative, applied to pressure.

        ``d(k) = [9/8 (f(k+1) - f(k)) - 1/24 (f(k+2) - f(k-1))] / dx``

        Args:
            field (numpy.ndarray): Field of length ``nx``.
            out (numpy.ndarray, optional): Output buffer of length ``nx``. Only the
                interior is written; a new zero array is used when omitted.

        Returns:
            numpy.ndarray: The derivative, zero outside the interior.
        """
        if out is None:
            out = np.zeros(self.nx, dtype=np.float64)
        # end if

        lo, hi = self.interior.start, self.interior.stop
        out[lo:hi] = self.inverse_dx * (
            C_INNER * (field[lo + 1:hi + 1] - field[lo:hi])
            + C_OUTER * (field[lo + 2:hi + 2] - field[lo - 1:hi - 1])
        )
        return out
    # end def forward

    def backward(self, field: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Backward-staggered derivative, applied to particle velocity.

        ``d(k) = [9/8 (f(k) - f(k-1)) - 1/24 (f(k+1) - f(k-2))] / dx``

        Args:
            field (numpy.ndarray): Field of length ``nx``.
            out (numpy.ndarray, optional): Output buffer of length ``nx``.

        Returns:
            numpy.ndarray: The derivative, zero outside the interior.
        """
        if out is None:
            out = np.zeros(self.nx, dtype=np.float64)
        # end if

        lo, hi = self.interior.start, self.interior.stop
        out[lo:hi] = self.inverse_dx * (
            C_INNER * (field[lo:hi] - field[lo - 1:hi - 1])
            + C_OUTER * (field[lo + 1:hi + 1] - field[lo - 2:hi - 2])
        )
        return out
    # end def backward

    def derivative(
            self,
            field: np.ndarray,
            staggering: Staggering,
            out: Optional[np.ndarray] = None
    ) -> np.ndarray:
        """Interior derivative in the requested staggering direction."""
        if Staggering(staggering) is Staggering.FORWARD:
            return self.forward(field, out)
        # end if
        return self.backward(field, out)
    # end def derivative

    def derivative_at(self, field: np.ndarray, k: int, staggering: Staggering) -> float:
        """
        Derivative at a single interior index.

        Args:
            field (numpy.ndarray): Field of length ``nx``.
            k (int): Grid index, must lie in the interior.
            staggering (Staggering): Direction of the half-cell shift.

        Returns:
            float: The derivative at ``k``.

        Raises:
            ConfigurationError: If ``k`` lies in one of the frozen margins.
        """
        if not self.first <= k <= self.last:
            raise ConfigurationError("k", k, f"must lie in the interior [{self.first}, {self.last}]")
        # end if

        if Staggering(staggering) is Staggering.FORWARD:
            value = C_INNER * (field[k + 1] - field[k]) + C_OUTER * (field[k + 2] - field[k - 1])
        else:
            value = C_INNER * (field[k] - field[k - 1]) + C_OUTER * (field[k + 1] - field[k - 2])
        # end if
        return float(value * self.inverse_dx)
    # end def derivative_at

# end class FiniteDifferenceStencil
