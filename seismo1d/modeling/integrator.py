"""
Staggered Adams-Bashforth time integration.

Each field is advanced with a weighted combination of its current spatial
derivative and the three previous ones:

    f <- f - c * dt * (13/12 d0 - 5/24 d1 + 1/6 d2 - 1/24 d3)

The previous derivatives live in a ring buffer of four slots. Before the
buffer has been filled the missing slots read as zero, which is the cold start
of the scheme.
"""

from typing import Union

import numpy as np


# Weights of d0 (current) to d3 (oldest)
AB4_COEFFICIENTS = (13.0 / 12.0, -5.0 / 24.0, 1.0 / 6.0, -1.0 / 24.0)

# Number of derivative evaluations kept per field
HISTORY_DEPTH = 4


class DerivativeHistory:
    """
    Ring buffer holding the four most recent derivative evaluations of a field.

    Slot ages run from 0 (newest) to 3 (oldest). ``push`` overwrites the oldest
    slot and makes it the newest by moving the head, so no array is copied
    as the history ages.

    Args:
        nx (int): Length of each stored derivative.
    """

    def __init__(self, nx: int):
        self.nx = int(nx)
        self._slots = np.zeros((HISTORY_DEPTH, self.nx), dtype=np.float64)
        self._head = 0
    # end def __init__

    @property
    def depth(self) -> int:
        return HISTORY_DEPTH
    # end def depth

    def newest(self, age: int) -> np.ndarray:
        """
        Derivative stored ``age`` pushes ago (0 = most recent).

        Args:
            age (int): Age of the slot, between 0 and 3.

        Returns:
            numpy.ndarray: A view on the slot; do not modify it.
        """
        if not 0 <= age < HISTORY_DEPTH:
            raise IndexError(f"History age {age} out of range [0, {HISTORY_DEPTH})")
        # end if
        return self._slots[(self._head + age) % HISTORY_DEPTH]
    # end def newest

    def push(self, derivative: np.ndarray) -> None:
        """
        Store a derivative as the newest entry, discarding the oldest one.

        Args:
            derivative (numpy.ndarray): Derivative of length ``nx``.

        Raises:
            ValueError: If ``derivative`` is not a vector of length ``nx``.
        """
        if np.shape(derivative) != (self.nx,):
            raise ValueError(
                f"Derivative must have shape ({self.nx},), got {np.shape(derivative)}"
            )
        # end if
        self._head = (self._head - 1) % HISTORY_DEPTH
        self._slots[self._head, :] = derivative
    # end def push

    def reset(self) -> None:
        """Return to the cold-start state."""
        self._slots.fill(0.0)
        self._head = 0
    # end def reset

    def as_array(self) -> np.ndarray:
        """Copy of the history ordered from newest to oldest, shape ``(4, nx)``."""
        order = [(self._head + age) % HISTORY_DEPTH for age in range(HISTORY_DEPTH)]
        return self._slots[order].copy()
    # end def as_array

# end class DerivativeHistory


class AdamsBashforthIntegrator:
    """
    Fourth-order Adams-Bashforth update of one field.

    Args:
        nx (int): Number of grid points.
        interior (slice): Grid indices that are updated; everything else is left untouched.
    """

    def __init__(self, nx: int, interior: slice):
        self.nx = int(nx)
        self.interior = interior
        self.history = DerivativeHistory(self.nx)
    # end def __init__

    def increment(
            self,
            derivative: np.ndarray,
            coefficient: Union[float, np.ndarray],
            dt: float
    ) -> np.ndarray:
        """
        Field increment over the interior, without modifying any state.

        Args:
            derivative (numpy.ndarray): Current derivative ``d0``.
            coefficient (float or numpy.ndarray): Material coefficient, scalar or per grid point.
            dt (float): Time step.

        Returns:
            numpy.ndarray: ``c * dt * (13/12 d0 - 5/24 d1 + 1/6 d2 - 1/24 d3)`` on the interior.
        """
        k = self.interior
        w0, w1, w2, w3 = AB4_COEFFICIENTS
        combined = (
            w0 * derivative[k]
            + w1 * self.history.newest(0)[k]
            + w2 * self.history.newest(1)[k]
            + w3 * self.history.newest(2)[k]
        )
        if np.ndim(coefficient) > 0:
            coefficient = np.asarray(coefficient)[k]
        # end if
        return coefficient * dt * combined
    # end def increment

    def advance(
            self,
            field: np.ndarray,
            derivative: np.ndarray,
            coefficient: Union[float, np.ndarray],
            dt: float
    ) -> np.ndarray:
        """
        Advance ``field`` in place by one time step and rotate the history.

        The increment is subtracted, following the sign of the governing
        equations ``dv/dt = -(1/rho) dp/dx`` and ``dp/dt = -lambda dv/dx``.

        Args:
            field (numpy.ndarray): Field to update in place.
            derivative (numpy.ndarray): Spatial derivative computed for this step.
            coefficient (float or numpy.ndarray): Material coefficient.
            dt (float): Time step.

        Returns:
            numpy.ndarray: The updated field (same object).
        """
        field[self.interior] -= self.increment(derivative, coefficient, dt)
        self.history.push(derivative)
        return field
    # end def advance

    def reset(self) -> None:
        self.history.reset()
    # end def reset

# end class AdamsBashforthIntegrator
