"""
Tests for the derivative history and the Adams-Bashforth integrator.
"""

import numpy as np
import pytest

from seismo1d.modeling.integrator import (
    AB4_COEFFICIENTS,
    AdamsBashforthIntegrator,
    DerivativeHistory,
)
from seismo1d.modeling.stencil import interior_slice


def test_coefficients_sum_to_one():
    assert AB4_COEFFICIENTS == (13.0 / 12.0, -5.0 / 24.0, 1.0 / 6.0, -1.0 / 24.0)
    assert sum(AB4_COEFFICIENTS) == pytest.approx(1.0)
# end def test_coefficients_sum_to_one


def test_history_starts_at_zero():
    history = DerivativeHistory(8)
    assert history.depth == 4
    assert history.as_array().shape == (4, 8)
    assert np.all(history.as_array() == 0.0)
# end def test_history_starts_at_zero


def test_history_rotates_newest_to_oldest():
    history = DerivativeHistory(3)
    for value in range(1, 7):
        history.push(np.full(3, float(value)))
    # end for

    # Always exactly four slots: the two oldest pushes were discarded
    ages = history.as_array()[:, 0]
    np.testing.assert_array_equal(ages, [6.0, 5.0, 4.0, 3.0])
    assert history.newest(0)[0] == 6.0
    assert history.newest(3)[0] == 3.0

    with pytest.raises(IndexError):
        history.newest(4)
    # end with

    history.reset()
    assert np.all(history.as_array() == 0.0)
# end def test_history_rotates_newest_to_oldest


def test_push_copies_the_derivative():
    history = DerivativeHistory(3)
    buffer = np.ones(3)
    history.push(buffer)
    buffer[:] = 5.0
    np.testing.assert_array_equal(history.newest(0), np.ones(3))
# end def test_push_copies_the_derivative


def test_cold_start_and_constant_derivative():
    """With a constant derivative the increments ramp up to exactly c * dt * d."""
    nx, dt, coefficient = 20, 0.01, 2.0
    integrator = AdamsBashforthIntegrator(nx, interior_slice(nx))
    field = np.zeros(nx)
    derivative = np.ones(nx)

    partial_sums = np.cumsum(AB4_COEFFICIENTS)
    previous = field.copy()
    for step in range(6):
        integrator.advance(field, derivative, coefficient, dt)
        increment = previous[10] - field[10]
        weight = partial_sums[min(step, 3)]
        assert increment == pytest.approx(coefficient * dt * weight, rel=1e-12)
        previous = field.copy()
    # end for
# end def test_cold_start_and_constant_derivative


def test_advance_matches_explicit_formula():
    nx, dt = 16, 0.002
    k = interior_slice(nx)
    rng = np.random.default_rng(3)
    derivatives = [rng.normal(size=nx) for _ in range(5)]
    coefficient = rng.uniform(1.0, 2.0, size=nx)

    integrator = AdamsBashforthIntegrator(nx, k)
    field = rng.normal(size=nx)
    for derivative in derivatives[:4]:
        integrator.advance(field, derivative, coefficient, dt)
    # end for

    before = field.copy()
    d0, d1, d2, d3 = derivatives[4], derivatives[3], derivatives[2], derivatives[1]
    expected = before.copy()
    expected[k] -= coefficient[k] * dt * (13 / 12 * d0[k] - 5 / 24 * d1[k] + 1 / 6 * d2[k] - 1 / 24 * d3[k])

    returned = integrator.advance(field, d0, coefficient, dt)
    assert returned is field
    np.testing.assert_allclose(field, expected, rtol=1e-13, atol=1e-15)
    np.testing.assert_array_equal(integrator.history.newest(0), d0)
# end def test_advance_matches_explicit_formula


def test_margins_are_not_updated():
    nx = 20
    integrator = AdamsBashforthIntegrator(nx, interior_slice(nx))
    field = np.full(nx, 3.0)
    integrator.advance(field, np.ones(nx), 1.0, 0.1)

    assert np.all(field[:5] == 3.0)
    assert np.all(field[nx - 5:] == 3.0)
    assert np.all(field[5:nx - 5] < 3.0)
# end def test_margins_are_not_updated


def test_increment_does_not_change_state():
    nx = 20
    integrator = AdamsBashforthIntegrator(nx, interior_slice(nx))
    increment = integrator.increment(np.ones(nx), 1.0, 0.1)
    assert increment.shape == (nx - 10,)
    assert np.all(integrator.history.as_array() == 0.0)

    integrator.advance(np.zeros(nx), np.ones(nx), 1.0, 0.1)
    integrator.reset()
    assert np.all(integrator.history.as_array() == 0.0)
# end def test_increment_does_not_change_state


def test_push_rejects_wrong_length():
    history = DerivativeHistory(3)
    with pytest.raises(ValueError, match=r"\(3,\)"):
        history.push(np.ones(4))
    # end with

    # The rejected push leaves the history untouched
    assert np.all(history.as_array() == 0.0)
    history.push(np.ones(3))
    np.testing.assert_array_equal(history.newest(0), np.ones(3))
# end def test_push_rejects_wrong_length
