"""Numerical engine: medium, discretization, source, stencil, integrator and simulator."""

from .medium import MediumModel
from .discretization import DiscretizationPlan, plan_discretization
from .wavelets import ricker, RickerWavelet
from .stencil import (
    C_INNER,
    C_OUTER,
    INTERIOR_MARGIN,
    FiniteDifferenceStencil,
    Staggering,
    interior_slice,
)
from .integrator import AB4_COEFFICIENTS, AdamsBashforthIntegrator, DerivativeHistory
from .results import SimulationResult, load_result
from .simulator import Simulator, WaveField

__all__ = [
    # Medium and discretization
    "MediumModel",
    "DiscretizationPlan",
    "plan_discretization",

    # Source
    "ricker",
    "RickerWavelet",

    # Stencil
    "C_INNER",
    "C_OUTER",
    "INTERIOR_MARGIN",
    "FiniteDifferenceStencil",
    "Staggering",
    "interior_slice",

    # Time integration
    "AB4_COEFFICIENTS",
    "AdamsBashforthIntegrator",
    "DerivativeHistory",

    # Simulation
    "Simulator",
    "WaveField",
    "SimulationResult",
    "load_result",
]
