"""1D acoustic finite-difference modelling with a staggered Adams-Bashforth scheme."""

from .errors import ConfigurationError, NumericalDivergence, Seismo1DError
from .modeling import (
    DiscretizationPlan,
    MediumModel,
    RickerWavelet,
    SimulationResult,
    Simulator,
    load_result,
    plan_discretization,
    ricker,
)
from .config import LayerConfig, SimulationConfig
from .simulation import load_config, run_simulation

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "NumericalDivergence",
    "Seismo1DError",
    "DiscretizationPlan",
    "MediumModel",
    "RickerWavelet",
    "SimulationResult",
    "Simulator",
    "load_result",
    "plan_discretization",
    "ricker",
    "LayerConfig",
    "SimulationConfig",
    "load_config",
    "run_simulation",
]
