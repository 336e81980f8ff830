"""
Simulation configuration.

The configuration gathers every input of a run: discretization targets,
source and receiver positions and the medium profile. It is validated with
pydantic and can be read from or written to YAML.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import ConfigurationError, as_configuration_error
from .modeling.discretization import DiscretizationPlan
from .modeling.medium import MediumModel
from .modeling.simulator import DEFAULT_SNAPSHOT_INTERVAL, Simulator
from .modeling.wavelets import RickerWavelet


class LayerConfig(BaseModel):
    """
    One layer of a stratified medium.

    Attributes:
        thickness (int): Number of grid points; 0 on the last layer fills the rest.
        velocity (float): P-wave velocity (m/s).
        density (float): Density (g/cm^3).
    """
    thickness: int = Field(ge=0)
    velocity: float
    density: float
# end class LayerConfig


def default_layers(nx: int) -> List[LayerConfig]:
    """Two-layer reference medium, each layer half of the grid."""
    return [
        LayerConfig(thickness=max(nx // 2, 1), velocity=1000.0, density=1.0),
        LayerConfig(thickness=0, velocity=1500.0, density=1.5),
    ]
# end def default_layers


class SimulationConfig(BaseModel):
    """
    Inputs of a finite-difference run.

    Grid indices are zero based. The medium is described either by ``layers``
    or by explicit per-point ``velocity`` and ``density`` profiles.

    Attributes:
        c1 (float): Grid points per dominant wavelength.
        c2 (float): Target Courant number, at most 1.
        nx (int): Number of grid points.
        total_time (float): Total propagation time (s).
        f0 (float): Centre frequency of the Ricker wavelet (Hz).
        q0 (float): Peak amplitude of the Ricker wavelet.
        source_index (int): Source grid index.
        receiver_indices (List[int]): Receiver grid indices.
        layers (List[LayerConfig], optional): Stratified medium description.
        velocity (List[float], optional): Per-point P-wave velocity.
        density (List[float], optional): Per-point density.
        snapshot_interval (int): Time steps between wavefield snapshots.
        divergence_threshold (float, optional): Abort when ``max |p|`` exceeds it.
    """
    c1: float = 20.0
    c2: float = 0.5
    nx: int = 2000
    total_time: float = 10.0
    f0: float = 10.0
    q0: float = 1.0
    source_index: int = 99
    receiver_indices: List[int] = Field(default_factory=lambda: [399, 799, 1799])
    layers: Optional[List[LayerConfig]] = None
    velocity: Optional[List[float]] = None
    density: Optional[List[float]] = None
    snapshot_interval: int = DEFAULT_SNAPSHOT_INTERVAL
    divergence_threshold: Optional[float] = None

    model_config = ConfigDict(extra="forbid")

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise as_configuration_error(exc) from exc
        # end try
    # end def __init__

    @model_validator(mode="after")
    def _check_medium_description(self) -> "SimulationConfig":
        """Exactly one way of describing the medium may be used."""
        explicit = self.velocity is not None or self.density is not None
        if explicit and self.layers is not None:
            raise ConfigurationError(
                "layers", "layers and velocity/density", "describe the medium with either layers or profiles, not both"
            )
        # end if

        if explicit and (self.velocity is None or self.density is None):
            raise ConfigurationError(
                "density" if self.density is None else "velocity",
                None,
                "velocity and density profiles must be given together"
            )
        # end if

        if not explicit and self.layers is None:
            self.layers = default_layers(self.nx)
        # end if
        return self
    # end def _check_medium_description

    # region LOADING

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> SimulationConfig:
        """
        Build a configuration from a dictionary; missing keys take their defaults.

        Args:
            data: Configuration values, typically parsed from YAML.

        Returns:
            SimulationConfig: The validated configuration.
        """
        if data is None:
            data = {}
        # end if

        if not isinstance(data, dict):
            raise ConfigurationError("configuration", type(data).__name__, "must be a mapping")
        # end if
        return cls(**data)
    # end def from_dict

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> SimulationConfig:
        """
        Load a configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            SimulationConfig: The validated configuration.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigurationError: If the content is invalid.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        # end if

        with open(path, "r") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError("configuration", str(path), f"invalid YAML: {e}") from e
            # end try
        # end with

        return cls.from_dict(data)
    # end def from_yaml

    def to_yaml(self, path: Union[str, Path]) -> Path:
        """
        Write the configuration to a YAML file.

        Args:
            path: Destination file.

        Returns:
            Path: The written file.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(self.model_dump(exclude_none=True), f, sort_keys=False)
        # end with
        return path
    # end def to_yaml

    # endregion LOADING

    # region BUILDERS

    def build_medium(self) -> MediumModel:
        """Medium described by this configuration."""
        if self.layers is not None:
            return MediumModel.from_layers(
                self.nx,
                [(layer.thickness, layer.velocity, layer.density) for layer in self.layers]
            )
        # end if
        return MediumModel.from_arrays(self.velocity, self.density, nx=self.nx)
    # end def build_medium

    def build_plan(self, medium: Optional[MediumModel] = None) -> DiscretizationPlan:
        """Discretization of the configured medium."""
        if medium is None:
            medium = self.build_medium()
        # end if
        return DiscretizationPlan.from_medium(
            medium,
            c1=self.c1,
            c2=self.c2,
            total_time=self.total_time,
            f0=self.f0,
        )
    # end def build_plan

    def build_simulator(self) -> Simulator:
        """
        Validate the whole setup and return a ready simulator.

        Every ``ConfigurationError`` is raised here, before any time step.
        """
        medium = self.build_medium()
        plan = self.build_plan(medium)
        return Simulator(
            medium=medium,
            plan=plan,
            source_index=self.source_index,
            receiver_indices=self.receiver_indices,
            wavelet=RickerWavelet(self.f0, amplitude=self.q0),
        )
    # end def build_simulator

    # endregion BUILDERS

# end class SimulationConfig
