"""
One-dimensional acoustic medium.

A medium is an ordered sequence of ``nx`` grid points carrying a P-wave
velocity (m/s) and a density (g/cm^3). The first Lame parameter
``lame = density * velocity**2`` drives the pressure update of the solver.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from ..errors import ConfigurationError, as_configuration_error


# A layer is either a mapping with thickness/velocity/density keys or a tuple
LayerDescription = Union[Mapping[str, Any], Tuple[int, float, float]]


def _read_only_profile(name: str, values: Any) -> np.ndarray:
    """
    Copy a profile into a read-only float64 vector and check its values.

    Args:
        name (str): Name of the profile, used in error messages.
        values (array_like): Profile values.

    Returns:
        numpy.ndarray: Validated one-dimensional profile.
    """
    profile = np.array(values, dtype=np.float64)
    if profile.ndim != 1:
        raise ConfigurationError(name, profile.shape, "profile must be one-dimensional")
    # end if

    if profile.size == 0:
        raise ConfigurationError(name, profile.size, "profile must not be empty")
    # end if

    if not np.all(np.isfinite(profile)):
        raise ConfigurationError(name, "non-finite value", "all values must be finite")
    # end if

    bad = np.flatnonzero(profile <= 0.0)
    if bad.size > 0:
        raise ConfigurationError(
            name,
            float(profile[bad[0]]),
            f"all values must be positive (first offending grid index {int(bad[0])})"
        )
    # end if

    profile.setflags(write=False)
    return profile
# end def _read_only_profile


class MediumModel(BaseModel):
    """
    Per-grid-point P-wave velocity and density of a 1D medium.

    The profiles are copied into read-only float64 arrays; the model is frozen
    after construction.

    Attributes:
        velocity_profile (np.ndarray): P-wave velocity at every grid point (m/s).
        density_profile (np.ndarray): Density at every grid point (g/cm^3).
    """
    velocity_profile: np.ndarray
    density_profile: np.ndarray

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
    )

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise as_configuration_error(exc, "medium") from exc
        # end try
    # end def __init__

    @field_validator("velocity_profile", mode="before")
    @classmethod
    def _check_velocity(cls, value: Any) -> np.ndarray:
        return _read_only_profile("velocity", value)
    # end def _check_velocity

    @field_validator("density_profile", mode="before")
    @classmethod
    def _check_density(cls, value: Any) -> np.ndarray:
        return _read_only_profile("density", value)
    # end def _check_density

    @model_validator(mode="after")
    def _check_lengths(self) -> "MediumModel":
        """Velocity and density must describe the same grid."""
        if self.velocity_profile.size != self.density_profile.size:
            raise ConfigurationError(
                "density",
                self.density_profile.size,
                f"profile length must equal the velocity profile length ({self.velocity_profile.size})"
            )
        # end if
        return self
    # end def _check_lengths

    # region CONSTRUCTORS

    @classmethod
    def from_arrays(
            cls,
            velocity: Iterable[float],
            density: Iterable[float],
            nx: Optional[int] = None
    ) -> MediumModel:
        """
        Build a medium from explicit per-point profiles.

        Args:
            velocity (array_like): P-wave velocity at every grid point (m/s).
            density (array_like): Density at every grid point.
            nx (int, optional): Expected number of grid points. When given, both
                profiles must have exactly this length.

        Returns:
            MediumModel: The validated medium.

        Raises:
            ConfigurationError: If a value is non-positive or a length is wrong.
        """
        medium = cls(velocity_profile=velocity, density_profile=density)
        if nx is not None and medium.nx != int(nx):
            raise ConfigurationError(
                "velocity",
                medium.nx,
                f"profile length must equal nx={nx}"
            )
        # end if
        return medium
    # end def from_arrays

    @classmethod
    def homogeneous(cls, nx: int, velocity: float, density: float) -> MediumModel:
        """
        Build a medium with constant properties.

        Args:
            nx (int): Number of grid points.
            velocity (float): P-wave velocity (m/s).
            density (float): Density.

        Returns:
            MediumModel: The homogeneous medium.
        """
        if nx <= 0:
            raise ConfigurationError("nx", nx, "must be positive")
        # end if
        return cls.from_arrays(
            np.full(nx, velocity, dtype=np.float64),
            np.full(nx, density, dtype=np.float64),
        )
    # end def homogeneous

    @classmethod
    def from_layers(cls, nx: int, layers: Sequence[LayerDescription]) -> MediumModel:
        """
        Construct a stratified medium from layer specifications.

        Args:
            nx (int): Total number of grid points.
            layers: Sequence of ``(thickness, velocity, density)`` tuples or
                mappings with the same keys, listed from the surface down.
                The final layer may use a thickness of ``0`` to fill the
                remaining grid points.

        Returns:
            MediumModel: The layered medium.

        Raises:
            ConfigurationError: If the layers are empty, a thickness is invalid,
                or the summed thickness differs from ``nx``.
        """
        if int(nx) != nx or nx <= 0:
            raise ConfigurationError("nx", nx, "must be a positive integer")
        # end if
        nx = int(nx)

        if not layers:
            raise ConfigurationError("layers", layers, "at least one layer must be provided")
        # end if

        velocity = np.empty(nx, dtype=np.float64)
        density = np.empty(nx, dtype=np.float64)

        depth_index = 0
        last_index = len(layers) - 1

        for idx, layer in enumerate(layers):
            if isinstance(layer, Mapping):
                thickness = int(layer["thickness"])
                layer_velocity = float(layer["velocity"])
                layer_density = float(layer["density"])
            else:
                thickness, layer_velocity, layer_density = int(layer[0]), float(layer[1]), float(layer[2])
            # end if

            if thickness < 0:
                raise ConfigurationError(f"layers[{idx}].thickness", thickness, "must be non-negative")
            # end if

            if idx == last_index and thickness == 0:
                thickness = nx - depth_index
                if thickness <= 0:
                    raise ConfigurationError(
                        f"layers[{idx}].thickness",
                        0,
                        f"no grid points left to fill: preceding layers already cover nx={nx}"
                    )
                # end if
            elif thickness == 0:
                raise ConfigurationError(
                    f"layers[{idx}].thickness", 0, "only the final layer may use zero thickness"
                )
            # end if

            next_depth = depth_index + thickness
            if next_depth > nx:
                raise ConfigurationError(
                    f"layers[{idx}].thickness", thickness, f"layer thicknesses exceed nx={nx}"
                )
            # end if

            velocity[depth_index:next_depth] = layer_velocity
            density[depth_index:next_depth] = layer_density
            depth_index = next_depth
        # end for

        if depth_index != nx:
            raise ConfigurationError(
                "layers",
                depth_index,
                f"sum of layer thicknesses must match nx={nx}; "
                "set the final layer thickness to 0 to fill the remaining points"
            )
        # end if

        return cls.from_arrays(velocity, density)
    # end def from_layers

    # endregion CONSTRUCTORS

    # region PROPERTIES

    @property
    def nx(self) -> int:
        """Number of grid points."""
        return int(self.velocity_profile.size)
    # end def nx

    @property
    def lame_profile(self) -> np.ndarray:
        """First Lame parameter ``density * velocity**2`` at every grid point."""
        lame = self.density_profile * self.velocity_profile * self.velocity_profile
        lame.setflags(write=False)
        return lame
    # end def lame_profile

    @property
    def buoyancy_profile(self) -> np.ndarray:
        """Inverse density, the coefficient of the velocity update."""
        buoyancy = 1.0 / self.density_profile
        buoyancy.setflags(write=False)
        return buoyancy
    # end def buoyancy_profile

    @property
    def min_velocity(self) -> float:
        return float(np.min(self.velocity_profile))
    # end def min_velocity

    @property
    def max_velocity(self) -> float:
        return float(np.max(self.velocity_profile))
    # end def max_velocity

    # endregion PROPERTIES

    # region ACCESSORS

    def _check_index(self, i: int) -> int:
        if not 0 <= i < self.nx:
            raise IndexError(f"Grid index {i} out of range [0, {self.nx})")
        # end if
        return int(i)
    # end def _check_index

    def velocity(self, i: int) -> float:
        """P-wave velocity at grid index ``i``."""
        return float(self.velocity_profile[self._check_index(i)])
    # end def velocity

    def density(self, i: int) -> float:
        """Density at grid index ``i``."""
        return float(self.density_profile[self._check_index(i)])
    # end def density

    def lame(self, i: int) -> float:
        """First Lame parameter at grid index ``i``."""
        i = self._check_index(i)
        return float(self.density_profile[i] * self.velocity_profile[i] ** 2)
    # end def lame

    # The conventional symbol for the first Lame parameter
    lambda_ = lame

    # endregion ACCESSORS

    def __str__(self) -> str:
        return (
            f"MediumModel(nx={self.nx}, "
            f"velocity=[{self.min_velocity:.2f}, {self.max_velocity:.2f}], "
            f"density=[{float(np.min(self.density_profile)):.2f}, {float(np.max(self.density_profile)):.2f}])"
        )
    # end def __str__

# end class MediumModel
