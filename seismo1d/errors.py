"""
Exception types raised by the seismo1d package.

All failures detected while validating a simulation setup are reported as
``ConfigurationError`` before the first time step runs. ``NumericalDivergence``
is only raised by runs that explicitly ask for divergence monitoring.
"""

from typing import Any, Optional


class Seismo1DError(Exception):
    """Base class for every error raised by seismo1d."""
# end class Seismo1DError


class ConfigurationError(Seismo1DError, ValueError):
    """
    Invalid simulation input.

    Args:
        parameter (str): Name of the offending parameter.
        value (Any): Value that was rejected.
        constraint (str): Human readable description of the violated constraint.
    """

    def __init__(self, parameter: str, value: Any, constraint: str):
        self.parameter = parameter
        self.value = value
        self.constraint = constraint
        super().__init__(f"Invalid {parameter}={value!r}: {constraint}")
    # end def __init__

# end class ConfigurationError


class NumericalDivergence(Seismo1DError, RuntimeError):
    """
    Raised when the pressure field grows past a configured threshold.

    Args:
        step (int): Time step index at which the threshold was exceeded.
        value (float): Maximum absolute pressure observed at that step.
        threshold (float, optional): Threshold in effect for the run.
    """

    def __init__(self, step: int, value: float, threshold: Optional[float] = None):
        self.step = step
        self.value = value
        self.threshold = threshold
        super().__init__(
            f"Pressure field diverged at step {step}: max |p| = {value:.6g} "
            f"(threshold {threshold})"
        )
    # end def __init__

# end class NumericalDivergence


def as_configuration_error(exc: Exception, default_parameter: str = "configuration") -> ConfigurationError:
    """
    Convert a pydantic ``ValidationError`` into a ``ConfigurationError``.

    Validators raise ``ConfigurationError`` directly; pydantic wraps them, so the
    original error is recovered from the error context when it is available.

    Args:
        exc (Exception): Validation error raised by pydantic.
        default_parameter (str): Parameter name used for model-level errors.

    Returns:
        ConfigurationError: The first error of the validation failure.
    """
    errors = exc.errors() if hasattr(exc, "errors") else []
    if not errors:
        return ConfigurationError(default_parameter, None, str(exc))
    # end if

    first = errors[0]
    original = (first.get("ctx") or {}).get("error")
    if isinstance(original, ConfigurationError):
        return original
    # end if

    location = ".".join(str(part) for part in first.get("loc", ()))
    message = str(first.get("msg", exc))
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    # end if
    return ConfigurationError(location or default_parameter, first.get("input"), message)
# end def as_configuration_error
