"""Typed domain errors for the CO2 emission estimator.

The calculation core never raises: it abstains by returning None.
These errors are raised at the orchestration boundary (service layer,
configuration loading, rendering) where a missing result must become
a user-visible failure.

All errors inherit from EstimatorError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class EstimatorError(Exception):
    """Base error for the estimator domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InvalidInputError(EstimatorError):
    """Form input rejected before any calculation.

    Attributes:
        field_name: The offending field (origin, destination, distance, mode)
    """

    field_name: str = ""


@dataclass
class CalculationError(EstimatorError):
    """The calculator abstained for the selected transport mode.

    Attributes:
        mode: Transport mode that was requested
        distance_km: Distance that was requested
    """

    mode: str = ""
    distance_km: Optional[float] = None


@dataclass
class ConfigurationError(EstimatorError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None


@dataclass
class RenderingError(EstimatorError):
    """HTML rendering of a report failed.

    Attributes:
        renderer_type: Type of renderer that failed
    """

    renderer_type: str = ""
