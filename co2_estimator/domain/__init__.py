"""Domain layer - Core value objects and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    CalculationError,
    ConfigurationError,
    EstimatorError,
    InvalidInputError,
    RenderingError,
)
from .models import (
    CarbonCreditConfig,
    CreditEstimate,
    DistanceLookup,
    EstimationReport,
    EstimationRequest,
    ModeEmissionResult,
    PriceEstimate,
    RenderedReport,
    RouteFact,
    SavingsResult,
    TransportMode,
)

__all__ = [
    # Models
    "RouteFact",
    "TransportMode",
    "CarbonCreditConfig",
    "ModeEmissionResult",
    "SavingsResult",
    "CreditEstimate",
    "PriceEstimate",
    "EstimationRequest",
    "EstimationReport",
    "DistanceLookup",
    "RenderedReport",
    # Errors
    "EstimatorError",
    "InvalidInputError",
    "CalculationError",
    "ConfigurationError",
    "RenderingError",
]
