"""Services layer - Application orchestration.

Available services:
- EstimatorService: Form validation, estimation and rendering
"""

from .estimator_service import GENERIC_FAILURE_MESSAGE, EstimatorService

__all__ = ["EstimatorService", "GENERIC_FAILURE_MESSAGE"]
