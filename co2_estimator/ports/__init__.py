"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the service layer and the
components it drives. They enable dependency injection and replace
any probing for optional collaborators at call time.
"""

from .calculator import EmissionCalculatorPort
from .rendering import ResultRendererPort
from .routes import RouteCatalogPort

__all__ = [
    "EmissionCalculatorPort",
    "RouteCatalogPort",
    "ResultRendererPort",
]
