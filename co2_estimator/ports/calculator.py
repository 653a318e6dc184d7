"""Calculator port - Abstraction over the emission arithmetic.

Every method abstains with None on invalid input. The service layer is
the only place where an abstention becomes an error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import ModeEmissionResult, PriceEstimate, SavingsResult


class EmissionCalculatorPort(Protocol):
    """Port for emission, savings and carbon-credit calculations.

    Implementation: calculator.py (EmissionCalculator)
    """

    @property
    def modes(self) -> Sequence[str]:
        """Configured transport mode keys."""
        ...

    def calculate_emission(self, distance_km: Any, mode: Any) -> Optional[float]:
        ...

    def calculate_all_modes(
        self, distance_km: Any
    ) -> Optional[Sequence[ModeEmissionResult]]:
        ...

    def calculate_savings(
        self, emission_kg: Any, baseline_kg: Any
    ) -> Optional[SavingsResult]:
        ...

    def calculate_carbon_credits(self, emission_kg: Any) -> Optional[float]:
        ...

    def estimate_credit_price(self, credits: Any) -> Optional[PriceEstimate]:
        ...
