"""Emission, savings and carbon-credit arithmetic.

Every operation is total over its inputs: when an input is invalid the
function abstains by returning None instead of raising. Callers must
check for None to tell "invalid input" apart from a computed zero.

Example
-------
    >>> calc = EmissionCalculator.from_config(get_config().emission)
    >>> calc.calculate_emission(100, "bus")
    8.9
    >>> [r.mode for r in calc.calculate_all_modes(100)]
    ['bicycle', 'bus', 'car', 'truck']
"""

from __future__ import annotations

import math
import numbers
import sys
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, List, Mapping, Optional

from .domain.models import (
    CarbonCreditConfig,
    ModeEmissionResult,
    PriceEstimate,
    SavingsResult,
)

if TYPE_CHECKING:
    from .config import EmissionConfig

EPSILON = sys.float_info.epsilon


def round_half_up(value: float, decimals: int) -> float:
    """Round on the scaled value, halves going up.

    A machine epsilon is added first so that values such as 1.005, stored
    as 1.00499999..., still round to 1.01.
    """
    factor = 10**decimals
    scaled = (value + EPSILON) * factor
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / factor


def to_number(value: Any) -> Optional[float]:
    """Coerce a form value to a float, or None when it is not a number.

    Numeric strings are accepted ("12.5", " 3 "); booleans are not.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        try:
            return float(value)
        except OverflowError:
            # ints beyond float range
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return float(text)
        except ValueError:
            return None
    return None


def _finite(value: Any) -> Optional[float]:
    number = to_number(value)
    if number is None or not math.isfinite(number):
        return None
    return number


@dataclass(frozen=True)
class EmissionCalculator:
    """Pure calculation layer over an injected factor table.

    Attributes:
        factors: Mode -> kg CO2 per km, iterated in configured order
        carbon_credit: Credit economics used for credits and prices
        baseline_mode: Mode used as 100% in the all-mode comparison
    """

    factors: Mapping[str, float]
    carbon_credit: CarbonCreditConfig
    baseline_mode: str = "car"
    _modes: tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        table = dict(self.factors)
        object.__setattr__(self, "factors", MappingProxyType(table))
        object.__setattr__(self, "_modes", tuple(table))

    @classmethod
    def from_config(cls, config: EmissionConfig) -> EmissionCalculator:
        """Build a calculator from the emission section of AppConfig."""
        return cls(
            factors=config.factor_table(),
            carbon_credit=config.credit_config(),
            baseline_mode=config.baseline_mode,
        )

    @property
    def modes(self) -> tuple[str, ...]:
        """Configured mode keys in configured order."""
        return self._modes

    def _factor(self, mode: Any) -> Optional[float]:
        if not isinstance(mode, str) or mode not in self.factors:
            return None
        factor = self.factors[mode]
        if isinstance(factor, bool) or not isinstance(factor, numbers.Real):
            return None
        try:
            factor = float(factor)
        except OverflowError:
            return None
        return factor if math.isfinite(factor) else None

    @staticmethod
    def _distance(distance_km: Any) -> Optional[float]:
        dist = _finite(distance_km)
        if dist is None or dist < 0:
            return None
        return dist

    def calculate_emission(self, distance_km: Any, mode: Any) -> Optional[float]:
        """Emission in kg CO2 for a distance and mode, rounded to 2 decimals.

        Returns None if the distance is negative or not finite, or if the
        mode has no valid factor.
        """
        dist = self._distance(distance_km)
        if dist is None:
            return None
        factor = self._factor(mode)
        if factor is None:
            return None
        emission = dist * factor
        if not math.isfinite(emission):
            return None
        return round_half_up(emission, 2)

    def calculate_all_modes(
        self, distance_km: Any
    ) -> Optional[List[ModeEmissionResult]]:
        """Emission of every configured mode, greenest first.

        percentage_vs_car is computed from unrounded emissions and is None
        when the baseline mode is not configured or emits nothing. Modes
        with equal emissions keep their configured order.
        """
        dist = self._distance(distance_km)
        if dist is None:
            return None

        baseline_factor = self._factor(self.baseline_mode)
        baseline = dist * baseline_factor if baseline_factor is not None else None

        results: List[ModeEmissionResult] = []
        for mode in self._modes:
            factor = self._factor(mode)
            if factor is None:
                continue
            emission = dist * factor
            if not math.isfinite(emission):
                return None

            percentage: Optional[float] = None
            if baseline is not None and baseline != 0:
                percentage = round_half_up(emission / baseline * 100, 2)

            results.append(
                ModeEmissionResult(
                    mode=mode,
                    emission_kg=round_half_up(emission, 2),
                    percentage_vs_car=percentage,
                )
            )

        results.sort(key=lambda r: r.emission_kg)
        return results

    def calculate_savings(
        self, emission_kg: Any, baseline_kg: Any
    ) -> Optional[SavingsResult]:
        """Savings of emission_kg against baseline_kg.

        Not clamped: an emission above the baseline gives a negative
        saved_kg. percentage is None when the baseline is zero.
        """
        emission = _finite(emission_kg)
        baseline = _finite(baseline_kg)
        if emission is None or baseline is None:
            return None

        saved = baseline - emission
        percentage: Optional[float] = None
        if baseline != 0:
            percentage = round_half_up(saved / baseline * 100, 2)

        return SavingsResult(saved_kg=round_half_up(saved, 2), percentage=percentage)

    def calculate_carbon_credits(self, emission_kg: Any) -> Optional[float]:
        """Credits needed to offset emission_kg, rounded to 4 decimals."""
        emission = _finite(emission_kg)
        if emission is None or emission < 0:
            return None
        per_credit = _finite(self.carbon_credit.kg_per_credit)
        if per_credit is None or per_credit <= 0:
            return None
        return round_half_up(emission / per_credit, 4)

    def estimate_credit_price(self, credits: Any) -> Optional[PriceEstimate]:
        """Price range for a number of credits.

        The average is taken from the already rounded min and max.
        """
        count = _finite(credits)
        if count is None or count < 0:
            return None
        price_min = _finite(self.carbon_credit.price_min_per_unit)
        price_max = _finite(self.carbon_credit.price_max_per_unit)
        if price_min is None or price_max is None:
            return None

        low = round_half_up(count * price_min, 2)
        high = round_half_up(count * price_max, 2)
        return PriceEstimate(
            min=low,
            max=high,
            average=round_half_up((low + high) / 2, 2),
        )
