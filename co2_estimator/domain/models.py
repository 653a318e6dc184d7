"""Immutable domain models for the CO2 emission estimator.

All models are frozen dataclasses with slots. They are created fresh
per calculation, owned by the caller and never mutated afterwards.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True, slots=True)
class RouteFact:
    """A static record pairing two cities with a known road distance.

    Attributes:
        origin: City in "City, UF" form (e.g. 'São Paulo, SP')
        destination: City in "City, UF" form
        distance_km: Distance between the two cities in kilometers
    """

    origin: str
    destination: str
    distance_km: float

    def __post_init__(self) -> None:
        """Validate city names and distance."""
        if not self.origin.strip() or not self.destination.strip():
            raise ValueError("Route cities must be non-empty")
        if not math.isfinite(self.distance_km) or self.distance_km <= 0:
            raise ValueError(
                f"Route distance must be positive, got {self.distance_km}"
            )


@dataclass(frozen=True, slots=True)
class TransportMode:
    """Display metadata for a transport mode (label, icon, color)."""

    key: str
    label: str
    icon: str
    color: str


@dataclass(frozen=True, slots=True)
class CarbonCreditConfig:
    """Carbon-credit economics.

    Attributes:
        kg_per_credit: Mass of CO2 represented by one credit
        price_min_per_unit: Lowest market price of one credit
        price_max_per_unit: Highest market price of one credit
    """

    kg_per_credit: float
    price_min_per_unit: float
    price_max_per_unit: float


@dataclass(frozen=True, slots=True)
class ModeEmissionResult:
    """Emission of one transport mode for a given distance.

    Attributes:
        mode: Transport mode key
        emission_kg: Emission rounded to 2 decimals
        percentage_vs_car: Emission relative to the car, or None when
            no car factor is configured or the car emits nothing
    """

    mode: str
    emission_kg: float
    percentage_vs_car: Optional[float] = None


@dataclass(frozen=True, slots=True)
class SavingsResult:
    """Savings of an emission against a baseline.

    saved_kg is negative when the emission exceeds the baseline.
    """

    saved_kg: float
    percentage: Optional[float] = None

    @property
    def is_positive(self) -> bool:
        return self.saved_kg > 0


@dataclass(frozen=True, slots=True)
class CreditEstimate:
    credits: float


@dataclass(frozen=True, slots=True)
class PriceEstimate:
    """Price range for a number of carbon credits."""

    min: float
    max: float
    average: float


@dataclass(frozen=True, slots=True)
class EstimationRequest:
    """Validated form payload.

    Attributes:
        origin: Departure city as typed by the user (trimmed)
        destination: Arrival city as typed by the user (trimmed)
        distance_km: Strictly positive distance
        mode: Selected transport mode key
    """

    origin: str
    destination: str
    distance_km: float
    mode: str


@dataclass(frozen=True, slots=True)
class EstimationReport:
    """Everything computed for one form submission.

    Attributes:
        request: The validated request
        emission_kg: Emission of the selected mode
        car_emission_kg: Emission of the baseline mode, if computable
        savings: Savings versus the baseline (only for non-baseline modes)
        comparison: All-mode comparison, greenest first
        credits: Carbon credits needed to offset emission_kg
        price: Price range of those credits
    """

    request: EstimationRequest
    emission_kg: float
    car_emission_kg: Optional[float] = None
    savings: Optional[SavingsResult] = None
    comparison: Optional[tuple[ModeEmissionResult, ...]] = None
    credits: Optional[CreditEstimate] = None
    price: Optional[PriceEstimate] = None

    @property
    def has_comparison(self) -> bool:
        return bool(self.comparison)

    @property
    def has_credits(self) -> bool:
        """Check if both the credit count and its price were computed."""
        return self.credits is not None and self.price is not None


@dataclass(frozen=True, slots=True)
class DistanceLookup:
    """Result of the distance autofill for an origin/destination pair.

    Attributes:
        distance_km: Distance found in the route catalog, if any
        origin_suggestions: Catalog cities close to an unknown origin
        destination_suggestions: Catalog cities close to an unknown destination
    """

    distance_km: Optional[float] = None
    origin_suggestions: tuple[str, ...] = field(default_factory=tuple)
    destination_suggestions: tuple[str, ...] = field(default_factory=tuple)

    @property
    def found(self) -> bool:
        return self.distance_km is not None


@dataclass(frozen=True, slots=True)
class RenderedReport:
    """HTML fragments for the three result sections of the page."""

    results_html: str
    comparison_html: str = ""
    credits_html: str = ""
