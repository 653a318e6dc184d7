"""Estimator service - Main orchestrator behind the page.

This service turns a form submission into an EstimationReport:
1. Input validation
2. Emission of the selected mode
3. Baseline emission and savings
4. All-mode comparison
5. Carbon credits and their price
6. Optional HTML rendering

It is the only layer where a calculator abstention (None) becomes a
typed error.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from ..calculator import to_number
from ..domain.errors import (
    CalculationError,
    EstimatorError,
    InvalidInputError,
    RenderingError,
)
from ..domain.models import (
    CreditEstimate,
    DistanceLookup,
    EstimationReport,
    EstimationRequest,
    RenderedReport,
)
from ..ports.calculator import EmissionCalculatorPort
from ..ports.rendering import ResultRendererPort
from ..ports.routes import RouteCatalogPort

GENERIC_FAILURE_MESSAGE = (
    "Ocorreu um erro ao processar o cálculo. Verifique os dados e tente novamente."
)


@dataclass
class EstimatorService:
    """Main service for CO2 emission estimates.

    Attributes:
        calculator: Emission arithmetic
        catalog: Static route catalog for distance autofill
        renderer: Optional HTML renderer for the result sections
        baseline_mode: Mode savings are measured against
        default_mode: Mode used when the form submits none
    """

    calculator: EmissionCalculatorPort
    catalog: RouteCatalogPort
    renderer: Optional[ResultRendererPort] = None
    baseline_mode: str = "car"
    default_mode: str = "car"

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------
    def list_cities(self) -> Sequence[str]:
        """Cities offered by the origin/destination pickers."""
        return self.catalog.list_cities()

    def suggest_distance(self, origin: Any, destination: Any) -> DistanceLookup:
        """Look up the distance for the distance autofill.

        When the pair is not in the catalog, each side that is not a known
        city gets fuzzy suggestions.
        """
        distance = self.catalog.find_distance(origin, destination)
        if distance is not None:
            self._logger.debug(
                "Distance found",
                extra={"origin": origin, "destination": destination, "distance_km": distance},
            )
            return DistanceLookup(distance_km=distance)

        known = {c.strip().lower() for c in self.catalog.list_cities()}

        def suggestions(name: Any) -> tuple[str, ...]:
            if not isinstance(name, str) or not name.strip():
                return ()
            if name.strip().lower() in known:
                return ()
            return tuple(self.catalog.suggest_cities(name))

        lookup = DistanceLookup(
            origin_suggestions=suggestions(origin),
            destination_suggestions=suggestions(destination),
        )
        self._logger.debug(
            "Distance not found",
            extra={
                "origin": origin,
                "destination": destination,
                "origin_suggestions": len(lookup.origin_suggestions),
                "destination_suggestions": len(lookup.destination_suggestions),
            },
        )
        return lookup

    # ------------------------------------------------------------------
    # Estimation
    # ------------------------------------------------------------------
    def validate_request(
        self,
        origin: Any,
        destination: Any,
        distance: Any,
        mode: Any = None,
    ) -> EstimationRequest:
        """Validate raw form values.

        Raises:
            InvalidInputError: If a city is empty or the distance is not a
                finite number greater than zero.
        """
        origin_text = origin.strip() if isinstance(origin, str) else ""
        destination_text = destination.strip() if isinstance(destination, str) else ""
        if not origin_text:
            raise InvalidInputError(
                "Por favor, preencha todos os campos (origem, destino e distância).",
                field_name="origin",
            )
        if not destination_text:
            raise InvalidInputError(
                "Por favor, preencha todos os campos (origem, destino e distância).",
                field_name="destination",
            )

        distance_km = to_number(distance)
        if distance_km is None:
            raise InvalidInputError(
                "Por favor, preencha todos os campos (origem, destino e distância).",
                field_name="distance",
            )
        if not math.isfinite(distance_km) or distance_km <= 0:
            raise InvalidInputError(
                "A distância deve ser um número maior que zero.",
                field_name="distance",
            )

        mode_key = mode.strip() if isinstance(mode, str) else ""
        return EstimationRequest(
            origin=origin_text,
            destination=destination_text,
            distance_km=distance_km,
            mode=mode_key or self.default_mode,
        )

    def estimate(self, request: EstimationRequest) -> EstimationReport:
        """Compute every result for a validated request.

        Raises:
            CalculationError: If the emission of the selected mode cannot be
                computed (unknown mode).
        """
        self._logger.info(
            "Starting estimation",
            extra={"mode": request.mode, "distance_km": request.distance_km},
        )

        emission = self.calculator.calculate_emission(request.distance_km, request.mode)
        if emission is None:
            raise CalculationError(
                "Falha ao calcular emissão. Verifique os dados.",
                mode=request.mode,
                distance_km=request.distance_km,
            )

        baseline = self.calculator.calculate_emission(
            request.distance_km, self.baseline_mode
        )

        savings = None
        if request.mode != self.baseline_mode and baseline is not None:
            savings = self.calculator.calculate_savings(emission, baseline)

        all_modes = self.calculator.calculate_all_modes(request.distance_km)
        comparison = tuple(all_modes) if all_modes is not None else None

        credits = self.calculator.calculate_carbon_credits(emission)
        price = None
        if credits is not None:
            price = self.calculator.estimate_credit_price(credits)

        report = EstimationReport(
            request=request,
            emission_kg=emission,
            car_emission_kg=baseline,
            savings=savings,
            comparison=comparison,
            credits=CreditEstimate(credits) if credits is not None else None,
            price=price,
        )
        self._logger.info(
            "Estimation computed",
            extra={
                "emission_kg": emission,
                "saved_kg": savings.saved_kg if savings else None,
                "credits": credits,
            },
        )
        return report

    def estimate_from_form(
        self,
        origin: Any,
        destination: Any,
        distance: Any,
        mode: Any = None,
    ) -> EstimationReport:
        """Validate raw form values then estimate."""
        request = self.validate_request(origin, destination, distance, mode)
        return self.estimate(request)

    def estimate_safe(
        self,
        origin: Any,
        destination: Any,
        distance: Any,
        mode: Any = None,
    ) -> tuple[Optional[EstimationReport], Optional[str]]:
        """Estimate, returning an error message instead of raising.

        Returns:
            Tuple of (EstimationReport or None, error message or None).
        """
        try:
            return self.estimate_from_form(origin, destination, distance, mode), None
        except InvalidInputError as e:
            return None, e.message
        except CalculationError as e:
            self._logger.warning(
                "Calculation abstained",
                extra={"mode": e.mode, "distance_km": e.distance_km},
            )
            return None, GENERIC_FAILURE_MESSAGE
        except EstimatorError as e:
            self._logger.error("Estimation failed", extra={"error": str(e)})
            return None, GENERIC_FAILURE_MESSAGE

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self, report: EstimationReport) -> RenderedReport:
        """Render the three result sections of a report.

        Raises:
            RenderingError: If no renderer is configured or rendering fails.
        """
        if self.renderer is None:
            raise RenderingError("No renderer configured", renderer_type="none")

        renderer_type = type(self.renderer).__name__
        try:
            results_html = self.renderer.render_results(report)
            comparison_html = ""
            if report.comparison:
                comparison_html = self.renderer.render_comparison(
                    report.comparison, report.request.mode
                )
            credits_html = ""
            if report.credits is not None and report.price is not None:
                credits_html = self.renderer.render_carbon_credits(
                    report.credits.credits, report.price
                )
        except (TypeError, ValueError, KeyError) as e:
            raise RenderingError(
                "Failed to render report",
                renderer_type=renderer_type,
                cause=e,
            )

        return RenderedReport(
            results_html=results_html,
            comparison_html=comparison_html,
            credits_html=credits_html,
        )
