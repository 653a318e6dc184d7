"""Page handlers behind the gradio app.

These functions hold the page behaviour (distance autofill, submit,
error feedback) without importing gradio, so apps/app.py only wires
components to them.
"""

from __future__ import annotations

import html
import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

from .adapters.rendering import format_number
from .domain.errors import CalculationError, EstimatorError, InvalidInputError
from .services import GENERIC_FAILURE_MESSAGE, EstimatorService

logger = logging.getLogger(__name__)

HELPER_DEFAULT = "A distância será preenchida automaticamente"
HELPER_MANUAL = "Inserção manual ativada. Digite a distância em km."
HELPER_NOT_FOUND = (
    'Distância não encontrada. Marque "inserir distância manualmente" para informar.'
)

COLOR_FOUND = "green"
COLOR_ERROR = "#E05A5A"


@dataclass(frozen=True)
class AutofillState:
    """What the distance field and its helper text should show.

    Attributes:
        distance_km: Value for the distance field (None clears it)
        editable: Whether the user may type a distance
        helper_html: Helper text under the field
        keep_value: Leave the current field value untouched
    """

    distance_km: Optional[float]
    editable: bool
    helper_html: str
    keep_value: bool = False


@dataclass(frozen=True)
class SubmitResult:
    """HTML for the three result sections, or an error message."""

    results_html: str = ""
    comparison_html: str = ""
    credits_html: str = ""
    error: Optional[str] = None


def _helper(text: str, color: Optional[str] = None) -> str:
    style = f' style="color:{color}"' if color else ""
    return f'<p class="distance-help"{style}>{html.escape(text)}</p>'


def autofill_distance(
    service: EstimatorService,
    origin: Any,
    destination: Any,
    manual: bool = False,
) -> AutofillState:
    """Fill the distance from the route catalog when possible.

    With manual entry on, the field is left alone and editable.
    """
    if manual:
        return AutofillState(
            distance_km=None,
            editable=True,
            helper_html=_helper(HELPER_MANUAL),
            keep_value=True,
        )

    origin_text = origin.strip() if isinstance(origin, str) else ""
    destination_text = destination.strip() if isinstance(destination, str) else ""
    if not origin_text or not destination_text:
        return AutofillState(None, editable=False, helper_html=_helper(HELPER_DEFAULT))

    lookup = service.suggest_distance(origin_text, destination_text)
    if lookup.found:
        message = (
            "Distância encontrada automaticamente: "
            f"{format_number(lookup.distance_km, 0)} km"
        )
        return AutofillState(
            lookup.distance_km, editable=False, helper_html=_helper(message, COLOR_FOUND)
        )

    message = HELPER_NOT_FOUND
    hints = [
        f"{label}: {', '.join(names)}"
        for label, names in (
            ("Origem parecida", lookup.origin_suggestions),
            ("Destino parecido", lookup.destination_suggestions),
        )
        if names
    ]
    if hints:
        message = f"{message} Você quis dizer? {' | '.join(hints)}"
    return AutofillState(None, editable=False, helper_html=_helper(message, COLOR_ERROR))


def submit(
    service: EstimatorService,
    origin: Any,
    destination: Any,
    distance: Any,
    mode: Any,
    delay_seconds: float = 0.0,
) -> SubmitResult:
    """Handle the Calculate button.

    delay_seconds simulates processing time before the calculation; it has
    no effect on the result.
    """
    try:
        request = service.validate_request(origin, destination, distance, mode)
    except InvalidInputError as e:
        return SubmitResult(error=e.message)

    if delay_seconds > 0:
        time.sleep(delay_seconds)

    try:
        report = service.estimate(request)
        rendered = service.render(report)
    except CalculationError as e:
        logger.warning(
            "Calculation abstained",
            extra={"mode": e.mode, "distance_km": e.distance_km},
        )
        return SubmitResult(error=GENERIC_FAILURE_MESSAGE)
    except EstimatorError as e:
        logger.error("Estimation failed", extra={"error": str(e)})
        return SubmitResult(error=GENERIC_FAILURE_MESSAGE)

    return SubmitResult(
        results_html=rendered.results_html,
        comparison_html=rendered.comparison_html,
        credits_html=rendered.credits_html,
    )
