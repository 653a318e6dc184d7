"""Rendering port - Abstraction for turning reports into markup.

This protocol defines the contract the page relies on, allowing the
HTML renderer to be swapped (or faked in tests).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import (
        EstimationReport,
        ModeEmissionResult,
        PriceEstimate,
    )


class ResultRendererPort(Protocol):
    """Port for result rendering.

    Implementation: adapters/rendering/html_renderer.py
    """

    def render_results(self, report: EstimationReport) -> str:
        """Render the route, distance, emission, mode and savings cards."""
        ...

    def render_comparison(
        self,
        modes: Sequence[ModeEmissionResult],
        selected_mode: str,
    ) -> str:
        """Render the all-mode comparison with the selected mode highlighted."""
        ...

    def render_carbon_credits(self, credits: float, price: PriceEstimate) -> str:
        """Render the carbon-credit count and price range."""
        ...
