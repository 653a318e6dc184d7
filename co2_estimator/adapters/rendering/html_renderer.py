"""HTML result renderer adapter.

Maps estimation value objects to the HTML fragments shown in the three
result sections of the page (results, comparison, carbon credits).
Numbers and currency are formatted the pt-BR way.
"""

from __future__ import annotations

import html
import logging
import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, List, Mapping, Sequence

from ...domain.models import (
    EstimationReport,
    ModeEmissionResult,
    PriceEstimate,
    TransportMode,
)

FALLBACK_ICON = "🚗"
FALLBACK_COLOR = "#0B84A5"

BAR_GREEN = "#2EC4B6"
BAR_YELLOW = "#FFC107"
BAR_ORANGE = "#F6A623"
BAR_RED = "#E05A5A"


def format_number(value: Any, decimals: int = 2) -> str:
    """Format a number with pt-BR separators: 1234.567 -> '1.234,57'.

    Non-numeric or non-finite input formats as '0'.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "0"
    if isinstance(value, bool) or not math.isfinite(number):
        return "0"

    quantum = Decimal(1).scaleb(-decimals)
    try:
        rounded = Decimal(repr(number)).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # more digits than the decimal context holds
        text = f"{number:,.{decimals}f}"
    else:
        if rounded == 0:
            rounded = abs(rounded)
        text = f"{rounded:,.{decimals}f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_currency(value: Any) -> str:
    """Format a value as Brazilian reais: 1234.5 -> 'R$ 1.234,50'."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "R$ 0,00"
    if isinstance(value, bool) or not math.isfinite(number):
        return "R$ 0,00"
    if number < 0 and format_number(-number, 2) != "0,00":
        return f"-R$ {format_number(-number, 2)}"
    return f"R$ {format_number(number, 2)}"


def bar_color(percentage: float) -> str:
    """Colour of a comparison bar for its share of the highest emission."""
    if percentage > 100:
        return BAR_RED
    if percentage > 75:
        return BAR_ORANGE
    if percentage > 25:
        return BAR_YELLOW
    return BAR_GREEN


@dataclass
class HtmlResultRenderer:
    """HTML renderer for estimation reports.

    This adapter implements ResultRendererPort.

    Attributes:
        transport_modes: Display metadata per mode key
        kg_per_credit: Shown in the credit card helper text
        baseline_mode: Mode for which no savings card is rendered
    """

    transport_modes: Mapping[str, TransportMode] = field(default_factory=dict)
    kg_per_credit: float = 1000.0
    baseline_mode: str = "car"
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _mode_display(self, mode: str) -> tuple[str, str, str]:
        meta = self.transport_modes.get(mode)
        if meta is None:
            return FALLBACK_ICON, html.escape(mode), FALLBACK_COLOR
        return meta.icon or FALLBACK_ICON, html.escape(meta.label), meta.color

    @staticmethod
    def _card(modifier: str, title: str, content: str) -> str:
        return (
            f'<div class="ui__result-card ui__result-card--{modifier}">'
            f'<h3 class="ui__result-card__title">{title}</h3>'
            f'<div class="ui__result-card__content">{content}</div>'
            "</div>"
        )

    def render_results(self, report: EstimationReport) -> str:
        """Render route, distance, emission, mode and savings cards.

        The savings card is only shown for a non-baseline mode that
        actually saves CO2 compared with the baseline.
        """
        request = report.request
        icon, label, _ = self._mode_display(request.mode)

        cards: List[str] = [
            self._card(
                "route",
                "Trajeto",
                f'<span class="ui__result-city">{html.escape(request.origin) or "—"}</span>'
                '<span class="ui__result-arrow"> → </span>'
                f'<span class="ui__result-city">{html.escape(request.destination) or "—"}</span>',
            ),
            self._card(
                "distance",
                "Distância",
                f'<span class="ui__result-value">{format_number(request.distance_km, 0)}</span>'
                '<span class="ui__result-unit">km</span>',
            ),
            self._card(
                "emission",
                "Emissão de CO₂",
                '<span class="ui__result-emoji">🍃</span>'
                f'<span class="ui__result-value">{format_number(report.emission_kg, 2)}</span>'
                '<span class="ui__result-unit">kg</span>',
            ),
            self._card(
                "transport",
                "Modo",
                f'<span class="ui__result-emoji">{icon}</span>'
                f'<span class="ui__result-value">{label}</span>',
            ),
        ]

        savings = report.savings
        if savings is not None and request.mode != self.baseline_mode and savings.is_positive:
            content = (
                f'<span class="ui__result-value">{format_number(savings.saved_kg, 2)}</span>'
                '<span class="ui__result-unit">kg economizados</span>'
            )
            if savings.percentage is not None:
                content += (
                    '<span class="ui__result-percentage">'
                    f"({format_number(savings.percentage, 1)}%)</span>"
                )
            cards.append(self._card("savings", "Economia", content))

        return '<div class="ui__results-cards">' + "".join(cards) + "</div>"

    def render_comparison(
        self,
        modes: Sequence[ModeEmissionResult],
        selected_mode: str,
    ) -> str:
        """Render one bar per mode, scaled to the highest emission."""
        if not modes:
            return ""

        max_emission = max(m.emission_kg for m in modes)

        parts: List[str] = [
            '<h3 class="ui__comparison-title">'
            "Comparação de Emissões por Modo de Transporte</h3>",
            '<div class="ui__comparison-list">',
        ]

        for item in modes:
            selected = item.mode == selected_mode
            icon, label, _ = self._mode_display(item.mode)

            item_class = "ui__comparison-item"
            if selected:
                item_class += " ui__comparison-item--selected"
            parts.append(f'<div class="{item_class}">')

            parts.append(
                '<div class="ui__comparison-item__header">'
                f'<span class="ui__comparison-item__icon">{icon}</span>'
                '<div class="ui__comparison-item__label-wrapper">'
                f'<span class="ui__comparison-item__label">{label}</span>'
            )
            if selected:
                parts.append('<span class="ui__comparison-item__badge">Selecionado</span>')
            parts.append("</div></div>")

            parts.append(
                '<div class="ui__comparison-item__stats">'
                f'<span class="ui__comparison-item__emission">{format_number(item.emission_kg, 2)} kg</span>'
            )
            if item.percentage_vs_car is not None:
                parts.append(
                    '<span class="ui__comparison-item__percentage">'
                    f"{format_number(item.percentage_vs_car, 0)}% do carro</span>"
                )
            parts.append("</div>")

            share = item.emission_kg / max_emission * 100 if max_emission > 0 else 0.0
            width = min(100.0, share)
            parts.append(
                '<div class="ui__comparison-item__bar-container">'
                f'<div class="ui__comparison-item__bar" style="width:{width:g}%; '
                f'background-color:{bar_color(share)};"></div>'
                "</div>"
            )

            parts.append("</div>")

        parts.append("</div>")
        parts.append(
            '<div class="ui__comparison-info">'
            '<h4 class="ui__comparison-info__title">💡 Dica</h4>'
            '<p class="ui__comparison-info__text">Modos com menor emissão ajudam a '
            "reduzir o impacto ambiental. Considere usar bicicleta ou transporte "
            "público quando possível!</p>"
            "</div>"
        )

        self._logger.debug(
            "Comparison rendered",
            extra={"modes": len(modes), "selected_mode": selected_mode},
        )
        return "".join(parts)

    def render_carbon_credits(self, credits: float, price: PriceEstimate) -> str:
        """Render the credit count and the estimated price range."""
        per_credit = format_number(self.kg_per_credit, 0)
        return (
            '<div class="ui__carbon-grid">'
            '<div class="ui__carbon-card ui__carbon-card--credits">'
            '<h3 class="ui__carbon-card__title">Créditos de Carbono Necessários</h3>'
            '<div class="ui__carbon-card__content">'
            f'<span class="ui__carbon-card__value">{format_number(credits, 4)}</span>'
            '<span class="ui__carbon-card__unit">créditos</span>'
            "</div>"
            f'<p class="ui__carbon-card__helper">1 crédito = {per_credit} kg CO₂</p>'
            "</div>"
            '<div class="ui__carbon-card ui__carbon-card--price">'
            '<h3 class="ui__carbon-card__title">Preço Estimado</h3>'
            '<div class="ui__carbon-card__content">'
            f'<span class="ui__carbon-card__value">{format_currency(price.average)}</span>'
            f'<span class="ui__carbon-card__range">({format_currency(price.min)} - '
            f"{format_currency(price.max)})</span>"
            "</div>"
            "</div>"
            "</div>"
            '<div class="ui__carbon-info">'
            '<h4 class="ui__carbon-info__title">❓ O que são Créditos de Carbono?</h4>'
            '<p class="ui__carbon-info__text">Créditos de carbono representam uma '
            f"quantidade fixa ({per_credit} kg) de CO₂ evitada ou removida da "
            "atmosfera. Ao compensar suas emissões, você contribui para projetos "
            "de reflorestamento e energia limpa.</p>"
            "</div>"
        )
