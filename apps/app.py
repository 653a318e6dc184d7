# -*- coding: utf-8 -*-
import html
import os
import sys
from typing import Any, List, Tuple

import gradio as gr

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from co2_estimator.config import get_config
from co2_estimator.container import get_container
from co2_estimator.logging_setup import configure_logging
from co2_estimator.page import autofill_distance, submit
from co2_estimator.services import EstimatorService

# ============================ CONFIG ============================
CONFIG = get_config()
configure_logging(CONFIG.observability)

SERVICE: EstimatorService = get_container().resolve(EstimatorService)
CITIES: List[str] = list(SERVICE.list_cities())
MODE_CHOICES: List[Tuple[str, str]] = [
    (f"{mode.icon} {mode.label}".strip(), key)
    for key, mode in CONFIG.emission.modes().items()
]


def on_route_change(origin: str, destination: str, manual: bool) -> Tuple[Any, str]:
    state = autofill_distance(SERVICE, origin, destination, manual)
    if state.keep_value:
        distance_update = gr.update(interactive=state.editable)
    else:
        distance_update = gr.update(value=state.distance_km, interactive=state.editable)
    return distance_update, state.helper_html


def on_submit(
    origin: str, destination: str, distance: Any, mode: str
) -> Tuple[str, str, str, str]:
    result = submit(
        SERVICE,
        origin,
        destination,
        distance,
        mode,
        delay_seconds=CONFIG.ui.processing_delay_seconds,
    )
    if result.error:
        gr.Warning(result.error)
        return "", "", "", f"<p style=\"color:#E05A5A\">{html.escape(result.error)}</p>"
    return result.results_html, result.comparison_html, result.credits_html, ""


# ============================ UI ============================
with gr.Blocks(title=CONFIG.ui.title) as app:
    gr.Markdown(
        f"""
# 🌱 {CONFIG.ui.title}
✔ Distância preenchida automaticamente para rotas conhecidas
✔ Comparação entre modos de transporte e créditos de carbono
"""
    )

    with gr.Row():
        origin_dd = gr.Dropdown(
            CITIES, value=None, allow_custom_value=True, label="📍 Origem"
        )
        destination_dd = gr.Dropdown(
            CITIES, value=None, allow_custom_value=True, label="🏁 Destino"
        )

    with gr.Row():
        distance_nb = gr.Number(label="📏 Distância (km)", interactive=False)
        manual_cb = gr.Checkbox(label="Inserir distância manualmente", value=False)
    distance_help = gr.HTML(value="<p>A distância será preenchida automaticamente</p>")

    mode_radio = gr.Radio(
        MODE_CHOICES, value=CONFIG.ui.default_mode, label="🚦 Modo de transporte"
    )
    btn = gr.Button("🧮 Calcular Emissão")
    error_view = gr.HTML(value="")

    results_view = gr.HTML(value="")
    comparison_view = gr.HTML(value="")
    credits_view = gr.HTML(value="")

    route_inputs = [origin_dd, destination_dd, manual_cb]
    route_outputs = [distance_nb, distance_help]
    origin_dd.change(on_route_change, inputs=route_inputs, outputs=route_outputs)
    destination_dd.change(on_route_change, inputs=route_inputs, outputs=route_outputs)
    manual_cb.change(on_route_change, inputs=route_inputs, outputs=route_outputs)

    btn.click(
        on_submit,
        inputs=[origin_dd, destination_dd, distance_nb, mode_radio],
        outputs=[results_view, comparison_view, credits_view, error_view],
    )

app.launch(server_name=CONFIG.ui.server_name, server_port=CONFIG.ui.server_port)
