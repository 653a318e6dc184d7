"""Rendering adapters - Implementations of ResultRendererPort.

Available implementations:
- HtmlResultRenderer: HTML fragments for the gradio page
"""

from .html_renderer import HtmlResultRenderer, format_currency, format_number

__all__ = ["HtmlResultRenderer", "format_number", "format_currency"]
