"""CO2 emission estimator.

Emission, mode comparison and carbon-credit estimates for trips
between Brazilian cities, served by a small gradio page.
"""

__version__ = "1.0.0"
