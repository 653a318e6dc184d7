"""Shared fixtures for the estimator tests."""

from __future__ import annotations

import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from co2_estimator.adapters.rendering import HtmlResultRenderer
from co2_estimator.adapters.routes import StaticRouteCatalog, load_routes_csv
from co2_estimator.calculator import EmissionCalculator
from co2_estimator.config import EmissionConfig, get_config, reset_config
from co2_estimator.container import reset_container
from co2_estimator.domain.models import CarbonCreditConfig
from co2_estimator.services import EstimatorService

DEFAULT_FACTORS = {"bicycle": 0.0, "car": 0.12, "bus": 0.089, "truck": 0.96}


@pytest.fixture(autouse=True)
def fresh_config():
    """Each test sees the environment it sets up, not a cached config."""
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


@pytest.fixture
def credit_config() -> CarbonCreditConfig:
    return CarbonCreditConfig(
        kg_per_credit=1000, price_min_per_unit=50, price_max_per_unit=150
    )


@pytest.fixture
def calculator(credit_config) -> EmissionCalculator:
    return EmissionCalculator(factors=DEFAULT_FACTORS, carbon_credit=credit_config)


@pytest.fixture
def catalog() -> StaticRouteCatalog:
    return StaticRouteCatalog(routes=load_routes_csv(get_config().catalog.routes_path))


@pytest.fixture
def renderer() -> HtmlResultRenderer:
    return HtmlResultRenderer(transport_modes=EmissionConfig().modes())


@pytest.fixture
def service(calculator, catalog, renderer) -> EstimatorService:
    return EstimatorService(calculator=calculator, catalog=catalog, renderer=renderer)
