"""Centralized configuration using Pydantic Settings.

This module is the single source of truth for the emission factors,
the transport-mode display metadata, the carbon-credit economics and
the runtime settings of the page. Values are loaded once and treated
as immutable for the lifetime of the process.

Configuration can be overridden via environment variables:
- CO2_EMISSION_FACTORS='{"car": 0.15, "bus": 0.08}'
- CO2_EMISSION_CARBON_CREDIT='{"kg_per_credit": 1000, "price_min_brl": 40}'
- CO2_CATALOG_SUGGESTION_LIMIT=3
- CO2_UI_SERVER_PORT=7861
- CO2_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

import math
from functools import lru_cache
from pathlib import Path
from typing import Dict, Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.errors import ConfigurationError
from .domain.models import CarbonCreditConfig, TransportMode


def _default_factors() -> Dict[str, float]:
    # kg CO2 per km; order is the comparison tie-break order
    return {
        "bicycle": 0.0,
        "car": 0.12,
        "bus": 0.089,
        "truck": 0.96,
    }


class TransportModeSettings(BaseModel):
    """Display metadata of one mode. Not used by the calculations."""

    label: str
    icon: str = ""
    color: str = "#0B84A5"


def _default_transport_modes() -> Dict[str, TransportModeSettings]:
    return {
        "bicycle": TransportModeSettings(label="Bicicleta", icon="🚲", color="#2EC4B6"),
        "car": TransportModeSettings(label="Carro", icon="🚗", color="#0B84A5"),
        "bus": TransportModeSettings(label="Ônibus", icon="🚌", color="#0B6E9E"),
        "truck": TransportModeSettings(label="Caminhão", icon="🚚", color="#045B66"),
    }


class CarbonCreditSettings(BaseModel):
    """Carbon-credit economics.

    Not validated here: the calculator abstains when kg_per_credit is not
    positive or a price is not finite.
    """

    kg_per_credit: float = 1000.0
    price_min_brl: float = 50.0
    price_max_brl: float = 150.0


class EmissionConfig(BaseSettings):
    """Emission factors and carbon-credit configuration.

    Environment variables prefixed with CO2_EMISSION_.
    """

    model_config = SettingsConfigDict(env_prefix="CO2_EMISSION_")

    factors: Dict[str, float] = Field(default_factory=_default_factors)
    transport_modes: Dict[str, TransportModeSettings] = Field(
        default_factory=_default_transport_modes
    )
    carbon_credit: CarbonCreditSettings = Field(default_factory=CarbonCreditSettings)
    baseline_mode: str = "car"

    @field_validator("factors")
    @classmethod
    def _check_factors(cls, value: Dict[str, float]) -> Dict[str, float]:
        for mode, factor in value.items():
            if not mode.strip():
                raise ValueError("Transport mode keys must be non-empty")
            if not math.isfinite(factor) or factor < 0:
                raise ValueError(
                    f"Emission factor for {mode!r} must be finite and >= 0, got {factor}"
                )
        return value

    def factor_table(self) -> Mapping[str, float]:
        """Return a copy of the mode -> kg CO2/km table, in configured order."""
        return dict(self.factors)

    def credit_config(self) -> CarbonCreditConfig:
        """Return the credit economics as a domain value object."""
        cc = self.carbon_credit
        return CarbonCreditConfig(
            kg_per_credit=cc.kg_per_credit,
            price_min_per_unit=cc.price_min_brl,
            price_max_per_unit=cc.price_max_brl,
        )

    def modes(self) -> Dict[str, TransportMode]:
        """Display metadata for every mode that has a factor.

        Modes without configured metadata get their key as label.
        """
        result: Dict[str, TransportMode] = {}
        for key in self.factors:
            meta = self.transport_modes.get(key)
            if meta is None:
                result[key] = TransportMode(key=key, label=key, icon="", color="#0B84A5")
            else:
                result[key] = TransportMode(
                    key=key, label=meta.label, icon=meta.icon, color=meta.color
                )
        return result


class CatalogConfig(BaseSettings):
    """Route catalog configuration.

    Environment variables prefixed with CO2_CATALOG_.
    """

    model_config = SettingsConfigDict(env_prefix="CO2_CATALOG_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent / "data"
    )
    routes_file: str = "routes.csv"
    suggestion_limit: int = 5
    suggestion_score_cutoff: float = 70.0

    @property
    def routes_path(self) -> Path:
        """Full path to the routes CSV file."""
        return self.data_dir / self.routes_file


class UIConfig(BaseSettings):
    """Web page configuration.

    Environment variables prefixed with CO2_UI_.
    """

    model_config = SettingsConfigDict(env_prefix="CO2_UI_")

    title: str = "Calculadora de Emissão de CO₂"
    default_mode: str = "car"
    processing_delay_seconds: float = 0.0
    server_name: str = "127.0.0.1"
    server_port: int = 7860


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with CO2_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="CO2_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True to append `extra` fields to each record


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.emission.factors["car"])
        print(config.catalog.routes_path)

    Environment variables prefixed with CO2_.
    """

    model_config = SettingsConfigDict(env_prefix="CO2_")

    emission: EmissionConfig = Field(default_factory=EmissionConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Raises:
        ConfigurationError: If a setting from the environment is invalid.
    """
    try:
        return AppConfig()
    except ValidationError as e:
        errors = e.errors()
        loc = ".".join(str(part) for part in errors[0]["loc"]) if errors else ""
        raise ConfigurationError(
            "Invalid configuration",
            setting_name=loc,
            expected_type=errors[0]["type"] if errors else None,
            cause=e,
        )


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
