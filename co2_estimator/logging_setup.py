"""Logging configuration for the page entry point.

Library modules only create loggers; handlers and levels are applied
here, once, from ObservabilityConfig.
"""

from __future__ import annotations

import logging
from typing import Optional

from .config import ObservabilityConfig, get_config

# Attributes every LogRecord has; anything else came in through `extra`.
_RESERVED = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


class ExtraFieldsFormatter(logging.Formatter):
    """Formatter that appends `extra={...}` fields as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {
            k: v for k, v in record.__dict__.items() if k not in _RESERVED
        }
        if not extras:
            return base
        fields = " ".join(f"{k}={v!r}" for k, v in sorted(extras.items()))
        return f"{base} | {fields}"


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Configure the root logger from ObservabilityConfig.

    Calling it again replaces the handler installed by a previous call.
    """
    config = config or get_config().observability

    handler = logging.StreamHandler()
    if config.structured:
        handler.setFormatter(ExtraFieldsFormatter(config.format))
    else:
        handler.setFormatter(logging.Formatter(config.format))
    handler.set_name("co2_estimator")

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == "co2_estimator":
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(config.level.upper())
