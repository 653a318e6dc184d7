import logging

import pytest

from co2_estimator.config import ObservabilityConfig
from co2_estimator.logging_setup import ExtraFieldsFormatter, configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_is_idempotent(restore_root_logger):
    config = ObservabilityConfig(level="debug")
    configure_logging(config)
    configure_logging(config)

    ours = [h for h in restore_root_logger.handlers if h.get_name() == "co2_estimator"]
    assert len(ours) == 1
    assert restore_root_logger.level == logging.DEBUG


def test_structured_logging_uses_extra_formatter(restore_root_logger):
    configure_logging(ObservabilityConfig(structured=True))
    ours = [h for h in restore_root_logger.handlers if h.get_name() == "co2_estimator"]
    assert isinstance(ours[0].formatter, ExtraFieldsFormatter)


def test_extra_fields_appended():
    formatter = ExtraFieldsFormatter("%(message)s")
    record = logging.makeLogRecord({"msg": "Estimation computed", "mode": "car"})

    assert formatter.format(record) == "Estimation computed | mode='car'"


def test_plain_record_unchanged():
    formatter = ExtraFieldsFormatter("%(message)s")
    record = logging.makeLogRecord({"msg": "hello"})
    assert formatter.format(record) == "hello"
