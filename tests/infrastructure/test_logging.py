"""Tests for the structlog configuration."""

import json
import logging

import pytest
import structlog

from storefront.infrastructure.config import Settings
from storefront.infrastructure.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_production_renders_json_lines(capsys):
    configure_logging(Settings(environment="production", log_level="INFO"))

    structlog.get_logger("storefront.test").info("order_created", order_id=5)

    line = capsys.readouterr().err.strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["event"] == "order_created"
    assert payload["order_id"] == 5
    assert payload["level"] == "info"


def test_level_filters_debug(capsys):
    configure_logging(Settings(environment="production", log_level="WARNING"))

    structlog.get_logger("storefront.test").debug("line_item_incremented")

    assert capsys.readouterr().err == ""
