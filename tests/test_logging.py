"""Unit tests for root logger configuration"""

import logging

import pytest

from lovejourney.core.config import settings
from lovejourney.core.logging import configure_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield root
    root.setLevel(level)
    root.handlers[:] = handlers


def test_default_level_comes_from_settings(root_logger, monkeypatch):
    monkeypatch.setattr(settings, "LOG_LEVEL", "warning")

    configure_logging()

    assert root_logger.level == logging.WARNING


def test_explicit_level_and_single_handler(root_logger):
    configure_logging("debug")
    handlers = list(root_logger.handlers)
    configure_logging("error")

    assert root_logger.handlers == handlers
    assert root_logger.level == logging.ERROR


def test_unknown_level_falls_back_to_info(root_logger):
    configure_logging("chatty")

    assert root_logger.level == logging.INFO
