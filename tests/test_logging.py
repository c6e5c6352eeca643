"""Tests for logging configuration."""

import logging

import pytest
from rich.logging import RichHandler

from code_context.utils.logging import configure_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("code_context")
    saved_handlers, saved_level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = saved_handlers
    logger.setLevel(saved_level)


def test_rich_handler_by_default(package_logger, monkeypatch):
    monkeypatch.delenv("CODE_CONTEXT_LOG_LEVEL", raising=False)

    logger = configure_logging()

    assert logger is package_logger
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], RichHandler)


def test_plain_handler_and_level_name(package_logger):
    logger = configure_logging("debug", use_rich=False)

    assert logger.level == logging.DEBUG
    assert type(logger.handlers[0]) is logging.StreamHandler


def test_level_from_environment(package_logger, monkeypatch):
    monkeypatch.setenv("CODE_CONTEXT_LOG_LEVEL", "info")

    assert configure_logging(use_rich=False).level == logging.INFO


def test_reconfigure_replaces_handlers(package_logger):
    configure_logging(logging.INFO, use_rich=False)
    logger = configure_logging(logging.ERROR, use_rich=False)

    assert len(logger.handlers) == 1
    assert logger.level == logging.ERROR
