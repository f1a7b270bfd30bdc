"""
Tests for logging setup.
"""

import logging

from umpire_planner.core.logging_config import setup_logging, get_logger, LOG_FORMAT


def test_setup_logging_installs_single_handler():
    root = setup_logging(logging.DEBUG)
    setup_logging(logging.DEBUG)

    assert root is logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert root.handlers[0].formatter._fmt == LOG_FORMAT
    assert logging.getLogger("uvicorn").level == logging.WARNING


def test_get_logger_returns_named_logger():
    assert get_logger("umpire_planner.services.slots").name == "umpire_planner.services.slots"
