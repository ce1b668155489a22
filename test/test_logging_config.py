"""
Tests for the package logging setup.
"""

import logging

import pytest

from qkatas.logging_config import LOGGER_NAME, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logger():
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)


class TestSetupLogging:
    """Handlers and levels of the package logger."""

    def test_stderr_only(self):
        logger = setup_logging(logging.DEBUG)

        assert logger.name == LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_log_file(self, tmp_path):
        path = tmp_path / "logs" / "qkatas.log"
        logger = setup_logging(logging.INFO, log_file=path)
        get_logger("qkatas.grover").info("found solution")
        for handler in logger.handlers:
            handler.flush()

        assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
        assert "found solution" in path.read_text()

    def test_repeated_setup_replaces_handlers(self):
        setup_logging(logging.INFO)
        logger = setup_logging(logging.WARNING)

        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING


class TestGetLogger:
    """Logger naming."""

    def test_module_name_kept(self):
        assert get_logger("qkatas.sat").name == "qkatas.sat"
        assert get_logger(LOGGER_NAME).name == LOGGER_NAME

    def test_foreign_name_nested(self):
        assert get_logger("scripts.bench").name == "qkatas.scripts.bench"
