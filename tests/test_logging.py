"""Tests for CLI logging setup."""

import logging

from ai_refactor.logging import configure_logging, get_logger


class TestConfigureLogging:
    def test_levels(self):
        assert configure_logging().level == logging.INFO
        assert configure_logging(verbose=True).level == logging.DEBUG

    def test_reconfigure_keeps_one_console_handler(self):
        configure_logging()
        logger = configure_logging(verbose=True)
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_foreign_handlers_are_left_alone(self):
        root = logging.getLogger("ai_refactor")
        extra = logging.NullHandler()
        root.addHandler(extra)
        configure_logging()
        assert extra in root.handlers
        assert len(root.handlers) == 2

    def test_stage_loggers_are_children(self):
        assert get_logger("scanner").name == "ai_refactor.scanner"
        assert get_logger().name == "ai_refactor"
        assert get_logger("scanner").parent is get_logger()

    def test_records_are_prefixed(self, capsys):
        configure_logging()
        get_logger("pipeline").info("Starting analysis of %s", "webapp")
        assert capsys.readouterr().err == "[ai-refactor] INFO Starting analysis of webapp\n"
