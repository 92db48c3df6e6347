"""
Unit tests for logging setup.
"""

import logging

from vaxpace.logging_config import setup_logging


class TestSetupLogging:

    def test_configures_both_packages(self, restore_loggers):
        setup_logging(logging.DEBUG)

        for name in ('vaxpace', 'pace_charts'):
            logger = logging.getLogger(name)
            assert logger.level == logging.DEBUG
            assert len(logger.handlers) == 1

    def test_repeated_setup_does_not_stack_handlers(self, restore_loggers):
        setup_logging(logging.INFO)
        setup_logging(logging.WARNING)

        assert len(logging.getLogger('pace_charts').handlers) == 1
        assert logging.getLogger('vaxpace').level == logging.WARNING

    def test_log_file(self, tmp_path, restore_loggers):
        log_file = tmp_path / 'chart.log'

        setup_logging(logging.DEBUG, str(log_file))
        logging.getLogger('pace_charts.chart').debug("hello from the builder")
        for handler in logging.getLogger('vaxpace').handlers:
            handler.flush()

        assert "hello from the builder" in log_file.read_text(encoding='utf-8')
