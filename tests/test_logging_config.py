"""
Tests for logging configuration
"""

import logging

from goshippo.logging_config import GoShippoLogger, get_module_logger, setup_logging


class TestLoggingConfig:
    """Test logger setup helpers"""

    def test_module_logger_is_namespaced(self):
        """Should return loggers under the goshippo namespace"""
        assert get_module_logger("client").name == "goshippo.client"

    def test_console_only(self):
        """Should add a single INFO stdout handler"""
        logger = GoShippoLogger(name="goshippo.test_console").get_logger()

        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.INFO

    def test_file_handler_creates_directories(self, tmp_path):
        """Should create the log directory and write DEBUG records to the file"""
        log_file = tmp_path / "logs" / "shippo.log"
        logger = GoShippoLogger(
            name="goshippo.test_file", log_file=log_file, console_output=False
        ).get_logger()

        logger.debug("request dump")
        for handler in logger.handlers:
            handler.flush()

        assert log_file.exists()
        assert "request dump" in log_file.read_text(encoding="utf-8")

    def test_setup_logging_replaces_handlers(self, tmp_path):
        """Should configure the package logger without duplicating handlers"""
        log_file = tmp_path / "shippo.log"
        setup_logging(log_file=log_file, verbose=True)
        logger = setup_logging(log_file=log_file, verbose=False)

        assert logger.name == "goshippo"
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.FileHandler)
        for handler in logger.handlers:
            handler.close()
        logger.handlers = []
