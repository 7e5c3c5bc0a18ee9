"""
Logging configuration for goshippo

Provides structured logging with optional file output and console output.
The library itself only creates named loggers; applications call
setup_logging() to attach handlers.
"""

import logging
import sys
from pathlib import Path


class GoShippoLogger:
    """Centralized logger for the package"""

    def __init__(
        self, name: str = "goshippo", log_file: Path | None = None, console_output: bool = True
    ):
        """
        Initialize logger

        Args:
            name: Logger name (usually "goshippo" for the package logger)
            log_file: Path to log file (optional)
            console_output: Whether to print to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)

        # Clear existing handlers
        self.logger.handlers = []

        # Format: timestamp - module - level - message
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )

        if console_output:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(logging.INFO)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def get_logger(self) -> logging.Logger:
        """Get the underlying logger instance"""
        return self.logger


def setup_logging(log_file: Path | None = None, verbose: bool = True) -> logging.Logger:
    """
    Setup logging for an application using the client

    Request/response dumps from a client with debug_flag set are logged at
    DEBUG, so they only reach the log file.

    Args:
        log_file: Log file path (e.g., logs/shippo.log), optional
        verbose: Whether to also print to console

    Returns:
        Configured package logger
    """
    logger_wrapper = GoShippoLogger(name="goshippo", log_file=log_file, console_output=verbose)
    return logger_wrapper.get_logger()


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get logger for a specific module

    Args:
        module_name: Name of the module (e.g., 'client', 'http_client')

    Returns:
        Logger instance
    """
    return logging.getLogger(f"goshippo.{module_name}")
