"""Logging utilities."""

import logging
import sys
from pathlib import Path
from typing import Optional


ROOT_LOGGER = "throwsim"


def setup_logger(
    name: str = ROOT_LOGGER,
    level: str = "INFO",
    log_file: Optional[str] = None,
    console: bool = True,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Set up and configure a logger.

    Args:
        name: Logger name.
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional file path for logging.
        console: Whether to log to console.
        format_string: Custom format string.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Clear existing handlers
    logger.handlers = []

    if format_string is None:
        format_string = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

    formatter = logging.Formatter(format_string, datefmt="%Y-%m-%d %H:%M:%S")

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Get an existing logger or create a basic one.

    Children of the package logger ("throwsim.solver") get no handlers of
    their own and propagate to the package logger, which is set up on
    first use.

    Args:
        name: Logger name.

    Returns:
        Logger instance.
    """
    if name != ROOT_LOGGER and name.startswith(ROOT_LOGGER + "."):
        get_logger(ROOT_LOGGER)
        return logging.getLogger(name)

    logger = logging.getLogger(name)

    if not logger.handlers:
        logger = setup_logger(name)

    return logger


class LoggerMixin:
    """Mixin class to add logging to any class."""

    @property
    def logger(self) -> logging.Logger:
        """Get class-specific logger under the package namespace."""
        if not hasattr(self, "_logger"):
            self._logger = get_logger(f"{ROOT_LOGGER}.{self.__class__.__name__}")
        return self._logger


def log_function_call(logger: Optional[logging.Logger] = None):
    """
    Decorator to log function calls.

    Args:
        logger: Logger to use (uses default if None).
    """
    def decorator(func):
        def wrapper(*args, **kwargs):
            log = logger or get_logger()
            log.debug(f"Calling {func.__name__}")
            try:
                result = func(*args, **kwargs)
                log.debug(f"{func.__name__} completed successfully")
                return result
            except Exception as e:
                log.error(f"{func.__name__} failed: {e}")
                raise
        wrapper.__name__ = func.__name__
        wrapper.__doc__ = func.__doc__
        return wrapper
    return decorator
