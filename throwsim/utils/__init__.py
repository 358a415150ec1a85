"""Utility modules."""

from .config_loader import ConfigLoader, load_config, get_nested, set_nested
from .logger import setup_logger, get_logger, LoggerMixin, log_function_call

__all__ = [
    "ConfigLoader",
    "load_config",
    "get_nested",
    "set_nested",
    "setup_logger",
    "get_logger",
    "LoggerMixin",
    "log_function_call",
]
