"""
Utilities module for calmap.

Provides configuration, logging setup and number formatting helpers.

Modules:
    config: YAML and environment configuration
    constants: Formatting, smoothing and legibility constants
    helpers: Fixed-decimal formatting
    logging_config: Logging handlers and formatters
"""

from .config import AppConfig, LoggingConfig, load_config
from .helpers import format_fixed, round_half_up
from .logging_config import get_logger, setup_logging

__all__ = [
    "AppConfig",
    "LoggingConfig",
    "load_config",
    "format_fixed",
    "round_half_up",
    "get_logger",
    "setup_logging",
]
